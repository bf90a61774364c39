"""Tests for the MPD keepalive thread."""

import time
from unittest.mock import MagicMock

import pytest
from mpd import ConnectionError as MPDConnectionError

from fakes import FakeSource
from mpdslack.errors import EventSourceClosed, PlaybackConnectionError
from mpdslack.keepalive import KEEPALIVE_SECONDS, KeepAlive
from mpdslack.mpd_source import MpdSource
from mpdslack.sync import SyncEngine


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class TestKeepAlive:
    """Periodic pings."""

    def test_default_interval(self):
        assert KeepAlive(FakeSource()).interval == KEEPALIVE_SECONDS == 30.0

    def test_pings_periodically(self):
        source = FakeSource()
        keepalive = KeepAlive(source, interval=0.01)
        keepalive.start()
        try:
            assert wait_for(lambda: source.pings >= 3)
        finally:
            keepalive.stop()
            keepalive.join(1.0)
        assert not keepalive.is_alive()

    def test_ping_failures_are_swallowed(self):
        source = FakeSource()
        source.ping_error = PlaybackConnectionError("ping failed: broken pipe")
        keepalive = KeepAlive(source, interval=0.01)
        keepalive.start()
        try:
            assert wait_for(lambda: source.pings >= 3)
            assert keepalive.is_alive()
        finally:
            keepalive.stop()
            keepalive.join(1.0)

    def test_is_daemon(self):
        assert KeepAlive(FakeSource()).daemon is True


class TestKeepAliveWithSync:
    """Ping failures while the sync loop is consuming MPD events."""

    def test_failed_pings_do_not_stop_or_trigger_updates(self, fake_slack, formatter):
        client, watcher = MagicMock(), MagicMock()
        client.ping.side_effect = MPDConnectionError("Connection lost while reading line")
        client.status.return_value = {"state": "play"}
        client.currentsong.return_value = {"title": "S", "artist": "A"}

        wakeups = []

        def idle(subsystem):
            if len(wakeups) == 20:
                raise MPDConnectionError("Connection closed")
            # Let the keepalive fail a few pings between player events.
            wait_for(lambda: client.ping.call_count > len(wakeups) // 5)
            wakeups.append(subsystem)
            return [subsystem]

        watcher.idle.side_effect = idle
        source = MpdSource(client, watcher)
        engine = SyncEngine(source, fake_slack, formatter)
        keepalive = KeepAlive(source, interval=0.01)
        keepalive.start()
        try:
            with pytest.raises(EventSourceClosed):
                engine.run(source.events())
        finally:
            keepalive.stop()
            keepalive.join(1.0)

        assert len(wakeups) == 20
        assert client.ping.call_count >= 4
        assert client.status.call_count == 20
        assert fake_slack.calls == [(":headphones:", "S - A")]
