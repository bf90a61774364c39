# mpdslack/mpd_source.py
import threading
from typing import Iterator, Optional, Protocol, Tuple

from mpd import MPDClient, MPDError

from .debug import debug_log
from .errors import PlaybackConnectionError, QueryError, StartupConnectionError
from .models import PlaybackAttributes, PlayerEvent, make_attributes

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600
CLOSE_WAIT_SECONDS = 2.0

# Errors python-mpd2 surfaces for protocol trouble and for the socket underneath.
_MPD_ERRORS = (MPDError, OSError)


class PlaybackSource(Protocol):
    def query_attributes(self) -> PlaybackAttributes: ...

    def query_is_playing(self) -> bool: ...

    def events(self) -> Iterator[PlayerEvent]: ...

    def ping(self) -> None: ...


def parse_address(network: str, address: str) -> Tuple[str, Optional[int]]:
    """
    "host:port" for tcp (":6600" -> localhost), a socket path for unix.
    """
    if network == "unix":
        return address, None
    if network != "tcp":
        raise ValueError(f"unsupported MPD network {network!r} (use tcp or unix)")

    host, sep, port = address.rpartition(":")
    if not sep:
        host, port = address, ""
    try:
        port_num = int(port) if port else DEFAULT_PORT
    except ValueError:
        raise ValueError(f"invalid MPD port in {address!r}") from None
    return host or DEFAULT_HOST, port_num


def _open(host: str, port: Optional[int], password: Optional[str], timeout: Optional[float]) -> MPDClient:
    client = MPDClient()
    client.timeout = timeout
    if port is None:
        client.connect(host)
    else:
        client.connect(host, port)
    if password:
        client.password(password)
    return client


def _close(client: MPDClient, polite: bool = True) -> None:
    if polite:
        try:
            client.close()
        except _MPD_ERRORS:
            pass
    try:
        client.disconnect()
    except _MPD_ERRORS:
        pass


class MpdSource:
    """
    Two MPD connections: one idling on the "player" subsystem for events,
    one for status/currentsong/ping. The command connection is shared with
    the keepalive thread, so every command on it goes through a lock.
    """

    def __init__(self, client: MPDClient, watcher: MPDClient):
        self._client = client
        self._watcher = watcher
        self._lock = threading.Lock()
        self.close_wait = CLOSE_WAIT_SECONDS

    @classmethod
    def connect(
        cls,
        network: str,
        address: str,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "MpdSource":
        try:
            host, port = parse_address(network, address)
        except ValueError as e:
            raise StartupConnectionError(str(e)) from e

        try:
            client = _open(host, port, password, timeout)
        except _MPD_ERRORS as e:
            raise StartupConnectionError(f"Failed to connect to mpd at {address}: {e}") from e

        try:
            watcher = _open(host, port, password, None)
        except _MPD_ERRORS as e:
            _close(client)
            raise StartupConnectionError(f"Failed to create mpd watcher at {address}: {e}") from e

        print(f"[MPD] Connected to {address} (mpd {client.mpd_version})")
        return cls(client, watcher)

    def query_attributes(self) -> PlaybackAttributes:
        try:
            with self._lock:
                song = self._client.currentsong()
        except _MPD_ERRORS as e:
            raise QueryError(f"currentsong failed: {e}") from e
        return make_attributes(song)

    def query_is_playing(self) -> bool:
        try:
            with self._lock:
                status = self._client.status()
        except _MPD_ERRORS as e:
            debug_log(f"MPD status failed, treating as not playing: {e}")
            return False
        return status.get("state") == "play"

    def events(self) -> Iterator[PlayerEvent]:
        while True:
            try:
                self._watcher.idle("player")
            except _MPD_ERRORS as e:
                print(f"[MPD] Event connection closed: {e}")
                return
            yield PlayerEvent()

    def ping(self) -> None:
        try:
            with self._lock:
                self._client.ping()
        except _MPD_ERRORS as e:
            raise PlaybackConnectionError(f"ping failed: {e}") from e

    def close(self) -> None:
        _close(self._watcher)
        # A command stuck on a dead link holds the lock; drop the socket under it.
        locked = self._lock.acquire(timeout=self.close_wait)
        try:
            _close(self._client, polite=locked)
        finally:
            if locked:
                self._lock.release()
