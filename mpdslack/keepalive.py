# mpdslack/keepalive.py
import threading

from .debug import debug_log
from .mpd_source import PlaybackSource

KEEPALIVE_SECONDS = 30.0


class KeepAlive(threading.Thread):
    """
    Pings MPD on a fixed interval so the command connection is not dropped
    for being idle. Ping failures are logged and otherwise ignored.
    """

    def __init__(self, source: PlaybackSource, interval: float = KEEPALIVE_SECONDS):
        super().__init__(name="mpd-keepalive", daemon=True)
        self.source = source
        self.interval = interval
        self._stopped = threading.Event()

    def stop(self):
        self._stopped.set()

    def run(self):
        while not self._stopped.wait(self.interval):
            try:
                self.source.ping()
            except Exception as e:
                print(f"[MPD] Keepalive ping failed: {e}")
                debug_log(f"Keepalive ping failed: {e!r}")
