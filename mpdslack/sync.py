# mpdslack/sync.py
from typing import Iterable, Optional

from .debug import debug_log
from .errors import EventSourceClosed
from .formatter import StatusFormatter
from .models import PlayerEvent
from .mpd_source import PlaybackSource

IDLE = "idle"
DECIDING = "deciding"
DISPATCHING = "dispatching"
FAILED = "failed"


class SyncEngine:
    """
    Mirrors MPD playback onto the Slack status, one player event at a time.

    Every event triggers a fresh look at MPD: while playing, the status is the
    current song; otherwise the configured default. A status whose text matches
    the last one sent is not sent again. The first failed dispatch, a failed
    song query while playing, or the end of the event feed stops the engine for
    good; the error is raised to the caller.
    """

    def __init__(self, source: PlaybackSource, client, formatter: StatusFormatter):
        self.source = source
        self.client = client
        self.formatter = formatter
        self.last_sent_text: Optional[str] = None
        self.state = IDLE

    def handle_event(self) -> bool:
        """Sync the status once. Returns True if an update was sent."""
        self.state = DECIDING
        try:
            if self.source.query_is_playing():
                # Once MPD says it is playing, currentsong is expected to work.
                status = self.formatter.playing(self.source.query_attributes())
            else:
                status = self.formatter.default()

            if status.text == self.last_sent_text:
                debug_log(f"Status unchanged, skipping: {status.text}")
                self.state = IDLE
                return False

            self.state = DISPATCHING
            self.client.set_status(status.icon, status.text)
        except Exception:
            self.state = FAILED
            raise

        self.last_sent_text = status.text
        self.state = IDLE
        return True

    def run(self, events: Iterable[PlayerEvent]) -> None:
        """Consume events until something fails. Never returns normally."""
        for _ in events:
            self.handle_event()

        self.state = FAILED
        raise EventSourceClosed("MPD event feed ended")
