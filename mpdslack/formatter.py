# mpdslack/formatter.py
from typing import Optional

from .models import (
    ELLIPSIS,
    HEADPHONES_ICON,
    STATUS_MAX_LENGTH,
    DisplayStatus,
    PlaybackAttributes,
)


def truncate(text: str, limit: int = STATUS_MAX_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def song_text(attrs: PlaybackAttributes) -> str:
    # Missing tags are fine: an untagged file shows up as " - ".
    return attrs.get("title", "") + " - " + attrs.get("artist", "")


class StatusFormatter:
    """
    Turns MPD playback attributes into the status shown on Slack.
    """

    def __init__(self, default_icon: str, default_text: str):
        self.default_icon = default_icon
        self.default_text = default_text

    def format(self, attrs: Optional[PlaybackAttributes]) -> DisplayStatus:
        """
        Status for a combined snapshot. `attrs` must hold MPD's `status` state
        next to the `currentsong` tags; currentsong alone has no "state" and
        always formats as the default.
        """
        if attrs and attrs.get("state") == "play":
            return self.playing(attrs)
        return self.default()

    def playing(self, attrs: PlaybackAttributes) -> DisplayStatus:
        return DisplayStatus(icon=HEADPHONES_ICON, text=truncate(song_text(attrs)))

    def default(self) -> DisplayStatus:
        return DisplayStatus(icon=self.default_icon, text=truncate(self.default_text))
