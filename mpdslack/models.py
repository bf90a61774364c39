# mpdslack/models.py
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Union

STATUS_MAX_LENGTH = 100
ELLIPSIS = "…"
HEADPHONES_ICON = ":headphones:"

PlaybackAttributes = Mapping[str, str]


@dataclass(frozen=True)
class DisplayStatus:
    icon: str
    text: str


@dataclass(frozen=True)
class PlayerEvent:
    """Something in MPD's "player" subsystem changed. Carries no payload."""


def make_attributes(raw: Mapping[str, Union[str, Iterable[str]]]) -> PlaybackAttributes:
    """
    Snapshot of an MPD reply: lower-case keys, repeated tags joined with ", ".
    """
    attrs = {}
    for key, value in raw.items():
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value)
        attrs[str(key).lower()] = str(value)
    return MappingProxyType(attrs)
