# mpdslack/errors.py


class MpdSlackError(Exception):
    pass


class StartupConnectionError(MpdSlackError):
    """MPD could not be reached before the sync loop started."""


class QueryError(MpdSlackError):
    """An MPD query failed."""


class PlaybackConnectionError(MpdSlackError):
    """The MPD command connection did not answer a ping."""


class CallError(MpdSlackError):
    """The Slack API call failed at the transport level."""


class EventSourceClosed(MpdSlackError):
    """The MPD event feed ended."""
