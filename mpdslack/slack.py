# mpdslack/slack.py
import json
import time
from typing import Callable, Mapping, Optional

import requests

from .debug import debug_log
from .errors import CallError

USER_AGENT = "mpd-slack-status/1.0"
PROFILE_SET = "users.profile.set"


class SlackClient:
    """
    Minimal client for the Slack web API methods used to set a profile status.

    One attempt per call, no retries. Only transport problems count as
    failures; Slack's own "ok"/"error" reply fields are logged, not enforced.
    """

    def __init__(
        self,
        api_token: str,
        api_url: str,
        version_uid: str,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.time,
        session: Optional[requests.Session] = None,
    ):
        self.api_token = api_token
        self.api_url = api_url
        self.version_uid = version_uid
        self.timeout = timeout
        self._clock = clock
        self._http = session or requests.Session()
        self._http.headers["User-Agent"] = USER_AGENT

    def method_url(self, method: str) -> str:
        # The timestamp keeps every request URL unique so nothing in between caches it.
        timestamp = int(self._clock())
        return f"{self.api_url}{method}?_x_id={self.version_uid}-{timestamp}"

    def call(self, method: str, args: Mapping[str, str]) -> dict:
        form = dict(args)
        form["token"] = self.api_token

        try:
            r = self._http.post(self.method_url(method), data=form, timeout=self.timeout)
        except requests.RequestException as e:
            raise CallError(f"{method} failed: {e}") from e

        try:
            data = r.json()
        except ValueError as e:
            raise CallError(f"{method} returned a non-JSON response (HTTP {r.status_code})") from e

        if isinstance(data, dict) and data.get("ok") is False:
            print(f"[Slack] {method} answered: {data.get('error', 'unknown error')}")
        else:
            debug_log(f"{method} ok")
        return data

    def set_status(self, icon: str, text: str) -> None:
        print(f"[Slack] Setting status [{icon}] {text}")

        profile = json.dumps({"status_text": text, "status_emoji": icon})
        self.call(PROFILE_SET, {"profile": profile})

    def close(self) -> None:
        self._http.close()
