#main.py
import argparse
import os
import sys

from mpdslack.errors import MpdSlackError, StartupConnectionError
from mpdslack.formatter import StatusFormatter
from mpdslack.keepalive import KEEPALIVE_SECONDS, KeepAlive
from mpdslack.mpd_source import MpdSource
from mpdslack.slack import SlackClient
from mpdslack.sync import SyncEngine


def build_parser() -> argparse.ArgumentParser:
    env = os.environ.get
    p = argparse.ArgumentParser(
        prog="mpd-slack-status",
        description="Show the song MPD is playing as your Slack status.",
    )
    p.add_argument("--api-token", default=env("SLACK_API_TOKEN"), help="Your Slack API token")
    p.add_argument("--api-url", default=env("SLACK_API_URL"), help="Full URL to API path for the Slack team")
    p.add_argument("--version-uid", default=env("SLACK_VERSION_UID"), help="The Slack version uid")
    p.add_argument("--mpd-network", default=env("MPD_NETWORK", "tcp"), choices=("tcp", "unix"))
    p.add_argument("--mpd-address", default=env("MPD_ADDRESS", ":6600"), help="host:port, or a socket path for unix")
    p.add_argument("--mpd-password", default=env("MPD_PASSWORD"))
    p.add_argument(
        "--mpd-timeout",
        type=float,
        default=None,
        help="Seconds to wait for MPD commands and pings (default: wait indefinitely)",
    )
    p.add_argument("--default-emoji", default=":question:", help="Status emoji when nothing is playing")
    p.add_argument("--default-text", default="I don't know", help="Status text when nothing is playing")
    p.add_argument(
        "--request-timeout",
        type=float,
        default=None,
        help="Seconds to wait for Slack (default: wait indefinitely)",
    )
    p.add_argument("--keepalive-interval", type=float, default=KEEPALIVE_SECONDS, help="Seconds between MPD pings")
    return p


def parse_args(argv=None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)

    missing = [
        flag
        for flag, value in (
            ("--api-token", args.api_token),
            ("--api-url", args.api_url),
            ("--version-uid", args.version_uid),
        )
        if not value
    ]
    if missing:
        parser.error("missing required option(s): " + ", ".join(missing))
    return args


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        source = MpdSource.connect(
            args.mpd_network,
            args.mpd_address,
            password=args.mpd_password,
            timeout=args.mpd_timeout,
        )
    except StartupConnectionError as e:
        print(f"[MPD] {e}", file=sys.stderr)
        return 1

    slack = SlackClient(args.api_token, args.api_url, args.version_uid, timeout=args.request_timeout)
    engine = SyncEngine(source, slack, StatusFormatter(args.default_emoji, args.default_text))

    KeepAlive(source, interval=args.keepalive_interval).start()

    print("[Sync] Watching MPD player events… (Ctrl+C to stop)")
    try:
        engine.run(source.events())
    except MpdSlackError as e:
        print(f"[Sync] Stopped: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    finally:
        source.close()
        slack.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
