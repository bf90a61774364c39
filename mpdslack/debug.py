# mpdslack/debug.py
import os
import time
from pathlib import Path

DEBUG_ENV = "MPDSLACK_DEBUG"
DEBUG_LOG_ENV = "MPDSLACK_DEBUG_LOG"
DEFAULT_LOG_NAME = "mpdslack_debug.log"


def debug_enabled() -> bool:
    return os.getenv(DEBUG_ENV, "").strip() in {"1", "true", "yes", "on"}


def debug_log_path() -> Path:
    return Path(os.getenv(DEBUG_LOG_ENV) or DEFAULT_LOG_NAME)


def debug_log(message: str) -> None:
    """
    Opt-in trace of the things the sync loop shrugs off (skipped updates,
    failed pings, failed status queries). Never raises.
    """
    if not debug_enabled():
        return

    line = f"[{time.strftime('%Y-%m-%d %H:%M:%S')}] {message}\n"
    try:
        with debug_log_path().open("a", encoding="utf-8") as f:
            f.write(line)
    except OSError:
        pass

    print(f"[DEBUG] {message}")
