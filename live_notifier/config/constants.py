"""Core constants, enums, and type definitions for the live notifier."""

from __future__ import annotations

import logging
from datetime import timedelta
from enum import Enum, auto
from typing import Any

from yarl import URL


# Logging special levels
CALL: int = logging.INFO - 1
logging.addLevelName(CALL, "CALL")

# Logging configuration
LOGGING_LEVELS = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: CALL,
    4: logging.DEBUG,
}
FILE_FORMATTER = logging.Formatter(
    "{asctime}.{msecs:03.0f}:\t{levelname:>7}:\t{filename}:{lineno}:\t{message}",
    style="{",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Type aliases
JsonType = dict[str, Any]

# Provider endpoints
TOKEN_URL = URL("https://id.twitch.tv/oauth2/token")
HELIX_URL = URL("https://api.twitch.tv/helix")
STREAM_URL = URL("https://twitch.tv")
RELEASES_URL = URL(
    "https://api.github.com/repos/twitch-live-notifier/twitch-live-notifier/releases/latest"
)

# Helix marks a running broadcast with this stream type
LIVE_STREAM_TYPE = "live"

# Intervals and Delays
POLL_INTERVAL = timedelta(seconds=60)
UPDATE_CHECK_INTERVAL = timedelta(hours=1)
REQUEST_ATTEMPTS = 3

# Helix allows 800 points per minute for app tokens, stay well below
HELIX_RATE_CAPACITY = 30
HELIX_RATE_WINDOW = 1


class State(Enum):
    """Application lifecycle states."""

    SETUP = auto()
    IDLE = auto()
    SYNCING = auto()
    AUTH_FAILED = auto()
    EXIT = auto()
