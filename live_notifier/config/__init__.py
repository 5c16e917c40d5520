"""Configuration package for the live notifier."""

from __future__ import annotations

# Re-export all public symbols for convenience
from .constants import (
    CALL,
    FILE_FORMATTER,
    HELIX_RATE_CAPACITY,
    HELIX_RATE_WINDOW,
    HELIX_URL,
    LIVE_STREAM_TYPE,
    LOGGING_LEVELS,
    POLL_INTERVAL,
    RELEASES_URL,
    REQUEST_ATTEMPTS,
    STREAM_URL,
    TOKEN_URL,
    UPDATE_CHECK_INTERVAL,
    JsonType,
    State,
)
from .paths import (
    DATA_DIR,
    LOG_PATH,
    LOGS_DIR,
    SETTINGS_PATH,
)


__all__ = [
    # constants.py
    "CALL",
    "FILE_FORMATTER",
    "LOGGING_LEVELS",
    "State",
    "JsonType",
    "TOKEN_URL",
    "HELIX_URL",
    "STREAM_URL",
    "RELEASES_URL",
    "LIVE_STREAM_TYPE",
    "POLL_INTERVAL",
    "UPDATE_CHECK_INTERVAL",
    "REQUEST_ATTEMPTS",
    "HELIX_RATE_CAPACITY",
    "HELIX_RATE_WINDOW",
    # paths.py
    "DATA_DIR",
    "SETTINGS_PATH",
    "LOGS_DIR",
    "LOG_PATH",
]
