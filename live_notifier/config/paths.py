"""Path-related configuration and environment detection."""

from __future__ import annotations

import os
from pathlib import Path


# Environment detection
IS_DOCKER = os.getenv("DOCKER_ENV") == "1" or os.path.exists("/.dockerenv")


# Base Paths - environment-specific resolution
if IS_DOCKER:
    # Docker environment: use fixed paths
    WORKING_DIR = Path("/app")
    DATA_DIR = Path("/app/data")
else:
    WORKING_DIR = Path.cwd()
    DATA_DIR = Path(os.getenv("LIVE_NOTIFIER_DATA_DIR", WORKING_DIR / "data"))

# Persistent storage paths - use DATA_DIR for Docker compatibility
SETTINGS_PATH = Path(DATA_DIR, "settings.json")
LOGS_DIR = Path(WORKING_DIR, "logs")
LOG_PATH = Path(LOGS_DIR, "live_notifier.log")
