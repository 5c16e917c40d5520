"""
API client modules for provider communication.

This package provides the HTTP client and the Helix REST client used to
query channel information.
"""

from __future__ import annotations

from live_notifier.api.helix_client import HelixClient
from live_notifier.api.http_client import HTTPClient


__all__ = [
    "HTTPClient",
    "HelixClient",
]
