"""Authentication for the Helix API."""

from __future__ import annotations

from live_notifier.auth.token_provider import TokenProvider


__all__ = [
    "TokenProvider",
]
