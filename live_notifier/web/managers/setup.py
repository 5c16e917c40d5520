"""Setup manager for handling the Twitch application credentials."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from live_notifier.config.settings import Settings
    from live_notifier.web.managers.broadcaster import WebSocketBroadcaster


class CredentialsManager:
    """Manages the credentials form in the web interface.

    Tells the clients whether a client ID and secret still have to be entered,
    and whether the stored ones were rejected by Twitch.
    """

    def __init__(self, broadcaster: WebSocketBroadcaster, settings: Settings):
        self._broadcaster = broadcaster
        self._settings = settings
        self._error: str | None = None

    @property
    def required(self) -> bool:
        return not self._settings.has_credentials or self._error is not None

    def auth_failed(self, message: str):
        """Flag the stored credentials as rejected.

        Args:
            message: Reason reported by the token endpoint
        """
        self._error = message
        asyncio.create_task(self._broadcaster.emit("credentials_required", self.get_status()))

    def auth_ok(self):
        if self._error is not None:
            self._error = None
            asyncio.create_task(self._broadcaster.emit("credentials_status", self.get_status()))

    def get_status(self) -> dict[str, Any]:
        """Get current credentials status for client synchronization.

        The secret itself is never sent back to the clients.
        """
        return {
            "required": self.required,
            "client_id": self._settings.client_id,
            "has_secret": bool(self._settings.client_secret),
            "error": self._error,
        }
