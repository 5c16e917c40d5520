"""Status manager for the application status line."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from live_notifier.web.managers.broadcaster import WebSocketBroadcaster


class StatusManager:
    """Tracks and broadcasts the status line shown to users
    (e.g., "Syncing channels...", "Idle", "Setup required").

    Also tracks whether a pass is currently running, for the busy indicator.
    """

    def __init__(self, broadcaster: WebSocketBroadcaster):
        self._broadcaster = broadcaster
        self._current_status = "Initializing..."
        self._syncing = False

    def update(self, status: str):
        """Update the current status and broadcast to all clients."""
        self._current_status = status
        asyncio.create_task(self._broadcaster.emit("status_update", {"status": status}))

    def set_syncing(self, syncing: bool):
        self._syncing = syncing
        asyncio.create_task(self._broadcaster.emit("syncing", {"active": syncing}))

    def get(self) -> str:
        return self._current_status

    @property
    def syncing(self) -> bool:
        return self._syncing
