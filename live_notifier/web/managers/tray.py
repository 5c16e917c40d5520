"""Notification manager for the web-based GUI (no system tray in browser)."""

from __future__ import annotations

import asyncio
from collections import deque
from datetime import datetime
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from live_notifier.web.managers.broadcaster import WebSocketBroadcaster


class NotificationManager:
    """Translates desktop-style notifications into browser notifications.

    The most recent notifications are kept around, so that clients
    connecting later can still show them.
    """

    def __init__(self, broadcaster: WebSocketBroadcaster, max_items: int = 50):
        self._broadcaster = broadcaster
        self._recent: deque[dict[str, Any]] = deque(maxlen=max_items)

    def notify(self, message: str, title: str, *, url: str | None = None):
        """Send a notification to every connected browser.

        Args:
            message: Notification message body
            title: Notification title
            url: Optional link to open when the notification is clicked
        """
        notification = {
            "title": title,
            "message": message,
            "url": url,
            "time": datetime.now().isoformat(timespec="seconds"),
        }
        self._recent.append(notification)
        asyncio.create_task(self._broadcaster.emit("notification", notification))

    def get_recent(self) -> list[dict[str, Any]]:
        return list(self._recent)
