"""Settings manager for application configuration."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable

from yarl import URL

from live_notifier.exceptions import ConfigPersistFailure


if TYPE_CHECKING:
    from live_notifier.config.settings import Settings
    from live_notifier.web.managers.broadcaster import WebSocketBroadcaster
    from live_notifier.web.managers.console import ConsoleOutputManager


logger = logging.getLogger("LiveNotifier")

# loggers that only produce output with debug mode on
DEBUG_LOGGERS = ("LiveNotifier.helix", "LiveNotifier.engine")


def apply_debug_mode(enabled: bool):
    for name in DEBUG_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if enabled else logging.NOTSET)


class SettingsManager:
    """Manages application settings in the web interface.

    Provides access to and modification of user preferences including
    auto-opening of streams, proxy configuration, and UI preferences.
    """

    def __init__(
        self,
        broadcaster: WebSocketBroadcaster,
        settings: Settings,
        console: ConsoleOutputManager,
        on_change: Callable[[], None] | None = None,
    ):
        self._broadcaster = broadcaster
        self._settings = settings
        self._console = console
        self._on_change = on_change

    def get_settings(self) -> dict[str, Any]:
        """Get current settings for display.

        Returns:
            Dictionary containing all user-configurable settings
        """
        return {
            "auto_open_streams": self._settings.auto_open_streams,
            "dark_mode": self._settings.dark_mode,
            "debug_mode": self._settings.debug_mode,
            "proxy": str(self._settings.proxy),
            "connection_quality": self._settings.connection_quality,
        }

    def _log_change(self, message: str):
        """Log setting change to both console and system logger."""
        self._console.print(message)

    def update_settings(self, settings_data: dict[str, Any]):
        """Update settings from user input.

        Args:
            settings_data: Dictionary of settings to update
        """
        should_trigger_update = False

        if "auto_open_streams" in settings_data:
            self._settings.auto_open_streams = bool(settings_data["auto_open_streams"])
            self._log_change(
                f"Setting changed: auto_open_streams = {self._settings.auto_open_streams}"
            )

        if "dark_mode" in settings_data:
            self._settings.dark_mode = bool(settings_data["dark_mode"])
            self._log_change(f"Setting changed: dark_mode = {self._settings.dark_mode}")

        if "debug_mode" in settings_data:
            self._settings.debug_mode = bool(settings_data["debug_mode"])
            apply_debug_mode(self._settings.debug_mode)
            self._log_change(f"Setting changed: debug_mode = {self._settings.debug_mode}")

        if "connection_quality" in settings_data:
            self._settings.connection_quality = int(settings_data["connection_quality"])
            self._log_change(
                f"Setting changed: connection_quality = {self._settings.connection_quality}"
            )

        if "proxy" in settings_data:
            proxy_str = (settings_data["proxy"] or "").strip()
            if proxy_str:
                if self._settings.proxy != URL(proxy_str):
                    self._settings.proxy = URL(proxy_str)
                    self._log_change(f"Proxy set to: {proxy_str}")
                    should_trigger_update = True
            else:
                if self._settings.proxy != URL():
                    self._settings.proxy = URL()
                    self._log_change("Proxy cleared")
                    should_trigger_update = True

        self._settings.alter()
        # Persist settings to disk immediately
        try:
            self._settings.save()
        except ConfigPersistFailure as exc:
            logger.error(str(exc))
        asyncio.create_task(self._broadcaster.emit("settings_updated", self.get_settings()))

        if should_trigger_update and self._on_change:
            self._on_change()
