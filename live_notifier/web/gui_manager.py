"""Main web GUI manager coordinating all UI components."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from live_notifier.config import State
from live_notifier.models import (
    AuthFailed,
    ChannelRemoved,
    SnapshotUpdated,
    StreamInfoUpdatedWhileOffline,
    StreamWentLive,
    StreamWentOffline,
    SyncingEnded,
    SyncingStarted,
    UpdateAvailable,
    stream_url,
)
from live_notifier.web.managers.broadcaster import WebSocketBroadcaster
from live_notifier.web.managers.channels import ChannelListManager
from live_notifier.web.managers.console import ConsoleOutputManager
from live_notifier.web.managers.settings import SettingsManager
from live_notifier.web.managers.setup import CredentialsManager
from live_notifier.web.managers.status import StatusManager
from live_notifier.web.managers.tray import NotificationManager


if TYPE_CHECKING:
    from socketio import AsyncServer

    from live_notifier.core.client import LiveNotifier
    from live_notifier.models import Event


logger = logging.getLogger("LiveNotifier")


class WebGUIManager:
    """Web-based GUI manager coordinating all UI components.

    This class is the presentation side of the application: it subscribes
    to the notifier's event bus and projects every event onto the component
    managers, which push the changes to the browser clients over Socket.IO.
    """

    def __init__(self, notifier: LiveNotifier):
        self._notifier: LiveNotifier = notifier
        self._broadcaster = WebSocketBroadcaster()

        # Create component managers
        self.status = StatusManager(self._broadcaster)
        self.output = ConsoleOutputManager(self._broadcaster)
        self.channels = ChannelListManager(self._broadcaster)
        self.tray = NotificationManager(self._broadcaster)
        self.setup = CredentialsManager(self._broadcaster, notifier.settings)
        self.settings = SettingsManager(
            self._broadcaster, notifier.settings, self.output, on_change=notifier.run_pass_now
        )

        self._unsubscribe = notifier.bus.subscribe(self.on_event)
        logger.info("Web GUI Manager initialized")

    def set_socketio(self, sio: AsyncServer):
        """Set the Socket.IO instance for real-time communication.

        Called by webapp during initialization to connect the broadcaster
        to the Socket.IO server.

        Args:
            sio: The Socket.IO AsyncServer instance
        """
        self._broadcaster.set_socketio(sio)

    def start(self):
        """Show the initial state, before the first pass comes through."""
        self.channels.batch_update(self._notifier.context.snapshot())
        if self._notifier.state is State.SETUP:
            self.status.update("Setup required")
        else:
            self.status.update("Idle")

    def stop(self):
        self._unsubscribe()

    def print(self, message: str):
        """Print message to console output.

        Args:
            message: Message to display in console
        """
        self.output.print(message)

    def channel_added(self, identifier: str):
        state = self._notifier.context.states.get(identifier)
        if state is not None:
            # shown as offline until the pass it triggered reports back
            self.channels.display(state, add=True)

    def apply_theme(self, dark_mode: bool):
        """Apply UI theme (handled client-side in web mode).

        Args:
            dark_mode: Whether to use dark theme
        """
        asyncio.create_task(self._broadcaster.emit("theme_change", {"dark_mode": dark_mode}))

    def on_event(self, event: Event):
        if isinstance(event, SyncingStarted):
            self.status.set_syncing(True)
            self.status.update("Syncing channels...")
        elif isinstance(event, SyncingEnded):
            self.status.set_syncing(False)
            if self._notifier.state is State.AUTH_FAILED:
                self.status.update("Invalid credentials")
            else:
                self.setup.auth_ok()
                self.status.update("Idle")
        elif isinstance(event, SnapshotUpdated):
            self.channels.batch_update(event.states)
        elif isinstance(event, StreamWentLive):
            self.print(f"{event.display_name} is live!")
            self.tray.notify(
                f"{event.display_name} is live!", "Stream online", url=stream_url(event.identifier)
            )
        elif isinstance(event, StreamWentOffline):
            self.print(f"{event.display_name} is offline")
            self.tray.notify(f"{event.display_name} went offline", "Stream offline")
        elif isinstance(event, StreamInfoUpdatedWhileOffline):
            self.print(f"{event.display_name} updated their stream info")
            self.tray.notify(
                f"{event.display_name} updated their stream info", "Stream info updated"
            )
        elif isinstance(event, ChannelRemoved):
            self.channels.remove(event.identifier)
        elif isinstance(event, AuthFailed):
            self.print(f"Authentication failed: {event.message}")
            self.setup.auth_failed(event.message)
        elif isinstance(event, UpdateAvailable):
            self.tray.notify(
                f"Version {event.version} is available", "Update available", url=event.url
            )
            asyncio.create_task(
                self._broadcaster.emit(
                    "update_available", {"version": event.version, "url": event.url}
                )
            )
