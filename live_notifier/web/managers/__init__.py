"""Web GUI manager modules for the live notifier web interface.

This package contains all component managers for the web-based GUI:
- WebSocketBroadcaster: Real-time message broadcasting to clients
- StatusManager: Main application status display
- ConsoleOutputManager: Console log output buffering and display
- ChannelListManager: Tracked channels display and ordering
- NotificationManager: Browser notifications for channel transitions
- CredentialsManager: Client ID / secret setup form
- SettingsManager: Application settings configuration
"""

from live_notifier.web.managers.broadcaster import WebSocketBroadcaster
from live_notifier.web.managers.channels import ChannelListManager
from live_notifier.web.managers.console import ConsoleOutputManager
from live_notifier.web.managers.settings import SettingsManager, apply_debug_mode
from live_notifier.web.managers.setup import CredentialsManager
from live_notifier.web.managers.status import StatusManager
from live_notifier.web.managers.tray import NotificationManager


__all__ = [
    "WebSocketBroadcaster",
    "StatusManager",
    "ConsoleOutputManager",
    "ChannelListManager",
    "NotificationManager",
    "CredentialsManager",
    "SettingsManager",
    "apply_debug_mode",
]
