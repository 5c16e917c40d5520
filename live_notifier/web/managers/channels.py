"""Channel list manager for tracking and displaying the configured channels."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from live_notifier.utils import format_count


if TYPE_CHECKING:
    from live_notifier.models import ChannelState
    from live_notifier.web.managers.broadcaster import WebSocketBroadcaster


def _sort_key(channel_data: dict[str, Any]) -> tuple[int, int, str]:
    # online channels first, most viewers on top, then offline ones by name
    if channel_data["online"]:
        return (0, -channel_data["viewers"], channel_data["name"].casefold())
    return (1, 0, channel_data["name"].casefold())


class ChannelListManager:
    """Manages the list of tracked channels in the web interface.

    Keeps the last snapshot of every channel with its online status, game,
    title and viewers, and broadcasts real-time updates when it changes.
    Channels that were never looked up yet are shown as offline.
    """

    def __init__(self, broadcaster: WebSocketBroadcaster):
        self._broadcaster = broadcaster
        self._channels: dict[str, dict[str, Any]] = {}

    @staticmethod
    def _channel_data(state: ChannelState) -> dict[str, Any]:
        channel_data = state.to_json()
        channel_data["viewers_text"] = format_count(channel_data["viewers"])
        return channel_data

    def display(self, state: ChannelState, *, add: bool = False):
        """Add or update a channel in the display list.

        Args:
            state: The channel state to display
            add: If True, emit channel_add event; otherwise emit channel_update
        """
        channel_data = self._channel_data(state)
        self._channels[state.identifier] = channel_data
        asyncio.create_task(
            self._broadcaster.emit("channel_update" if not add else "channel_add", channel_data)
        )

    def remove(self, identifier: str):
        """Remove a channel from the display list.

        Args:
            identifier: The channel to remove
        """
        if identifier in self._channels:
            del self._channels[identifier]
            asyncio.create_task(self._broadcaster.emit("channel_remove", {"id": identifier}))

    def batch_update(self, states: dict[str, ChannelState]):
        """Replace all channels atomically with a new snapshot.

        This prevents UI flicker by updating all channels in one operation
        instead of clearing and gradually re-adding them.

        Args:
            states: Channel states to display, keyed by identifier
        """
        self._channels = {
            identifier: self._channel_data(state) for identifier, state in states.items()
        }
        asyncio.create_task(
            self._broadcaster.emit("channels_batch_update", {"channels": self.get_channels()})
        )

    def get_channels(self) -> list[dict[str, Any]]:
        """Get all currently tracked channels, in display order.

        Returns:
            List of channel data dictionaries
        """
        return sorted(self._channels.values(), key=_sort_key)
