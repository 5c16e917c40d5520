"""
Channel set service for adding and removing tracked channels.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from live_notifier.models import ChannelRemoved
from live_notifier.utils import canonical_name


if TYPE_CHECKING:
    from live_notifier.core.context import NotifierContext
    from live_notifier.core.event_bus import EventBus
    from live_notifier.services.scheduler import Scheduler


logger = logging.getLogger("LiveNotifier")


class ChannelSetManager:
    """
    Service responsible for the configured channel list.

    Handles:
    - Case-insensitive deduplication of channel names
    - Persisting the list after every change
    - Keeping the state map in sync with the list
    - Requesting a pass after a channel was added
    """

    def __init__(self, context: NotifierContext, scheduler: Scheduler, bus: EventBus) -> None:
        self._context = context
        self._scheduler = scheduler
        self._bus = bus

    def __contains__(self, name: str) -> bool:
        return canonical_name(name) in self._context.settings.channels

    def add(self, name: str) -> bool:
        """
        Start tracking a channel.

        Args:
            name: Channel login name, in any case

        Returns:
            True if the channel was added, False if it was empty or already tracked
        """
        identifier = canonical_name(name)
        if not identifier:
            logger.info("Ignoring an empty channel name")
            return False
        channels: list[str] = self._context.settings.channels
        if identifier in channels:
            logger.info(f"{identifier} is already in the config")
            return False
        # assign a new list, so the change is registered by the settings
        self._context.settings.channels = [*channels, identifier]
        self._context.ensure_state(identifier)
        if self._context.save_settings():
            logger.info(f"{identifier} added to config")
        self._scheduler.trigger()
        return True

    async def remove(self, name: str) -> bool:
        """
        Stop tracking a channel, and forget its state.

        Args:
            name: Channel login name, in any case

        Returns:
            True if the channel was removed, False if it wasn't tracked
        """
        identifier = canonical_name(name)
        channels: list[str] = self._context.settings.channels
        if identifier not in channels:
            logger.info(f"{identifier} is not in the config")
            return False
        self._context.settings.channels = [c for c in channels if c != identifier]
        self._context.drop_state(identifier)
        if self._context.save_settings():
            logger.info(f"{identifier} removed from config")
        await self._bus.publish([ChannelRemoved(identifier)])
        return True
