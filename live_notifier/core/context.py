from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from live_notifier.exceptions import ConfigPersistFailure
from live_notifier.models import ChannelState


if TYPE_CHECKING:
    from live_notifier.config.settings import Settings


logger = logging.getLogger("LiveNotifier")


class NotifierContext:
    """
    Owns the configuration and the channel state map.

    Created once at startup from the persisted settings. Only the reconciliation
    engine writes channel state, and only the channel set manager adds or
    removes channels.
    """

    def __init__(self, settings: Settings):
        self.settings: Settings = settings
        self.states: dict[str, ChannelState] = {}
        for identifier in settings.channels:
            self.states[identifier] = ChannelState(identifier)

    @property
    def channels(self) -> list[str]:
        return list(self.settings.channels)

    def ensure_state(self, identifier: str) -> ChannelState:
        if (state := self.states.get(identifier)) is None:
            state = self.states[identifier] = ChannelState(identifier)
        return state

    def drop_state(self, identifier: str) -> None:
        self.states.pop(identifier, None)

    def snapshot(self) -> dict[str, ChannelState]:
        """Copies of the tracked states, in the configured channel order."""
        return {
            identifier: self.states[identifier].copy()
            for identifier in self.settings.channels
            if identifier in self.states
        }

    def save_settings(self, *, force: bool = False) -> bool:
        """
        Persist the settings. A failed write is logged and reported through
        the return value, the in-memory state stays as it is.
        """
        try:
            self.settings.save(force=force)
        except ConfigPersistFailure as exc:
            logger.error(str(exc))
            return False
        return True
