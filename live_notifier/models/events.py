"""Typed events published on the change feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from live_notifier.models.channel import ChannelState


@dataclass(frozen=True)
class Event:
    """Base class of everything published on the event bus."""


@dataclass(frozen=True)
class SyncingStarted(Event):
    """A reconciliation pass has started."""


@dataclass(frozen=True)
class SyncingEnded(Event):
    """A reconciliation pass has finished, successfully or not."""


@dataclass(frozen=True)
class SnapshotUpdated(Event):
    """Copies of every tracked channel's state, in configured order."""
    states: dict[str, ChannelState] = field(default_factory=dict)


@dataclass(frozen=True)
class ChannelEvent(Event):
    identifier: str
    display_name: str


@dataclass(frozen=True)
class StreamWentLive(ChannelEvent):
    pass


@dataclass(frozen=True)
class StreamWentOffline(ChannelEvent):
    pass


@dataclass(frozen=True)
class StreamInfoUpdatedWhileOffline(ChannelEvent):
    pass


@dataclass(frozen=True)
class OpenStreamRequested(Event):
    identifier: str
    url: str


@dataclass(frozen=True)
class ChannelRemoved(Event):
    identifier: str


@dataclass(frozen=True)
class AuthFailed(Event):
    message: str


@dataclass(frozen=True)
class UpdateAvailable(Event):
    version: str
    url: str
