"""Domain models for channel tracking."""

from live_notifier.models.channel import ChannelInfo, ChannelState, stream_url
from live_notifier.models.events import (
    AuthFailed,
    ChannelEvent,
    ChannelRemoved,
    Event,
    OpenStreamRequested,
    SnapshotUpdated,
    StreamInfoUpdatedWhileOffline,
    StreamWentLive,
    StreamWentOffline,
    SyncingEnded,
    SyncingStarted,
    UpdateAvailable,
)


__all__ = [
    "ChannelInfo",
    "ChannelState",
    "stream_url",
    "Event",
    "ChannelEvent",
    "SyncingStarted",
    "SyncingEnded",
    "SnapshotUpdated",
    "StreamWentLive",
    "StreamWentOffline",
    "StreamInfoUpdatedWhileOffline",
    "OpenStreamRequested",
    "ChannelRemoved",
    "AuthFailed",
    "UpdateAvailable",
]
