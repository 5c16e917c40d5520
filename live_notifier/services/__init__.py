"""Services making up the polling engine."""

from __future__ import annotations

from live_notifier.services.channel_fetcher import ChannelInfoFetcher
from live_notifier.services.channel_set import ChannelSetManager
from live_notifier.services.reconciler import ReconciliationEngine
from live_notifier.services.scheduler import Scheduler
from live_notifier.services.update_checker import UpdateChecker


__all__ = [
    "ChannelInfoFetcher",
    "ChannelSetManager",
    "ReconciliationEngine",
    "Scheduler",
    "UpdateChecker",
]
