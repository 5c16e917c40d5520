"""
Reconciliation engine.

Runs polling passes over the configured channels, compares every fetched
record with the stored state, and publishes the resulting transitions.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from live_notifier.config import CALL
from live_notifier.exceptions import AuthFailure, ExitRequest, FetchFailure
from live_notifier.models import (
    AuthFailed,
    OpenStreamRequested,
    SnapshotUpdated,
    StreamInfoUpdatedWhileOffline,
    StreamWentLive,
    StreamWentOffline,
    SyncingEnded,
    SyncingStarted,
)


if TYPE_CHECKING:
    from live_notifier.auth import TokenProvider
    from live_notifier.core.context import NotifierContext
    from live_notifier.core.event_bus import EventBus
    from live_notifier.models import ChannelInfo, ChannelState, Event
    from live_notifier.services.channel_fetcher import ChannelInfoFetcher


logger = logging.getLogger("LiveNotifier")
engine_logger = logging.getLogger("LiveNotifier.engine")


def classify(state: ChannelState, info: ChannelInfo) -> tuple[bool, bool, bool]:
    """
    Compare a fresh lookup with the stored state of the same channel.

    Returns the (went_live, went_offline, info_changed) flags. A channel
    that was never observed counts as offline, and its game or title
    can't have changed.
    """
    was_live: bool = state.is_live is True
    went_live: bool = info.is_live and not was_live
    went_offline: bool = not info.is_live and was_live
    info_changed: bool = (
        state.observed
        and state.game_name is not None
        and state.stream_title is not None
        and (state.game_name != info.game_name or state.stream_title != info.stream_title)
    )
    return went_live, went_offline, info_changed


class ReconciliationEngine:
    """
    Service that owns the polling pass.

    Handles:
    - Token acquisition at the start of a pass
    - Concurrent per-channel lookups
    - Transition detection and state updates, once every lookup has finished
    - Publishing the pass' events on the event bus
    """

    def __init__(
        self,
        context: NotifierContext,
        fetcher: ChannelInfoFetcher,
        token_provider: TokenProvider,
        bus: EventBus,
    ) -> None:
        self._context = context
        self._fetcher = fetcher
        self._token_provider = token_provider
        self._bus = bus
        self._lock = asyncio.Lock()
        self._auth_error: str | None = None

    @property
    def running(self) -> bool:
        return self._lock.locked()

    async def run_pass(self) -> list[Event]:
        """
        Run one polling pass over every configured channel.

        The events are published as they become available: `SyncingStarted`
        right away, then the per-channel transitions in configured order,
        the snapshot, and `SyncingEnded`. Only one pass runs at a time,
        a concurrent call waits for the running one to finish first.

        Returns:
            Every event published during this pass, in order
        """
        async with self._lock:
            started: list[Event] = [SyncingStarted()]
            await self._bus.publish(started)
            events: list[Event] = []
            try:
                events.extend(await self._reconcile_all())
            finally:
                events.append(SyncingEnded())
                await self._bus.publish(events)
            return started + events

    async def _reconcile_all(self) -> list[Event]:
        channels: list[str] = self._context.channels
        try:
            await self._token_provider.get_token()
        except AuthFailure as exc:
            logger.error(f"Unable to sync channels: {exc}")
            return [AuthFailed(str(exc))]

        self._auth_error = None
        tasks: list[asyncio.Task[ChannelInfo | None]] = [
            asyncio.create_task(self._lookup(identifier)) for identifier in channels
        ]
        try:
            lookups: list[ChannelInfo | None] = await asyncio.gather(*tasks)
        finally:
            # a failed or cancelled pass leaves no lookup behind
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.wait(pending)

        # nothing is written to the stored state before every lookup has finished
        events: list[Event] = []
        for identifier, info in zip(channels, lookups):
            if info is None:
                continue
            if identifier not in self._context.settings.channels:
                # removed while the lookup was running
                engine_logger.debug(f"Discarding lookup for removed channel {identifier}")
                continue
            events.extend(self.reconcile(self._context.ensure_state(identifier), info))
        if self._auth_error is not None:
            # the token got rejected halfway through, and couldn't be replaced
            events.append(AuthFailed(self._auth_error))
        events.append(SnapshotUpdated(self._context.snapshot()))
        logger.log(CALL, f"Checked all channels ({len(channels)})")
        return events

    async def _lookup(self, identifier: str) -> ChannelInfo | None:
        try:
            return await self._fetcher.fetch_channel_info(identifier)
        except FetchFailure as exc:
            # keep the last known state, a failed lookup doesn't mean the channel went offline
            logger.warning(str(exc))
        except AuthFailure as exc:
            logger.warning(f"Failed to fetch channel info for {identifier}: {exc}")
            self._auth_error = str(exc)
        except ExitRequest:
            raise
        except Exception:
            logger.exception(f"Unexpected error while fetching channel info for {identifier}")
        return None

    def reconcile(self, state: ChannelState, info: ChannelInfo) -> list[Event]:
        """
        Apply a lookup result to the stored state and return the resulting events.

        At most one transition is reported per channel per pass: going live
        wins over going offline (they can't both happen), and an info change
        is only reported for a channel that stays offline.
        """
        went_live, went_offline, info_changed = classify(state, info)
        events: list[Event] = []
        if went_live:
            logger.info(f"{info.identifier} is live!")
            events.append(StreamWentLive(info.identifier, info.display_name))
            if self._context.settings.auto_open_streams:
                events.append(OpenStreamRequested(info.identifier, state.url))
        elif went_offline:
            logger.info(f"{info.identifier} is offline!")
            events.append(StreamWentOffline(info.identifier, info.display_name))
        elif info_changed and not info.is_live:
            logger.info(f"{info.identifier} updated their stream info while offline")
            events.append(StreamInfoUpdatedWhileOffline(info.identifier, info.display_name))
        engine_logger.debug(
            f"{info.identifier}: live={state.is_live}->{info.is_live}, "
            f"game={state.game_name!r}->{info.game_name!r}, "
            f"title={state.stream_title!r}->{info.stream_title!r}"
        )
        state.apply(info)
        return events
