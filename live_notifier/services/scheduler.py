"""
Scheduler service driving the polling passes and the update check.

Both run as independent asyncio tasks, so a slow update check never delays
a pass and the other way around.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from datetime import timedelta
from typing import TYPE_CHECKING

from live_notifier.config import CALL
from live_notifier.exceptions import ExitRequest
from live_notifier.utils import task_wrapper


if TYPE_CHECKING:
    from live_notifier.config.settings import Settings
    from live_notifier.services.reconciler import ReconciliationEngine
    from live_notifier.services.update_checker import UpdateChecker


logger = logging.getLogger("LiveNotifier")

# lower bound for the poll interval, regardless of what the settings say
MIN_POLL_INTERVAL = timedelta(seconds=10)


class Scheduler:
    """
    Service responsible for the periodic tasks.

    Handles:
    - A pass right after starting, then one every poll interval
    - Manual "run now" triggers, coalesced while a pass is running
    - The update check, on its own (longer) interval
    """

    def __init__(
        self,
        settings: Settings,
        engine: ReconciliationEngine,
        update_checker: UpdateChecker | None = None,
    ) -> None:
        self._settings = settings
        self._engine = engine
        self._update_checker = update_checker
        self._wakeup = asyncio.Event()
        self._poll_task: asyncio.Task[None] | None = None
        self._update_task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    @property
    def poll_interval(self) -> timedelta:
        return max(timedelta(seconds=self._settings.poll_interval_seconds), MIN_POLL_INTERVAL)

    @property
    def update_interval(self) -> timedelta:
        return timedelta(minutes=max(self._settings.update_check_interval_minutes, 1))

    def start(self) -> None:
        """Start both loops. Does nothing if the scheduler is already running."""
        if self.running:
            return
        logger.info(f"Starting scheduler, polling every {self.poll_interval.total_seconds():.0f}s")
        self._wakeup.clear()
        self._poll_task = asyncio.create_task(self._poll_loop())
        if self._update_checker is not None:
            self._update_task = asyncio.create_task(self._update_loop())

    def trigger(self) -> None:
        """
        Request a pass outside of the regular interval.

        If a pass is already running, a single follow-up pass is run after it,
        no matter how many times this was called in the meantime.
        """
        if not self.running:
            logger.debug("Scheduler isn't running, ignoring the pass request")
            return
        logger.log(CALL, "Pass requested")
        self._wakeup.set()

    async def stop(self) -> None:
        """Cancel both loops and wait for them to finish."""
        tasks = [task for task in (self._poll_task, self._update_task) if task is not None]
        self._poll_task = None
        self._update_task = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task
        if tasks:
            logger.info("Scheduler stopped")

    async def _run_pass(self) -> None:
        try:
            await self._engine.run_pass()
        except ExitRequest:
            raise
        except Exception:
            # the scheduler has to outlive any single pass
            logger.exception("Pass failed")

    @task_wrapper
    async def _poll_loop(self) -> None:
        while True:
            # triggers arriving during the pass schedule the next one right away
            self._wakeup.clear()
            await self._run_pass()
            with suppress(asyncio.TimeoutError):
                await asyncio.wait_for(
                    self._wakeup.wait(), timeout=self.poll_interval.total_seconds()
                )

    @task_wrapper
    async def _update_loop(self) -> None:
        assert self._update_checker is not None
        while True:
            try:
                await self._update_checker.check()
            except ExitRequest:
                raise
            except Exception:
                logger.exception("Update check failed")
            await asyncio.sleep(self.update_interval.total_seconds())
