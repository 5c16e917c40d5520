import asyncio
import unittest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from live_notifier.services import Scheduler
from live_notifier.services.scheduler import MIN_POLL_INTERVAL


class BlockingEngine:
    """Counts passes, each one waits until the gate is opened."""

    def __init__(self):
        self.passes = 0
        self.gate = asyncio.Event()
        self.entered = asyncio.Event()

    async def run_pass(self):
        self.passes += 1
        self.entered.set()
        await self.gate.wait()
        return []


def make_settings(poll_interval_seconds=3600, update_check_interval_minutes=60):
    settings = MagicMock()
    settings.poll_interval_seconds = poll_interval_seconds
    settings.update_check_interval_minutes = update_check_interval_minutes
    return settings


class TestScheduler(unittest.IsolatedAsyncioTestCase):
    async def test_intervals(self):
        scheduler = Scheduler(make_settings(1, 0), MagicMock())
        self.assertEqual(scheduler.poll_interval, MIN_POLL_INTERVAL)
        self.assertEqual(scheduler.update_interval, timedelta(minutes=1))
        scheduler = Scheduler(make_settings(60, 60), MagicMock())
        self.assertEqual(scheduler.poll_interval, timedelta(seconds=60))
        self.assertEqual(scheduler.update_interval, timedelta(hours=1))

    async def test_start_runs_a_pass_right_away(self):
        engine = BlockingEngine()
        engine.gate.set()
        checker = MagicMock()
        checker.check = AsyncMock(return_value=False)
        scheduler = Scheduler(make_settings(), engine, checker)
        scheduler.start()
        self.assertTrue(scheduler.running)
        await asyncio.sleep(0.01)
        self.assertEqual(engine.passes, 1)
        checker.check.assert_awaited_once()
        await scheduler.stop()
        self.assertFalse(scheduler.running)

    async def test_start_twice(self):
        engine = BlockingEngine()
        engine.gate.set()
        scheduler = Scheduler(make_settings(), engine)
        scheduler.start()
        scheduler.start()
        await asyncio.sleep(0.01)
        self.assertEqual(engine.passes, 1)
        await scheduler.stop()

    async def test_trigger_runs_another_pass(self):
        engine = BlockingEngine()
        engine.gate.set()
        scheduler = Scheduler(make_settings(), engine)
        scheduler.start()
        await asyncio.sleep(0.01)
        scheduler.trigger()
        await asyncio.sleep(0.01)
        self.assertEqual(engine.passes, 2)
        await scheduler.stop()

    async def test_triggers_during_a_pass_are_coalesced(self):
        engine = BlockingEngine()
        scheduler = Scheduler(make_settings(), engine)
        scheduler.start()
        await asyncio.wait_for(engine.entered.wait(), timeout=1)
        for _ in range(3):
            scheduler.trigger()
        engine.gate.set()
        await asyncio.sleep(0.05)
        self.assertEqual(engine.passes, 2)
        await scheduler.stop()

    async def test_trigger_when_stopped_is_ignored(self):
        engine = BlockingEngine()
        engine.gate.set()
        scheduler = Scheduler(make_settings(), engine)
        scheduler.trigger()
        await asyncio.sleep(0.01)
        self.assertEqual(engine.passes, 0)

    async def test_stop_cancels_running_pass(self):
        engine = BlockingEngine()
        scheduler = Scheduler(make_settings(), engine)
        scheduler.start()
        await asyncio.wait_for(engine.entered.wait(), timeout=1)
        await scheduler.stop()
        self.assertFalse(scheduler.running)
        scheduler.trigger()
        engine.gate.set()
        await asyncio.sleep(0.01)
        self.assertEqual(engine.passes, 1)

    async def test_failed_pass_does_not_stop_the_scheduler(self):
        engine = MagicMock()
        engine.run_pass = AsyncMock(side_effect=[RuntimeError("boom"), [], []])
        scheduler = Scheduler(make_settings(), engine)
        with self.assertLogs("LiveNotifier", level="ERROR"):
            scheduler.start()
            await asyncio.sleep(0.01)
        self.assertTrue(scheduler.running)
        scheduler.trigger()
        await asyncio.sleep(0.01)
        self.assertEqual(engine.run_pass.await_count, 2)
        await scheduler.stop()

    async def test_failed_update_check_is_logged(self):
        engine = BlockingEngine()
        engine.gate.set()
        checker = MagicMock()
        checker.check = AsyncMock(side_effect=RuntimeError("boom"))
        scheduler = Scheduler(make_settings(), engine, checker)
        with self.assertLogs("LiveNotifier", level="ERROR"):
            scheduler.start()
            await asyncio.sleep(0.01)
        self.assertTrue(scheduler.running)
        await scheduler.stop()


if __name__ == "__main__":
    unittest.main()
