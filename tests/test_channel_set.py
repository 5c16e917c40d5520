import argparse
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from live_notifier.config.settings import Settings
from live_notifier.core.context import NotifierContext
from live_notifier.core.event_bus import EventBus
from live_notifier.models import ChannelRemoved
from live_notifier.services import ChannelSetManager


class TestChannelSetManager(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name, "settings.json")
        self.settings = Settings(argparse.Namespace(), self.path)
        self.context = NotifierContext(self.settings)
        self.scheduler = MagicMock()
        self.bus = EventBus()
        self.published = []
        self.bus.subscribe(self.published.append)
        self.manager = ChannelSetManager(self.context, self.scheduler, self.bus)

    def tearDown(self):
        self._tmp.cleanup()

    def test_add_is_case_insensitive(self):
        self.assertTrue(self.manager.add("Bob"))
        with self.assertLogs("LiveNotifier", level="INFO") as logs:
            self.assertFalse(self.manager.add("bob"))
        self.assertIn("bob is already in the config", logs.output[0])
        self.assertEqual(self.settings.channels, ["bob"])
        self.assertEqual(self.scheduler.trigger.call_count, 1)
        self.assertIn("bob", self.manager)
        self.assertIn("BOB", self.manager)

    def test_add_persists_and_tracks_state(self):
        self.manager.add("  Alice ")
        self.assertEqual(self.settings.channels, ["alice"])
        self.assertIn("alice", self.context.states)
        self.assertFalse(self.context.states["alice"].observed)
        reloaded = Settings(argparse.Namespace(), self.path)
        self.assertEqual(reloaded.channels, ["alice"])

    def test_add_keeps_order(self):
        for name in ("carol", "alice", "bob"):
            self.manager.add(name)
        self.assertEqual(self.settings.channels, ["carol", "alice", "bob"])
        self.assertEqual(list(self.context.snapshot()), ["carol", "alice", "bob"])

    def test_add_empty_name(self):
        self.assertFalse(self.manager.add("   "))
        self.assertEqual(self.settings.channels, [])
        self.scheduler.trigger.assert_not_called()

    def test_add_with_failing_save(self):
        with patch("live_notifier.config.settings.json_save", side_effect=OSError("disk full")):
            with self.assertLogs("LiveNotifier", level="ERROR"):
                self.assertTrue(self.manager.add("alice"))
        # still tracked and polled, the next successful save catches up
        self.assertEqual(self.settings.channels, ["alice"])
        self.scheduler.trigger.assert_called_once()

    async def test_remove(self):
        self.manager.add("alice")
        self.manager.add("bob")
        self.assertTrue(await self.manager.remove("ALICE"))
        self.assertEqual(self.settings.channels, ["bob"])
        self.assertNotIn("alice", self.context.states)
        self.assertEqual(self.published, [ChannelRemoved("alice")])
        reloaded = Settings(argparse.Namespace(), self.path)
        self.assertEqual(reloaded.channels, ["bob"])

    async def test_remove_missing(self):
        with self.assertLogs("LiveNotifier", level="INFO") as logs:
            self.assertFalse(await self.manager.remove("nobody"))
        self.assertIn("nobody is not in the config", logs.output[0])
        self.assertEqual(self.published, [])


if __name__ == "__main__":
    unittest.main()
