import argparse
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from yarl import URL

from live_notifier.config.settings import Settings
from live_notifier.exceptions import ConfigPersistFailure


class TestSettings(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name, "settings.json")

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, contents: dict):
        self.path.write_text(json.dumps(contents), encoding="utf8")

    def test_defaults_without_file(self):
        settings = Settings(argparse.Namespace(), self.path)
        self.assertEqual(settings.channels, [])
        self.assertFalse(settings.auto_open_streams)
        self.assertEqual(settings.poll_interval_seconds, 60)
        self.assertEqual(settings.update_check_interval_minutes, 60)
        self.assertEqual(settings.proxy, URL())
        self.assertFalse(settings.has_credentials)

    def test_channels_canonicalized_and_deduplicated(self):
        self._write({"channels": ["Bob", " alice ", "bob", "", "ALICE", "carol"]})
        settings = Settings(argparse.Namespace(), self.path)
        self.assertEqual(settings.channels, ["bob", "alice", "carol"])
        # the cleaned up list gets written back on the next save
        settings.save()
        stored = json.loads(self.path.read_text(encoding="utf8"))
        self.assertEqual(stored["channels"], ["bob", "alice", "carol"])

    def test_channels_that_arent_names_are_dropped(self):
        self._write({"channels": ["alice", None, 42, {"name": "bob"}, "Carol"]})
        settings = Settings(argparse.Namespace(), self.path)
        self.assertEqual(settings.channels, ["alice", "carol"])
        self.assertNotIn("none", settings.channels)

    def test_unknown_stored_types_fall_back_to_defaults(self):
        self._write(
            {
                "proxy": {"__type": "set", "data": ["http://localhost:8888"]},
                "auto_open_streams": True,
            }
        )
        settings = Settings(argparse.Namespace(), self.path)
        self.assertEqual(settings.proxy, URL())
        self.assertTrue(settings.auto_open_streams)

    def test_unknown_and_mistyped_keys_replaced(self):
        self._write({"channels": "alice", "auto_open_streams": True, "language": "English"})
        settings = Settings(argparse.Namespace(), self.path)
        self.assertEqual(settings.channels, [])
        self.assertTrue(settings.auto_open_streams)
        with self.assertRaises(AttributeError):
            settings.language

    def test_args_take_precedence(self):
        args = argparse.Namespace(port=9000, no_browser=True)
        settings = Settings(args, self.path)
        self.assertEqual(settings.port, 9000)
        self.assertTrue(settings.no_browser)

    def test_has_credentials(self):
        settings = Settings(argparse.Namespace(), self.path)
        settings.client_id = "abc"
        self.assertFalse(settings.has_credentials)
        settings.client_secret = "def"
        self.assertTrue(settings.has_credentials)

    def test_unknown_setting_cant_be_set(self):
        settings = Settings(argparse.Namespace(), self.path)
        with self.assertRaises(TypeError):
            settings.something_else = 1

    def test_save_only_when_altered(self):
        settings = Settings(argparse.Namespace(), self.path)
        settings.save()
        self.assertFalse(self.path.exists())
        settings.auto_open_streams = True
        settings.save()
        stored = json.loads(self.path.read_text(encoding="utf8"))
        self.assertTrue(stored["auto_open_streams"])

    def test_proxy_round_trip(self):
        settings = Settings(argparse.Namespace(), self.path)
        settings.proxy = URL("http://localhost:8888")
        settings.save()
        reloaded = Settings(argparse.Namespace(), self.path)
        self.assertEqual(reloaded.proxy, URL("http://localhost:8888"))

    def test_save_failure_raises_persist_failure(self):
        settings = Settings(argparse.Namespace(), self.path)
        settings.channels = ["alice"]
        with patch("live_notifier.config.settings.json_save", side_effect=PermissionError("denied")):
            with self.assertRaises(ConfigPersistFailure):
                settings.save()
        # in-memory state is kept
        self.assertEqual(settings.channels, ["alice"])


if __name__ == "__main__":
    unittest.main()
