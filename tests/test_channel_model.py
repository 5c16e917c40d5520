import unittest
from datetime import datetime, timezone

from live_notifier.models import ChannelInfo, ChannelState, stream_url


USER = {
    "id": "141981764",
    "login": "alice",
    "display_name": "Alice",
    "profile_image_url": "https://static-cdn.jtvnw.net/alice.png",
}
STREAM = {
    "user_login": "alice",
    "type": "live",
    "viewer_count": 120,
    "game_name": "Just Chatting",
    "title": "stream title",
    "is_mature": False,
    "started_at": "2024-05-01T17:00:00Z",
}
CHANNEL = {
    "broadcaster_login": "alice",
    "game_name": "Chess",
    "title": "channel title",
    "is_mature": True,
}


class TestChannelInfo(unittest.TestCase):
    def test_from_helix_live(self):
        info = ChannelInfo.from_helix("alice", USER, STREAM, CHANNEL)
        self.assertTrue(info.is_live)
        self.assertEqual(info.display_name, "Alice")
        self.assertEqual(info.viewer_count, 120)
        # the channel record wins over the stream record
        self.assertEqual(info.game_name, "Chess")
        self.assertEqual(info.stream_title, "channel title")
        self.assertTrue(info.is_mature)
        self.assertEqual(info.started_at, datetime(2024, 5, 1, 17, tzinfo=timezone.utc))

    def test_from_helix_stream_fills_in_missing_channel_data(self):
        info = ChannelInfo.from_helix("alice", USER, STREAM, None)
        self.assertEqual(info.game_name, "Just Chatting")
        self.assertEqual(info.stream_title, "stream title")
        self.assertFalse(info.is_mature)

    def test_from_helix_offline(self):
        info = ChannelInfo.from_helix("alice", USER, None, CHANNEL)
        self.assertFalse(info.is_live)
        self.assertEqual(info.viewer_count, 0)
        self.assertIsNone(info.started_at)
        # the metadata is still known while offline
        self.assertEqual(info.game_name, "Chess")

    def test_from_helix_non_live_stream_type(self):
        info = ChannelInfo.from_helix("alice", USER, {**STREAM, "type": ""}, CHANNEL)
        self.assertFalse(info.is_live)
        self.assertEqual(info.viewer_count, 0)

    def test_display_name_falls_back_to_identifier(self):
        info = ChannelInfo.from_helix("alice", {"id": "1", "display_name": ""}, None, None)
        self.assertEqual(info.display_name, "alice")
        self.assertIsNone(info.profile_image_url)


class TestChannelState(unittest.TestCase):
    def test_new_state_is_unobserved(self):
        state = ChannelState("alice")
        self.assertIsNone(state.is_live)
        self.assertFalse(state.observed)
        self.assertIsNone(state.game_name)
        self.assertEqual(state.url, "https://twitch.tv/alice")

    def test_apply_overwrites_everything(self):
        state = ChannelState("alice")
        state.apply(ChannelInfo.from_helix("alice", USER, STREAM, CHANNEL))
        self.assertTrue(state.observed)
        self.assertTrue(state.is_live)
        self.assertEqual(state.viewer_count, 120)
        state.apply(ChannelInfo.from_helix("alice", USER, None, {"broadcaster_login": "alice"}))
        self.assertFalse(state.is_live)
        self.assertEqual(state.viewer_count, 0)
        self.assertIsNone(state.game_name)

    def test_copy_is_independent(self):
        state = ChannelState("alice")
        state.apply(ChannelInfo.from_helix("alice", USER, STREAM, CHANNEL))
        clone = state.copy()
        state.apply(ChannelInfo.from_helix("alice", USER, None, CHANNEL))
        self.assertTrue(clone.is_live)
        self.assertFalse(state.is_live)

    def test_to_json(self):
        state = ChannelState("alice")
        data = state.to_json()
        self.assertFalse(data["online"])
        self.assertFalse(data["observed"])
        self.assertEqual(data["name"], "alice")
        state.apply(ChannelInfo.from_helix("alice", USER, STREAM, CHANNEL))
        data = state.to_json()
        self.assertTrue(data["online"])
        self.assertEqual(data["viewers"], 120)
        self.assertEqual(data["started_at"], "2024-05-01T17:00:00+00:00")
        self.assertEqual(data["url"], stream_url("alice"))


if __name__ == "__main__":
    unittest.main()
