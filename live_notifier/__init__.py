"""Twitch live notifier: polls Helix for a list of channels and reports live/offline changes."""
