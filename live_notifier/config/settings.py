from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, TypedDict

from yarl import URL

from live_notifier.config.constants import POLL_INTERVAL, UPDATE_CHECK_INTERVAL
from live_notifier.config.paths import SETTINGS_PATH
from live_notifier.exceptions import ConfigPersistFailure
from live_notifier.utils import canonical_name, deduplicate, json_load, json_save


if TYPE_CHECKING:
    from typing import Any as ParsedArgs  # Avoid circular import


class SettingsFile(TypedDict):
    client_id: str
    client_secret: str
    channels: list[str]
    auto_open_streams: bool
    dark_mode: bool
    debug_mode: bool
    initialized: bool
    proxy: URL
    connection_quality: int
    poll_interval_seconds: int
    update_check_interval_minutes: int


default_settings: SettingsFile = {
    "client_id": "",
    "client_secret": "",
    "channels": [],
    "auto_open_streams": False,
    "dark_mode": False,
    "debug_mode": False,
    "initialized": False,
    "proxy": URL(),
    "connection_quality": 1,
    "poll_interval_seconds": int(POLL_INTERVAL.total_seconds()),
    "update_check_interval_minutes": int(UPDATE_CHECK_INTERVAL.total_seconds() // 60),
}


class Settings:
    # from args
    host: str
    port: int
    no_browser: bool
    # args properties
    logging_level: int
    # from settings file
    client_id: str
    client_secret: str
    channels: list[str]
    auto_open_streams: bool
    dark_mode: bool
    debug_mode: bool
    initialized: bool
    proxy: URL
    connection_quality: int
    poll_interval_seconds: int
    update_check_interval_minutes: int

    PASSTHROUGH = ("_settings", "_args", "_altered", "_path")

    def __init__(self, args: ParsedArgs, path: Path = SETTINGS_PATH):
        self._path: Path = path
        # copy the template, so that the default channel list is never shared
        defaults: SettingsFile = {**default_settings, "channels": []}
        self._settings: SettingsFile = json_load(path, defaults)
        self._args: ParsedArgs = args
        self._altered: bool = False
        # channel identity is case-insensitive, the file may have been edited by hand
        # only names are kept, entries of any other type are dropped
        channels = deduplicate(
            name
            for raw in self._settings["channels"]
            if isinstance(raw, str) and (name := canonical_name(raw))
        )
        if channels != self._settings["channels"]:
            self._settings["channels"] = channels
            self._altered = True

    # default logic of reading settings is to check args first, then the settings file
    def __getattr__(self, name: str, /) -> Any:
        if name in self.PASSTHROUGH:
            # passthrough
            return getattr(super(), name)
        elif hasattr(self._args, name):
            return getattr(self._args, name)
        elif name in self._settings:
            return self._settings[name]  # type: ignore[literal-required]
        return getattr(super(), name)

    def __setattr__(self, name: str, value: Any, /) -> None:
        if name in self.PASSTHROUGH:
            # passthrough
            return super().__setattr__(name, value)
        elif name in self._settings:
            self._settings[name] = value  # type: ignore[literal-required]
            self._altered = True
            return
        raise TypeError(f"{name} is missing a custom setter")

    def __delattr__(self, name: str, /) -> None:
        raise RuntimeError("settings can't be deleted")

    @property
    def has_credentials(self) -> bool:
        return bool(self._settings["client_id"] and self._settings["client_secret"])

    def alter(self) -> None:
        self._altered = True

    def save(self, *, force: bool = False) -> None:
        """
        Write the whole settings blob to disk.

        Raises ConfigPersistFailure if the file can't be written.
        The in-memory state is kept either way.
        """
        if not (self._altered or force):
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            json_save(self._path, self._settings, sort=True)
        except OSError as exc:
            raise ConfigPersistFailure(f"Failed to save settings to {self._path}: {exc}") from exc
        self._altered = False
