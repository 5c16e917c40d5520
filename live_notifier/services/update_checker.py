"""Checks the project's release page for a newer version."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import aiohttp

from live_notifier.config import RELEASES_URL
from live_notifier.exceptions import ExitRequest, RequestException
from live_notifier.models import UpdateAvailable
from live_notifier.version import __version__


if TYPE_CHECKING:
    from live_notifier.api.http_client import HTTPClient
    from live_notifier.config import JsonType
    from live_notifier.core.event_bus import EventBus


logger = logging.getLogger("LiveNotifier")


def version_key(version: str) -> tuple[int, ...]:
    """Turn '1.10.2' (or 'v1.10.2-beta') into (1, 10, 2) for comparisons."""
    return tuple(int(part) for part in re.findall(r"\d+", version.split("-", 1)[0]))


class UpdateChecker:
    def __init__(
        self, http_client: HTTPClient, bus: EventBus, *, current_version: str = __version__
    ) -> None:
        self._http_client = http_client
        self._bus = bus
        self.current_version: str = current_version
        self.latest_version: str | None = None
        self.download_url: str | None = None
        self._announced: str | None = None

    @property
    def update_available(self) -> bool:
        return self.latest_version is not None and (
            version_key(self.latest_version) > version_key(self.current_version)
        )

    def info(self) -> dict[str, Any]:
        return {
            "current_version": self.current_version,
            "latest_version": self.latest_version,
            "update_available": self.update_available,
            "download_url": self.download_url,
        }

    async def check(self) -> bool:
        """
        Query the latest release, publishing `UpdateAvailable` the first time
        a newer version is seen. Failures are logged and otherwise ignored.

        Returns:
            True if a newer version is available
        """
        try:
            async with self._http_client.request(
                "GET", RELEASES_URL, headers={"Accept": "application/vnd.github+json"}
            ) as response:
                if response.status != 200:
                    logger.warning(f"Failed to check for updates: status {response.status}")
                    return False
                data: JsonType = await response.json()
        except ExitRequest:
            raise
        except (RequestException, aiohttp.ClientError, ValueError) as exc:
            logger.warning(f"Failed to check for updates: {exc}")
            return False

        latest: str = str(data.get("tag_name") or "").lstrip("v")
        if not latest:
            return False
        self.latest_version = latest
        self.download_url = data.get("html_url")
        if not self.update_available:
            logger.debug(f"No update available ({self.current_version} is current)")
            return False
        if self._announced != latest:
            self._announced = latest
            logger.info(f"Update available: {self.current_version} -> {latest}")
            await self._bus.publish([UpdateAvailable(latest, self.download_url or "")])
        return True
