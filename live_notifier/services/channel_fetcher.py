"""
Channel info fetcher.

Performs the user, stream and channel lookups for a single channel and
merges them into one ChannelInfo record.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import aiohttp

from live_notifier.exceptions import FetchFailure, RequestException
from live_notifier.models import ChannelInfo
from live_notifier.utils import canonical_name


if TYPE_CHECKING:
    from live_notifier.api import HelixClient
    from live_notifier.config import JsonType


logger = logging.getLogger("LiveNotifier")


class ChannelInfoFetcher:
    """
    Service responsible for looking up a channel on Helix.

    Handles:
    - Resolving the login name into the broadcaster ID (users endpoint)
    - Checking the live status (streams endpoint)
    - Reading the game, title and maturity flag (channels endpoint)
    """

    def __init__(self, helix: HelixClient) -> None:
        self._helix = helix

    async def fetch_channel_info(self, identifier: str) -> ChannelInfo:
        """
        Fetch the current information about a channel.

        Args:
            identifier: The channel's login name, any case

        Returns:
            The normalized channel information

        Raises:
            FetchFailure: If any of the lookups failed, or the channel doesn't exist
            AuthFailure: If no access token could be obtained
        """
        identifier = canonical_name(identifier)
        try:
            users = await self._helix.get("users", {"login": identifier})
            if not users:
                raise FetchFailure(identifier, "unknown channel")
            user: JsonType = users[0]
            streams = await self._helix.get("streams", {"user_login": identifier})
            channels = await self._helix.get("channels", {"broadcaster_id": user["id"]})
        except (
            RequestException,
            aiohttp.ClientError,
            asyncio.TimeoutError,
            KeyError,
            ValueError,
        ) as exc:
            raise FetchFailure(identifier, f"{type(exc).__name__}: {exc}") from exc

        stream: JsonType | None = streams[0] if streams else None
        channel: JsonType | None = next(
            (
                channel_data
                for channel_data in channels
                if canonical_name(channel_data.get("broadcaster_login", "")) == identifier
            ),
            None,
        )
        info = ChannelInfo.from_helix(identifier, user, stream, channel)
        logger.debug(f"Fetched {info!r}")
        return info
