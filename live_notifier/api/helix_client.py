"""
Client for the Twitch Helix REST API.

Handles authorization headers, rate limiting and error responses.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from live_notifier.config import HELIX_RATE_CAPACITY, HELIX_RATE_WINDOW, HELIX_URL
from live_notifier.exceptions import HelixException
from live_notifier.utils import RateLimiter


if TYPE_CHECKING:
    from live_notifier.api.http_client import HTTPClient
    from live_notifier.auth import TokenProvider
    from live_notifier.config import JsonType


logger = logging.getLogger("LiveNotifier")
helix_logger = logging.getLogger("LiveNotifier.helix")


class HelixClient:
    """
    Helix API client.

    This client provides:
    - Bearer token and Client-Id headers on every request
    - Rate limited requests
    - Token invalidation when Helix rejects the token
    """

    def __init__(self, http_client: HTTPClient, token_provider: TokenProvider):
        self.http_client = http_client
        self._token_provider = token_provider
        self._limiter = RateLimiter(capacity=HELIX_RATE_CAPACITY, window=HELIX_RATE_WINDOW)

    async def headers(self) -> dict[str, str]:
        token = await self._token_provider.get_token()
        return {
            "Client-Id": self._token_provider.client_id,
            "Authorization": f"Bearer {token}",
        }

    async def get(self, endpoint: str, params: JsonType) -> list[JsonType]:
        """
        Execute a GET request against a Helix endpoint.

        Parameters
        ----------
        endpoint : str
            Endpoint path relative to the Helix root, ex. "streams"
        params : JsonType
            Query parameters

        Returns
        -------
        list[JsonType]
            The `data` list of the response

        Raises
        ------
        AuthFailure
            If no token could be obtained
        HelixException
            If the API responded with an error status
        """
        headers = await self.headers()
        helix_logger.debug(f"Helix Request: {endpoint} {params}")
        async with self._limiter:
            async with self.http_client.request(
                "GET", HELIX_URL / endpoint, params=params, headers=headers
            ) as response:
                status = response.status
                response_json: JsonType = await response.json()
        helix_logger.debug(f"Helix Response: {response_json}")

        if status == 401:
            # the token expired or got revoked, get a new one next time
            logger.info("Helix rejected the access token, invalidating it")
            self._token_provider.invalidate()
        if status != 200:
            raise HelixException(status, response_json.get("message", "unknown error"))
        return response_json.get("data") or []
