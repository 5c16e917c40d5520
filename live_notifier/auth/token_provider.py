"""App access token management for the Helix API."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import aiohttp

from live_notifier.config import TOKEN_URL
from live_notifier.exceptions import AuthFailure, ExitRequest, RequestException


if TYPE_CHECKING:
    from live_notifier.api.http_client import HTTPClient
    from live_notifier.config import JsonType
    from live_notifier.config.settings import Settings


logger = logging.getLogger("LiveNotifier")


class TokenProvider:
    """
    Exchanges the stored client credentials for an app access token.

    This class handles:
    - The client credentials grant against the token endpoint
    - Caching the token until it's invalidated (ex. after a 401 from Helix)
    - Serializing concurrent requests, so only one exchange is in flight
    """

    def __init__(self, settings: Settings, http_client: HTTPClient):
        self._settings: Settings = settings
        self._http_client: HTTPClient = http_client
        self._lock = asyncio.Lock()
        self._access_token: str | None = None

    @property
    def client_id(self) -> str:
        return self._settings.client_id

    @property
    def has_token(self) -> bool:
        return self._access_token is not None

    def invalidate(self) -> None:
        """Drop the cached token, the next `get_token` call exchanges the credentials again."""
        self._access_token = None

    async def get_token(self) -> str:
        """
        Return a bearer token, requesting a new one if none is cached.

        No retries are done here beyond the transport-level ones.

        Raises:
            AuthFailure: If the credentials are missing or the exchange failed
        """
        async with self._lock:
            if self._access_token is None:
                self._access_token = await self._exchange()
            return self._access_token

    async def _exchange(self) -> str:
        if not self._settings.has_credentials:
            raise AuthFailure("Client ID and secret are not configured")
        params = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "grant_type": "client_credentials",
        }
        try:
            async with self._http_client.request("POST", TOKEN_URL, params=params) as response:
                if response.status != 200:
                    # {"status": 400, "message": "invalid client secret"}
                    message = await self._error_message(response)
                    raise AuthFailure(f"Token request rejected ({response.status}): {message}")
                response_json: JsonType = await response.json()
        except ExitRequest:
            raise
        except (RequestException, aiohttp.ClientError, ValueError) as exc:
            raise AuthFailure(f"Token request failed: {exc}") from exc
        # {
        #     "access_token": "30 chars [a-z0-9]",
        #     "expires_in": 5011271,
        #     "token_type": "bearer"
        # }
        access_token = response_json.get("access_token")
        if not access_token:
            raise AuthFailure("Token response contained no access token")
        logger.info("OAuth token fetched successfully")
        return access_token

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> str:
        try:
            body: JsonType = await response.json()
        except (aiohttp.ContentTypeError, ValueError):
            return await response.text()
        return str(body.get("message", body))
