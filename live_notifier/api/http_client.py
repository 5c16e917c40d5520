"""
HTTP client for provider API requests.

Handles HTTP session management, request retries, and connection quality settings.
"""

from __future__ import annotations

import asyncio
import logging
from collections import abc
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import aiohttp
from yarl import URL

from live_notifier.config import REQUEST_ATTEMPTS, State
from live_notifier.exceptions import ExitRequest, RequestException
from live_notifier.utils import ExponentialBackoff


if TYPE_CHECKING:
    from live_notifier.config.settings import Settings
    from live_notifier.core.client import LiveNotifier


logger = logging.getLogger("LiveNotifier")


class HTTPClient:
    """
    Manages the HTTP session and retries requests with exponential backoff.

    This client provides:
    - A single lazily created session
    - A bounded number of retries on connection errors and server errors
    - Connection quality-based timeout configuration
    - Proxy support
    """

    def __init__(
        self,
        settings: Settings,
        notifier: LiveNotifier,
        *,
        max_attempts: int = REQUEST_ATTEMPTS,
    ):
        """
        Parameters
        ----------
        settings : Settings
            Application settings for connection quality and proxy configuration
        notifier : LiveNotifier
            Application object, checked for the exit state between retries
        max_attempts : int
            How many times a request is tried before giving up
        """
        self.settings = settings
        self._notifier = notifier
        self._max_attempts = max_attempts
        self._session: aiohttp.ClientSession | None = None

    async def get_session(self) -> aiohttp.ClientSession:
        """
        Get or create the HTTP session.

        Raises
        ------
        RuntimeError
            If the session is closed
        """
        if (session := self._session) is not None:
            if session.closed:
                raise RuntimeError("Session is closed")
            return session

        connection_quality = self.settings.connection_quality
        if connection_quality < 1:
            connection_quality = self.settings.connection_quality = 1
        elif connection_quality > 6:
            connection_quality = self.settings.connection_quality = 6

        timeout = aiohttp.ClientTimeout(
            sock_connect=5 * connection_quality,
            total=10 * connection_quality,
        )
        connector = aiohttp.TCPConnector(limit=50)
        self._session = aiohttp.ClientSession(timeout=timeout, connector=connector)
        return self._session

    @asynccontextmanager
    async def request(
        self,
        method: str,
        url: URL | str,
        **kwargs,
    ) -> abc.AsyncIterator[aiohttp.ClientResponse]:
        """
        Make an HTTP request with automatic retries.

        Responses with a status below 500 are yielded as-is, the caller decides
        what to do with client errors.

        Parameters
        ----------
        method : str
            HTTP method (GET, POST, etc.)
        url : URL | str
            Request URL
        **kwargs
            Additional arguments passed to aiohttp.ClientSession.request

        Yields
        ------
        aiohttp.ClientResponse
            The HTTP response

        Raises
        ------
        ExitRequest
            If the application is closing
        RequestException
            If all attempts failed
        """
        session = await self.get_session()
        method = method.upper()

        if self.settings.proxy and "proxy" not in kwargs:
            kwargs["proxy"] = self.settings.proxy

        logger.debug(f"Request: ({method=}, {url=})")
        backoff = ExponentialBackoff(maximum=30)
        last_error: str = ""

        for attempt, delay in enumerate(backoff, start=1):
            if self._notifier._state is State.EXIT:
                raise ExitRequest()

            response: aiohttp.ClientResponse | None = None
            usable = False
            try:
                response = await session.request(method, url, **kwargs)
                logger.debug(f"Response: {response.status}: {response.url}")
                if response.status < 500:
                    # Pre-read the response to avoid getting errors outside the context manager
                    await response.read()
                    usable = True
                else:
                    last_error = f"server responded with {response.status}"
            except aiohttp.ClientConnectorCertificateError:
                # SSL verification failures should not be retried
                raise
            except (
                aiohttp.ClientConnectionError,
                asyncio.TimeoutError,
                aiohttp.ClientPayloadError,
            ) as exc:
                last_error = f"{type(exc).__name__}: {exc}"

            if usable:
                assert response is not None
                try:
                    yield response
                finally:
                    response.release()
                return
            if response is not None:
                response.release()

            if attempt >= self._max_attempts:
                break
            logger.debug(f"Retrying {method} {url} in {delay:.1f}s ({last_error})")
            await asyncio.sleep(delay)

        raise RequestException(
            f"{method} {url} failed after {self._max_attempts} attempts: {last_error}"
        )

    async def close(self) -> None:
        """
        Close the HTTP session.

        This should be called during application shutdown.
        """
        if self._session is not None:
            await self._session.close()
            self._session = None
