import asyncio
import unittest
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

from live_notifier.auth import TokenProvider
from live_notifier.config import TOKEN_URL
from live_notifier.exceptions import AuthFailure, RequestException


def fake_response(status, payload):
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=str(payload))
    return response


def make_http(*responses):
    http = MagicMock()
    http.calls = []

    @asynccontextmanager
    async def request(method, url, **kwargs):
        http.calls.append((method, url, kwargs))
        item = responses[len(http.calls) - 1]
        if isinstance(item, Exception):
            raise item
        # let other tasks run while the "request" is in flight
        await asyncio.sleep(0)
        yield item

    http.request = request
    return http


def make_settings(client_id="my-client", client_secret="my-secret"):
    settings = MagicMock()
    settings.client_id = client_id
    settings.client_secret = client_secret
    settings.has_credentials = bool(client_id and client_secret)
    return settings


TOKEN = {"access_token": "abcdefghijklmnopqrstuvwxyz0123", "expires_in": 5011271}


class TestTokenProvider(unittest.IsolatedAsyncioTestCase):
    async def test_exchange_and_cache(self):
        http = make_http(fake_response(200, TOKEN))
        provider = TokenProvider(make_settings(), http)
        self.assertFalse(provider.has_token)
        self.assertEqual(await provider.get_token(), TOKEN["access_token"])
        self.assertEqual(await provider.get_token(), TOKEN["access_token"])
        self.assertTrue(provider.has_token)
        self.assertEqual(len(http.calls), 1)
        method, url, kwargs = http.calls[0]
        self.assertEqual(method, "POST")
        self.assertEqual(url, TOKEN_URL)
        self.assertEqual(
            kwargs["params"],
            {
                "client_id": "my-client",
                "client_secret": "my-secret",
                "grant_type": "client_credentials",
            },
        )

    async def test_concurrent_requests_share_one_exchange(self):
        http = make_http(fake_response(200, TOKEN), fake_response(200, TOKEN))
        provider = TokenProvider(make_settings(), http)
        tokens = await asyncio.gather(provider.get_token(), provider.get_token())
        self.assertEqual(tokens, [TOKEN["access_token"]] * 2)
        self.assertEqual(len(http.calls), 1)

    async def test_invalidate(self):
        http = make_http(
            fake_response(200, TOKEN), fake_response(200, {"access_token": "second"})
        )
        provider = TokenProvider(make_settings(), http)
        await provider.get_token()
        provider.invalidate()
        self.assertFalse(provider.has_token)
        self.assertEqual(await provider.get_token(), "second")

    async def test_rejected_credentials(self):
        http = make_http(fake_response(400, {"status": 400, "message": "invalid client secret"}))
        provider = TokenProvider(make_settings(), http)
        with self.assertRaises(AuthFailure) as ctx:
            await provider.get_token()
        self.assertIn("invalid client secret", str(ctx.exception))
        self.assertFalse(provider.has_token)

    async def test_transport_failure(self):
        http = make_http(RequestException("POST failed after 3 attempts"))
        provider = TokenProvider(make_settings(), http)
        with self.assertRaises(AuthFailure):
            await provider.get_token()

    async def test_missing_access_token(self):
        http = make_http(fake_response(200, {"token_type": "bearer"}))
        provider = TokenProvider(make_settings(), http)
        with self.assertRaises(AuthFailure):
            await provider.get_token()

    async def test_missing_credentials(self):
        http = make_http()
        provider = TokenProvider(make_settings(client_secret=""), http)
        with self.assertRaises(AuthFailure):
            await provider.get_token()
        self.assertEqual(http.calls, [])


if __name__ == "__main__":
    unittest.main()
