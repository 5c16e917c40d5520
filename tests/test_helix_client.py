import unittest
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

from live_notifier.api import HelixClient
from live_notifier.config import HELIX_URL
from live_notifier.exceptions import AuthFailure, HelixException


def fake_response(status, payload):
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    return response


def make_http(*responses):
    http = MagicMock()
    http.calls = []

    @asynccontextmanager
    async def request(method, url, **kwargs):
        http.calls.append((method, url, kwargs))
        yield responses[len(http.calls) - 1]

    http.request = request
    return http


def make_token_provider():
    provider = MagicMock()
    provider.client_id = "my-client"
    provider.get_token = AsyncMock(return_value="token")
    return provider


class TestHelixClient(unittest.IsolatedAsyncioTestCase):
    async def test_get_returns_data(self):
        http = make_http(fake_response(200, {"data": [{"id": "42", "login": "alice"}]}))
        helix = HelixClient(http, make_token_provider())
        data = await helix.get("users", {"login": "alice"})
        self.assertEqual(data, [{"id": "42", "login": "alice"}])
        method, url, kwargs = http.calls[0]
        self.assertEqual(method, "GET")
        self.assertEqual(url, HELIX_URL / "users")
        self.assertEqual(kwargs["params"], {"login": "alice"})
        self.assertEqual(
            kwargs["headers"], {"Client-Id": "my-client", "Authorization": "Bearer token"}
        )

    async def test_empty_data(self):
        http = make_http(fake_response(200, {"data": []}))
        helix = HelixClient(http, make_token_provider())
        self.assertEqual(await helix.get("streams", {"user_login": "alice"}), [])

    async def test_unauthorized_invalidates_token(self):
        provider = make_token_provider()
        http = make_http(
            fake_response(401, {"error": "Unauthorized", "status": 401, "message": "Invalid OAuth token"})
        )
        helix = HelixClient(http, provider)
        with self.assertRaises(HelixException) as ctx:
            await helix.get("users", {"login": "alice"})
        self.assertEqual(ctx.exception.status, 401)
        provider.invalidate.assert_called_once()

    async def test_bad_request(self):
        provider = make_token_provider()
        http = make_http(fake_response(400, {"status": 400, "message": "Malformed query params."}))
        helix = HelixClient(http, provider)
        with self.assertRaises(HelixException) as ctx:
            await helix.get("channels", {"broadcaster_id": ""})
        self.assertIn("Malformed query params.", str(ctx.exception))
        provider.invalidate.assert_not_called()

    async def test_no_token(self):
        provider = make_token_provider()
        provider.get_token.side_effect = AuthFailure("invalid client secret")
        http = make_http()
        helix = HelixClient(http, provider)
        with self.assertRaises(AuthFailure):
            await helix.get("users", {"login": "alice"})
        self.assertEqual(http.calls, [])


if __name__ == "__main__":
    unittest.main()
