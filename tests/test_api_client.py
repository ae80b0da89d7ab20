#!/usr/bin/env python3
"""
Unit tests for the TradeDesk HTTP client.

Run with:
    python -m pytest tests/test_api_client.py -v
"""

import asyncio
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

# ruff: noqa: E402
from tests.fakes import BASE_URL, FakeServer
from tradedesk.api import APIConnectionError, APIResponse, APIResponseError, TradeDeskAPI
from tradedesk.core.config import ClientConfig


def call(api: TradeDeskAPI, coro):
    async def _run():
        try:
            return await coro
        finally:
            await api.close()

    return asyncio.run(_run())


class TestAPIResponse:
    """Tests for the APIResponse helpers."""

    def test_ok_range(self):
        assert APIResponse(200).ok
        assert APIResponse(204).ok
        assert not APIResponse(302).ok
        assert not APIResponse(401).ok

    def test_unauthorized(self):
        assert APIResponse(401).unauthorized
        assert not APIResponse(403).unauthorized

    def test_success_flag(self):
        assert APIResponse(200, {"success": True}).success
        assert not APIResponse(200, {"success": False}).success
        assert not APIResponse(200).success


class TestTradeDeskAPI:
    """Tests for request building and decoding."""

    def test_base_url_trailing_slash(self):
        api = TradeDeskAPI(base_url="https://example.com/")
        assert api.base_url == "https://example.com"

    def test_from_config(self):
        config = ClientConfig(api_base_url="https://example.com//", request_timeout=3.0)
        api = TradeDeskAPI.from_config(config)
        assert api.base_url == "https://example.com"
        assert api.timeout == 3.0

    def test_request_url_and_body(self):
        server = FakeServer()
        server.respond("POST", "/api/login", body={"success": True})
        api = server.api()

        response = call(api, api.login("671234567", "pw"))

        request = server.requests[-1]
        assert str(request.url) == f"{BASE_URL}/api/login"
        assert request.headers["Content-Type"] == "application/json"
        assert server.last_json() == {"phone": "671234567", "password": "pw"}
        assert response.status_code == 200
        assert response.data == {"success": True}

    def test_bearer_header(self):
        server = FakeServer()
        server.respond("POST", "/api/start-trade", body={"success": True})
        api = server.api()

        call(api, api.start_trade("tok"))

        assert server.requests[-1].headers["Authorization"] == "Bearer tok"

    def test_error_status_still_decoded(self):
        server = FakeServer()
        server.respond("POST", "/api/forgot-password", status=404, body={"success": False, "message": "Unknown phone"})
        api = server.api()

        response = call(api, api.forgot_password("600000000"))

        assert response.status_code == 404
        assert response.data["message"] == "Unknown phone"

    def test_connection_error_raised(self):
        server = FakeServer()
        server.fail("GET", "/api/user-data")
        api = server.api()

        with pytest.raises(APIConnectionError):
            call(api, api.user_data("tok"))

    def test_timeout_is_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        api = TradeDeskAPI(base_url=BASE_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(APIConnectionError):
            call(api, api.register("671234567", "pw", None))

    def test_non_object_body_raises(self):
        server = FakeServer()
        server.respond("GET", "/api/user-data", body=[1, 2, 3])
        api = server.api()

        with pytest.raises(APIResponseError) as exc_info:
            call(api, api.user_data("tok"))
        assert exc_info.value.status_code == 200

    def test_validate_ignores_body(self):
        server = FakeServer()
        server.respond("GET", "/api/validate", status=204, body="")
        api = server.api()

        response = call(api, api.validate("tok"))

        assert response.ok
        assert response.data == {}

    def test_client_recreated_after_close(self):
        server = FakeServer()
        server.respond("POST", "/api/forgot-password", body={"success": True})
        api = server.api()

        call(api, api.forgot_password("671234567"))
        call(api, api.forgot_password("671234567"))

        assert len(server.requests) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
