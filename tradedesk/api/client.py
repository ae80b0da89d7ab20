"""Async HTTP client for the TradeDesk backend API."""

import logging
import time
from typing import Any

import httpx

from tradedesk.api.models import APIConnectionError, APIResponse, APIResponseError
from tradedesk.core.config import DEFAULT_CONFIG, ClientConfig

logger = logging.getLogger(__name__)


class TradeDeskAPI:
    """
    Thin client for the TradeDesk REST endpoints.

    Every endpoint method returns an APIResponse, whatever the HTTP status.
    Transport failures raise APIConnectionError; bodies that aren't JSON
    objects raise APIResponseError. Callers decide how to present either.

    Usage:
        api = TradeDeskAPI.from_config(config)
        response = await api.login("671234567", "secret")
        await api.close()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_CONFIG.api_base_url,
        timeout: float = DEFAULT_CONFIG.request_timeout,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls, config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> "TradeDeskAPI":
        return cls(base_url=config.api_base_url, timeout=config.request_timeout, transport=transport)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "TradeDeskAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # =========================================================
    # Endpoints
    # =========================================================

    async def register(self, phone: str, password: str, referral_code: str | None) -> APIResponse:
        return await self._request(
            "POST",
            "/api/register",
            json={"phone": phone, "password": password, "referral_code": referral_code},
        )

    async def login(self, phone: str, password: str) -> APIResponse:
        return await self._request("POST", "/api/login", json={"phone": phone, "password": password})

    async def logout(self, token: str) -> APIResponse:
        return await self._request("POST", "/api/logout", token=token, parse=False)

    async def user_data(self, token: str) -> APIResponse:
        return await self._request("GET", "/api/user-data", token=token)

    async def change_password(self, token: str, old_password: str, new_password: str) -> APIResponse:
        return await self._request(
            "POST",
            "/api/change-password",
            token=token,
            json={"old_password": old_password, "new_password": new_password},
        )

    async def forgot_password(self, phone: str) -> APIResponse:
        return await self._request("POST", "/api/forgot-password", json={"phone": phone})

    async def validate(self, token: str) -> APIResponse:
        """Check the token server-side. Only the status code matters."""
        return await self._request("GET", "/api/validate", token=token, parse=False)

    async def start_trade(self, token: str) -> APIResponse:
        return await self._request("POST", "/api/start-trade", token=token, json={})

    # =========================================================
    # Transport
    # =========================================================

    async def _request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json: dict[str, Any] | None = None,
        parse: bool = True,
    ) -> APIResponse:
        """
        Send a request and decode the JSON body.

        Args:
            method: HTTP method
            path: Endpoint path, starting with "/api/"
            token: Bearer token for authenticated endpoints
            json: Request body
            parse: Decode the body; when False only the status is returned

        Returns:
            APIResponse with status code and decoded body
        """
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        start_time = time.time()

        try:
            client = await self._get_client()
            response = await client.request(method, path, json=json, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out after {self.timeout}s")
            raise APIConnectionError(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise APIConnectionError(f"{method} {path} failed: {e}") from e

        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug(f"{method} {path} -> {response.status_code} in {elapsed_ms:.0f}ms")

        if not parse:
            return APIResponse(status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, dict):
            # A 401 is meaningful on its own, whatever the body looks like
            if response.status_code == 401:
                return APIResponse(status_code=401)
            raise APIResponseError(
                f"{method} {path} returned a non-JSON-object body", response.status_code
            )

        return APIResponse(status_code=response.status_code, data=data)
