"""Response and error types for the TradeDesk HTTP API."""

from dataclasses import dataclass, field
from typing import Any

# Result handed back whenever a request never produced a usable response
NETWORK_ERROR_MESSAGE = "Network error. Please try again."


class APIError(Exception):
    """Base class for failures talking to the TradeDesk API."""


class APIConnectionError(APIError):
    """The request could not be sent or no response arrived (incl. timeouts)."""


class APIResponseError(APIError):
    """A response arrived but its body is not a JSON object."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class APIResponse:
    """Decoded response from an API call."""

    status_code: int
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def success(self) -> bool:
        """Business-level outcome reported by the API in its `success` field."""
        return bool(self.data.get("success"))


def network_error_result() -> dict[str, Any]:
    """Generic failure result for transport errors."""
    return {"success": False, "message": NETWORK_ERROR_MESSAGE}
