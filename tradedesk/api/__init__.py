"""
TradeDesk backend API.

Async httpx client plus the response/error types it produces.
"""

from tradedesk.api.client import TradeDeskAPI
from tradedesk.api.models import (
    NETWORK_ERROR_MESSAGE,
    APIConnectionError,
    APIError,
    APIResponse,
    APIResponseError,
    network_error_result,
)

__all__ = [
    "APIConnectionError",
    "APIError",
    "APIResponse",
    "APIResponseError",
    "NETWORK_ERROR_MESSAGE",
    "TradeDeskAPI",
    "network_error_result",
]
