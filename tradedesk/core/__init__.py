"""
Shared building blocks for the TradeDesk client.

Modules:
- config: Client configuration (API location, currency, trading calendar)
- formatting: Currency, phone and countdown display helpers
"""

from tradedesk.core.config import DEFAULT_CONFIG, WAT, ClientConfig
from tradedesk.core.formatting import (
    countdown_text,
    format_currency,
    format_phone,
    is_trading_hours,
    whatsapp_link,
)

__all__ = [
    "ClientConfig",
    "DEFAULT_CONFIG",
    "WAT",
    "countdown_text",
    "format_currency",
    "format_phone",
    "is_trading_hours",
    "whatsapp_link",
]
