"""Server-side trade actions."""

from tradedesk.trading.service import TradeStartResult, TradingService

__all__ = ["TradeStartResult", "TradingService"]
