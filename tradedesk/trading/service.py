"""
Trade start flow.

Starting a trade is a single server call; the client only gates it on the
session and the trading calendar and fills in a profit estimate when the
server doesn't send one.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from tradedesk.api.models import APIError
from tradedesk.core.config import DEFAULT_CONFIG, ClientConfig
from tradedesk.session.manager import SessionManager
from tradedesk.simulation.market import MarketSimulator

logger = logging.getLogger(__name__)

LOGIN_REQUIRED_MESSAGE = "Please login first"
START_FAILED_MESSAGE = "Failed to start trade"
SERVER_ERROR_MESSAGE = "Server error. Please try again."


@dataclass
class TradeStartResult:
    """Outcome of asking the server to start a trade."""

    success: bool
    message: str
    pair: str | None = None
    estimated_profit: int | None = None


class TradingService:
    """
    Starts server-side trades for the logged-in user.

    Usage:
        service = TradingService(session, simulator)
        result = await service.start_trade()
    """

    def __init__(
        self,
        session: SessionManager,
        simulator: MarketSimulator,
        config: ClientConfig = DEFAULT_CONFIG,
    ):
        self.session = session
        self.simulator = simulator
        self.config = config

    def trading_open(self, now: datetime | None = None) -> bool:
        """True once the trading start date has passed."""
        now = now or self.session.clock()
        return now >= self.config.trading_start

    def trading_closed_message(self) -> str:
        start = self.config.trading_start
        return f"Trading starts on {start:%d/%m/%Y} at 8:00 AM WAT"

    async def start_trade(self) -> TradeStartResult:
        if not self.session.is_authenticated():
            return TradeStartResult(success=False, message=LOGIN_REQUIRED_MESSAGE)

        if not self.trading_open():
            return TradeStartResult(success=False, message=self.trading_closed_message())

        try:
            response = await self.session.api.start_trade(self.session.token)
        except APIError as e:
            logger.error(f"Trade error: {e}")
            return TradeStartResult(success=False, message=SERVER_ERROR_MESSAGE)

        if response.unauthorized:
            logger.info("Session cleared: token rejected by server")
            self.session.clear_session()
            return TradeStartResult(success=False, message=LOGIN_REQUIRED_MESSAGE)

        data = response.data
        if not data.get("success"):
            return TradeStartResult(success=False, message=data.get("message") or START_FAILED_MESSAGE)

        trade = data.get("trade")
        if not isinstance(trade, dict):
            trade = {}
        pair = trade.get("pair") or self.simulator.pick_pair().value
        estimated = trade.get("estimated_profit")
        if estimated is None:
            estimated = self._estimate_from_profile()

        logger.info(f"Trade started on {pair}, est. profit {estimated}")
        return TradeStartResult(
            success=True,
            message="AI Trade Started!",
            pair=pair,
            estimated_profit=estimated,
        )

    def _estimate_from_profile(self) -> int:
        """Estimate profit from the stored available balance."""
        user = self.session.user or {}
        balance = user.get("available_balance", 0)
        try:
            return self.simulator.estimate_profit(float(balance))
        except (TypeError, ValueError):
            logger.warning(f"Cannot estimate profit from balance {balance!r}")
            return 0
