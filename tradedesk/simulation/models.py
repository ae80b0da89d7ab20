"""
Data models for the display-only market simulation.

Nothing here touches a real market: trades are generated locally so the
dashboard has something to show.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Pair(Enum):
    """Instruments the simulator can quote."""

    BTC_USD = "BTC/USD"
    EUR_USD = "EUR/USD"
    GOLD = "GOLD"


# Reference price each synthetic quote is perturbed around
BASE_PRICES: dict[Pair, float] = {
    Pair.BTC_USD: 60000,
    Pair.EUR_USD: 1.08,
    Pair.GOLD: 2300,
}


@dataclass(frozen=True)
class SimulatedTrade:
    """
    A synthetic, always-winning trade for display.

    Never persisted and never mutated after creation.
    """

    id: str  # "TR" + epoch ms + random suffix
    pair: Pair
    entry_price: float
    exit_price: float
    profit_percent: float  # Decimal, 0.005 - 0.035
    timestamp: datetime
    result: str = "win"
    status: str = "completed"

    @property
    def profit(self) -> float:
        """Price gained between entry and exit."""
        return self.exit_price - self.entry_price

    def to_dict(self) -> dict:
        """Plain representation for JSON output."""
        return {
            "id": self.id,
            "pair": self.pair.value,
            "entry_price": self.entry_price,
            "exit_price": self.exit_price,
            "profit": self.profit,
            "profit_percent": self.profit_percent,
            "timestamp": self.timestamp.isoformat(),
            "result": self.result,
            "status": self.status,
        }
