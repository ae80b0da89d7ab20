"""
Market Simulation

Synthetic quotes and winning trades for display.
No market data, no persistence, reproducible with a seeded RNG.
"""

from tradedesk.simulation.market import MAX_PROFIT_PCT, MIN_PROFIT_PCT, MarketSimulator
from tradedesk.simulation.models import BASE_PRICES, Pair, SimulatedTrade

__all__ = [
    "BASE_PRICES",
    "MAX_PROFIT_PCT",
    "MIN_PROFIT_PCT",
    "MarketSimulator",
    "Pair",
    "SimulatedTrade",
]
