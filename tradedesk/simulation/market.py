"""
Market Simulator

Generates synthetic quotes, trades and profit estimates for the dashboard.
All randomness comes from an injected random.Random, so a seeded simulator
produces the same sequence every run.

Usage:
    sim = MarketSimulator(rng=random.Random(42))
    trade = sim.generate_trade()
    sim.estimate_profit(100_000)  # -> 500 .. 3500
"""

import math
import random
import string
from datetime import datetime, timezone
from typing import Callable

from tradedesk.simulation.models import BASE_PRICES, Pair, SimulatedTrade

# Profit band for every simulated outcome
MIN_PROFIT_PCT = 0.005  # 0.5%
MAX_PROFIT_PCT = 0.035  # 3.5%

# Total width of the price variation around the base (±1%)
PRICE_VARIATION = 0.02

TRADE_ID_PREFIX = "TR"
TRADE_ID_SUFFIX_LEN = 9
_ID_ALPHABET = string.digits + string.ascii_uppercase

# Chart bars are drawn from [CHART_MIN, CHART_MIN + CHART_SPAN)
CHART_MIN = 50.0
CHART_SPAN = 100.0


class MarketSimulator:
    """Synthetic market for display purposes."""

    PAIRS: tuple[Pair, ...] = tuple(Pair)

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.rng = rng or random.Random()
        self.clock = clock

    def pick_pair(self) -> Pair:
        return self.rng.choice(self.PAIRS)

    def synthetic_price(self, pair: Pair | str) -> float:
        """
        Base price for the pair, nudged by up to ±1%, rounded to cents.

        Accepts a Pair or its display value, e.g. "EUR/USD".
        """
        base = BASE_PRICES[Pair(pair)]
        variation = base * PRICE_VARIATION * (self.rng.random() - 0.5)
        return round(base + variation, 2)

    def profit_percent(self) -> float:
        return self.rng.uniform(MIN_PROFIT_PCT, MAX_PROFIT_PCT)

    def trade_id(self, now: datetime) -> str:
        """Timestamp-based id with a random base-36 suffix. Best-effort unique."""
        millis = int(now.timestamp() * 1000)
        suffix = "".join(self.rng.choice(_ID_ALPHABET) for _ in range(TRADE_ID_SUFFIX_LEN))
        return f"{TRADE_ID_PREFIX}{millis}{suffix}"

    def generate_trade(self) -> SimulatedTrade:
        """Compose a winning trade on a random pair."""
        now = self.clock()
        pair = self.pick_pair()
        entry = self.synthetic_price(pair)
        pct = self.profit_percent()
        exit_price = entry * (1 + pct)

        return SimulatedTrade(
            id=self.trade_id(now),
            pair=pair,
            entry_price=entry,
            exit_price=exit_price,
            profit_percent=pct,
            timestamp=now,
        )

    def generate_trades(self, count: int = 5) -> list[SimulatedTrade]:
        """Seed list for the trades panel."""
        return [self.generate_trade() for _ in range(count)]

    def estimate_profit(self, balance: float) -> int:
        """
        Estimated profit on a balance, in whole currency units.

        Raises:
            ValueError: If balance is negative, NaN or infinite
        """
        if isinstance(balance, bool) or not isinstance(balance, (int, float)):
            raise ValueError(f"Balance must be a number, got: {balance!r}")
        if not math.isfinite(balance) or balance < 0:
            raise ValueError(f"Balance must be a finite non-negative number, got: {balance}")
        return round(balance * self.profit_percent())

    def chart_series(self, length: int = 20) -> list[float]:
        """Random bar heights for the overview chart."""
        return [self.rng.random() * CHART_SPAN + CHART_MIN for _ in range(length)]
