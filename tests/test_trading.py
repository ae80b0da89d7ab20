#!/usr/bin/env python3
"""
Unit tests for the trade start flow.

Run with:
    python -m pytest tests/test_trading.py -v
"""

import json
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

# ruff: noqa: E402
from tests.fakes import SessionHarness
from tradedesk.core.config import ClientConfig
from tradedesk.simulation.market import MarketSimulator
from tradedesk.simulation.models import Pair
from tradedesk.trading.service import (
    LOGIN_REQUIRED_MESSAGE,
    SERVER_ERROR_MESSAGE,
    START_FAILED_MESSAGE,
    TradingService,
)

# Harness clock is 2026-03-01, after this start
OPEN_CONFIG = ClientConfig(trading_start=datetime(2026, 2, 7, 7, 0, tzinfo=timezone.utc))


def make_service(harness: SessionHarness, config: ClientConfig = OPEN_CONFIG) -> TradingService:
    return TradingService(harness.session, MarketSimulator(rng=random.Random(1)), config)


@pytest.fixture
def harness() -> SessionHarness:
    h = SessionHarness()
    h.seed_session(token="abc")
    return h


class TestStartTrade:
    """Tests for TradingService.start_trade."""

    def test_requires_login(self):
        h = SessionHarness()
        result = h.run(make_service(h).start_trade())

        assert not result.success
        assert result.message == LOGIN_REQUIRED_MESSAGE
        assert h.server.requests == []

    def test_expired_session_requires_login(self, harness):
        harness.clock.advance(days=10)
        result = harness.run(make_service(harness).start_trade())

        assert result.message == LOGIN_REQUIRED_MESSAGE
        assert harness.store.get("token") is None

    def test_blocked_before_trading_start(self, harness):
        config = ClientConfig(trading_start=harness.clock() + timedelta(days=1))
        service = make_service(harness, config)

        result = harness.run(service.start_trade())

        assert not result.success
        assert result.message.startswith("Trading starts on 02/03/2026")
        assert harness.server.requests == []

    def test_started(self, harness):
        harness.server.respond(
            "POST",
            "/api/start-trade",
            body={"success": True, "trade": {"pair": "GOLD", "estimated_profit": 1800}},
        )

        result = harness.run(make_service(harness).start_trade())

        assert result.success
        assert result.pair == "GOLD"
        assert result.estimated_profit == 1800
        assert harness.server.requests[-1].headers["Authorization"] == "Bearer abc"

    def test_missing_estimate_uses_stored_balance(self, harness):
        harness.server.respond("POST", "/api/start-trade", body={"success": True, "trade": {"pair": "EUR/USD"}})

        result = harness.run(make_service(harness).start_trade())

        # Seeded available_balance is 100000
        assert 500 <= result.estimated_profit <= 3500

    def test_missing_estimate_with_bad_balance(self, harness):
        harness.store.set("user", json.dumps({"available_balance": "lots"}))
        harness.server.respond("POST", "/api/start-trade", body={"success": True, "trade": {"pair": "GOLD"}})

        result = harness.run(make_service(harness).start_trade())

        assert result.success
        assert result.estimated_profit == 0

    def test_malformed_trade_payload(self, harness):
        for payload in ("queued", ["GOLD"], 42):
            harness.server.respond("POST", "/api/start-trade", body={"success": True, "trade": payload})

            result = harness.run(make_service(harness).start_trade())

            assert result.success
            assert result.pair in {p.value for p in Pair}
            assert 500 <= result.estimated_profit <= 3500

    def test_business_rejection_passes_message(self, harness):
        harness.server.respond(
            "POST", "/api/start-trade", status=400, body={"success": False, "message": "Insufficient balance"}
        )

        result = harness.run(make_service(harness).start_trade())

        assert not result.success
        assert result.message == "Insufficient balance"

    def test_rejection_without_message(self, harness):
        harness.server.respond("POST", "/api/start-trade", body={"success": False})

        result = harness.run(make_service(harness).start_trade())

        assert result.message == START_FAILED_MESSAGE

    def test_401_clears_session(self, harness):
        harness.server.respond("POST", "/api/start-trade", status=401, body={"message": "Unauthorized"})

        result = harness.run(make_service(harness).start_trade())

        assert not result.success
        assert harness.store.get("token") is None
        assert harness.store.get("expiry") is None

    def test_network_error(self, harness):
        harness.server.fail("POST", "/api/start-trade")

        result = harness.run(make_service(harness).start_trade())

        assert result.message == SERVER_ERROR_MESSAGE
        assert harness.store.get("token") == "abc"


class TestTradingCalendar:
    def test_trading_open(self):
        h = SessionHarness()
        service = make_service(h)
        assert service.trading_open()
        assert not service.trading_open(datetime(2026, 1, 1, tzinfo=timezone.utc))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
