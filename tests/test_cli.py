#!/usr/bin/env python3
"""
Tests for the command-line interface.

The remote API is replaced by a FakeServer through TradeDeskAPI.from_config.

Run with:
    python -m pytest tests/test_cli.py -v
"""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

# ruff: noqa: E402
from tests.fakes import FakeServer
from tradedesk.session.store import JsonFileSessionStore
from tradedesk.ui import cli


@pytest.fixture
def server(monkeypatch, tmp_path):
    """FakeServer behind the CLI, with the session file and cwd in tmp_path."""
    fake = FakeServer()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TRADEDESK_SESSION_FILE", str(tmp_path / "session.json"))
    monkeypatch.setenv("TRADEDESK_TRADING_START", "2020-01-01T08:00:00+01:00")
    monkeypatch.setattr(
        cli.TradeDeskAPI,
        "from_config",
        classmethod(lambda cls, config, transport=None: fake.api()),
    )
    return fake


def stored(tmp_path: Path) -> JsonFileSessionStore:
    return JsonFileSessionStore(tmp_path / "session.json")


def seed_session(tmp_path: Path, days: int = 3) -> None:
    store = stored(tmp_path)
    expiry = datetime.now(timezone.utc) + timedelta(days=days)
    store.set("expiry", expiry.isoformat())
    store.set("phone", "671234567")
    store.set("user", json.dumps({"available_balance": 100000}))
    store.set("token", "abc")


class TestParser:
    def test_requires_command(self):
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args([])

    def test_login_args(self):
        args = cli.create_parser().parse_args(["login", "671234567", "-p", "x"])
        assert args.command == "login"
        assert args.phone == "671234567"
        assert args.password == "x"


class TestTradesCommand:
    def test_json_output_is_reproducible(self, capsys):
        assert cli.run_cli(["trades", "--count", "3", "--seed", "5", "--json"]) == 0
        first = json.loads(capsys.readouterr().out)

        cli.run_cli(["trades", "--count", "3", "--seed", "5", "--json"])
        second = json.loads(capsys.readouterr().out)

        assert len(first) == 3
        assert [t["pair"] for t in first] == [t["pair"] for t in second]
        assert all(t["exit_price"] > t["entry_price"] for t in first)

    def test_table_output(self, capsys):
        assert cli.run_cli(["trades", "--count", "2", "--seed", "1"]) == 0
        assert "Simulated trades (2)" in capsys.readouterr().out


class TestSessionCommands:
    def test_login_then_status(self, server, tmp_path, capsys):
        server.respond("POST", "/api/login", body={"success": True, "token": "abc", "user": {}})

        assert cli.run_cli(["login", "671234567", "-p", "x"]) == 0
        assert stored(tmp_path).get("token") == "abc"

        assert cli.run_cli(["status"]) == 0
        assert "671 234 567" in capsys.readouterr().out

    def test_failed_login(self, server, tmp_path, capsys):
        server.respond("POST", "/api/login", status=401, body={"success": False, "message": "Invalid credentials"})

        assert cli.run_cli(["login", "671234567", "-p", "bad"]) == 1
        assert "Invalid credentials" in capsys.readouterr().out
        assert stored(tmp_path).get("token") is None

    def test_logout(self, server, tmp_path):
        seed_session(tmp_path)
        server.fail("POST", "/api/logout")

        assert cli.run_cli(["logout"]) == 0
        assert stored(tmp_path).get("token") is None

    def test_profile_requires_session(self, server, capsys):
        assert cli.run_cli(["profile"]) == 1
        assert "Please login first" in capsys.readouterr().out
        assert server.requests == []

    def test_profile(self, server, tmp_path, capsys):
        seed_session(tmp_path)
        server.respond("GET", "/api/user-data", body={"total_balance": 150000, "available_balance": 100000})

        assert cli.run_cli(["profile"]) == 0
        out = capsys.readouterr().out
        assert "150,000 XAF" in out
        assert "100,000 XAF" in out

    def test_profile_401(self, server, tmp_path, capsys):
        seed_session(tmp_path)
        server.respond("GET", "/api/user-data", status=401, body={})

        assert cli.run_cli(["profile"]) == 1
        assert "Please login first" in capsys.readouterr().out
        assert stored(tmp_path).get("token") is None

    def test_start_trade(self, server, tmp_path, capsys):
        seed_session(tmp_path)
        server.respond(
            "POST", "/api/start-trade", body={"success": True, "trade": {"pair": "BTC/USD", "estimated_profit": 2100}}
        )

        assert cli.run_cli(["start-trade"]) == 0
        assert "BTC/USD" in capsys.readouterr().out

    def test_forgot_password_failure_shows_support_link(self, server, capsys):
        server.fail("POST", "/api/forgot-password")

        assert cli.run_cli(["forgot-password", "671234567"]) == 1
        assert "https://wa.me/" in capsys.readouterr().out

    def test_invalid_config(self, server, monkeypatch, capsys):
        monkeypatch.setenv("TRADEDESK_TIMEOUT", "never")
        assert cli.run_cli(["status"]) == 2
        assert "Invalid configuration" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
