#!/usr/bin/env python3
"""
Terminal Dashboard for TradeDesk.

A dark-themed UI showing:
- Account balances and profits
- Simulated AI trade feed
- Activity chart
- Countdown to the trading start

The session is checked on startup; without one, a login screen is shown.

Run with:
    tradedesk dashboard
"""

import logging
import random
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer

from tradedesk.api.client import TradeDeskAPI
from tradedesk.core.config import DEFAULT_CONFIG, ClientConfig
from tradedesk.core.formatting import format_phone
from tradedesk.session.manager import SessionManager
from tradedesk.session.store import JsonFileSessionStore, SessionStore
from tradedesk.session.views import View
from tradedesk.simulation.market import MarketSimulator
from tradedesk.simulation.models import SimulatedTrade
from tradedesk.trading.service import TradingService
from tradedesk.ui.components import (
    BalancesPanel,
    ChartPanel,
    CountdownPanel,
    LoginScreen,
    TradesPanel,
)
from tradedesk.ui.components.trades_panel import MAX_TRADES_DISPLAYED

logger = logging.getLogger("dashboard")

# Number of simulated trades shown on load
SEED_TRADES = 5


def configure_file_logging(path: str = "tradedesk.log") -> None:
    """File-only logging so log lines don't draw over the TUI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=[logging.FileHandler(path)],
    )


class TradingDashboard(App):
    """Account dashboard with simulated trade feed."""

    TITLE = "TRADEDESK"
    CSS = """
    Screen {
        background: #000000;
    }

    .panel-title {
        color: #44ffaa;
        text-style: bold;
        padding: 0 1;
    }

    .panel-content {
        padding: 0 1;
    }

    #countdown {
        height: 1;
        padding: 0 1;
        background: #111111;
    }

    BalancesPanel, ChartPanel, TradesPanel {
        border: solid #333333;
        height: 1fr;
    }
    """
    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("s", "start_trade", "Start trade"),
        Binding("r", "refresh", "Refresh"),
        Binding("n", "new_trades", "New trades"),
        Binding("l", "logout", "Logout"),
    ]

    def __init__(
        self,
        config: ClientConfig | None = None,
        store: SessionStore | None = None,
        api: TradeDeskAPI | None = None,
        seed: int | None = None,
    ):
        super().__init__()
        self.config = config or DEFAULT_CONFIG
        self.api = api or TradeDeskAPI.from_config(self.config)
        self.session = SessionManager(
            self.api,
            store or JsonFileSessionStore(self.config.session_file),
            config=self.config,
            current_view=View.DASHBOARD,
            on_navigate=self._on_navigate,
            on_notice=self._on_notice,
        )
        self.simulator = MarketSimulator(rng=random.Random(seed))
        self.trading = TradingService(self.session, self.simulator, self.config)
        self.trades: list[SimulatedTrade] = []
        self.user: dict | None = None

    def compose(self) -> ComposeResult:
        yield CountdownPanel(self.config.trading_start, id="countdown")
        with Horizontal():
            with Vertical():
                yield BalancesPanel(id="balances")
                yield ChartPanel(id="chart")
            yield TradesPanel(id="trades")
        yield Footer()

    def on_mount(self) -> None:
        logger.info(f"Dashboard started against {self.config.api_base_url}")
        self.seed_display()
        self.update_countdown()
        # Countdown is the only recurring refresh
        self.set_interval(1, self.update_countdown)

        if self.session.init():
            self.load_user_data()

    # =========================================================
    # Display updates
    # =========================================================

    def seed_display(self) -> None:
        """Fill the chart and the trade feed with synthetic data."""
        self.query_one(ChartPanel).update_display(self.simulator.chart_series())
        self.trades = self.simulator.generate_trades(SEED_TRADES)
        self.query_one(TradesPanel).update_display(self.trades, self.config.currency)

    def update_countdown(self) -> None:
        self.query_one(CountdownPanel).tick(datetime.now(self.config.trading_start.tzinfo))

    def update_balances(self) -> None:
        self.query_one(BalancesPanel).update_display(self.user, self.config.currency)
        phone = format_phone(self.session.phone)
        self.sub_title = f"📱 {phone}" if phone else ""

    @work(exclusive=True, group="account")
    async def load_user_data(self) -> None:
        """Fetch the profile; a rejected token sends us back to login."""
        user = await self.session.get_user_data()
        if user is None:
            if self.session.is_authenticated():
                self.notify("Could not load account. Press r to retry.", severity="warning")
            else:
                self.session.redirect_to_login()
            return
        self.user = user
        self.update_balances()

    # =========================================================
    # Session callbacks
    # =========================================================

    def _on_notice(self, message: str) -> None:
        self.notify(message, severity="warning")

    def _on_navigate(self, view: View) -> None:
        if view == View.LOGIN:
            self.show_login()

    def show_login(self, message: str = "") -> None:
        self.user = None
        self.update_balances()
        self.push_screen(LoginScreen(message), self._on_login_submitted)

    def _on_login_submitted(self, credentials: tuple[str, str] | None) -> None:
        if credentials is None:
            self.call_later(self.action_quit)
            return
        phone, password = credentials
        self.attempt_login(phone, password)

    @work(exclusive=True, group="login")
    async def attempt_login(self, phone: str, password: str) -> None:
        result = await self.session.login(phone, password)
        if not result.get("success"):
            self.show_login(result.get("message") or "Login failed")
            return

        self.session.current_view = View.DASHBOARD
        self.notify("Welcome back!", severity="information")
        self.load_user_data()

    # =========================================================
    # Actions
    # =========================================================

    def action_refresh(self) -> None:
        if self.session.validate_session():
            self.load_user_data()

    def action_new_trades(self) -> None:
        self.trades.append(self.simulator.generate_trade())
        self.trades = self.trades[-MAX_TRADES_DISPLAYED:]
        self.query_one(TradesPanel).update_display(self.trades, self.config.currency)
        self.query_one(ChartPanel).update_display(self.simulator.chart_series())

    @work(exclusive=True, group="trade")
    async def action_start_trade(self) -> None:
        result = await self.trading.start_trade()
        if result.success:
            self.notify(
                f"{result.pair} • Est. profit: +{result.estimated_profit} {self.config.currency}",
                title=result.message,
                severity="information",
                timeout=5,
            )
        else:
            self.notify(result.message, severity="error")
            if not self.session.is_authenticated():
                self.session.redirect_to_login()

    @work(exclusive=True, group="logout")
    async def action_logout(self) -> None:
        await self.session.logout()
        self.notify("Logged out", severity="information")
        self.session.redirect_to_login()

    async def action_quit(self) -> None:
        await self.api.close()
        self.exit()


def run_dashboard(config: ClientConfig | None = None, seed: int | None = None) -> None:
    configure_file_logging()
    app = TradingDashboard(config=config, seed=seed)
    app.run()


if __name__ == "__main__":
    run_dashboard(ClientConfig.from_env())
