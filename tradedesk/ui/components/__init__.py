"""
UI components for the trading dashboard.

Reusable Textual widgets for displaying account and trade data.
"""

from tradedesk.ui.components.balances_panel import BalancesPanel, render_balances
from tradedesk.ui.components.chart_panel import ChartPanel, render_bars
from tradedesk.ui.components.countdown_panel import CountdownPanel
from tradedesk.ui.components.login_screen import LoginScreen
from tradedesk.ui.components.trades_panel import TradesPanel, build_trades_table, trade_row

__all__ = [
    "BalancesPanel",
    "ChartPanel",
    "CountdownPanel",
    "LoginScreen",
    "TradesPanel",
    "build_trades_table",
    "render_balances",
    "render_bars",
    "trade_row",
]
