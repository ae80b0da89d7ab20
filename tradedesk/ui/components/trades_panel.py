"""
Trades panel component.

Lists simulated trades, most recent first.
"""

from rich.table import Table
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, ScrollableContainer
from textual.widgets import Static

from tradedesk.core.formatting import format_currency
from tradedesk.simulation.models import SimulatedTrade

# Theme colors (Rich markup)
COLOR_UP = "#44ffaa"
COLOR_DOWN = "#ff7777"

# Maximum trades kept on screen
MAX_TRADES_DISPLAYED = 15


def trade_row(trade: SimulatedTrade, currency: str = "XAF") -> tuple[str, str, str, str]:
    """Rich-markup cells for one trade: time, pair, profit, result."""
    won = trade.result == "win"
    color = COLOR_UP if won else COLOR_DOWN
    label = "WIN" if won else "LOSS"
    return (
        f"{trade.timestamp:%H:%M:%S}",
        f"[bold]{trade.pair.value}[/bold]",
        f"[{color}]+{format_currency(trade.profit, currency)} ({trade.profit_percent * 100:.2f}%)[/{color}]",
        f"[{color}]{label}[/{color}]",
    )


def build_trades_table(trades: list[SimulatedTrade], currency: str = "XAF", **table_kwargs) -> Table:
    """Build a Rich Table from trades, in the order given."""
    table = Table(**table_kwargs)
    table.add_column("Time", style="dim", width=8, no_wrap=True)
    table.add_column("Pair", width=8, no_wrap=True)
    table.add_column("Profit", ratio=1)
    table.add_column("Result", width=6, no_wrap=True)

    for trade in trades:
        table.add_row(*(Text.from_markup(cell) for cell in trade_row(trade, currency)))

    return table


class TradesPanel(Container):
    """Panel displaying the simulated trade feed."""

    def compose(self) -> ComposeResult:
        yield Static("🤖 AI TRADES", classes="panel-title")
        with ScrollableContainer(id="trades-scroll", classes="panel-content"):
            yield Static("", id="trades-content")

    def update_display(self, trades: list[SimulatedTrade], currency: str = "XAF") -> None:
        """
        Update the trade feed.

        Args:
            trades: Simulated trades, oldest first
            currency: Currency suffix for amounts
        """
        content = self.query_one("#trades-content", Static)
        if not trades:
            content.update("[dim]No trades yet[/dim]")
            return

        recent = list(reversed(trades[-MAX_TRADES_DISPLAYED:]))
        content.update(
            build_trades_table(
                recent,
                currency,
                show_header=False,
                show_edge=False,
                box=None,
                padding=(0, 1),
                expand=True,
            )
        )
