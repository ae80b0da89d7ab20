"""
Balances panel component.

Displays the account figures returned by the user-data endpoint.
"""

from typing import Any

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static

from tradedesk.core.formatting import format_currency

# Theme colors (Rich markup)
COLOR_UP = "#44ffaa"
COLOR_DIM = "#666666"

# (profile field, label) in display order
BALANCE_FIELDS = (
    ("total_balance", "Total balance"),
    ("available_balance", "Available"),
    ("total_profit", "Total profit"),
    ("today_profit", "Today"),
)


def render_balances(user: dict[str, Any] | None, currency: str = "XAF") -> str:
    """Rich markup for the balances block. Missing figures show as 0."""
    if user is None:
        return f"[{COLOR_DIM}]Loading account...[/{COLOR_DIM}]"

    lines = []
    for key, label in BALANCE_FIELDS:
        value = user.get(key) or 0
        try:
            amount = format_currency(value, currency)
        except (TypeError, ValueError):
            amount = f"— {currency}"
        color = COLOR_UP if key.endswith("profit") else "white"
        lines.append(f"{label:<14} [{color}]{amount}[/{color}]")
    return "\n".join(lines)


class BalancesPanel(Container):
    """Panel displaying balances and profits."""

    def compose(self) -> ComposeResult:
        yield Static("💰 BALANCES", classes="panel-title")
        yield Static(render_balances(None), id="balances-content", classes="panel-content")

    def update_display(self, user: dict[str, Any] | None, currency: str = "XAF") -> None:
        content = self.query_one("#balances-content", Static)
        content.update(render_balances(user, currency))
