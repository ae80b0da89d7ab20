"""
Chart panel - activity bar chart.

Uses Unicode block characters for reliable terminal rendering.
"""

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static

# Rows available for bars
CHART_HEIGHT = 8

# Unicode block characters for vertical bar chart (8 levels)
BLOCKS = " ▁▂▃▄▅▆▇█"


def render_bars(values: list[float], height: int = CHART_HEIGHT) -> list[str]:
    """
    Render values as vertical bars scaled to the largest one.

    Returns:
        `height` strings, top row first, one character per value
    """
    if not values:
        return []

    peak = max(values)
    levels = len(BLOCKS) - 1
    # Height of each bar in eighths of a row
    units = [
        round(max(value, 0) / peak * height * levels) if peak > 0 else 0
        for value in values
    ]

    rows = []
    for row in range(height - 1, -1, -1):
        floor = row * levels
        chars = []
        for unit in units:
            filled = min(max(unit - floor, 0), levels)
            chars.append(BLOCKS[filled])
        rows.append("".join(chars))
    return rows


class ChartPanel(Container):
    """Panel displaying the activity chart."""

    def compose(self) -> ComposeResult:
        yield Static("📈 ACTIVITY", classes="panel-title")
        yield Static("", id="chart-content", classes="panel-content")

    def update_display(self, values: list[float]) -> None:
        rows = render_bars(values)
        # Double each column so bars are readable
        text = "\n".join("".join(ch * 2 for ch in row) for row in rows)
        content = self.query_one("#chart-content", Static)
        content.update(f"[cyan]{text}[/cyan]" if text else "[dim]No data[/dim]")
