"""
Countdown panel component.

Shows the time left until trading opens, then a live banner.
"""

from datetime import datetime

from textual.widgets import Static

from tradedesk.core.formatting import LIVE_LABEL, countdown_text

COLOR_UP = "#44ffaa"


class CountdownPanel(Static):
    """Single-line countdown to the trading start."""

    def __init__(self, target: datetime, **kwargs):
        super().__init__("", **kwargs)
        self.target = target

    def tick(self, now: datetime) -> None:
        text = countdown_text(self.target, now)
        if text == LIVE_LABEL:
            self.update(f"[bold {COLOR_UP}]{text}[/bold {COLOR_UP}]")
        else:
            self.update(f"⏳ Trading starts in [bold]{text}[/bold]")
