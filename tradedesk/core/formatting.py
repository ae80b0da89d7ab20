"""
Display helpers shared by the CLI and the dashboard.
"""

import math
import re
from datetime import datetime
from urllib.parse import quote

# Night hours run slower; trades are shown as "active" between these hours
TRADING_HOURS_START = 6
TRADING_HOURS_END = 22

LIVE_LABEL = "TRADING LIVE!"


def format_currency(amount: float | str, currency: str = "XAF") -> str:
    """
    Format an amount with thousands separators and a currency suffix.

    Up to three fraction digits are kept and trailing zeros dropped:
    12500 -> "12,500 XAF", 1.0845 -> "1.085 XAF".
    """
    value = float(amount)
    if not math.isfinite(value):
        return f"— {currency}"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return f"{text} {currency}"


def format_phone(phone: str | None) -> str:
    """Format a Cameroon phone number as '6XX XXX XXX' (country code removed)."""
    if not phone:
        return ""
    phone = re.sub(r"^\+237", "", phone)
    return re.sub(r"(\d{3})(\d{3})(\d{3})", r"\1 \2 \3", phone, count=1)


def whatsapp_link(message: str, number: str) -> str:
    """Build a wa.me deep link with a pre-filled message."""
    return f"https://wa.me/{number}?text={quote(message, safe='')}"


def is_trading_hours(now: datetime | None = None) -> bool:
    """True between 06:00 and 22:00 local time."""
    now = now or datetime.now()
    return TRADING_HOURS_START <= now.hour < TRADING_HOURS_END


def countdown_text(target: datetime, now: datetime) -> str:
    """
    Render the time left until `target` as 'Xd Xh Xm Xs'.

    Returns LIVE_LABEL once the target has been reached.
    """
    remaining = int((target - now).total_seconds())
    if remaining <= 0:
        return LIVE_LABEL

    days, remainder = divmod(remaining, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{days}d {hours}h {minutes}m {seconds}s"
