"""
Client configuration.

Centralizes API location, currency and trading-calendar constants so the
CLI, the dashboard and the tests all read the same values.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from dotenv import load_dotenv

# West Africa Time (UTC+1), the timezone trading hours are announced in
WAT = timezone(timedelta(hours=1), "WAT")


@dataclass
class ClientConfig:
    """Configuration for the TradeDesk client.

    Percentages are expressed as decimals (e.g., 0.05 = 5%).
    """

    # =========================================================
    # Remote API
    # =========================================================

    # Base URL of the backend; "/api/..." paths are appended to it
    api_base_url: str = "https://quantumai-backend.onrender.com"

    # Seconds before an outbound request is reported as a network error
    request_timeout: float = 15.0

    # =========================================================
    # Session
    # =========================================================

    # Days a login stays valid before the session expires locally
    session_days: int = 7

    # Where the local key-value session store lives
    session_file: str = "data/session.json"

    # =========================================================
    # Money
    # =========================================================

    currency: str = "XAF"
    min_deposit: int = 10000
    min_withdrawal: int = 20000
    withdrawal_fee: float = 0.05

    # =========================================================
    # Trading calendar
    # =========================================================

    # Trades can't be started before this moment
    trading_start: datetime = field(
        default_factory=lambda: datetime(2026, 2, 7, 8, 0, tzinfo=WAT)
    )

    # =========================================================
    # Support contacts
    # =========================================================

    admin_phone: str = "672815642"
    whatsapp_number: str = "237672815642"

    def __post_init__(self):
        self.api_base_url = self.api_base_url.rstrip("/")

    @classmethod
    def from_env(cls, env_path: str | None = None) -> "ClientConfig":
        """
        Create config from environment variables.

        Looks for (all optional):
        - TRADEDESK_API_URL
        - TRADEDESK_TIMEOUT
        - TRADEDESK_SESSION_FILE
        - TRADEDESK_SESSION_DAYS
        - TRADEDESK_CURRENCY
        - TRADEDESK_TRADING_START (ISO-8601, with offset)
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        config = cls()

        api_url = os.getenv("TRADEDESK_API_URL")
        if api_url:
            if not api_url.startswith(("http://", "https://")):
                raise ValueError(f"TRADEDESK_API_URL must be an http(s) URL, got: {api_url}")
            config.api_base_url = api_url.rstrip("/")

        timeout = os.getenv("TRADEDESK_TIMEOUT")
        if timeout:
            config.request_timeout = _positive_float("TRADEDESK_TIMEOUT", timeout)

        session_days = os.getenv("TRADEDESK_SESSION_DAYS")
        if session_days:
            config.session_days = _whole_days("TRADEDESK_SESSION_DAYS", session_days)

        config.session_file = os.getenv("TRADEDESK_SESSION_FILE", config.session_file)
        config.currency = os.getenv("TRADEDESK_CURRENCY", config.currency)

        trading_start = os.getenv("TRADEDESK_TRADING_START")
        if trading_start:
            try:
                start = datetime.fromisoformat(trading_start)
            except ValueError:
                raise ValueError(
                    f"TRADEDESK_TRADING_START must be an ISO-8601 timestamp, got: {trading_start}"
                ) from None
            if start.tzinfo is None:
                start = start.replace(tzinfo=WAT)
            config.trading_start = start

        return config


def _positive_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got: {raw}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got: {raw}")
    return value


def _whole_days(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a whole number of days, got: {raw}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got: {raw}")
    return value


# Default configuration instance
DEFAULT_CONFIG = ClientConfig()
