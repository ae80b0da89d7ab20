"""
Command-line interface for TradeDesk.

Handles argument parsing, account/session commands, and launching the
dashboard application.
"""

import argparse
import asyncio
import json
import logging
import random
import sys

import questionary
from rich.console import Console

from tradedesk.api.client import TradeDeskAPI
from tradedesk.core.config import ClientConfig
from tradedesk.core.formatting import format_currency, format_phone
from tradedesk.session.manager import SessionManager
from tradedesk.session.store import JsonFileSessionStore
from tradedesk.session.views import View
from tradedesk.simulation.market import MarketSimulator
from tradedesk.trading.service import TradingService
from tradedesk.ui.components.trades_panel import build_trades_table

# Views each command runs as; protected ones need a session
COMMAND_VIEWS = {
    "register": View.REGISTER,
    "login": View.LOGIN,
    "forgot-password": View.LOGIN,
    "logout": View.LANDING,
    "status": View.LANDING,
    "profile": View.PROFILE,
    "change-password": View.PROFILE,
    "start-trade": View.DASHBOARD,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(prog="tradedesk", description="TradeDesk client")
    parser.add_argument("--env-file", type=str, default=None, help="Path to a .env file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Create an account")
    register.add_argument("phone", help="Phone number (6XXXXXXXX)")
    register.add_argument("--password", "-p", help="Password (prompted if omitted)")
    register.add_argument("--referral", "-r", default=None, help="Referral code")

    login = sub.add_parser("login", help="Log in and store the session")
    login.add_argument("phone", help="Phone number (6XXXXXXXX)")
    login.add_argument("--password", "-p", help="Password (prompted if omitted)")

    sub.add_parser("logout", help="Log out and clear the stored session")
    sub.add_parser("status", help="Show the stored session")
    sub.add_parser("profile", help="Show balances from the server")

    change = sub.add_parser("change-password", help="Change your password")
    change.add_argument("--old", help="Current password (prompted if omitted)")
    change.add_argument("--new", help="New password (prompted if omitted)")

    forgot = sub.add_parser("forgot-password", help="Request a password reset")
    forgot.add_argument("phone", help="Phone number (6XXXXXXXX)")

    sub.add_parser("start-trade", help="Start an AI trade")

    trades = sub.add_parser("trades", help="Print simulated trades")
    trades.add_argument("--count", "-n", type=int, default=5, help="Number of trades (default: 5)")
    trades.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    trades.add_argument("--json", action="store_true", help="Output as JSON")

    dashboard = sub.add_parser("dashboard", help="Launch the terminal dashboard")
    dashboard.add_argument("--seed", type=int, default=None, help="Random seed for simulated data")

    return parser


def prompt_secret(value: str | None, message: str) -> str:
    """Use the given value or ask for it without echo."""
    if value:
        return value
    answer = questionary.password(message).ask()
    if not answer:
        print("\n❌ Cancelled")
        sys.exit(1)
    return answer


def build_session(config: ClientConfig, view: View) -> SessionManager:
    return SessionManager(
        TradeDeskAPI.from_config(config),
        JsonFileSessionStore(config.session_file),
        config=config,
        current_view=view,
        on_navigate=lambda _view: print("🔒 Please login first: tradedesk login <phone>"),
        on_notice=lambda message: print(f"⚠️  {message}"),
    )


def print_result(result: dict, success_text: str) -> bool:
    if result.get("success"):
        print(f"✓ {result.get('message') or success_text}")
        return True
    print(f"✗ {result.get('message') or 'Request failed'}")
    return False


async def run_command(args: argparse.Namespace, config: ClientConfig) -> int:
    """Run one account/session command. Returns the exit code."""
    session = build_session(config, COMMAND_VIEWS[args.command])
    try:
        if session.current_view.requires_auth and not session.init():
            return 1

        if args.command == "register":
            password = prompt_secret(args.password, "Password:")
            result = await session.register(args.phone, password, args.referral)
            return 0 if print_result(result, "Account created. You can now log in.") else 1

        if args.command == "login":
            password = prompt_secret(args.password, "Password:")
            result = await session.login(args.phone, password)
            if not print_result(result, "Logged in"):
                return 1
            print(f"   Session valid until {session.expiry:%Y-%m-%d %H:%M} UTC")
            return 0

        if args.command == "logout":
            await session.logout()
            print("✓ Logged out")
            return 0

        if args.command == "status":
            return handle_status(session)

        if args.command == "profile":
            return await handle_profile(session, config)

        if args.command == "change-password":
            old = prompt_secret(args.old, "Current password:")
            new = prompt_secret(args.new, "New password:")
            result = await session.change_password(old, new)
            return 0 if print_result(result, "Password changed") else 1

        if args.command == "forgot-password":
            result = await session.request_password_reset(args.phone)
            ok = print_result(result, "Reset requested")
            if not ok:
                print(f"   Or contact support: {session.password_reset_link()}")
            return 0 if ok else 1

        if args.command == "start-trade":
            trading = TradingService(session, MarketSimulator(), config)
            result = await trading.start_trade()
            if not result.success:
                print(f"✗ {result.message}")
                return 1
            print(f"🤖 {result.message}")
            print(f"   {result.pair} • Est. profit: +{format_currency(result.estimated_profit, config.currency)}")
            return 0

        raise ValueError(f"Unknown command: {args.command}")
    finally:
        await session.api.close()


def handle_status(session: SessionManager) -> int:
    """Display the stored session without calling the server."""
    if not session.is_authenticated():
        print("\n📂 Not logged in.")
        print("   Use: tradedesk login <phone>")
        print()
        return 1

    print(f"\n📱 Logged in as {format_phone(session.phone)}")
    print(f"   Session valid until {session.expiry:%Y-%m-%d %H:%M} UTC")
    print()
    return 0


async def handle_profile(session: SessionManager, config: ClientConfig) -> int:
    user = await session.get_user_data()
    if user is None:
        if session.is_authenticated():
            print("✗ Network error. Please try again.")
        else:
            session.redirect_to_login()
        return 1

    def money(key: str) -> str:
        return format_currency(user.get(key) or 0, config.currency)

    print(f"\n📊 Account {format_phone(session.phone)}")
    print("-" * 40)
    print(f"   Total balance:  {money('total_balance')}")
    print(f"   Available:      {money('available_balance')}")
    print(f"   Total profit:   {money('total_profit')}")
    print(f"   Today:          {money('today_profit')}")
    print()
    return 0


def handle_trades(count: int, seed: int | None, as_json: bool, currency: str) -> int:
    """Print simulated trades."""
    simulator = MarketSimulator(rng=random.Random(seed))
    trades = simulator.generate_trades(count)

    if as_json:
        print(json.dumps([t.to_dict() for t in trades], indent=2))
        return 0

    console = Console()
    console.print(build_trades_table(trades, currency, title=f"🤖 Simulated trades ({len(trades)})"))
    return 0


def run_cli(argv: list[str] | None = None) -> int:
    """Parse arguments and run the appropriate command or launch the dashboard."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = ClientConfig.from_env(args.env_file)
    except ValueError as e:
        print(f"\n❌ Invalid configuration: {e}")
        return 2

    if args.command == "dashboard":
        from tradedesk.ui.dashboard import run_dashboard

        run_dashboard(config, seed=args.seed)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    if args.command == "trades":
        return handle_trades(args.count, args.seed, args.json, config.currency)

    return asyncio.run(run_command(args, config))


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
