"""Helpers shared by the CLI commands: console, service wiring and formatting."""

import json
import sys
from datetime import datetime
from typing import Any, NoReturn

from rich.console import Console

from finwatch.config import load_settings
from finwatch.domain.money import MoneyAmount
from finwatch.domain.ports import SystemClock
from finwatch.services import Services, open_services
from finwatch.store.schema import database_exists, get_db_path

console = Console()


def fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def load_services() -> Services:
    """Open services on the default database, exiting if it is missing."""
    db_path = get_db_path()
    if not database_exists(db_path):
        fail("Database not found. Run 'finwatch init' first.")
    return open_services(db_path, load_settings(), SystemClock())


def currency_symbol() -> str:
    return load_settings().currency_symbol


def format_money(amount: MoneyAmount, symbol: str) -> str:
    """Format an amount for display (e.g., "£1,500.00", "-£25.00")."""
    if amount.is_negative():
        return f"-{symbol}{(-amount).to_decimal():,.2f}"
    return f"{symbol}{amount.to_decimal():,.2f}"


def parse_month_option(month: str | None) -> tuple[int, int]:
    """Parse a --month YYYY-MM option, defaulting to the current month.

    Returns:
        Tuple of (month, year).
    """
    if month is None:
        now = datetime.now()
        return now.month, now.year
    try:
        parsed = datetime.strptime(month, "%Y-%m")
    except ValueError:
        fail(f"Invalid month '{month}'. Use YYYY-MM.")
    return parsed.month, parsed.year


def parse_amount(amount: str) -> MoneyAmount:
    try:
        return MoneyAmount.parse(amount)
    except ValueError as e:
        fail(str(e))


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data))
