"""Transaction management commands (add, show, update, list, delete)."""

import sqlite3
from datetime import date

import pandas as pd
from rich.table import Table

from finwatch.commands.shell import (
    console,
    currency_symbol,
    fail,
    format_money,
    load_services,
    parse_amount,
    parse_month_option,
    print_json,
)
from finwatch.dates import month_label, month_window
from finwatch.domain.models import CategoryId, PaymentMethod, Transaction, TransactionId, TransactionType, UserId
from finwatch.errors import FinwatchError
from finwatch.services.responses import transaction_response
from finwatch.services.transactions import (
    add_transaction,
    delete_transaction,
    get_transaction,
    list_transactions,
    update_transaction,
)


def parse_date(value: str, failure: str) -> date:
    """Parse a user-entered date leniently, day first, exiting on garbage."""
    try:
        # Normalize date using pandas
        return pd.to_datetime(value, dayfirst=True).date()
    except (ValueError, pd.errors.ParserError) as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        fail(failure)


def print_transaction(transaction: Transaction, heading: str) -> None:
    console.print(heading)
    console.print(f"  ID: {transaction.id}")
    console.print(f"  Date: {transaction.date.isoformat()}")
    console.print(f"  Category: {transaction.category_name or transaction.category_id}")
    console.print(f"  Amount: {format_money(transaction.amount, currency_symbol())}")
    console.print(f"  Type: {transaction.type.value}")
    if transaction.payment_method:
        console.print(f"  Method: {transaction.payment_method.value}")
    if transaction.description:
        console.print(f"  Description: {transaction.description}")


def add_command(
    user_id: int,
    date: str,
    category_id: int,
    amount: str,
    transaction_type: str,
    description: str | None = None,
    payment_method: str | None = None,
) -> None:
    """Add a transaction manually.

    Args:
        user_id: Owning user.
        date: Transaction date (YYYY-MM-DD, DD/MM/YYYY, or other formats).
        category_id: Category ID (see 'finwatch category list').
        amount: Amount as a positive decimal string.
        transaction_type: INCOME or EXPENSE.
        description: Optional description.
        payment_method: Optional payment method (CASH, CREDIT_CARD, DEBIT_CARD, UPI, BANK_TRANSFER).
    """
    services = load_services()
    normalized_date = parse_date(date, "Transaction not added")

    try:
        parsed_type = TransactionType(transaction_type.upper())
        parsed_method = PaymentMethod(payment_method.upper()) if payment_method else None
    except ValueError as e:
        fail(str(e))

    try:
        transaction = add_transaction(
            services.transactions,
            services.categories,
            UserId(user_id),
            CategoryId(category_id),
            parse_amount(amount),
            normalized_date,
            parsed_type,
            description=description,
            payment_method=parsed_method,
        )
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    print_transaction(transaction, "[green]✓[/green] Transaction added:")


def list_command(
    user_id: int,
    month: str | None = None,
    category_id: int | None = None,
    transaction_type: str | None = None,
    as_json: bool = False,
) -> None:
    """List transactions for a month."""
    services = load_services()
    month_int, year = parse_month_option(month)
    start, end = month_window(year, month_int)

    try:
        parsed_type = TransactionType(transaction_type.upper()) if transaction_type else None
    except ValueError as e:
        fail(str(e))

    try:
        transactions = list_transactions(
            services.transactions,
            UserId(user_id),
            start,
            end,
            category_id=CategoryId(category_id) if category_id is not None else None,
            transaction_type=parsed_type,
        )
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json([transaction_response(t) for t in transactions])
        return

    label = month_label(year, month_int)
    if not transactions:
        console.print(f"[yellow]No transactions found for {label}[/yellow]")
        return

    symbol = currency_symbol()
    table = Table(title=f"Transactions - {label} ({len(transactions)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Method", style="dim")

    for txn in transactions:
        if txn.type is TransactionType.EXPENSE:
            amount_display = f"[red]-{format_money(txn.amount, symbol)}[/red]"
        else:
            amount_display = f"[green]+{format_money(txn.amount, symbol)}[/green]"

        method = txn.payment_method.value if txn.payment_method else "[dim]-[/dim]"
        table.add_row(
            str(txn.id),
            txn.date.isoformat(),
            txn.description or "[dim]-[/dim]",
            txn.category_name or str(txn.category_id),
            amount_display,
            method,
        )

    console.print(table)


def delete_command(user_id: int, transaction_id: int) -> None:
    """Delete a transaction."""
    services = load_services()

    try:
        delete_transaction(services.transactions, TransactionId(transaction_id), UserId(user_id))
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Transaction {transaction_id} deleted")


def show_command(user_id: int, transaction_id: int, as_json: bool = False) -> None:
    """Show one transaction."""
    services = load_services()

    try:
        transaction = get_transaction(services.transactions, TransactionId(transaction_id), UserId(user_id))
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json(transaction_response(transaction))
        return
    print_transaction(transaction, f"[bold]Transaction {transaction.id}[/bold]")


def update_command(
    user_id: int,
    transaction_id: int,
    date: str | None = None,
    category_id: int | None = None,
    amount: str | None = None,
    transaction_type: str | None = None,
    description: str | None = None,
    payment_method: str | None = None,
    as_json: bool = False,
) -> None:
    """Update a transaction; options left out keep their current value.

    Budgets are evaluated from the transactions on every read, so the change
    shows up in 'finwatch budget list' straight away.
    """
    services = load_services()
    normalized_date = parse_date(date, "Transaction not updated") if date else None
    parsed_amount = parse_amount(amount) if amount is not None else None

    try:
        parsed_type = TransactionType(transaction_type.upper()) if transaction_type else None
        parsed_method = PaymentMethod(payment_method.upper()) if payment_method else None
    except ValueError as e:
        fail(str(e))

    try:
        transaction = update_transaction(
            services.transactions,
            services.categories,
            TransactionId(transaction_id),
            UserId(user_id),
            category_id=CategoryId(category_id) if category_id is not None else None,
            amount=parsed_amount,
            on=normalized_date,
            transaction_type=parsed_type,
            description=description,
            payment_method=parsed_method,
        )
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json(transaction_response(transaction))
        return
    print_transaction(transaction, "[green]✓[/green] Transaction updated:")
