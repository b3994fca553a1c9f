"""CLI entry point for finwatch."""

import typer

from finwatch.commands import admin, budget, categories, transactions
from finwatch.commands.shell import fail
from finwatch.config import get_config_path, load_settings
from finwatch.logging import configure_logging

app = typer.Typer(
    name="finwatch",
    help="finwatch - Track spending against monthly category budgets",
    add_completion=False,
)
budget_app = typer.Typer(help="Create, update and check your monthly budgets.")
category_app = typer.Typer(help="List and add categories.")
txn_app = typer.Typer(help="Add, show, update, list and delete transactions.")

app.add_typer(budget_app, name="budget")
app.add_typer(category_app, name="category")
app.add_typer(txn_app, name="txn")

USER_OPTION = typer.Option(None, "--user", "-u", help="User ID (default: user_id from config)")
JSON_OPTION = typer.Option(False, "--json", help="Print JSON instead of a table")
MONTH_OPTION = typer.Option(None, "--month", help="Month (YYYY-MM, default: current month)")


def resolve_user(user: int | None) -> int:
    return user if user is not None else load_settings().user_id


@app.callback()
def main() -> None:
    """finwatch - Track spending against monthly category budgets."""
    try:
        settings = load_settings()
        configure_logging(json_output=settings.log_json, log_level=settings.log_level)
    except ValueError as e:
        fail(f"Invalid config in {get_config_path()}: {e}")


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config and re-run setup"),
    migrate: bool = typer.Option(False, "--migrate", help="Update database schema only"),
) -> None:
    """Initialize finwatch database, default categories and configuration."""
    admin.init_command(force, migrate)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    admin.backup_command(output_dir)


@category_app.command(name="list")
def category_list(user: int = USER_OPTION, as_json: bool = JSON_OPTION) -> None:
    """List default categories and your own."""
    categories.list_command(resolve_user(user), as_json)


@category_app.command(name="add")
def category_add(
    name: str,
    category_type: str = typer.Option("EXPENSE", "--type", "-t", help="INCOME or EXPENSE"),
    user: int = USER_OPTION,
) -> None:
    """Add a private category."""
    categories.add_command(resolve_user(user), name, category_type)


@txn_app.command(name="add")
def txn_add(
    date: str,
    category_id: int,
    amount: str,
    transaction_type: str = typer.Option("EXPENSE", "--type", "-t", help="INCOME or EXPENSE"),
    description: str = typer.Option(None, "--description", "-d", help="What the transaction was for"),
    payment_method: str = typer.Option(
        None, "--method", "-m", help="CASH, CREDIT_CARD, DEBIT_CARD, UPI or BANK_TRANSFER"
    ),
    user: int = USER_OPTION,
) -> None:
    """Add a transaction."""
    transactions.add_command(
        resolve_user(user), date, category_id, amount, transaction_type, description, payment_method
    )


@txn_app.command(name="show")
def txn_show(transaction_id: int, user: int = USER_OPTION, as_json: bool = JSON_OPTION) -> None:
    """Show one transaction."""
    transactions.show_command(resolve_user(user), transaction_id, as_json)


@txn_app.command(name="update")
def txn_update(
    transaction_id: int,
    date: str = typer.Option(None, "--date", help="New date (YYYY-MM-DD, DD/MM/YYYY, ...)"),
    category_id: int = typer.Option(None, "--category", "-c", help="New category ID"),
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    transaction_type: str = typer.Option(None, "--type", "-t", help="INCOME or EXPENSE"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
    payment_method: str = typer.Option(
        None, "--method", "-m", help="CASH, CREDIT_CARD, DEBIT_CARD, UPI or BANK_TRANSFER"
    ),
    user: int = USER_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Update a transaction's date, category, amount, type, description or method."""
    transactions.update_command(
        resolve_user(user),
        transaction_id,
        date,
        category_id,
        amount,
        transaction_type,
        description,
        payment_method,
        as_json,
    )


@txn_app.command(name="list")
def txn_list(
    month: str = MONTH_OPTION,
    category_id: int = typer.Option(None, "--category", "-c", help="Only this category ID"),
    transaction_type: str = typer.Option(None, "--type", "-t", help="Only INCOME or EXPENSE"),
    user: int = USER_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """List your transactions for a month."""
    transactions.list_command(resolve_user(user), month, category_id, transaction_type, as_json)


@txn_app.command(name="delete")
def txn_delete(transaction_id: int, user: int = USER_OPTION) -> None:
    """Delete a transaction."""
    transactions.delete_command(resolve_user(user), transaction_id)


@budget_app.command(name="create")
def budget_create(
    category_id: int,
    limit: str,
    month: str = MONTH_OPTION,
    user: int = USER_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Create a budget limit for a category and month."""
    budget.create_command(resolve_user(user), category_id, limit, month, as_json)


@budget_app.command(name="update")
def budget_update(
    budget_id: int,
    category_id: int = typer.Option(None, "--category", "-c", help="New category ID"),
    limit: str = typer.Option(None, "--limit", "-l", help="New limit"),
    month: str = typer.Option(None, "--month", help="New month (YYYY-MM)"),
    user: int = USER_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Update a budget's category, limit or month."""
    budget.update_command(resolve_user(user), budget_id, category_id, limit, month, as_json)


@budget_app.command(name="delete")
def budget_delete(budget_id: int, user: int = USER_OPTION) -> None:
    """Delete a budget."""
    budget.delete_command(resolve_user(user), budget_id)


@budget_app.command(name="show")
def budget_show(budget_id: int, user: int = USER_OPTION, as_json: bool = JSON_OPTION) -> None:
    """Show one budget with its current spending."""
    budget.show_command(resolve_user(user), budget_id, as_json)


@budget_app.command(name="list")
def budget_list(month: str = MONTH_OPTION, user: int = USER_OPTION, as_json: bool = JSON_OPTION) -> None:
    """List your budgets for a month with spending against each."""
    budget.list_command(resolve_user(user), month, as_json)


@budget_app.command(name="alerts")
def budget_alerts(user: int = USER_OPTION, as_json: bool = JSON_OPTION) -> None:
    """Show this month's budgets that are 80% or more used."""
    budget.alerts_command(resolve_user(user), as_json)


if __name__ == "__main__":
    app()
