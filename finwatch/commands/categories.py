"""Category commands: list available categories and add your own."""

import sqlite3

from rich.table import Table

from finwatch.commands.shell import console, fail, load_services, print_json
from finwatch.domain.models import TransactionType, UserId
from finwatch.errors import FinwatchError
from finwatch.services.categories import create_category, list_categories
from finwatch.services.responses import category_response


def list_command(user_id: int, as_json: bool) -> None:
    """List default categories and your own."""
    services = load_services()

    try:
        categories = list_categories(services.categories, UserId(user_id))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json([category_response(c) for c in categories])
        return

    if not categories:
        console.print("[yellow]No categories found. Run 'finwatch init' to seed defaults.[/yellow]")
        return

    table = Table(title="Categories")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Type")
    table.add_column("Scope", style="dim")

    for category in categories:
        type_display = "[green]INCOME[/green]" if category.type is TransactionType.INCOME else "[red]EXPENSE[/red]"
        scope = "default" if category.owner_id is None else "yours"
        table.add_row(str(category.id), category.name, type_display, scope)

    console.print(table)


def add_command(user_id: int, name: str, category_type: str) -> None:
    """Add a private category."""
    services = load_services()

    try:
        parsed_type = TransactionType(category_type.upper())
    except ValueError:
        fail(f"Invalid type '{category_type}'. Use INCOME or EXPENSE.")

    try:
        category = create_category(services.categories, UserId(user_id), name, parsed_type)
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Created category: {category.name} (ID: {category.id})")
