"""Budget commands: manage monthly category budgets and show alerts."""

import sqlite3

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
from finwatch.dates import month_label
from finwatch.domain.alerts import Alert, AlertLevel
from finwatch.domain.evaluation import BudgetEvaluation
from finwatch.domain.models import BudgetId, CategoryId, UserId
from finwatch.errors import FinwatchError
from finwatch.services.responses import alert_response, budget_response


def format_percentage_with_color(evaluation: BudgetEvaluation) -> str:
    """Format percentage used with color based on the alert thresholds.

    Args:
        evaluation: Budget evaluation.

    Returns:
        Colored string for percentage display.
    """
    text = f"{evaluation.percentage_used:.2f}%"
    if evaluation.percentage_used >= 100:
        return f"[red]{text}[/red]"
    elif evaluation.percentage_used >= 80:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[green]{text}[/green]"


def render_evaluation(evaluation: BudgetEvaluation, symbol: str) -> None:
    """Render a single budget evaluation."""
    budget = evaluation.budget
    console.print(f"[bold cyan]{budget.category_name} - {month_label(budget.year, budget.month)}[/bold cyan]")
    console.print(f"  [dim]Budget #{budget.id}[/dim]")
    console.print(f"  Limit:     {format_money(budget.limit, symbol)}")
    console.print(f"  Spent:     {format_money(evaluation.spending, symbol)}")
    console.print(f"  Used:      {format_percentage_with_color(evaluation)}")

    if evaluation.exceeded:
        console.print(f"  [red]Over by:   {format_money(-evaluation.remaining, symbol)}[/red]")
    else:
        console.print(f"  [green]Remaining: {format_money(evaluation.remaining, symbol)}[/green]")


def render_evaluation_table(evaluations: list[BudgetEvaluation], title: str, symbol: str) -> None:
    """Render budget evaluations as a table with a totals line."""
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Category", style="white")
    table.add_column("Limit", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Used", justify="right")
    table.add_column("Remaining", justify="right")

    for evaluation in evaluations:
        if evaluation.remaining.is_negative():
            remaining_display = f"[red]{format_money(evaluation.remaining, symbol)}[/red]"
        else:
            remaining_display = f"[green]{format_money(evaluation.remaining, symbol)}[/green]"

        table.add_row(
            str(evaluation.budget.id),
            evaluation.budget.category_name,
            format_money(evaluation.budget.limit, symbol),
            format_money(evaluation.spending, symbol),
            format_percentage_with_color(evaluation),
            remaining_display,
        )

    console.print(table)

    exceeded = [e for e in evaluations if e.exceeded]
    if exceeded:
        names = ", ".join(e.budget.category_name for e in exceeded)
        console.print(f"\n[red]Over budget:[/red] {names}")


def render_alert(alert: Alert, symbol: str) -> None:
    """Render a single alert line with its forecast."""
    color = "red" if alert.level is AlertLevel.DANGER else "yellow"
    console.print(f"[bold {color}]{alert.level.value}[/bold {color}] {alert.category_name}: {alert.message}")

    if alert.forecast is not None:
        console.print(
            f"  [dim]Pace: {format_money(alert.forecast.daily_average, symbol)}/day, "
            f"projected {format_money(alert.forecast.projected_spending, symbol)} "
            f"of {format_money(alert.evaluation.budget.limit, symbol)}[/dim]"
        )
        if alert.forecast.will_exceed and alert.forecast.exceed_date and alert.level is AlertLevel.WARNING:
            console.print(f"  [dim]Limit reached around {alert.forecast.exceed_date.isoformat()}[/dim]")


def create_command(user_id: int, category_id: int, limit: str, month: str | None, as_json: bool) -> None:
    """Create a budget for a category."""
    services = load_services()
    month_int, year = parse_month_option(month)

    try:
        evaluation = services.budgets.create_budget(
            UserId(user_id), CategoryId(category_id), parse_amount(limit), month_int, year
        )
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json(budget_response(evaluation))
        return

    console.print(f"[green]✓[/green] Budget created for {evaluation.budget.category_name}")
    render_evaluation(evaluation, currency_symbol())


def update_command(
    user_id: int, budget_id: int, category_id: int | None, limit: str | None, month: str | None, as_json: bool
) -> None:
    """Update a budget; unspecified fields keep their current values."""
    services = load_services()

    try:
        current = services.budgets.get_budget(BudgetId(budget_id), UserId(user_id)).budget
        if month is not None:
            month_int, year = parse_month_option(month)
        else:
            month_int, year = current.month, current.year

        evaluation = services.budgets.update_budget(
            BudgetId(budget_id),
            UserId(user_id),
            CategoryId(category_id) if category_id is not None else current.category_id,
            parse_amount(limit) if limit is not None else current.limit,
            month_int,
            year,
        )
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json(budget_response(evaluation))
        return

    console.print(f"[green]✓[/green] Budget #{budget_id} updated")
    render_evaluation(evaluation, currency_symbol())


def delete_command(user_id: int, budget_id: int) -> None:
    """Delete a budget."""
    services = load_services()

    try:
        services.budgets.delete_budget(BudgetId(budget_id), UserId(user_id))
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Budget #{budget_id} deleted")


def show_command(user_id: int, budget_id: int, as_json: bool) -> None:
    """Show one budget with its current spending."""
    services = load_services()

    try:
        evaluation = services.budgets.get_budget(BudgetId(budget_id), UserId(user_id))
    except FinwatchError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json(budget_response(evaluation))
        return

    render_evaluation(evaluation, currency_symbol())


def list_command(user_id: int, month: str | None, as_json: bool) -> None:
    """List budgets for a month with spending against each."""
    services = load_services()
    month_int, year = parse_month_option(month)

    try:
        evaluations = services.budgets.list_budgets(UserId(user_id), month_int, year)
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json([budget_response(e) for e in evaluations])
        return

    label = month_label(year, month_int)
    if not evaluations:
        console.print(f"[yellow]No budgets set for {label}[/yellow]")
        console.print("[dim]Use 'finwatch budget create <category-id> <limit>' to add one[/dim]")
        return

    render_evaluation_table(evaluations, f"{label} Budgets", currency_symbol())


def alerts_command(user_id: int, as_json: bool) -> None:
    """Show alerts for this month's budgets that are 80% or more used."""
    services = load_services()

    try:
        alerts = services.budgets.list_alerts(UserId(user_id))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if as_json:
        print_json([alert_response(a) for a in alerts])
        return

    if not alerts:
        console.print("[green]All budgets are under 80% for this month[/green]")
        return

    symbol = currency_symbol()
    for alert in alerts:
        render_alert(alert, symbol)
