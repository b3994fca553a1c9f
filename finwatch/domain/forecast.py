"""Pure functions for projecting end-of-month spending from the current pace."""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal

from finwatch.dates import days_in_month
from finwatch.domain.evaluation import BudgetEvaluation
from finwatch.domain.money import MoneyAmount

DAILY_AVERAGE_SCALE = 4


@dataclass(frozen=True)
class Forecast:
    """Immutable month-end projection for one budget."""

    daily_average: MoneyAmount
    projected_spending: MoneyAmount
    will_exceed: bool
    exceed_date: date | None = None


def calculate_daily_average(spending: MoneyAmount, days_elapsed: int) -> Decimal:
    """Average spend per elapsed day, zero when no days have elapsed."""
    if days_elapsed <= 0:
        return Decimal(0)
    return spending.divide(days_elapsed, DAILY_AVERAGE_SCALE, ROUND_HALF_UP)


def days_until_limit(remaining: MoneyAmount, daily_average: Decimal) -> int:
    """Whole days until the remaining amount is used up at the daily pace.

    Already-exceeded budgets give 0.
    """
    if not remaining.is_positive():
        return 0
    days = (remaining.to_decimal() / daily_average).to_integral_value(rounding=ROUND_CEILING)
    return int(days)


def forecast(evaluation: BudgetEvaluation, today: date) -> Forecast:
    """Project month-end spending for an evaluated budget.

    Args:
        evaluation: Budget evaluation for the month containing `today`.
        today: Current date; its day of month is the number of elapsed days.

    Returns:
        Forecast. exceed_date is set only when the projection exceeds the limit.
    """
    budget = evaluation.budget
    total_days = days_in_month(budget.year, budget.month)

    daily_average = calculate_daily_average(evaluation.spending, today.day)
    projected = (daily_average * total_days).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    projected_spending = MoneyAmount.parse(projected)

    if daily_average == 0:
        return Forecast(
            daily_average=MoneyAmount.zero(),
            projected_spending=projected_spending,
            will_exceed=False,
        )

    will_exceed = projected_spending > budget.limit
    exceed_date = None
    if will_exceed:
        exceed_date = today + timedelta(days=days_until_limit(evaluation.remaining, daily_average))

    return Forecast(
        daily_average=MoneyAmount.parse(daily_average.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        projected_spending=projected_spending,
        will_exceed=will_exceed,
        exceed_date=exceed_date,
    )
