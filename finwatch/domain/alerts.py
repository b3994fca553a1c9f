"""Pure functions for budget alert classification.

Thresholds are fixed policy:
- below 80% used: no alert
- 80% up to (not including) 100%: WARNING
- 100% and above: DANGER
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from finwatch.dates import days_in_month
from finwatch.domain.evaluation import BudgetEvaluation
from finwatch.domain.forecast import Forecast

WARNING_THRESHOLD = Decimal("80.0")
DANGER_THRESHOLD = Decimal("100.0")


class AlertLevel(str, Enum):
    WARNING = "WARNING"
    DANGER = "DANGER"


@dataclass(frozen=True)
class Alert:
    """Immutable alert for a budget at or above the warning threshold."""

    evaluation: BudgetEvaluation
    days_left_in_month: int
    level: AlertLevel
    message: str
    forecast: Forecast | None = None

    @property
    def category_name(self) -> str:
        return self.evaluation.budget.category_name


def alert_level_for(percentage_used: Decimal) -> AlertLevel | None:
    """Map a percentage to an alert level, or None below the warning threshold."""
    if percentage_used >= DANGER_THRESHOLD:
        return AlertLevel.DANGER
    if percentage_used >= WARNING_THRESHOLD:
        return AlertLevel.WARNING
    return None


def danger_message(percentage_used: Decimal) -> str:
    overage = (percentage_used - DANGER_THRESHOLD).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"Budget exceeded by {overage}%"


def warning_message(percentage_used: Decimal, days_left: int) -> str:
    # Whole percent, half-up: 80.50 reads as 81%
    whole = percentage_used.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{whole}% of budget used with {days_left} days remaining"


def days_left_in_month(year: int, month: int, today: date) -> int:
    return days_in_month(year, month) - today.day


def classify(evaluation: BudgetEvaluation, today: date) -> Alert | None:
    """Classify an evaluation into an alert.

    The caller is responsible for passing a `today` that falls in the
    budget's own month; days left are computed from the budget's month.

    Args:
        evaluation: Evaluated budget.
        today: Current date.

    Returns:
        Alert, or None when less than 80% of the budget is used.
    """
    level = alert_level_for(evaluation.percentage_used)
    if level is None:
        return None

    budget = evaluation.budget
    days_left = days_left_in_month(budget.year, budget.month, today)

    if level is AlertLevel.DANGER:
        message = danger_message(evaluation.percentage_used)
    else:
        message = warning_message(evaluation.percentage_used, days_left)

    return Alert(
        evaluation=evaluation,
        days_left_in_month=days_left,
        level=level,
        message=message,
    )
