"""Pure functions for budget-vs-spending evaluation.

This module contains the functional core for budget evaluation:
- No I/O beyond the injected transaction source
- No caching, every call recomputes from the current transactions
- Pure data transformations

Percentage policy: spending / limit is rounded half-up to 4 decimal digits
and then scaled by 100, giving a percentage with 2 decimal digits.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from finwatch.dates import month_window
from finwatch.domain.models import Budget, CategoryId, UserId
from finwatch.domain.money import MoneyAmount
from finwatch.domain.ports import TransactionSource
from finwatch.domain.spending import in_window, period_spending, spending_by_category

RATIO_SCALE = 4
HUNDRED = Decimal(100)
ZERO_PERCENT = Decimal("0.00")


@dataclass(frozen=True)
class BudgetEvaluation:
    """Immutable evaluation of one budget against its month's spending."""

    budget: Budget
    spending: MoneyAmount
    percentage_used: Decimal
    remaining: MoneyAmount
    exceeded: bool


def calculate_percentage_used(spending: MoneyAmount, limit: MoneyAmount) -> Decimal:
    """Calculate percentage of a limit used.

    Args:
        spending: Amount spent.
        limit: Budget limit.

    Returns:
        Percentage with 2 decimal digits, e.g. Decimal("76.67"). Zero when
        nothing was spent or the limit is zero.
    """
    if not spending.is_positive() or not limit:
        return ZERO_PERCENT
    ratio = spending.divide(limit, RATIO_SCALE, ROUND_HALF_UP)
    return (ratio * HUNDRED).quantize(Decimal("0.01"))


def evaluate_with_spending(budget: Budget, spending: MoneyAmount) -> BudgetEvaluation:
    """Build an evaluation from an already-aggregated spending total."""
    return BudgetEvaluation(
        budget=budget,
        spending=spending,
        percentage_used=calculate_percentage_used(spending, budget.limit),
        remaining=budget.limit - spending,
        exceeded=spending > budget.limit,
    )


def evaluate(budget: Budget, source: TransactionSource) -> BudgetEvaluation:
    """Evaluate a single budget against its calendar month.

    Args:
        budget: Budget to evaluate.
        source: Transaction source for the budget owner's transactions.

    Returns:
        BudgetEvaluation recomputed from the source.
    """
    start, end = month_window(budget.year, budget.month)
    spending = period_spending(source, budget.owner_id, budget.category_id, start, end)
    return evaluate_with_spending(budget, spending)


def evaluate_many(budgets: Iterable[Budget], source: TransactionSource) -> list[BudgetEvaluation]:
    """Evaluate several budgets, fetching each (owner, month, year) window once.

    Args:
        budgets: Budgets to evaluate, in the order results should be returned.
        source: Transaction source.

    Returns:
        One BudgetEvaluation per budget, in input order.
    """
    budgets = list(budgets)
    windows: dict[tuple[UserId, int, int], dict[CategoryId, MoneyAmount]] = {}

    for budget in budgets:
        window_key = (budget.owner_id, budget.month, budget.year)
        if window_key in windows:
            continue
        start, end = month_window(budget.year, budget.month)
        transactions = source.find_by_owner_and_date_range(budget.owner_id, start, end)
        windows[window_key] = spending_by_category(t for t in transactions if in_window(t, start, end))

    return [
        evaluate_with_spending(
            budget,
            windows[(budget.owner_id, budget.month, budget.year)].get(budget.category_id, MoneyAmount.zero()),
        )
        for budget in budgets
    ]
