"""Pure functions for spending aggregation.

All monetary amounts are MoneyAmount values; only EXPENSE transactions count
as spending, whatever their sign.
"""

from collections.abc import Iterable
from datetime import date

from finwatch.domain.models import CategoryId, Transaction, TransactionType, UserId
from finwatch.domain.money import MoneyAmount
from finwatch.domain.ports import TransactionSource


def is_expense_in_category(transaction: Transaction, category_id: CategoryId) -> bool:
    """Check whether a transaction counts towards a category's spending."""
    return transaction.category_id == category_id and transaction.type == TransactionType.EXPENSE


def sum_expenses(transactions: Iterable[Transaction], category_id: CategoryId) -> MoneyAmount:
    """Sum EXPENSE amounts for one category.

    Args:
        transactions: Transactions already restricted to the window of interest.
        category_id: Category to total.

    Returns:
        Total spending, zero when nothing matches.
    """
    total = MoneyAmount.zero()
    for transaction in transactions:
        if is_expense_in_category(transaction, category_id):
            total = total + transaction.amount
    return total


def spending_by_category(transactions: Iterable[Transaction]) -> dict[CategoryId, MoneyAmount]:
    """Group EXPENSE amounts by category.

    Args:
        transactions: Transactions for a single window.

    Returns:
        Dictionary mapping category id to total spending. Categories with no
        expenses are absent.
    """
    totals: dict[CategoryId, MoneyAmount] = {}
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        totals[transaction.category_id] = totals.get(transaction.category_id, MoneyAmount.zero()) + transaction.amount
    return totals


def in_window(transaction: Transaction, start: date, end: date) -> bool:
    return start <= transaction.date <= end


def period_spending(
    source: TransactionSource,
    owner_id: UserId,
    category_id: CategoryId,
    start: date,
    end: date,
) -> MoneyAmount:
    """Total a category's spending over an inclusive date window.

    Fetches the owner's whole window in a single call and filters locally.

    Args:
        source: Transaction source to read from.
        owner_id: Owner of the transactions.
        category_id: Category to total.
        start: First day of the window (inclusive).
        end: Last day of the window (inclusive).

    Returns:
        Total spending, zero when nothing matches.

    Raises:
        ValueError: If start is after end.
    """
    if start > end:
        raise ValueError(f"Window start {start} is after end {end}")

    transactions = source.find_by_owner_and_date_range(owner_id, start, end)
    return sum_expenses((t for t in transactions if in_window(t, start, end)), category_id)
