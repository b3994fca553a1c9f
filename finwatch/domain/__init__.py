"""Domain models and types for finwatch.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations (collaborators are injected through ports)
- Easy to test
- Business logic separated from infrastructure
"""

from finwatch.domain.models import (
    Budget,
    BudgetId,
    Category,
    CategoryId,
    PaymentMethod,
    Transaction,
    TransactionId,
    TransactionType,
    UserId,
)
from finwatch.domain.money import MoneyAmount

__all__ = [
    "Budget",
    "BudgetId",
    "Category",
    "CategoryId",
    "MoneyAmount",
    "PaymentMethod",
    "Transaction",
    "TransactionId",
    "TransactionType",
    "UserId",
]
