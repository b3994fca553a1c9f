"""Domain type definitions for finwatch.

These NewTypes provide semantic clarity and help with type checking:
- UserId: Identity of the authenticated caller owning records
- CategoryId / BudgetId / TransactionId: Store-assigned identities

The entity dataclasses mirror what the stores hand to the core. They are
immutable; changes go through the registry and come back as new instances.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import NewType

from finwatch.domain.money import MoneyAmount

UserId = NewType("UserId", int)

CategoryId = NewType("CategoryId", int)

BudgetId = NewType("BudgetId", int)

TransactionId = NewType("TransactionId", int)


class TransactionType(str, Enum):
    """Classification shared by categories and transactions."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class PaymentMethod(str, Enum):
    """How a transaction was paid."""

    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    UPI = "UPI"
    BANK_TRANSFER = "BANK_TRANSFER"


@dataclass(frozen=True)
class Category:
    """Immutable category. owner_id of None marks a shared default category."""

    id: CategoryId
    name: str
    type: TransactionType
    owner_id: UserId | None = None
    is_default: bool = False

    def usable_by(self, owner_id: UserId) -> bool:
        """A category is usable when it is shared or owned by the caller."""
        return self.owner_id is None or self.owner_id == owner_id


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record."""

    id: TransactionId
    owner_id: UserId
    category_id: CategoryId
    amount: MoneyAmount
    date: date
    type: TransactionType
    description: str | None = None
    payment_method: PaymentMethod | None = None
    category_name: str | None = None


@dataclass(frozen=True)
class Budget:
    """Immutable monthly budget for one category.

    The tuple (owner_id, category_id, month, year) is unique across budgets.
    An id of None means the budget has not been saved yet.
    """

    id: BudgetId | None
    owner_id: UserId
    category_id: CategoryId
    limit: MoneyAmount
    month: int
    year: int
    category_name: str = ""
    created_at: datetime | None = None

    @property
    def key(self) -> tuple[UserId, CategoryId, int, int]:
        return (self.owner_id, self.category_id, self.month, self.year)
