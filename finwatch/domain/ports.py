"""Collaborator interfaces the core depends on.

The core never talks to a database directly. It is handed objects matching
these protocols: the SQLite store implements them in production and tests use
in-memory fakes.
"""

from datetime import date, datetime, timezone
from typing import Protocol

from finwatch.domain.models import Budget, BudgetId, Category, CategoryId, Transaction, UserId


class TransactionSource(Protocol):
    """Read access to transactions."""

    def find_by_owner_and_date_range(self, owner_id: UserId, start: date, end: date) -> list[Transaction]:
        """Return the owner's transactions dated within [start, end], in any order."""
        ...


class CategoryStore(Protocol):
    """Category lookup."""

    def get_by_id(self, category_id: CategoryId) -> Category | None:
        """Return the category, or None if it does not exist."""
        ...


class BudgetStore(Protocol):
    """Budget records with a durable uniqueness constraint on the key tuple."""

    def get_by_id(self, budget_id: BudgetId) -> Budget | None: ...

    def find_by_owner_category_month_year(
        self, owner_id: UserId, category_id: CategoryId, month: int, year: int
    ) -> Budget | None: ...

    def find_by_owner_and_month_year(self, owner_id: UserId, month: int, year: int) -> list[Budget]: ...

    def save(self, budget: Budget) -> Budget:
        """Insert (id is None) or update a budget.

        Raises:
            ConstraintViolation: If the key tuple collides with another record.
        """
        ...

    def delete_by_id(self, budget_id: BudgetId) -> None: ...


class Clock(Protocol):
    """Source of "now"."""

    def now(self) -> datetime: ...

    def today(self) -> date: ...


class SystemClock:
    """Production clock using the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Controllable clock for deterministic tests and what-if reports."""

    def __init__(self, today: date, now: datetime | None = None) -> None:
        self._today = today
        self._now = now or datetime(today.year, today.month, today.day, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def today(self) -> date:
        return self._today

    def set_today(self, today: date) -> None:
        self._today = today
        self._now = datetime(today.year, today.month, today.day, tzinfo=timezone.utc)
