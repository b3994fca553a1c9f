"""SQLite-backed implementations of the core's collaborator protocols.

Query functions return plain dictionaries; these classes convert rows to and
from domain objects so the core never sees the database.
"""

import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Any

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
from finwatch.errors import ConstraintViolation
from finwatch.store import queries


def category_from_row(row: dict[str, Any]) -> Category:
    owner_id = row["owner_id"]
    return Category(
        id=CategoryId(row["id"]),
        name=row["name"],
        type=TransactionType(row["type"]),
        owner_id=UserId(owner_id) if owner_id is not None else None,
        is_default=bool(row["is_default"]),
    )


def transaction_from_row(row: dict[str, Any]) -> Transaction:
    payment_method = row.get("payment_method")
    return Transaction(
        id=TransactionId(row["id"]),
        owner_id=UserId(row["owner_id"]),
        category_id=CategoryId(row["category_id"]),
        amount=MoneyAmount.from_cents(row["amount"]),
        date=date.fromisoformat(row["date"]),
        type=TransactionType(row["type"]),
        description=row.get("description"),
        payment_method=PaymentMethod(payment_method) if payment_method else None,
        category_name=row.get("category_name"),
    )


def budget_from_row(row: dict[str, Any]) -> Budget:
    return Budget(
        id=BudgetId(row["id"]),
        owner_id=UserId(row["owner_id"]),
        category_id=CategoryId(row["category_id"]),
        category_name=row.get("category_name") or "",
        limit=MoneyAmount.from_cents(row["limit_amount"]),
        month=row["month"],
        year=row["year"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class SqliteCategoryStore:
    """Category lookups against the categories table."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path

    def get_by_id(self, category_id: CategoryId) -> Category | None:
        row = queries.get_category(category_id, self.db_path)
        return category_from_row(row) if row else None

    def list_defaults(self) -> list[Category]:
        return [category_from_row(row) for row in queries.get_default_categories(self.db_path)]

    def list_owned(self, owner_id: UserId) -> list[Category]:
        return [category_from_row(row) for row in queries.get_owned_categories(owner_id, self.db_path)]

    def add(self, name: str, category_type: TransactionType, owner_id: UserId | None) -> Category:
        category_id = queries.insert_category(name, category_type.value, owner_id, False, self.db_path)
        return Category(id=CategoryId(category_id), name=name, type=category_type, owner_id=owner_id)

    def add_defaults(self, rows: list[tuple[str, TransactionType]]) -> int:
        return queries.insert_categories(
            [(name, category_type.value) for name, category_type in rows], is_default=True, db_path=self.db_path
        )


class SqliteTransactionSource:
    """Transaction reads and writes against the transactions table."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path

    def find_by_owner_and_date_range(self, owner_id: UserId, start: date, end: date) -> list[Transaction]:
        rows = queries.get_transactions_in_range(owner_id, start.isoformat(), end.isoformat(), self.db_path)
        return [transaction_from_row(row) for row in rows]

    def get_by_id(self, transaction_id: TransactionId) -> Transaction | None:
        row = queries.get_transaction(transaction_id, self.db_path)
        return transaction_from_row(row) if row else None

    def add(self, transaction: Transaction) -> Transaction:
        transaction_id = queries.insert_transaction(
            owner_id=transaction.owner_id,
            category_id=transaction.category_id,
            amount=transaction.amount.cents,
            date=transaction.date.isoformat(),
            transaction_type=transaction.type.value,
            description=transaction.description,
            payment_method=transaction.payment_method.value if transaction.payment_method else None,
            db_path=self.db_path,
        )
        return self._read_back(TransactionId(transaction_id))

    def update(self, transaction: Transaction) -> Transaction:
        queries.update_transaction(
            transaction.id,
            category_id=transaction.category_id,
            amount=transaction.amount.cents,
            date=transaction.date.isoformat(),
            transaction_type=transaction.type.value,
            description=transaction.description,
            payment_method=transaction.payment_method.value if transaction.payment_method else None,
            db_path=self.db_path,
        )
        return self._read_back(transaction.id)

    def _read_back(self, transaction_id: TransactionId) -> Transaction:
        saved = self.get_by_id(transaction_id)
        assert saved is not None, "saved transaction must be readable"
        return saved

    def delete_by_id(self, transaction_id: TransactionId) -> None:
        queries.delete_transaction(transaction_id, self.db_path)


class SqliteBudgetStore:
    """Budget records; the table's UNIQUE key is the final word on duplicates."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path

    def get_by_id(self, budget_id: BudgetId) -> Budget | None:
        row = queries.get_budget(budget_id, self.db_path)
        return budget_from_row(row) if row else None

    def find_by_owner_category_month_year(
        self, owner_id: UserId, category_id: CategoryId, month: int, year: int
    ) -> Budget | None:
        row = queries.find_budget(owner_id, category_id, month, year, self.db_path)
        return budget_from_row(row) if row else None

    def find_by_owner_and_month_year(self, owner_id: UserId, month: int, year: int) -> list[Budget]:
        return [budget_from_row(row) for row in queries.get_budgets_for_month(owner_id, month, year, self.db_path)]

    def save(self, budget: Budget) -> Budget:
        try:
            if budget.id is None:
                created_at = budget.created_at or datetime.now()
                budget_id = queries.insert_budget(
                    budget.owner_id,
                    budget.category_id,
                    budget.limit.cents,
                    budget.month,
                    budget.year,
                    created_at.isoformat(),
                    self.db_path,
                )
            else:
                budget_id = budget.id
                queries.update_budget(
                    budget_id, budget.category_id, budget.limit.cents, budget.month, budget.year, self.db_path
                )
        except sqlite3.IntegrityError as e:
            if "UNIQUE" not in str(e):
                raise
            raise ConstraintViolation(f"Budget key {budget.key} rejected by store: {e}") from e

        saved = self.get_by_id(BudgetId(budget_id))
        assert saved is not None, "saved budget must be readable"
        return saved

    def delete_by_id(self, budget_id: BudgetId) -> None:
        queries.delete_budget(budget_id, self.db_path)
