"""Tests for the SQLite-backed stores."""

import sqlite3
from dataclasses import replace
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from finwatch.domain.models import (
    Budget,
    BudgetId,
    CategoryId,
    PaymentMethod,
    Transaction,
    TransactionId,
    TransactionType,
    UserId,
)
from finwatch.domain.money import MoneyAmount
from finwatch.errors import ConstraintViolation
from finwatch.store.repositories import SqliteBudgetStore, SqliteCategoryStore, SqliteTransactionSource

ALICE = UserId(1)
BOB = UserId(2)
CREATED = datetime(2025, 10, 1, 9, 30, tzinfo=timezone.utc)


def new_budget(category_id: CategoryId, month: int = 10, owner_id: UserId = ALICE, limit: str = "3000.00") -> Budget:
    return Budget(
        id=None,
        owner_id=owner_id,
        category_id=category_id,
        limit=MoneyAmount.parse(limit),
        month=month,
        year=2025,
        created_at=CREATED,
    )


def new_transaction(category_id: CategoryId, amount: str, on: date, owner_id: UserId = ALICE) -> Transaction:
    return Transaction(
        id=TransactionId(0),
        owner_id=owner_id,
        category_id=category_id,
        amount=MoneyAmount.parse(amount),
        date=on,
        type=TransactionType.EXPENSE,
        description="Lunch",
        payment_method=PaymentMethod.UPI,
    )


@pytest.fixture
def categories(db_path: Path) -> SqliteCategoryStore:
    return SqliteCategoryStore(db_path)


@pytest.fixture
def food(categories: SqliteCategoryStore) -> CategoryId:
    return categories.add("Food & Dining", TransactionType.EXPENSE, None).id


@pytest.fixture
def transport(categories: SqliteCategoryStore) -> CategoryId:
    return categories.add("Transportation", TransactionType.EXPENSE, None).id


class TestSchema:
    """Tests for init_database."""

    def test_creates_tables(self, db_path: Path) -> None:
        """Should create the three tables."""
        conn = sqlite3.connect(db_path)
        try:
            names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        finally:
            conn.close()
        assert {"categories", "transactions", "budgets"} <= names

    def test_rejects_bad_month(self, db_path: Path) -> None:
        """Should enforce the month range at the table level."""
        conn = sqlite3.connect(db_path)
        try:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO budgets (owner_id, category_id, limit_amount, month, year, created_at) "
                    "VALUES (1, 1, 100, 13, 2025, '2025-01-01')"
                )
        finally:
            conn.close()


class TestCategoryStore:
    """Tests for SqliteCategoryStore."""

    def test_add_and_get(self, categories: SqliteCategoryStore) -> None:
        """Should round-trip a private category."""
        added = categories.add("Coffee", TransactionType.EXPENSE, ALICE)
        found = categories.get_by_id(added.id)

        assert found == added
        assert found is not None and found.owner_id == ALICE

    def test_missing(self, categories: SqliteCategoryStore) -> None:
        """Should return None for an unknown id."""
        assert categories.get_by_id(CategoryId(999)) is None

    def test_defaults_and_owned(self, categories: SqliteCategoryStore) -> None:
        """Should keep defaults and private categories apart."""
        categories.add_defaults([("Salary", TransactionType.INCOME), ("Rent", TransactionType.EXPENSE)])
        categories.add("Coffee", TransactionType.EXPENSE, ALICE)
        categories.add("Trains", TransactionType.EXPENSE, BOB)

        assert {c.name for c in categories.list_defaults()} == {"Salary", "Rent"}
        assert all(c.is_default and c.owner_id is None for c in categories.list_defaults())
        assert [c.name for c in categories.list_owned(ALICE)] == ["Coffee"]


class TestTransactionSource:
    """Tests for SqliteTransactionSource."""

    def test_add_assigns_id(self, db_path: Path, food: CategoryId) -> None:
        """Should return the saved transaction with its new id."""
        source = SqliteTransactionSource(db_path)
        saved = source.add(new_transaction(food, "12.34", date(2025, 10, 3)))

        assert saved.id > 0
        assert saved.category_name == "Food & Dining"
        assert source.get_by_id(saved.id) == saved

    def test_update(self, db_path: Path, food: CategoryId, transport: CategoryId) -> None:
        """Should overwrite the mutable fields and join the new category name."""
        source = SqliteTransactionSource(db_path)
        saved = source.add(new_transaction(food, "12.34", date(2025, 10, 3)))

        updated = source.update(
            replace(
                saved,
                category_id=transport,
                amount=MoneyAmount.parse("20.00"),
                date=date(2025, 10, 4),
                type=TransactionType.INCOME,
                description=None,
                payment_method=None,
            )
        )

        assert updated.category_name == "Transportation"
        assert updated.amount == MoneyAmount.parse("20.00")
        assert updated.date == date(2025, 10, 4)
        assert updated.type is TransactionType.INCOME
        assert updated.description is None
        assert updated.payment_method is None
        assert source.get_by_id(saved.id) == updated

    def test_range_is_inclusive_and_per_owner(self, db_path: Path, food: CategoryId) -> None:
        """Should include both window ends and only the owner's rows."""
        source = SqliteTransactionSource(db_path)
        source.add(new_transaction(food, "1.00", date(2025, 9, 30)))
        source.add(new_transaction(food, "2.00", date(2025, 10, 1)))
        source.add(new_transaction(food, "3.00", date(2025, 10, 31)))
        source.add(new_transaction(food, "4.00", date(2025, 10, 15), owner_id=BOB))

        found = source.find_by_owner_and_date_range(ALICE, date(2025, 10, 1), date(2025, 10, 31))

        assert [t.amount for t in found] == [MoneyAmount.parse("3.00"), MoneyAmount.parse("2.00")]

    def test_amounts_stored_as_cents(self, db_path: Path, food: CategoryId) -> None:
        """Should store integer cents."""
        SqliteTransactionSource(db_path).add(new_transaction(food, "0.10", date(2025, 10, 3)))
        conn = sqlite3.connect(db_path)
        try:
            (amount,) = conn.execute("SELECT amount FROM transactions").fetchone()
        finally:
            conn.close()
        assert amount == 10

    def test_delete(self, db_path: Path, food: CategoryId) -> None:
        """Should remove the transaction."""
        source = SqliteTransactionSource(db_path)
        saved = source.add(new_transaction(food, "5.00", date(2025, 10, 3)))
        source.delete_by_id(saved.id)
        assert source.get_by_id(saved.id) is None


class TestBudgetStore:
    """Tests for SqliteBudgetStore."""

    def test_insert_and_read_back(self, db_path: Path, food: CategoryId) -> None:
        """Should assign an id and join the category name."""
        store = SqliteBudgetStore(db_path)
        saved = store.save(new_budget(food))

        assert saved.id is not None
        assert saved.category_name == "Food & Dining"
        assert saved.limit == MoneyAmount.parse("3000.00")
        assert saved.created_at == CREATED
        assert store.get_by_id(saved.id) == saved

    def test_find_by_key(self, db_path: Path, food: CategoryId) -> None:
        """Should find by (owner, category, month, year) only."""
        store = SqliteBudgetStore(db_path)
        saved = store.save(new_budget(food))

        assert store.find_by_owner_category_month_year(ALICE, food, 10, 2025) == saved
        assert store.find_by_owner_category_month_year(BOB, food, 10, 2025) is None
        assert store.find_by_owner_category_month_year(ALICE, food, 11, 2025) is None

    def test_month_listing_sorted_by_category_name(
        self, db_path: Path, food: CategoryId, transport: CategoryId
    ) -> None:
        """Should list one month's budgets ordered by category name."""
        store = SqliteBudgetStore(db_path)
        store.save(new_budget(transport))
        store.save(new_budget(food))
        store.save(new_budget(food, month=11))

        names = [b.category_name for b in store.find_by_owner_and_month_year(ALICE, 10, 2025)]
        assert names == ["Food & Dining", "Transportation"]

    def test_duplicate_key_raises_constraint_violation(self, db_path: Path, food: CategoryId) -> None:
        """Should translate the UNIQUE failure."""
        store = SqliteBudgetStore(db_path)
        store.save(new_budget(food))

        with pytest.raises(ConstraintViolation):
            store.save(new_budget(food, limit="10.00"))

    def test_same_key_for_other_owner(self, db_path: Path, food: CategoryId) -> None:
        """Should allow the same key tuple for a different owner."""
        store = SqliteBudgetStore(db_path)
        store.save(new_budget(food))
        assert store.save(new_budget(food, owner_id=BOB)).owner_id == BOB

    def test_update(self, db_path: Path, food: CategoryId, transport: CategoryId) -> None:
        """Should update fields in place and keep created_at."""
        store = SqliteBudgetStore(db_path)
        saved = store.save(new_budget(food))
        updated = store.save(replace(saved, category_id=transport, limit=MoneyAmount.parse("50.00"), month=12))

        assert updated.id == saved.id
        assert updated.category_name == "Transportation"
        assert updated.limit == MoneyAmount.parse("50.00")
        assert updated.month == 12
        assert updated.created_at == CREATED

    def test_update_into_taken_key(self, db_path: Path, food: CategoryId, transport: CategoryId) -> None:
        """Should raise ConstraintViolation when an update collides."""
        store = SqliteBudgetStore(db_path)
        store.save(new_budget(food))
        other = store.save(new_budget(transport))

        with pytest.raises(ConstraintViolation):
            store.save(replace(other, category_id=food))

    def test_delete(self, db_path: Path, food: CategoryId) -> None:
        """Should remove the budget."""
        store = SqliteBudgetStore(db_path)
        saved = store.save(new_budget(food))
        store.delete_by_id(BudgetId(saved.id))
        assert store.get_by_id(BudgetId(saved.id)) is None
