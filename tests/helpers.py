"""In-memory collaborators and builders shared by the tests."""

from dataclasses import replace
from datetime import date, datetime

from finwatch.domain.models import (
    Budget,
    BudgetId,
    Category,
    CategoryId,
    Transaction,
    TransactionId,
    TransactionType,
    UserId,
)
from finwatch.domain.money import MoneyAmount
from finwatch.errors import ConstraintViolation

ALICE = UserId(1)
BOB = UserId(2)

FOOD = CategoryId(10)
TRANSPORT = CategoryId(11)
SALARY = CategoryId(12)
BOBS_HOBBY = CategoryId(20)


def money(amount: str) -> MoneyAmount:
    return MoneyAmount.parse(amount)


def expense(amount: str, on: date, category_id: CategoryId = FOOD, owner_id: UserId = ALICE) -> Transaction:
    return Transaction(
        id=TransactionId(0),
        owner_id=owner_id,
        category_id=category_id,
        amount=money(amount),
        date=on,
        type=TransactionType.EXPENSE,
    )


def income(amount: str, on: date, category_id: CategoryId = SALARY, owner_id: UserId = ALICE) -> Transaction:
    return replace(expense(amount, on, category_id, owner_id), type=TransactionType.INCOME)


def make_budget(
    limit: str = "3000.00",
    month: int = 10,
    year: int = 2025,
    category_id: CategoryId = FOOD,
    owner_id: UserId = ALICE,
    budget_id: int | None = 1,
    category_name: str = "Food & Dining",
) -> Budget:
    return Budget(
        id=BudgetId(budget_id) if budget_id is not None else None,
        owner_id=owner_id,
        category_id=category_id,
        category_name=category_name,
        limit=money(limit),
        month=month,
        year=year,
    )


def default_categories() -> list[Category]:
    return [
        Category(id=FOOD, name="Food & Dining", type=TransactionType.EXPENSE, is_default=True),
        Category(id=TRANSPORT, name="Transportation", type=TransactionType.EXPENSE, is_default=True),
        Category(id=SALARY, name="Salary", type=TransactionType.INCOME, is_default=True),
        Category(id=BOBS_HOBBY, name="Model Trains", type=TransactionType.EXPENSE, owner_id=BOB),
    ]


class InMemoryTransactionSource:
    """Transaction source that records how often it was queried."""

    def __init__(self, transactions: list[Transaction] | None = None) -> None:
        self.transactions: list[Transaction] = []
        self.calls: list[tuple[UserId, date, date]] = []
        for transaction in transactions or []:
            self.add(transaction)

    def find_by_owner_and_date_range(self, owner_id: UserId, start: date, end: date) -> list[Transaction]:
        self.calls.append((owner_id, start, end))
        return [t for t in self.transactions if t.owner_id == owner_id and start <= t.date <= end]

    def get_by_id(self, transaction_id: TransactionId) -> Transaction | None:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    def add(self, transaction: Transaction) -> Transaction:
        saved = replace(transaction, id=TransactionId(len(self.transactions) + 1))
        self.transactions.append(saved)
        return saved

    def update(self, transaction: Transaction) -> Transaction:
        self.transactions = [transaction if t.id == transaction.id else t for t in self.transactions]
        return transaction

    def delete_by_id(self, transaction_id: TransactionId) -> None:
        self.transactions = [t for t in self.transactions if t.id != transaction_id]


class InMemoryCategoryStore:
    def __init__(self, categories: list[Category] | None = None) -> None:
        self.categories = {c.id: c for c in (categories if categories is not None else default_categories())}

    def get_by_id(self, category_id: CategoryId) -> Category | None:
        return self.categories.get(category_id)

    def list_defaults(self) -> list[Category]:
        return [c for c in self.categories.values() if c.is_default]

    def list_owned(self, owner_id: UserId) -> list[Category]:
        return [c for c in self.categories.values() if c.owner_id == owner_id]

    def add(self, name: str, category_type: TransactionType, owner_id: UserId | None) -> Category:
        category = Category(id=CategoryId(100 + len(self.categories)), name=name, type=category_type, owner_id=owner_id)
        self.categories[category.id] = category
        return category


class InMemoryBudgetStore:
    """Budget store enforcing the unique key like the database does.

    With blind_lookups=True the key lookup never finds anything, which lets a
    test drive a write straight into the unique constraint, as a concurrent
    create would.
    """

    def __init__(self, blind_lookups: bool = False) -> None:
        self.records: dict[BudgetId, Budget] = {}
        self.blind_lookups = blind_lookups
        self.next_id = 1

    def get_by_id(self, budget_id: BudgetId) -> Budget | None:
        return self.records.get(budget_id)

    def find_by_owner_category_month_year(
        self, owner_id: UserId, category_id: CategoryId, month: int, year: int
    ) -> Budget | None:
        if self.blind_lookups:
            return None
        return next((b for b in self.records.values() if b.key == (owner_id, category_id, month, year)), None)

    def find_by_owner_and_month_year(self, owner_id: UserId, month: int, year: int) -> list[Budget]:
        return [b for b in self.records.values() if (b.owner_id, b.month, b.year) == (owner_id, month, year)]

    def save(self, budget: Budget) -> Budget:
        for existing in self.records.values():
            if existing.key == budget.key and existing.id != budget.id:
                raise ConstraintViolation(f"UNIQUE constraint failed for {budget.key}")

        if budget.id is None:
            budget = replace(budget, id=BudgetId(self.next_id), created_at=budget.created_at or datetime(2025, 1, 1))
            self.next_id += 1
        self.records[budget.id] = budget
        return budget

    def delete_by_id(self, budget_id: BudgetId) -> None:
        self.records.pop(budget_id, None)
