"""Shared fixtures."""

from datetime import date
from pathlib import Path

import pytest
from helpers import InMemoryBudgetStore, InMemoryCategoryStore, InMemoryTransactionSource

from finwatch.domain.ports import FixedClock
from finwatch.services.budgets import BudgetService
from finwatch.services.registry import BudgetRegistry
from finwatch.store.schema import init_database


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(date(2025, 10, 20))


@pytest.fixture
def category_store() -> InMemoryCategoryStore:
    return InMemoryCategoryStore()


@pytest.fixture
def budget_store() -> InMemoryBudgetStore:
    return InMemoryBudgetStore()


@pytest.fixture
def transaction_source() -> InMemoryTransactionSource:
    return InMemoryTransactionSource()


@pytest.fixture
def registry(
    budget_store: InMemoryBudgetStore, category_store: InMemoryCategoryStore, clock: FixedClock
) -> BudgetRegistry:
    return BudgetRegistry(budget_store, category_store, clock=clock)


@pytest.fixture
def budget_service(
    registry: BudgetRegistry,
    budget_store: InMemoryBudgetStore,
    transaction_source: InMemoryTransactionSource,
    clock: FixedClock,
) -> BudgetService:
    return BudgetService(registry, budget_store, transaction_source, clock)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "finwatch.db"
    init_database(path)
    return path
