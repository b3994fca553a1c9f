"""Service layer - wires the functional core to the SQLite store.

open_services() builds everything the shell needs from a database path and
the loaded settings.
"""

from dataclasses import dataclass
from pathlib import Path

from finwatch.config import Settings
from finwatch.domain.ports import Clock, SystemClock
from finwatch.services.budgets import BudgetService
from finwatch.services.registry import BudgetRegistry
from finwatch.store.repositories import SqliteBudgetStore, SqliteCategoryStore, SqliteTransactionSource


@dataclass(frozen=True)
class Services:
    """Stores and services bound to one database."""

    categories: SqliteCategoryStore
    transactions: SqliteTransactionSource
    budgets: BudgetService


def open_services(db_path: Path, settings: Settings, clock: Clock | None = None) -> Services:
    clock = clock or SystemClock()
    category_store = SqliteCategoryStore(db_path)
    transaction_store = SqliteTransactionSource(db_path)
    budget_store = SqliteBudgetStore(db_path)

    registry = BudgetRegistry(
        budget_store,
        category_store,
        clock=clock,
        min_year=settings.min_year,
        max_year=settings.max_year,
    )
    return Services(
        categories=category_store,
        transactions=transaction_store,
        budgets=BudgetService(registry, budget_store, transaction_store, clock),
    )


__all__ = ["BudgetRegistry", "BudgetService", "Services", "open_services"]
