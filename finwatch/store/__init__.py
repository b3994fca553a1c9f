"""Database store layer - provides persistence for the application.

This module re-exports the schema functions and the repository classes that
implement the core's collaborator protocols.
"""

from finwatch.store.repositories import SqliteBudgetStore, SqliteCategoryStore, SqliteTransactionSource
from finwatch.store.schema import database_exists, get_db_path, init_database
from finwatch.store.seed import DEFAULT_CATEGORIES, seed_default_categories

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Repositories
    "SqliteBudgetStore",
    "SqliteCategoryStore",
    "SqliteTransactionSource",
    # Seeding
    "DEFAULT_CATEGORIES",
    "seed_default_categories",
]
