"""Database schema initialization and migrations."""

import os
import sqlite3
from pathlib import Path


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "finwatch" / "finwatch.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Amounts are stored as INTEGER cents. The budgets table carries the
    durable uniqueness constraint on (owner_id, category_id, month, year).

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                type TEXT NOT NULL CHECK (type IN ('INCOME', 'EXPENSE')),
                is_default INTEGER NOT NULL DEFAULT 0,
                owner_id INTEGER,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                owner_id INTEGER NOT NULL,
                category_id INTEGER NOT NULL REFERENCES categories(id),
                amount INTEGER NOT NULL,
                description TEXT,
                date TEXT NOT NULL,
                payment_method TEXT,
                type TEXT NOT NULL CHECK (type IN ('INCOME', 'EXPENSE')),
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS budgets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                owner_id INTEGER NOT NULL,
                category_id INTEGER NOT NULL REFERENCES categories(id),
                limit_amount INTEGER NOT NULL,
                month INTEGER NOT NULL CHECK (month BETWEEN 1 AND 12),
                year INTEGER NOT NULL,
                created_at TEXT NOT NULL,
                CONSTRAINT uk_owner_category_month_year UNIQUE (owner_id, category_id, month, year)
            )
        """
        )

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_owner_date ON transactions(owner_id, date)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_txn_category ON transactions(category_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_budget_owner_month_year ON budgets(owner_id, month, year)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_category_owner ON categories(owner_id)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
