"""Database query functions."""

import sqlite3
from pathlib import Path
from typing import Any

from finwatch.store.schema import get_db_path

BUDGET_COLUMNS = """
    b.id, b.owner_id, b.category_id, c.name AS category_name,
    b.limit_amount, b.month, b.year, b.created_at
"""

TRANSACTION_COLUMNS = """
    t.id, t.owner_id, t.category_id, c.name AS category_name,
    t.amount, t.description, t.date, t.payment_method, t.type
"""

CATEGORY_COLUMNS = "id, name, type, is_default, owner_id"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


# Categories


def insert_category(
    name: str,
    category_type: str,
    owner_id: int | None = None,
    is_default: bool = False,
    db_path: Path | None = None,
) -> int:
    """Insert a category.

    Args:
        name: Category name.
        category_type: "INCOME" or "EXPENSE".
        owner_id: Owning user, or None for a shared category.
        is_default: Whether this is one of the seeded default categories.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new category.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO categories (name, type, is_default, owner_id) VALUES (?, ?, ?, ?)",
                (name, category_type, int(is_default), owner_id),
            )
            conn.commit()
            return int(cursor.lastrowid)
        except sqlite3.Error:
            conn.rollback()
            raise


def insert_categories(rows: list[tuple[str, str]], is_default: bool = False, db_path: Path | None = None) -> int:
    """Insert several shared categories in one transaction.

    Args:
        rows: List of (name, type) tuples.
        is_default: Whether these are seeded default categories.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Number of categories inserted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.executemany(
                "INSERT INTO categories (name, type, is_default, owner_id) VALUES (?, ?, ?, NULL)",
                [(name, category_type, int(is_default)) for name, category_type in rows],
            )
            conn.commit()
            return len(rows)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_category(category_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a category by ID.

    Returns:
        Category dictionary, or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE id = ?", (category_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def get_default_categories(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all seeded default categories, ordered by type then name.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE is_default = 1 ORDER BY type, name")
        return [dict(row) for row in cursor.fetchall()]


def get_owned_categories(owner_id: int, db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get categories private to one user, ordered by type then name.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE owner_id = ? ORDER BY type, name",
            (owner_id,),
        )
        return [dict(row) for row in cursor.fetchall()]


# Transactions


def insert_transaction(
    owner_id: int,
    category_id: int,
    amount: int,
    date: str,
    transaction_type: str,
    description: str | None = None,
    payment_method: str | None = None,
    db_path: Path | None = None,
) -> int:
    """Insert a transaction.

    Args:
        owner_id: Owning user.
        category_id: Category ID.
        amount: Amount in cents.
        date: Transaction date (YYYY-MM-DD).
        transaction_type: "INCOME" or "EXPENSE".
        description: Optional description.
        payment_method: Optional payment method name.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new transaction.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO transactions (owner_id, category_id, amount, description, date, payment_method, type)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (owner_id, category_id, amount, description, date, payment_method, transaction_type),
            )
            conn.commit()
            return int(cursor.lastrowid)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_transaction(transaction_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a transaction by ID.

    Returns:
        Transaction dictionary, or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"""
            SELECT {TRANSACTION_COLUMNS} FROM transactions t LEFT JOIN categories c ON c.id = t.category_id
            WHERE t.id = ?
            """,
            (transaction_id,),
        )
        row = cursor.fetchone()
        return dict(row) if row else None


def update_transaction(
    transaction_id: int,
    category_id: int,
    amount: int,
    date: str,
    transaction_type: str,
    description: str | None = None,
    payment_method: str | None = None,
    db_path: Path | None = None,
) -> None:
    """Overwrite every mutable field of a transaction.

    Args:
        transaction_id: Transaction to update.
        category_id: Category ID.
        amount: Amount in cents.
        date: Transaction date (YYYY-MM-DD).
        transaction_type: "INCOME" or "EXPENSE".
        description: Description, or None to clear it.
        payment_method: Payment method name, or None to clear it.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE transactions
                SET category_id = ?, amount = ?, description = ?, date = ?, payment_method = ?, type = ?
                WHERE id = ?
                """,
                (category_id, amount, description, date, payment_method, transaction_type, transaction_id),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_transaction(transaction_id: int, db_path: Path | None = None) -> None:
    """Delete a transaction by ID.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def get_transactions_in_range(
    owner_id: int, since_date: str, until_date: str, db_path: Path | None = None
) -> list[dict[str, Any]]:
    """Get a user's transactions dated within an inclusive range.

    Args:
        owner_id: Owning user.
        since_date: First date (YYYY-MM-DD), inclusive.
        until_date: Last date (YYYY-MM-DD), inclusive.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of transaction dictionaries ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"""
            SELECT {TRANSACTION_COLUMNS} FROM transactions t LEFT JOIN categories c ON c.id = t.category_id
            WHERE t.owner_id = ? AND t.date >= ? AND t.date <= ?
            ORDER BY t.date DESC, t.id DESC
            """,
            (owner_id, since_date, until_date),
        )
        return [dict(row) for row in cursor.fetchall()]


# Budgets


def get_budget(budget_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a budget by ID, joined with its category name.

    Returns:
        Budget dictionary, or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {BUDGET_COLUMNS} FROM budgets b JOIN categories c ON c.id = b.category_id WHERE b.id = ?",
            (budget_id,),
        )
        row = cursor.fetchone()
        return dict(row) if row else None


def find_budget(
    owner_id: int, category_id: int, month: int, year: int, db_path: Path | None = None
) -> dict[str, Any] | None:
    """Find the budget for a (owner, category, month, year) key.

    Returns:
        Budget dictionary, or None if no budget uses the key.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"""
            SELECT {BUDGET_COLUMNS} FROM budgets b JOIN categories c ON c.id = b.category_id
            WHERE b.owner_id = ? AND b.category_id = ? AND b.month = ? AND b.year = ?
            """,
            (owner_id, category_id, month, year),
        )
        row = cursor.fetchone()
        return dict(row) if row else None


def get_budgets_for_month(owner_id: int, month: int, year: int, db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all of a user's budgets for one month, ordered by category name.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"""
            SELECT {BUDGET_COLUMNS} FROM budgets b JOIN categories c ON c.id = b.category_id
            WHERE b.owner_id = ? AND b.month = ? AND b.year = ?
            ORDER BY c.name
            """,
            (owner_id, month, year),
        )
        return [dict(row) for row in cursor.fetchall()]


def insert_budget(
    owner_id: int,
    category_id: int,
    limit_amount: int,
    month: int,
    year: int,
    created_at: str,
    db_path: Path | None = None,
) -> int:
    """Insert a budget.

    Returns:
        ID of the new budget.

    Raises:
        sqlite3.IntegrityError: If the (owner, category, month, year) key already exists.
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO budgets (owner_id, category_id, limit_amount, month, year, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (owner_id, category_id, limit_amount, month, year, created_at),
            )
            conn.commit()
            return int(cursor.lastrowid)
        except sqlite3.Error:
            conn.rollback()
            raise


def update_budget(
    budget_id: int,
    category_id: int,
    limit_amount: int,
    month: int,
    year: int,
    db_path: Path | None = None,
) -> None:
    """Update the mutable fields of a budget.

    Raises:
        sqlite3.IntegrityError: If the new key collides with another budget.
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "UPDATE budgets SET category_id = ?, limit_amount = ?, month = ?, year = ? WHERE id = ?",
                (category_id, limit_amount, month, year, budget_id),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_budget(budget_id: int, db_path: Path | None = None) -> None:
    """Delete a budget by ID.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
