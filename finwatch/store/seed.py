"""Idempotent seeding of the shared default categories."""

from finwatch.domain.models import TransactionType
from finwatch.logging import get_logger
from finwatch.store.repositories import SqliteCategoryStore

logger = get_logger(__name__)

DEFAULT_CATEGORIES: list[tuple[str, TransactionType]] = [
    ("Salary", TransactionType.INCOME),
    ("Freelance", TransactionType.INCOME),
    ("Investment", TransactionType.INCOME),
    ("Gift", TransactionType.INCOME),
    ("Other Income", TransactionType.INCOME),
    ("Food & Dining", TransactionType.EXPENSE),
    ("Transportation", TransactionType.EXPENSE),
    ("Shopping", TransactionType.EXPENSE),
    ("Entertainment", TransactionType.EXPENSE),
    ("Bills & Utilities", TransactionType.EXPENSE),
    ("Healthcare", TransactionType.EXPENSE),
    ("Education", TransactionType.EXPENSE),
    ("Travel", TransactionType.EXPENSE),
    ("Groceries", TransactionType.EXPENSE),
    ("Rent", TransactionType.EXPENSE),
    ("Other Expense", TransactionType.EXPENSE),
]


def seed_default_categories(store: SqliteCategoryStore) -> int:
    """Insert the default categories unless any already exist.

    Args:
        store: Category store to seed.

    Returns:
        Number of categories inserted (0 when already seeded).

    Raises:
        sqlite3.Error: If database operation fails.
    """
    existing = store.list_defaults()
    if existing:
        logger.info("default_categories_present", count=len(existing))
        return 0

    inserted = store.add_defaults(DEFAULT_CATEGORIES)
    logger.info("default_categories_seeded", count=inserted)
    return inserted
