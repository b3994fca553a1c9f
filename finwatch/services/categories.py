"""Category operations: the shared defaults plus each user's own categories."""

from typing import Protocol

from finwatch.domain.models import Category, TransactionType, UserId
from finwatch.errors import DuplicateCategory, InvalidInput
from finwatch.logging import get_logger

logger = get_logger(__name__)

MAX_NAME_LENGTH = 50


class CategoryRepository(Protocol):
    def list_defaults(self) -> list[Category]: ...

    def list_owned(self, owner_id: UserId) -> list[Category]: ...

    def add(self, name: str, category_type: TransactionType, owner_id: UserId | None) -> Category: ...


def create_category(
    categories: CategoryRepository, owner_id: UserId, name: str, category_type: TransactionType
) -> Category:
    """Create a private category for a user.

    Args:
        categories: Category repository.
        owner_id: Owning user.
        name: Category name, compared case-insensitively with the user's own categories.
        category_type: INCOME or EXPENSE.

    Returns:
        The new category.

    Raises:
        InvalidInput: If the name is blank or too long.
        DuplicateCategory: If the user already has a category with this name.
    """
    name = name.strip()
    if not name:
        raise InvalidInput("name", name, "Category name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInput("name", name, f"Category name must be at most {MAX_NAME_LENGTH} characters")

    if any(c.name.lower() == name.lower() for c in categories.list_owned(owner_id)):
        raise DuplicateCategory(owner_id, name)

    category = categories.add(name, category_type, owner_id)
    logger.info("category_created", category_id=category.id, owner_id=owner_id)
    return category


def list_categories(categories: CategoryRepository, owner_id: UserId) -> list[Category]:
    """All categories available to a user: defaults first, then their own."""
    return categories.list_defaults() + categories.list_owned(owner_id)
