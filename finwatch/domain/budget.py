"""Pure validation rules for budget records.

These run before any store write. Each rule raises a finwatch error carrying
the offending field and value.
"""

from finwatch.domain.models import Budget, Category, CategoryId, UserId
from finwatch.domain.money import MoneyAmount
from finwatch.errors import InvalidInput, UnauthorizedCategory


def validate_limit(limit: MoneyAmount) -> None:
    if not limit.is_positive():
        raise InvalidInput("limit", str(limit), "Limit amount must be greater than 0")


def validate_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidInput("month", month, "Month must be between 1 and 12")


def validate_year(year: int, min_year: int, max_year: int) -> None:
    if not min_year <= year <= max_year:
        raise InvalidInput("year", year, f"Year must be between {min_year} and {max_year}")


def validate_budget_fields(limit: MoneyAmount, month: int, year: int, min_year: int, max_year: int) -> None:
    """Validate the caller-supplied budget fields.

    Raises:
        InvalidInput: For the first field that fails.
    """
    validate_limit(limit)
    validate_month(month)
    validate_year(year, min_year, max_year)


def ensure_category_usable(category: Category, owner_id: UserId) -> None:
    """Raise UnauthorizedCategory unless the category is shared or the caller's own."""
    if not category.usable_by(owner_id):
        raise UnauthorizedCategory(category.id, owner_id)


def key_changed(budget: Budget, category_id: CategoryId, month: int, year: int) -> bool:
    """Check whether an update moves a budget to a different (category, month, year) key."""
    return (budget.category_id, budget.month, budget.year) != (category_id, month, year)
