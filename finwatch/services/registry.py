"""Budget registry: one budget per (owner, category, month, year).

The registry pre-checks the key tuple before writing. The store's own unique
constraint remains authoritative: if two concurrent creates both pass the
pre-check, the loser's ConstraintViolation is reported as DuplicateBudget,
exactly as if the pre-check had caught it. Nothing is retried.
"""

from dataclasses import replace

from finwatch.config import DEFAULT_MAX_YEAR, DEFAULT_MIN_YEAR
from finwatch.domain.budget import ensure_category_usable, key_changed, validate_budget_fields
from finwatch.domain.models import Budget, BudgetId, Category, CategoryId, UserId
from finwatch.domain.money import MoneyAmount
from finwatch.domain.ports import BudgetStore, CategoryStore, Clock, SystemClock
from finwatch.errors import BudgetNotFound, CategoryNotFound, ConstraintViolation, DuplicateBudget, Unauthorized
from finwatch.logging import get_logger

logger = get_logger(__name__)


class BudgetRegistry:
    """Create, update, delete and fetch budget records with ownership checks."""

    def __init__(
        self,
        budgets: BudgetStore,
        categories: CategoryStore,
        clock: Clock | None = None,
        min_year: int = DEFAULT_MIN_YEAR,
        max_year: int = DEFAULT_MAX_YEAR,
    ) -> None:
        self.budgets = budgets
        self.categories = categories
        self.clock = clock or SystemClock()
        self.min_year = min_year
        self.max_year = max_year

    def _usable_category(self, category_id: CategoryId, owner_id: UserId) -> Category:
        category = self.categories.get_by_id(category_id)
        if category is None:
            raise CategoryNotFound(category_id)
        ensure_category_usable(category, owner_id)
        return category

    def _save(self, budget: Budget, category: Category) -> Budget:
        try:
            return self.budgets.save(budget)
        except ConstraintViolation as e:
            logger.warning(
                "budget_constraint_violation",
                owner_id=budget.owner_id,
                category_id=budget.category_id,
                month=budget.month,
                year=budget.year,
            )
            raise DuplicateBudget(budget.owner_id, budget.category_id, budget.month, budget.year, category.name) from e

    def get(self, budget_id: BudgetId, owner_id: UserId) -> Budget:
        """Fetch a budget owned by the caller.

        Raises:
            BudgetNotFound: If no budget has this id.
            Unauthorized: If the budget belongs to someone else.
        """
        budget = self.budgets.get_by_id(budget_id)
        if budget is None:
            raise BudgetNotFound(budget_id)
        if budget.owner_id != owner_id:
            raise Unauthorized(f"Budget {budget_id} does not belong to user {owner_id}")
        return budget

    def create(
        self,
        owner_id: UserId,
        category_id: CategoryId,
        limit: MoneyAmount,
        month: int,
        year: int,
    ) -> Budget:
        """Create a budget.

        Raises:
            InvalidInput: If limit, month or year are out of range.
            CategoryNotFound: If the category does not exist.
            UnauthorizedCategory: If the category is private to another user.
            DuplicateBudget: If the caller already has a budget for this key.
        """
        validate_budget_fields(limit, month, year, self.min_year, self.max_year)
        category = self._usable_category(category_id, owner_id)

        existing = self.budgets.find_by_owner_category_month_year(owner_id, category_id, month, year)
        if existing is not None:
            logger.info("budget_duplicate_rejected", owner_id=owner_id, category_id=category_id, month=month, year=year)
            raise DuplicateBudget(owner_id, category_id, month, year, category.name)

        budget = Budget(
            id=None,
            owner_id=owner_id,
            category_id=category_id,
            category_name=category.name,
            limit=limit,
            month=month,
            year=year,
            created_at=self.clock.now(),
        )
        saved = self._save(budget, category)
        logger.info("budget_created", budget_id=saved.id, owner_id=owner_id, month=month, year=year)
        return saved

    def update(
        self,
        budget_id: BudgetId,
        owner_id: UserId,
        category_id: CategoryId,
        limit: MoneyAmount,
        month: int,
        year: int,
    ) -> Budget:
        """Update a budget's category, limit, month and year.

        The duplicate check only runs when (category, month, year) changes,
        and never matches the budget being updated.

        Raises:
            BudgetNotFound: If no budget has this id.
            Unauthorized: If the budget belongs to someone else.
            InvalidInput: If limit, month or year are out of range.
            CategoryNotFound: If the new category does not exist.
            UnauthorizedCategory: If the new category is private to another user.
            DuplicateBudget: If another of the caller's budgets already uses the new key.
        """
        current = self.get(budget_id, owner_id)
        validate_budget_fields(limit, month, year, self.min_year, self.max_year)
        category = self._usable_category(category_id, owner_id)

        if key_changed(current, category_id, month, year):
            existing = self.budgets.find_by_owner_category_month_year(owner_id, category_id, month, year)
            if existing is not None and existing.id != budget_id:
                logger.info(
                    "budget_duplicate_rejected", owner_id=owner_id, category_id=category_id, month=month, year=year
                )
                raise DuplicateBudget(owner_id, category_id, month, year, category.name)

        updated = replace(
            current,
            category_id=category_id,
            category_name=category.name,
            limit=limit,
            month=month,
            year=year,
        )
        saved = self._save(updated, category)
        logger.info("budget_updated", budget_id=budget_id, owner_id=owner_id)
        return saved

    def delete(self, budget_id: BudgetId, owner_id: UserId) -> None:
        """Delete a budget owned by the caller.

        Raises:
            BudgetNotFound: If no budget has this id.
            Unauthorized: If the budget belongs to someone else.
        """
        self.get(budget_id, owner_id)
        self.budgets.delete_by_id(budget_id)
        logger.info("budget_deleted", budget_id=budget_id, owner_id=owner_id)
