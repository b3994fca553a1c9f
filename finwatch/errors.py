"""Exception hierarchy for finwatch.

Every error carries the fields a caller needs to render a precise message
(which resource, which field, which conflicting key). Translating these into
exit codes or HTTP statuses is up to the shell.
"""


class FinwatchError(Exception):
    """Base exception for all finwatch errors"""

    pass


class NotFound(FinwatchError):
    """Raised when a referenced record does not exist"""

    def __init__(self, resource: str, resource_id: int) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found with id: {resource_id}")


class BudgetNotFound(NotFound):
    def __init__(self, budget_id: int) -> None:
        super().__init__("Budget", budget_id)


class CategoryNotFound(NotFound):
    def __init__(self, category_id: int) -> None:
        super().__init__("Category", category_id)


class TransactionNotFound(NotFound):
    def __init__(self, transaction_id: int) -> None:
        super().__init__("Transaction", transaction_id)


class Unauthorized(FinwatchError):
    """Raised when the caller does not own the resource"""

    pass


class UnauthorizedCategory(Unauthorized):
    """Raised when a category is private to another user"""

    def __init__(self, category_id: int, owner_id: int) -> None:
        self.category_id = category_id
        self.owner_id = owner_id
        super().__init__(
            f"Category {category_id} is not available to user {owner_id}: "
            "use your own categories or default categories"
        )


class DuplicateBudget(FinwatchError):
    """Raised when a budget already exists for (owner, category, month, year)"""

    def __init__(self, owner_id: int, category_id: int, month: int, year: int, category_name: str = "") -> None:
        self.owner_id = owner_id
        self.category_id = category_id
        self.month = month
        self.year = year
        self.category_name = category_name
        label = category_name or f"#{category_id}"
        super().__init__(f"Budget already exists for category '{label}' in {month}/{year}")


class DuplicateCategory(FinwatchError):
    """Raised when the caller already has a category with the same name"""

    def __init__(self, owner_id: int, name: str) -> None:
        self.owner_id = owner_id
        self.name = name
        super().__init__(f"You already have a category named '{name}'")


class InvalidInput(FinwatchError):
    """Raised when a field fails validation"""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} ({value!r}): {reason}")


class ConstraintViolation(FinwatchError):
    """Raised by a store when a durable uniqueness constraint rejects a write"""

    pass
