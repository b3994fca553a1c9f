"""Transaction operations with category and ownership checks."""

from dataclasses import replace
from datetime import date
from typing import Protocol

from finwatch.domain.budget import ensure_category_usable
from finwatch.domain.models import (
    CategoryId,
    PaymentMethod,
    Transaction,
    TransactionId,
    TransactionType,
    UserId,
)
from finwatch.domain.money import MoneyAmount
from finwatch.domain.ports import CategoryStore
from finwatch.errors import CategoryNotFound, InvalidInput, TransactionNotFound, Unauthorized
from finwatch.logging import get_logger

logger = get_logger(__name__)


class TransactionRepository(Protocol):
    def find_by_owner_and_date_range(self, owner_id: UserId, start: date, end: date) -> list[Transaction]: ...

    def get_by_id(self, transaction_id: TransactionId) -> Transaction | None: ...

    def add(self, transaction: Transaction) -> Transaction: ...

    def update(self, transaction: Transaction) -> Transaction: ...

    def delete_by_id(self, transaction_id: TransactionId) -> None: ...


def check_amount_and_category(
    categories: CategoryStore, owner_id: UserId, category_id: CategoryId, amount: MoneyAmount
) -> None:
    """Raise unless the amount is positive and the category is usable by the caller."""
    if not amount.is_positive():
        raise InvalidInput("amount", str(amount), "Amount must be greater than 0")

    category = categories.get_by_id(category_id)
    if category is None:
        raise CategoryNotFound(category_id)
    ensure_category_usable(category, owner_id)


def add_transaction(
    transactions: TransactionRepository,
    categories: CategoryStore,
    owner_id: UserId,
    category_id: CategoryId,
    amount: MoneyAmount,
    on: date,
    transaction_type: TransactionType,
    description: str | None = None,
    payment_method: PaymentMethod | None = None,
) -> Transaction:
    """Record a transaction against a category the caller may use.

    Raises:
        InvalidInput: If the amount is not positive.
        CategoryNotFound: If the category does not exist.
        UnauthorizedCategory: If the category is private to another user.
    """
    check_amount_and_category(categories, owner_id, category_id, amount)

    saved = transactions.add(
        Transaction(
            id=TransactionId(0),
            owner_id=owner_id,
            category_id=category_id,
            amount=amount,
            date=on,
            type=transaction_type,
            description=description,
            payment_method=payment_method,
        )
    )
    logger.info("transaction_added", transaction_id=saved.id, owner_id=owner_id, amount=str(amount))
    return saved


def get_transaction(
    transactions: TransactionRepository, transaction_id: TransactionId, owner_id: UserId
) -> Transaction:
    """Fetch one of the caller's transactions.

    Raises:
        TransactionNotFound: If no transaction has this id.
        Unauthorized: If the transaction belongs to someone else.
    """
    transaction = transactions.get_by_id(transaction_id)
    if transaction is None:
        raise TransactionNotFound(transaction_id)
    if transaction.owner_id != owner_id:
        raise Unauthorized(f"Transaction {transaction_id} does not belong to user {owner_id}")
    return transaction


def update_transaction(
    transactions: TransactionRepository,
    categories: CategoryStore,
    transaction_id: TransactionId,
    owner_id: UserId,
    category_id: CategoryId | None = None,
    amount: MoneyAmount | None = None,
    on: date | None = None,
    transaction_type: TransactionType | None = None,
    description: str | None = None,
    payment_method: PaymentMethod | None = None,
) -> Transaction:
    """Change one of the caller's transactions.

    Fields left as None keep their current value. The resulting amount and
    category are checked the same way as on add, so a transaction cannot be
    moved into another user's private category.

    Raises:
        TransactionNotFound: If no transaction has this id.
        Unauthorized: If the transaction belongs to someone else.
        InvalidInput: If the new amount is not positive.
        CategoryNotFound: If the new category does not exist.
        UnauthorizedCategory: If the new category is private to another user.
    """
    current = get_transaction(transactions, transaction_id, owner_id)
    changed = replace(
        current,
        category_id=category_id if category_id is not None else current.category_id,
        amount=amount if amount is not None else current.amount,
        date=on or current.date,
        type=transaction_type or current.type,
        description=description if description is not None else current.description,
        payment_method=payment_method or current.payment_method,
    )
    check_amount_and_category(categories, owner_id, changed.category_id, changed.amount)

    saved = transactions.update(changed)
    logger.info("transaction_updated", transaction_id=transaction_id, owner_id=owner_id, amount=str(saved.amount))
    return saved


def delete_transaction(transactions: TransactionRepository, transaction_id: TransactionId, owner_id: UserId) -> None:
    """Delete one of the caller's transactions.

    Raises:
        TransactionNotFound: If no transaction has this id.
        Unauthorized: If the transaction belongs to someone else.
    """
    get_transaction(transactions, transaction_id, owner_id)
    transactions.delete_by_id(transaction_id)
    logger.info("transaction_deleted", transaction_id=transaction_id, owner_id=owner_id)


def list_transactions(
    transactions: TransactionRepository,
    owner_id: UserId,
    start: date,
    end: date,
    category_id: CategoryId | None = None,
    transaction_type: TransactionType | None = None,
) -> list[Transaction]:
    """List the caller's transactions in an inclusive window, newest first.

    Raises:
        ValueError: If start is after end.
    """
    if start > end:
        raise ValueError(f"Window start {start} is after end {end}")

    found = transactions.find_by_owner_and_date_range(owner_id, start, end)
    if category_id is not None:
        found = [t for t in found if t.category_id == category_id]
    if transaction_type is not None:
        found = [t for t in found if t.type == transaction_type]
    return sorted(found, key=lambda t: (t.date, t.id), reverse=True)
