"""Budget operations exposed to the shell.

Every read recomputes spending from the transaction source; nothing is
cached, so results always reflect the current transactions.
"""

from dataclasses import replace

from finwatch.domain.alerts import Alert, classify
from finwatch.domain.budget import validate_month
from finwatch.domain.evaluation import BudgetEvaluation, evaluate, evaluate_many
from finwatch.domain.forecast import forecast
from finwatch.domain.models import BudgetId, CategoryId, UserId
from finwatch.domain.money import MoneyAmount
from finwatch.domain.ports import BudgetStore, Clock, TransactionSource
from finwatch.services.registry import BudgetRegistry


class BudgetService:
    """Budget CRUD plus evaluation and alerting for one store set."""

    def __init__(
        self,
        registry: BudgetRegistry,
        budgets: BudgetStore,
        transactions: TransactionSource,
        clock: Clock,
    ) -> None:
        self.registry = registry
        self.budgets = budgets
        self.transactions = transactions
        self.clock = clock

    def create_budget(
        self, owner_id: UserId, category_id: CategoryId, limit: MoneyAmount, month: int, year: int
    ) -> BudgetEvaluation:
        budget = self.registry.create(owner_id, category_id, limit, month, year)
        return evaluate(budget, self.transactions)

    def update_budget(
        self,
        budget_id: BudgetId,
        owner_id: UserId,
        category_id: CategoryId,
        limit: MoneyAmount,
        month: int,
        year: int,
    ) -> BudgetEvaluation:
        budget = self.registry.update(budget_id, owner_id, category_id, limit, month, year)
        return evaluate(budget, self.transactions)

    def delete_budget(self, budget_id: BudgetId, owner_id: UserId) -> None:
        self.registry.delete(budget_id, owner_id)

    def get_budget(self, budget_id: BudgetId, owner_id: UserId) -> BudgetEvaluation:
        budget = self.registry.get(budget_id, owner_id)
        return evaluate(budget, self.transactions)

    def list_budgets(self, owner_id: UserId, month: int, year: int) -> list[BudgetEvaluation]:
        """Evaluate all of a user's budgets for one month.

        Raises:
            InvalidInput: If month is outside 1-12.
        """
        validate_month(month)
        budgets = self.budgets.find_by_owner_and_month_year(owner_id, month, year)
        return evaluate_many(budgets, self.transactions)

    def list_alerts(self, owner_id: UserId) -> list[Alert]:
        """Alerts for the current month's budgets that are at least 80% used.

        Each alert carries a month-end forecast at the current pace.
        """
        today = self.clock.today()
        budgets = self.budgets.find_by_owner_and_month_year(owner_id, today.month, today.year)

        alerts: list[Alert] = []
        for evaluation in evaluate_many(budgets, self.transactions):
            alert = classify(evaluation, today)
            if alert is not None:
                alerts.append(replace(alert, forecast=forecast(evaluation, today)))
        return alerts
