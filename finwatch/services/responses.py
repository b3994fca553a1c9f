"""Wire-format views of evaluations and alerts.

Monetary fields are strings with exactly 2 decimals, percentages are numbers
with at most 2 decimals, and alertLevel is exactly WARNING or DANGER.
"""

from typing import Any

from finwatch.domain.alerts import Alert
from finwatch.domain.evaluation import BudgetEvaluation
from finwatch.domain.forecast import Forecast
from finwatch.domain.models import Category, Transaction
from finwatch.domain.money import MoneyAmount


def money(amount: MoneyAmount) -> str:
    return str(amount)


def percentage(value: Any) -> float:
    return round(float(value), 2)


def budget_response(evaluation: BudgetEvaluation) -> dict[str, Any]:
    budget = evaluation.budget
    return {
        "id": budget.id,
        "categoryId": budget.category_id,
        "categoryName": budget.category_name,
        "limitAmount": money(budget.limit),
        "currentSpending": money(evaluation.spending),
        "month": budget.month,
        "year": budget.year,
        "percentageUsed": percentage(evaluation.percentage_used),
        "isExceeded": evaluation.exceeded,
        "remaining": money(evaluation.remaining),
        "createdAt": budget.created_at.isoformat() if budget.created_at else None,
    }


def forecast_response(result: Forecast) -> dict[str, Any]:
    return {
        "dailyAverage": money(result.daily_average),
        "projectedSpending": money(result.projected_spending),
        "willExceed": result.will_exceed,
        "exceedDate": result.exceed_date.isoformat() if result.exceed_date else None,
    }


def alert_response(alert: Alert) -> dict[str, Any]:
    evaluation = alert.evaluation
    response = {
        "budgetId": evaluation.budget.id,
        "categoryName": alert.category_name,
        "limitAmount": money(evaluation.budget.limit),
        "currentSpending": money(evaluation.spending),
        "percentageUsed": percentage(evaluation.percentage_used),
        "daysLeftInMonth": alert.days_left_in_month,
        "alertLevel": alert.level.value,
        "message": alert.message,
    }
    if alert.forecast is not None:
        response["forecast"] = forecast_response(alert.forecast)
    return response


def category_response(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "type": category.type.value,
        "isDefault": category.is_default,
    }


def transaction_response(transaction: Transaction) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "categoryId": transaction.category_id,
        "categoryName": transaction.category_name,
        "amount": money(transaction.amount),
        "description": transaction.description,
        "transactionDate": transaction.date.isoformat(),
        "paymentMethod": transaction.payment_method.value if transaction.payment_method else None,
        "transactionType": transaction.type.value,
    }
