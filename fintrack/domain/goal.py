"""Pure functions for the savings goal.

A goal is a target bank balance tracked against spending since its
start date. Only one goal is active at a time; the store enforces that.

All monetary amounts are in minor units (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

from fintrack.domain.models import Money
from fintrack.domain.transactions import MAX_AMOUNT, Transaction, parse_amount, parse_date
from fintrack.errors import ValidationError


@dataclass(frozen=True)
class Goal:
    """Immutable savings goal."""

    id: int
    bank_amount: Money
    start_date: date
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class GoalProgress:
    """Immutable goal progress as of a given day."""

    goal: Goal
    spent: Money
    income: Money
    current_balance: Money
    percent_spent: float


def validate_goal_fields(bank_amount: Any, start_date: Any) -> tuple[Money, date]:
    """Validate raw goal input.

    Args:
        bank_amount: Bank balance in major units.
        start_date: Date the goal starts tracking from.

    Returns:
        Tuple of (bank_amount in minor units, start_date).

    Raises:
        ValidationError: If the amount is not positive or the date is malformed.
    """
    errors: dict[str, str] = {}
    amount = Money(0)
    start = date.min

    if bank_amount is None or str(bank_amount).strip() == "":
        errors["bank_amount"] = "is required"
    else:
        try:
            amount = parse_amount(bank_amount)
        except ValueError:
            errors["bank_amount"] = "must be a number"
        else:
            if amount <= 0:
                errors["bank_amount"] = "must be greater than 0"
            elif amount > MAX_AMOUNT:
                errors["bank_amount"] = "is too large"

    if start_date is None or str(start_date).strip() == "":
        errors["start_date"] = "is required"
    else:
        try:
            start = parse_date(start_date)
        except ValueError:
            errors["start_date"] = "is not a valid date"

    if errors:
        raise ValidationError(errors)
    return amount, start


def compute_goal_progress(goal: Goal, transactions: Iterable[Transaction], today: date) -> GoalProgress:
    """Compute how much of the goal's bank balance has been spent.

    Only transactions dated from the goal's start date through today count.

    Args:
        goal: The active goal.
        transactions: All transactions.
        today: Reference date.

    Returns:
        GoalProgress with spending, income and the resulting balance.
    """
    spent = 0
    income = 0
    for txn in transactions:
        if not goal.start_date <= txn.date <= today:
            continue
        if txn.is_expense:
            spent += txn.amount
        elif txn.is_income:
            income += txn.amount

    percent_spent = (spent / goal.bank_amount) * 100 if goal.bank_amount > 0 else 0.0

    return GoalProgress(
        goal=goal,
        spent=Money(spent),
        income=Money(income),
        current_balance=Money(goal.bank_amount + income - spent),
        percent_spent=percent_spent,
    )
