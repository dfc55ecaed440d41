"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in minor units (Money type).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TypeVar

from fintrack.dates import month_bounds, month_key, window_cutoff
from fintrack.domain.catalog import (
    EXPENSE_CATEGORIES,
    PAYMENT_MODES,
    CategoryEntry,
    PaymentModeEntry,
    lookup_category,
    lookup_expense_category,
    lookup_payment_mode,
)
from fintrack.domain.models import Money, Month
from fintrack.domain.transactions import Transaction, summarize_totals

TOP_EXPENSES_LIMIT = 5
TREND_DAYS = 7
DAILY_CHART_DAYS = 14


@dataclass(frozen=True)
class CategoryBreakdown:
    """Expense total for one catalog category."""

    category: CategoryEntry
    amount: Money
    count: int
    percentage: float


@dataclass(frozen=True)
class PaymentBreakdown:
    """Income plus expense total for one payment mode."""

    mode: PaymentModeEntry
    amount: Money
    count: int
    percentage: float


BreakdownT = TypeVar("BreakdownT", CategoryBreakdown, PaymentBreakdown)


@dataclass(frozen=True)
class Report:
    """Immutable report derived from a transaction snapshot."""

    window_days: int
    total_income: Money
    total_expenses: Money
    net_balance: Money
    category_breakdown: list[CategoryBreakdown]
    payment_breakdown: list[PaymentBreakdown]
    monthly_change_pct: float
    avg_income_per_day: float
    avg_expense_per_day: float
    top_expenses: list[Transaction]
    weekly_trend_pct: float
    transaction_count: int
    current_month_expenses: Money
    previous_month_expenses: Money


@dataclass(frozen=True)
class DailyPoint:
    """Income and expenses on one calendar day."""

    day: date
    income: Money
    expenses: Money


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total grouped by display label."""

    label: str
    color: str
    amount: Money


@dataclass(frozen=True)
class MonthlyPoint:
    """Income and expenses in one calendar month."""

    month: Month
    income: Money
    expenses: Money


def calculate_percentage(amount: Money, total: Money) -> float:
    """Calculate the share of a total as a percentage (0 when total is 0)."""
    if total <= 0:
        return 0.0
    return (amount / total) * 100


def calculate_change_percentage(current: Money, previous: Money) -> float:
    """Calculate percentage change from previous to current (0 when previous is 0)."""
    if previous <= 0:
        return 0.0
    return ((current - previous) / previous) * 100


def trend_is_improving(trend_pct: float) -> bool:
    """Spending that is flat or falling counts as improving."""
    return trend_pct <= 0


def filter_window(transactions: Iterable[Transaction], window_days: int, today: date) -> list[Transaction]:
    """Keep transactions dated from today - window_days through today, inclusive."""
    cutoff = window_cutoff(today, window_days)
    return [t for t in transactions if cutoff <= t.date <= today]


def sum_expenses_between(transactions: Iterable[Transaction], start: date, end: date) -> Money:
    """Sum debit amounts dated in [start, end], both inclusive."""
    return Money(sum(t.amount for t in transactions if t.is_expense and start <= t.date <= end))


def create_category_breakdown(transactions: Iterable[Transaction], total_expenses: Money) -> list[CategoryBreakdown]:
    """Group debit amounts by expense category.

    Debits with a category that is not in the expense catalog are counted
    under the "other" entry.

    Args:
        transactions: Windowed transactions.
        total_expenses: Sum of all debits in the window.

    Returns:
        Non-zero entries sorted by amount descending, ties in catalog order.
    """
    amounts = {entry.id: 0 for entry in EXPENSE_CATEGORIES}
    counts = {entry.id: 0 for entry in EXPENSE_CATEGORIES}
    for txn in transactions:
        if not txn.is_expense:
            continue
        entry = lookup_expense_category(txn.category)
        amounts[entry.id] += txn.amount
        counts[entry.id] += 1

    breakdown = [
        CategoryBreakdown(
            category=entry,
            amount=Money(amounts[entry.id]),
            count=counts[entry.id],
            percentage=calculate_percentage(Money(amounts[entry.id]), total_expenses),
        )
        for entry in EXPENSE_CATEGORIES
        if amounts[entry.id] > 0
    ]
    return sort_breakdown(breakdown)


def create_payment_breakdown(
    transactions: Iterable[Transaction], total_income: Money, total_expenses: Money
) -> list[PaymentBreakdown]:
    """Group credit and debit amounts by payment mode.

    Percentages are shares of income plus expenses, not of expenses alone.
    Unknown payment modes are counted under the lookup fallback.

    Returns:
        Non-zero entries sorted by amount descending, ties in catalog order.
    """
    amounts = {mode.id: 0 for mode in PAYMENT_MODES}
    counts = {mode.id: 0 for mode in PAYMENT_MODES}
    for txn in transactions:
        mode = lookup_payment_mode(txn.payment_mode)
        amounts[mode.id] += txn.amount
        counts[mode.id] += 1

    denominator = Money(total_income + total_expenses)
    breakdown = [
        PaymentBreakdown(
            mode=mode,
            amount=Money(amounts[mode.id]),
            count=counts[mode.id],
            percentage=calculate_percentage(Money(amounts[mode.id]), denominator),
        )
        for mode in PAYMENT_MODES
        if amounts[mode.id] > 0
    ]
    return sort_breakdown(breakdown)


def sort_breakdown(breakdown: Iterable[BreakdownT]) -> list[BreakdownT]:
    """Stable sort of breakdown entries by amount, largest first."""
    return sorted(breakdown, key=lambda entry: entry.amount, reverse=True)


def select_top_expenses(transactions: Iterable[Transaction], limit: int = TOP_EXPENSES_LIMIT) -> list[Transaction]:
    """Pick the largest debits, ties kept in input order."""
    debits = [t for t in transactions if t.is_expense]
    return sorted(debits, key=lambda t: t.amount, reverse=True)[:limit]


def calculate_weekly_trend(transactions: Sequence[Transaction], today: date) -> float:
    """Compare debits in [today-7, today] with debits in [today-14, today-7)."""
    week_start = today - timedelta(days=TREND_DAYS)
    prior_start = today - timedelta(days=TREND_DAYS * 2)
    recent = sum_expenses_between(transactions, week_start, today)
    prior = sum_expenses_between(transactions, prior_start, week_start - timedelta(days=1))
    return calculate_change_percentage(recent, prior)


def build_report(transactions: Sequence[Transaction], window_days: int, today: date) -> Report:
    """Build the full report for a trailing window.

    Totals, breakdowns, averages and top expenses use the window. The
    monthly comparison and weekly trend use the whole list.

    Args:
        transactions: Snapshot of all transactions, in any order.
        window_days: Size of the trailing window in days.
        today: Reference date for the window and the comparisons.

    Returns:
        Report with all derived statistics.
    """
    window_days = max(window_days, 1)
    in_window = filter_window(transactions, window_days, today)

    total_income, total_expenses = summarize_totals(in_window)

    current_start, current_end = month_bounds(today)
    previous_start, previous_end = month_bounds(today, months_back=1)
    current_month_expenses = sum_expenses_between(transactions, current_start, current_end)
    previous_month_expenses = sum_expenses_between(transactions, previous_start, previous_end)

    return Report(
        window_days=window_days,
        total_income=total_income,
        total_expenses=total_expenses,
        net_balance=Money(total_income - total_expenses),
        category_breakdown=create_category_breakdown(in_window, total_expenses),
        payment_breakdown=create_payment_breakdown(in_window, total_income, total_expenses),
        monthly_change_pct=calculate_change_percentage(current_month_expenses, previous_month_expenses),
        avg_income_per_day=total_income / window_days,
        avg_expense_per_day=total_expenses / window_days,
        top_expenses=select_top_expenses(in_window),
        weekly_trend_pct=calculate_weekly_trend(transactions, today),
        transaction_count=len(in_window),
        current_month_expenses=current_month_expenses,
        previous_month_expenses=previous_month_expenses,
    )


def daily_series(transactions: Iterable[Transaction], today: date, days: int = DAILY_CHART_DAYS) -> list[DailyPoint]:
    """Income and expenses per day for the last `days` days, oldest first."""
    start = today - timedelta(days=days - 1)
    income = {start + timedelta(days=i): 0 for i in range(days)}
    expenses = dict(income)
    for txn in transactions:
        if txn.date not in income:
            continue
        if txn.is_income:
            income[txn.date] += txn.amount
        elif txn.is_expense:
            expenses[txn.date] += txn.amount
    return [DailyPoint(day=day, income=Money(income[day]), expenses=Money(expenses[day])) for day in income]


def category_totals(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """Debit totals grouped by category label, in first-seen order."""
    totals: dict[str, int] = {}
    colors: dict[str, str] = {}
    for txn in transactions:
        if not txn.is_expense:
            continue
        entry = lookup_category(txn.category)
        totals[entry.label] = totals.get(entry.label, 0) + txn.amount
        colors.setdefault(entry.label, entry.color)
    return [CategoryTotal(label=label, color=colors[label], amount=Money(amount)) for label, amount in totals.items()]


def monthly_series(transactions: Iterable[Transaction]) -> list[MonthlyPoint]:
    """Income and expenses per calendar month present in the data, oldest first."""
    income: dict[Month, int] = {}
    expenses: dict[Month, int] = {}
    for txn in transactions:
        key = month_key(txn.date)
        income.setdefault(key, 0)
        expenses.setdefault(key, 0)
        if txn.is_income:
            income[key] += txn.amount
        else:
            expenses[key] += txn.amount
    return [
        MonthlyPoint(month=month, income=Money(income[month]), expenses=Money(expenses[month]))
        for month in sorted(income)
    ]


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
