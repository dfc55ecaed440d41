"""Tests for fintrack.domain.report pure functions."""

from datetime import date, timedelta

import pytest

from fintrack.domain.models import CategoryId, Money, PaymentModeId, TransactionType
from fintrack.domain.report import (
    build_report,
    calculate_change_percentage,
    calculate_histogram_bar_length,
    calculate_percentage,
    category_totals,
    daily_series,
    filter_window,
    monthly_series,
    select_top_expenses,
    sort_breakdown,
    trend_is_improving,
)
from fintrack.domain.transactions import Transaction

TODAY = date(2025, 6, 15)


def make_txn(
    txn_id: int,
    amount: int,
    txn_type: TransactionType = "debit",
    category: str = "food",
    day: date = TODAY,
    payment_mode: str = "cash",
) -> Transaction:
    return Transaction(
        id=txn_id,
        amount=Money(amount),
        description=f"Transaction {txn_id}",
        category=CategoryId(category),
        type=txn_type,
        payment_mode=PaymentModeId(payment_mode),
        date=day,
    )


class TestBuildReportScenarios:
    """End-to-end scenarios for build_report."""

    def test_income_and_expense_today(self) -> None:
        """Should total income, expenses and net and break down the expense."""
        transactions = [
            make_txn(1, 10000, "debit", "food"),
            make_txn(2, 50000, "credit", "salary"),
        ]

        report = build_report(transactions, 30, TODAY)

        assert report.total_income == 50000
        assert report.total_expenses == 10000
        assert report.net_balance == 40000
        assert len(report.category_breakdown) == 1
        entry = report.category_breakdown[0]
        assert entry.category.id == "food"
        assert entry.amount == 10000
        assert entry.count == 1
        assert entry.percentage == 100.0
        assert report.transaction_count == 2

    def test_empty_list(self) -> None:
        """Should produce zeros and empty lists without raising."""
        report = build_report([], 7, TODAY)

        assert report.total_income == 0
        assert report.total_expenses == 0
        assert report.net_balance == 0
        assert report.category_breakdown == []
        assert report.payment_breakdown == []
        assert report.top_expenses == []
        assert report.monthly_change_pct == 0
        assert report.weekly_trend_pct == 0
        assert report.avg_income_per_day == 0
        assert report.avg_expense_per_day == 0
        assert report.transaction_count == 0

    def test_only_income_gives_zero_category_percentages(self) -> None:
        """Should not divide by zero when there are no expenses."""
        report = build_report([make_txn(1, 5000, "credit", "salary")], 30, TODAY)

        assert report.total_expenses == 0
        assert report.category_breakdown == []
        assert report.payment_breakdown[0].percentage == 100.0

    def test_net_balance_is_exact(self) -> None:
        """Net balance should equal income minus expenses exactly."""
        transactions = [
            make_txn(1, 33333, "credit", "salary"),
            make_txn(2, 11111, "debit", "food"),
            make_txn(3, 7, "debit", "fuel"),
            make_txn(4, 1, "credit", "bonus"),
        ]

        report = build_report(transactions, 30, TODAY)

        assert report.net_balance == report.total_income - report.total_expenses
        assert report.net_balance == 33334 - 11118

    def test_non_positive_window_is_treated_as_one_day(self) -> None:
        """Should not divide by zero for a zero-day window."""
        report = build_report([make_txn(1, 1000)], 0, TODAY)

        assert report.window_days == 1
        assert report.avg_expense_per_day == 1000.0

    def test_window_reaching_before_earliest_date(self) -> None:
        """A very large window covers everything instead of overflowing."""
        old = make_txn(1, 1000, day=date(1, 1, 1))

        report = build_report([old], 1_000_000, TODAY)

        assert report.window_days == 1_000_000
        assert report.total_expenses == 1000


class TestWindowFilter:
    """Tests for the trailing window boundaries."""

    def test_includes_transaction_exactly_window_days_ago(self) -> None:
        """A transaction dated exactly window_days ago is inside the window."""
        txn = make_txn(1, 1000, day=TODAY - timedelta(days=30))

        assert filter_window([txn], 30, TODAY) == [txn]

    def test_excludes_transaction_one_day_older(self) -> None:
        """A transaction dated window_days + 1 ago is outside the window."""
        txn = make_txn(1, 1000, day=TODAY - timedelta(days=31))

        assert filter_window([txn], 30, TODAY) == []

    def test_excludes_future_transactions(self) -> None:
        """Transactions dated after today are outside the window."""
        txn = make_txn(1, 1000, day=TODAY + timedelta(days=1))

        assert filter_window([txn], 30, TODAY) == []

    def test_report_totals_only_use_window(self) -> None:
        """Totals should ignore transactions outside the window."""
        transactions = [
            make_txn(1, 1000, day=TODAY - timedelta(days=3)),
            make_txn(2, 9000, day=TODAY - timedelta(days=40)),
        ]

        report = build_report(transactions, 7, TODAY)

        assert report.total_expenses == 1000
        assert report.transaction_count == 1


class TestCategoryBreakdown:
    """Tests for the expense category breakdown."""

    def test_sorted_by_amount_descending(self) -> None:
        """Largest category should come first."""
        transactions = [
            make_txn(1, 1000, category="food"),
            make_txn(2, 5000, category="rent"),
            make_txn(3, 3000, category="fuel"),
        ]

        report = build_report(transactions, 30, TODAY)

        assert [e.category.id for e in report.category_breakdown] == ["rent", "fuel", "food"]

    def test_ties_keep_catalog_order(self) -> None:
        """Equal amounts should follow the catalog declaration order."""
        transactions = [
            make_txn(1, 1000, category="shopping"),
            make_txn(2, 1000, category="transportation"),
            make_txn(3, 1000, category="food"),
        ]

        report = build_report(transactions, 30, TODAY)

        assert [e.category.id for e in report.category_breakdown] == ["food", "transportation", "shopping"]

    def test_percentages_sum_to_hundred(self) -> None:
        """Shares should add up to 100 when there are expenses."""
        transactions = [
            make_txn(1, 1000, category="food"),
            make_txn(2, 2000, category="rent"),
            make_txn(3, 4000, category="travel"),
        ]

        report = build_report(transactions, 30, TODAY)

        assert sum(e.percentage for e in report.category_breakdown) == pytest.approx(100.0)

    def test_counts_transactions_per_category(self) -> None:
        """Should count each debit in its category."""
        transactions = [
            make_txn(1, 1000, category="food"),
            make_txn(2, 500, category="food"),
        ]

        report = build_report(transactions, 30, TODAY)

        assert report.category_breakdown[0].count == 2
        assert report.category_breakdown[0].amount == 1500

    def test_unknown_category_counts_as_other(self) -> None:
        """Debits with an unknown or income category should land in 'other'."""
        transactions = [
            make_txn(1, 1000, category="mystery"),
            make_txn(2, 500, category="salary"),
        ]

        report = build_report(transactions, 30, TODAY)

        assert len(report.category_breakdown) == 1
        assert report.category_breakdown[0].category.id == "other"
        assert report.category_breakdown[0].amount == 1500

    def test_ignores_credits(self) -> None:
        """Income should never appear in the category breakdown."""
        transactions = [
            make_txn(1, 1000, "debit", "food"),
            make_txn(2, 9000, "credit", "food"),
        ]

        report = build_report(transactions, 30, TODAY)

        assert report.category_breakdown[0].amount == 1000
        assert report.category_breakdown[0].percentage == 100.0


class TestPaymentBreakdown:
    """Tests for the payment-mode breakdown."""

    def test_includes_credits_and_debits(self) -> None:
        """Both income and expenses count toward a payment mode."""
        transactions = [
            make_txn(1, 3000, "credit", "salary", payment_mode="bank_transfer"),
            make_txn(2, 1000, "debit", "food", payment_mode="upi"),
        ]

        report = build_report(transactions, 30, TODAY)

        modes = {e.mode.id: e for e in report.payment_breakdown}
        assert [e.mode.id for e in report.payment_breakdown] == ["bank_transfer", "upi"]
        assert modes["bank_transfer"].percentage == 75.0
        assert modes["upi"].percentage == 25.0

    def test_unknown_mode_falls_back_to_first_mode(self) -> None:
        """An unknown payment mode should be counted under the fallback entry."""
        report = build_report([make_txn(1, 1000, payment_mode="barter")], 30, TODAY)

        assert report.payment_breakdown[0].mode.id == "cash"
        assert report.payment_breakdown[0].count == 1


class TestMonthlyComparison:
    """Tests for current vs previous month spending."""

    def test_zero_previous_month_gives_zero_change(self) -> None:
        """Should return 0, not infinity, when last month had no spending."""
        transactions = [make_txn(1, 20000, day=date(2025, 6, 2))]

        report = build_report(transactions, 7, TODAY)

        assert report.current_month_expenses == 20000
        assert report.previous_month_expenses == 0
        assert report.monthly_change_pct == 0

    def test_uses_full_list_not_window(self) -> None:
        """Monthly totals should include transactions outside the window."""
        transactions = [
            make_txn(1, 15000, day=date(2025, 6, 1)),
            make_txn(2, 10000, day=date(2025, 5, 1)),
            make_txn(3, 99999, day=date(2025, 4, 30)),
        ]

        report = build_report(transactions, 7, TODAY)

        assert report.current_month_expenses == 15000
        assert report.previous_month_expenses == 10000
        assert report.monthly_change_pct == 50.0

    def test_previous_month_across_year_boundary(self) -> None:
        """January should compare against December of the previous year."""
        transactions = [
            make_txn(1, 5000, day=date(2025, 1, 10)),
            make_txn(2, 10000, day=date(2024, 12, 31)),
        ]

        report = build_report(transactions, 30, date(2025, 1, 20))

        assert report.previous_month_expenses == 10000
        assert report.monthly_change_pct == -50.0


class TestWeeklyTrend:
    """Tests for the week-over-week spending trend."""

    def test_spending_down_is_negative(self) -> None:
        """Less spending this week should give a negative trend."""
        transactions = [
            make_txn(1, 5000, day=TODAY - timedelta(days=7)),
            make_txn(2, 10000, day=TODAY - timedelta(days=14)),
            make_txn(3, 70000, day=TODAY - timedelta(days=15)),
        ]

        report = build_report(transactions, 30, TODAY)

        assert report.weekly_trend_pct == -50.0
        assert trend_is_improving(report.weekly_trend_pct)

    def test_spending_up_is_positive(self) -> None:
        """More spending this week should give a positive trend."""
        transactions = [
            make_txn(1, 3000, day=TODAY),
            make_txn(2, 1000, day=TODAY - timedelta(days=8)),
        ]

        report = build_report(transactions, 30, TODAY)

        assert report.weekly_trend_pct == 200.0
        assert not trend_is_improving(report.weekly_trend_pct)

    def test_no_prior_week_gives_zero(self) -> None:
        """Should return 0 when the prior week had no spending."""
        report = build_report([make_txn(1, 3000)], 30, TODAY)

        assert report.weekly_trend_pct == 0
        assert trend_is_improving(report.weekly_trend_pct)


class TestTopExpensesAndAverages:
    """Tests for top expenses and per-day averages."""

    def test_top_five_with_stable_ties(self) -> None:
        """Should return the five largest debits, ties in input order."""
        amounts = [100, 500, 300, 500, 200, 50, 400]
        transactions = [make_txn(i, amount) for i, amount in enumerate(amounts, 1)]

        top = select_top_expenses(transactions)

        assert [t.id for t in top] == [2, 4, 7, 3, 5]

    def test_top_expenses_exclude_income(self) -> None:
        """Credits never appear in top expenses."""
        transactions = [make_txn(1, 99999, "credit", "salary"), make_txn(2, 100)]

        report = build_report(transactions, 30, TODAY)

        assert [t.id for t in report.top_expenses] == [2]

    def test_daily_averages(self) -> None:
        """Averages divide window totals by the window size."""
        transactions = [make_txn(1, 10000), make_txn(2, 5000, "credit", "salary")]

        report = build_report(transactions, 10, TODAY)

        assert report.avg_expense_per_day == 1000.0
        assert report.avg_income_per_day == 500.0


class TestSortingIdempotence:
    """Sorting twice should give the same order as sorting once."""

    def test_breakdown_sort_is_idempotent(self) -> None:
        transactions = [
            make_txn(1, 1000, category="food"),
            make_txn(2, 1000, category="fuel", payment_mode="upi"),
            make_txn(3, 3000, category="rent", payment_mode="wallet"),
        ]
        report = build_report(transactions, 30, TODAY)

        assert sort_breakdown(report.category_breakdown) == report.category_breakdown
        assert sort_breakdown(report.payment_breakdown) == report.payment_breakdown

    def test_top_expenses_sort_is_idempotent(self) -> None:
        transactions = [make_txn(i, amount) for i, amount in enumerate([300, 100, 300, 200], 1)]
        once = select_top_expenses(transactions)

        assert select_top_expenses(once) == once


class TestPercentages:
    """Tests for percentage helpers."""

    def test_percentage_of_zero_total(self) -> None:
        assert calculate_percentage(Money(500), Money(0)) == 0.0

    def test_change_from_zero(self) -> None:
        assert calculate_change_percentage(Money(500), Money(0)) == 0.0

    def test_change_percentage(self) -> None:
        assert calculate_change_percentage(Money(150), Money(100)) == 50.0


class TestChartSeries:
    """Tests for the chart series helpers."""

    def test_daily_series_covers_fourteen_days(self) -> None:
        """Should return one point per day, oldest first, ending today."""
        transactions = [
            make_txn(1, 1000, day=TODAY),
            make_txn(2, 4000, "credit", "salary", day=TODAY),
            make_txn(3, 700, day=TODAY - timedelta(days=13)),
            make_txn(4, 900, day=TODAY - timedelta(days=14)),
        ]

        points = daily_series(transactions, TODAY)

        assert len(points) == 14
        assert points[0].day == TODAY - timedelta(days=13)
        assert points[0].expenses == 700
        assert points[-1].day == TODAY
        assert points[-1].expenses == 1000
        assert points[-1].income == 4000

    def test_category_totals_group_by_label(self) -> None:
        """Unknown categories should be grouped under the fallback label."""
        transactions = [
            make_txn(1, 1000, category="food"),
            make_txn(2, 200, category="mystery"),
            make_txn(3, 300, category="food"),
            make_txn(4, 5000, "credit", "salary"),
        ]

        totals = category_totals(transactions)

        assert [(t.label, t.amount) for t in totals] == [("Food & Dining", 1300), ("Other", 200)]
        assert totals[0].color == "#FF6B6B"

    def test_monthly_series_sorted_chronologically(self) -> None:
        """Months should be ordered oldest first with income and expenses split."""
        transactions = [
            make_txn(1, 1000, day=date(2025, 6, 1)),
            make_txn(2, 3000, "credit", "salary", day=date(2025, 4, 30)),
            make_txn(3, 500, day=date(2025, 4, 2)),
        ]

        points = monthly_series(transactions)

        assert [p.month for p in points] == ["2025-04", "2025-06"]
        assert points[0].income == 3000
        assert points[0].expenses == 500
        assert points[1].income == 0


class TestCalculateHistogramBarLength:
    """Tests for calculate_histogram_bar_length."""

    def test_full_bar_for_max(self) -> None:
        assert calculate_histogram_bar_length(Money(5000), Money(5000), 30) == 30

    def test_half_bar(self) -> None:
        assert calculate_histogram_bar_length(Money(2500), Money(5000), 30) == 15

    def test_zero_max(self) -> None:
        assert calculate_histogram_bar_length(Money(100), Money(0), 30) == 0
