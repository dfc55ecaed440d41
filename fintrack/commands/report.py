"""Report command: summary cards, breakdowns, comparisons and top expenses."""

import logging
import sys
from datetime import date

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fintrack.config import load_settings
from fintrack.domain.catalog import REPORT_PERIODS, lookup_category
from fintrack.domain.report import Report, build_report, calculate_histogram_bar_length
from fintrack.errors import StoreError
from fintrack.formatting import format_currency, format_percentage, format_trend
from fintrack.store.queries import list_transactions
from fintrack.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)

BAR_WIDTH = 30


def period_label(window_days: int) -> str:
    """Label a window with its preset period name when it matches one."""
    for period in REPORT_PERIODS:
        if period.days == window_days:
            return period.label
    return f"last {window_days} days"


def render_summary_cards(report: Report, symbol: str) -> None:
    """Render the headline numbers as a row of panels."""
    net_style = "green" if report.net_balance >= 0 else "red"
    cards = [
        Panel(
            f"[bold {net_style}]{format_currency(report.net_balance, symbol)}[/bold {net_style}]\n"
            f"[dim]Last {report.window_days} days[/dim]",
            title="Net Balance",
        ),
        Panel(
            f"[green]{format_currency(report.total_income, symbol)}[/green]\n"
            f"[dim]{format_currency(report.avg_income_per_day, symbol)} per day[/dim]",
            title="Income",
        ),
        Panel(
            f"[red]{format_currency(report.total_expenses, symbol)}[/red]\n"
            f"[dim]{format_currency(report.avg_expense_per_day, symbol)} per day[/dim]",
            title="Expenses",
        ),
        Panel(
            f"{format_trend(report.weekly_trend_pct)}\n[dim]vs previous 7 days[/dim]",
            title="Weekly Trend",
        ),
    ]
    console.print(Columns(cards))
    console.print(f"[dim]{report.transaction_count} transactions in window[/dim]\n")


def render_category_breakdown(report: Report, symbol: str, histogram: bool) -> None:
    """Render expenses by category with optional histogram bars."""
    if not report.category_breakdown:
        console.print("[dim]No expenses in this period[/dim]\n")
        return

    table = Table(title="Expenses by category")
    table.add_column("Category", style="magenta")
    table.add_column("Count", justify="right", style="dim")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")
    if histogram:
        table.add_column("", no_wrap=True)

    max_amount = report.category_breakdown[0].amount
    for entry in report.category_breakdown:
        row = [
            f"{entry.category.icon} {entry.category.label}",
            str(entry.count),
            format_currency(entry.amount, symbol),
            format_percentage(entry.percentage),
        ]
        if histogram:
            bar = "█" * calculate_histogram_bar_length(entry.amount, max_amount, BAR_WIDTH)
            row.append(f"[{entry.category.color}]{bar}[/]")
        table.add_row(*row)

    console.print(table)


def render_payment_breakdown(report: Report, symbol: str) -> None:
    """Render income plus expenses by payment mode."""
    if not report.payment_breakdown:
        return

    table = Table(title="By payment mode")
    table.add_column("Payment mode", style="blue")
    table.add_column("Count", justify="right", style="dim")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")

    for entry in report.payment_breakdown:
        table.add_row(
            f"{entry.mode.icon} {entry.mode.label}",
            str(entry.count),
            format_currency(entry.amount, symbol),
            format_percentage(entry.percentage),
        )

    console.print(table)


def render_monthly_comparison(report: Report, symbol: str) -> None:
    """Render this month's spending against last month's."""
    console.print("\n[bold cyan]Monthly comparison[/bold cyan]")
    console.print(f"  This month: {format_currency(report.current_month_expenses, symbol)}")
    console.print(f"  Last month: {format_currency(report.previous_month_expenses, symbol)}")
    console.print(f"  Change:     {format_trend(report.monthly_change_pct)}\n")


def render_top_expenses(report: Report, symbol: str) -> None:
    """Render the largest expenses in the window."""
    if not report.top_expenses:
        return

    table = Table(title="Top expenses")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right", style="red")

    for idx, txn in enumerate(report.top_expenses, 1):
        category = lookup_category(txn.category)
        table.add_row(
            str(idx),
            txn.date.strftime("%d %b %Y"),
            txn.description,
            f"{category.icon} {category.label}",
            format_currency(txn.amount, symbol),
        )

    console.print(table)


def report_command(days: int | None = None, histogram: bool = True) -> None:
    """Generate the report for a trailing window of days."""
    db_path = get_db_path()
    settings = load_settings()
    symbol = settings["currency_symbol"]
    window_days = days or int(settings["default_window_days"])

    try:
        transactions = list_transactions(db_path)
    except StoreError as e:
        logger.error("Could not load transactions: %s", e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    # Functional core builds the report; the rest of this command only renders it
    report = build_report(transactions, window_days, date.today())

    console.print(f"[bold cyan]Report - {period_label(window_days)}[/bold cyan]\n")
    render_summary_cards(report, symbol)
    render_category_breakdown(report, symbol, histogram)
    render_payment_breakdown(report, symbol)
    render_monthly_comparison(report, symbol)
    render_top_expenses(report, symbol)
