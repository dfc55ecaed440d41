"""Chart command: text charts of daily, category and monthly totals."""

import logging
import sys
from datetime import date

from rich.console import Console
from rich.table import Table

from fintrack.config import load_settings
from fintrack.dates import month_range
from fintrack.domain.report import (
    calculate_histogram_bar_length,
    category_totals,
    daily_series,
    filter_window,
    monthly_series,
)
from fintrack.domain.transactions import Transaction
from fintrack.errors import StoreError
from fintrack.formatting import format_currency
from fintrack.store.queries import list_transactions
from fintrack.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)

CHART_KINDS = ("daily", "category", "monthly")
BAR_WIDTH = 24


def _bar(amount: int, max_amount: int, style: str) -> str:
    length = calculate_histogram_bar_length(amount, max_amount, BAR_WIDTH)
    return f"[{style}]{'█' * length}[/]"


def render_daily_chart(transactions: list[Transaction], today: date, symbol: str) -> None:
    """Render income against expenses for each of the last 14 days."""
    points = daily_series(transactions, today)
    max_amount = max([max(p.income, p.expenses) for p in points] + [0])

    table = Table(title="Last 14 days")
    table.add_column("Day", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")
    table.add_column("", no_wrap=True)

    for point in points:
        bars = f"{_bar(point.income, max_amount, 'green')}\n{_bar(point.expenses, max_amount, 'red')}"
        table.add_row(
            point.day.strftime("%b %d"),
            format_currency(point.income, symbol),
            format_currency(point.expenses, symbol),
            bars,
        )

    console.print(table)


def render_category_chart(transactions: list[Transaction], symbol: str) -> None:
    """Render expense totals per category label."""
    totals = category_totals(transactions)
    if not totals:
        console.print("[dim]No expenses to chart[/dim]")
        return

    grand_total = sum(entry.amount for entry in totals)
    max_amount = max(entry.amount for entry in totals)

    table = Table(title=f"Expenses by category ({format_currency(grand_total, symbol)})")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("", no_wrap=True)

    for entry in totals:
        table.add_row(entry.label, format_currency(entry.amount, symbol), _bar(entry.amount, max_amount, entry.color))

    console.print(table)


def render_monthly_chart(transactions: list[Transaction], symbol: str) -> None:
    """Render income against expenses per month."""
    points = monthly_series(transactions)
    if not points:
        console.print("[dim]No transactions to chart[/dim]")
        return

    max_amount = max(max(p.income, p.expenses) for p in points)

    table = Table(title="Income vs expenses by month")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")
    table.add_column("", no_wrap=True)

    for point in points:
        bars = f"{_bar(point.income, max_amount, 'green')}\n{_bar(point.expenses, max_amount, 'red')}"
        table.add_row(
            month_range(point.month)[2],
            format_currency(point.income, symbol),
            format_currency(point.expenses, symbol),
            bars,
        )

    console.print(table)


def chart_command(kind: str = "daily", days: int | None = None) -> None:
    """Render one of the text charts over the trailing window."""
    if kind not in CHART_KINDS:
        console.print(f"[red]Unknown chart '{kind}'. Choose from: {', '.join(CHART_KINDS)}[/red]")
        sys.exit(1)

    db_path = get_db_path()
    settings = load_settings()
    symbol = settings["currency_symbol"]
    window_days = days or int(settings["default_window_days"])
    today = date.today()

    try:
        transactions = list_transactions(db_path)
    except StoreError as e:
        logger.error("Could not load transactions: %s", e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    in_window = filter_window(transactions, window_days, today)

    if kind == "daily":
        render_daily_chart(in_window, today, symbol)
    elif kind == "category":
        render_category_chart(in_window, symbol)
    else:
        render_monthly_chart(in_window, symbol)
