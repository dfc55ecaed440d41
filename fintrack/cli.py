"""CLI entry point for fintrack."""

import typer

from fintrack.commands.admin import backup_command, config_command, init_command
from fintrack.commands.chart import chart_command
from fintrack.commands.goal import goal_command
from fintrack.commands.report import report_command
from fintrack.commands.transactions import add_command, delete_command, edit_command, list_command
from fintrack.config import load_settings
from fintrack.logs import setup_logging

app = typer.Typer(
    name="fintrack",
    help="fintrack - Track your income, expenses and savings goal",
    add_completion=False,
)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """fintrack - Track your income, expenses and savings goal."""
    setup_logging(log_level or str(load_settings()["log_level"]))


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    migrate: bool = typer.Option(False, "--migrate", help="Update the database schema only"),
) -> None:
    """Initialize fintrack database and configuration."""
    init_command(force, migrate)


@app.command(name="config")
def config(
    key: str = typer.Argument(None, help="Setting name (omit to show all settings)"),
    value: str = typer.Argument(None, help="New value (omit to show the current value)"),
) -> None:
    """Show or change your settings."""
    config_command(key, value)


@app.command()
def add(
    amount: str,
    description: str,
    txn_type: str = typer.Option("debit", "--type", "-t", help="'debit' (expense) or 'credit' (income)"),
    category: str = typer.Option(None, "--category", "-c", help="Category id (default depends on type)"),
    payment_mode: str = typer.Option("cash", "--payment-mode", "-p", help="Payment mode id"),
    remarks: str = typer.Option(None, "--remarks", "-r", help="Optional remarks"),
    txn_date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
) -> None:
    """Add an income or expense transaction."""
    add_command(amount, description, txn_type, category, payment_mode, remarks, txn_date)


@app.command()
def edit(
    txn_id: int,
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    description: str = typer.Option(None, "--description", help="New description"),
    txn_type: str = typer.Option(None, "--type", "-t", help="'debit' (expense) or 'credit' (income)"),
    category: str = typer.Option(None, "--category", "-c", help="New category id"),
    payment_mode: str = typer.Option(None, "--payment-mode", "-p", help="New payment mode id"),
    remarks: str = typer.Option(None, "--remarks", "-r", help="New remarks"),
    txn_date: str = typer.Option(None, "--date", "-d", help="New transaction date"),
) -> None:
    """Edit a transaction by ID."""
    edit_command(txn_id, amount, description, txn_type, category, payment_mode, remarks, txn_date)


@app.command()
def delete(
    txn_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a transaction by ID."""
    delete_command(txn_id, yes)


@app.command(name="list")
def list_transactions(
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
    search: str = typer.Option(None, "--search", "-s", help="Search description and remarks"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category id"),
    txn_type: str = typer.Option(None, "--type", "-t", help="Only 'debit' or 'credit'"),
    sort_by: str = typer.Option("date", "--sort", help="Sort by 'date', 'amount', 'description' or 'category'"),
    ascending: bool = typer.Option(False, "--asc", help="Sort ascending (default: descending)"),
) -> None:
    """List your transactions."""
    list_command(limit, all, search, category, txn_type, sort_by, ascending)  # type: ignore[arg-type]


@app.command(name="report")
def report(
    days: int = typer.Option(None, "--days", "-n", min=1, help="Trailing window in days (e.g. 7, 15, 30, 90, 365)"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show your income and spending report."""
    report_command(days, histogram)


@app.command()
def chart(
    kind: str = typer.Argument("daily", help="'daily', 'category' or 'monthly'"),
    days: int = typer.Option(None, "--days", "-n", min=1, help="Trailing window in days"),
) -> None:
    """Show a text chart of your transactions."""
    chart_command(kind, days)


@app.command()
def goal(
    set_amount: str = typer.Option(None, "--set", help="Set a new goal bank amount (replaces any existing goal)"),
    start: str = typer.Option(None, "--start", help="Goal start date (default: today)"),
) -> None:
    """Show or set your savings goal."""
    goal_command(set_amount, start)


if __name__ == "__main__":
    app()
