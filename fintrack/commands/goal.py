"""Goal command for setting and tracking the savings goal."""

import logging
import sys
from datetime import date

from rich.console import Console

from fintrack.config import load_settings
from fintrack.domain.goal import compute_goal_progress, validate_goal_fields
from fintrack.errors import StoreError, ValidationError
from fintrack.formatting import format_currency, format_percentage
from fintrack.store.queries import get_latest_goal, list_transactions, replace_goal
from fintrack.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)


def format_progress_with_color(percentage: float) -> str:
    """Format spent percentage with color based on how much is used.

    Args:
        percentage: Share of the bank amount already spent.

    Returns:
        Colored string for progress display.
    """
    text = format_percentage(percentage)
    if percentage > 100:
        return f"[red]{text}[/red]"
    elif percentage > 90:
        return f"[yellow]{text}[/yellow]"
    else:
        return f"[green]{text}[/green]"


def show_goal_status(symbol: str) -> None:
    """Print the active goal and how much of it has been spent."""
    db_path = get_db_path()
    goal = get_latest_goal(db_path)

    if goal is None:
        console.print("[yellow]No goal set[/yellow]")
        console.print("[dim]Use 'fintrack goal --set AMOUNT' to set one[/dim]")
        return

    progress = compute_goal_progress(goal, list_transactions(db_path), date.today())

    console.print(f"[bold cyan]Goal since {goal.start_date.strftime('%d %b %Y')}[/bold cyan]\n")
    console.print(f"  Bank amount:     {format_currency(goal.bank_amount, symbol)}")
    console.print(f"  Income since:    [green]{format_currency(progress.income, symbol)}[/green]")
    console.print(f"  Spent since:     [red]{format_currency(progress.spent, symbol)}[/red]")
    balance_style = "green" if progress.current_balance >= 0 else "red"
    console.print(
        f"  Current balance: [{balance_style}]{format_currency(progress.current_balance, symbol)}[/{balance_style}]"
    )
    console.print(f"  Spent:           {format_progress_with_color(progress.percent_spent)}")


def goal_command(set_amount: str | None = None, start: str | None = None) -> None:
    """Show the goal, or replace it when an amount is given."""
    symbol = load_settings()["currency_symbol"]

    try:
        if set_amount is not None:
            bank_amount, start_date = validate_goal_fields(set_amount, start or date.today())
            goal = replace_goal(bank_amount, start_date, get_db_path())
            console.print(
                f"[green]✓[/green] Goal set: {format_currency(goal.bank_amount, symbol)} "
                f"from {goal.start_date.isoformat()}"
            )
            console.print("[dim]Any previous goal was replaced[/dim]\n")

        show_goal_status(symbol)

    except ValidationError as e:
        console.print("[red]Invalid goal:[/red]", style="bold")
        for field, message in e.errors.items():
            console.print(f"  [yellow]{field}[/yellow] {message}")
        sys.exit(1)
    except StoreError as e:
        logger.error("Goal command failed: %s", e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
