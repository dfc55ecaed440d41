"""Transaction management commands (add, edit, delete, list)."""

import logging
import sys
from dataclasses import asdict
from datetime import date
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from fintrack.config import load_settings
from fintrack.domain.catalog import (
    default_category_for_type,
    lookup_category,
    lookup_payment_mode,
    lookup_transaction_type,
)
from fintrack.domain.models import CREDIT, DEBIT, TransactionType
from fintrack.domain.transactions import (
    SortField,
    Transaction,
    change_type,
    filter_transactions,
    sort_transactions,
    summarize_totals,
    validate_transaction_fields,
)
from fintrack.errors import NotFoundError, StoreError, ValidationError
from fintrack.formatting import format_currency, format_signed_currency
from fintrack.store.queries import (
    create_transaction,
    delete_transaction,
    get_transaction,
    list_transactions,
    update_transaction,
)
from fintrack.store.schema import get_db_path

console = Console()
logger = logging.getLogger(__name__)


def print_validation_errors(error: ValidationError) -> None:
    """Print field-level validation messages."""
    console.print("[red]Invalid transaction:[/red]", style="bold")
    for field, message in error.errors.items():
        console.print(f"  [yellow]{field}[/yellow] {message}")


def print_transaction(txn: Transaction, symbol: str) -> None:
    """Print a short summary of a stored transaction."""
    category = lookup_category(txn.category)
    mode = lookup_payment_mode(txn.payment_mode)
    console.print(f"  ID: {txn.id}")
    console.print(f"  Date: {txn.date.isoformat()}")
    console.print(f"  Description: {txn.description}")
    console.print(f"  Amount: {format_signed_currency(txn.amount, txn.is_income, symbol)}")
    console.print(f"  Type: {lookup_transaction_type(txn.type).label}")
    console.print(f"  Category: {category.icon} {category.label}")
    console.print(f"  Payment: {mode.icon} {mode.label}")
    if txn.remarks:
        console.print(f"  [dim]Remarks: {txn.remarks}[/dim]")


def add_command(
    amount: str,
    description: str,
    txn_type: str = DEBIT,
    category: str | None = None,
    payment_mode: str = "cash",
    remarks: str | None = None,
    txn_date: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        amount: Amount in major units.
        description: Short label.
        txn_type: "debit" for an expense, "credit" for income.
        category: Category id. Defaults to the type's first category.
        payment_mode: Payment mode id.
        remarks: Optional free text.
        txn_date: Transaction date. Defaults to today.
    """
    db_path = get_db_path()
    symbol = load_settings()["currency_symbol"]

    if category is None and txn_type in (CREDIT, DEBIT):
        category = default_category_for_type(txn_type)  # type: ignore[arg-type]

    raw: dict[str, Any] = {
        "amount": amount,
        "description": description,
        "type": txn_type,
        "category": category,
        "payment_mode": payment_mode,
        "remarks": remarks,
        "date": txn_date or date.today(),
    }

    try:
        fields = validate_transaction_fields(raw)
        txn = create_transaction(fields, db_path)
    except ValidationError as e:
        print_validation_errors(e)
        sys.exit(1)
    except StoreError as e:
        logger.error("Could not add transaction: %s", e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Transaction added:")
    print_transaction(txn, symbol)


def edit_command(
    txn_id: int,
    amount: str | None = None,
    description: str | None = None,
    txn_type: str | None = None,
    category: str | None = None,
    payment_mode: str | None = None,
    remarks: str | None = None,
    txn_date: str | None = None,
) -> None:
    """Edit a transaction. Options left unset keep their current values."""
    db_path = get_db_path()
    symbol = load_settings()["currency_symbol"]

    try:
        current = get_transaction(txn_id, db_path).fields()

        # Switching type resets the category unless one is given explicitly
        if txn_type in (CREDIT, DEBIT) and category is None:
            current = change_type(current, txn_type)  # type: ignore[arg-type]

        raw: dict[str, Any] = asdict(current)
        raw["amount"] = amount if amount is not None else f"{current.amount / 100:.2f}"
        overrides = {
            "description": description,
            "type": txn_type,
            "category": category,
            "payment_mode": payment_mode,
            "remarks": remarks,
            "date": txn_date,
        }
        raw.update({key: value for key, value in overrides.items() if value is not None})

        fields = validate_transaction_fields(raw)
        txn = update_transaction(txn_id, fields, db_path)
    except ValidationError as e:
        print_validation_errors(e)
        sys.exit(1)
    except NotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except StoreError as e:
        logger.error("Could not update transaction %s: %s", txn_id, e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Updated transaction {txn_id}:")
    print_transaction(txn, symbol)


def delete_command(txn_id: int, yes: bool = False) -> None:
    """Delete a transaction after confirmation."""
    db_path = get_db_path()
    symbol = load_settings()["currency_symbol"]

    try:
        txn = get_transaction(txn_id, db_path)

        if not yes:
            print_transaction(txn, symbol)
            if not typer.confirm("\nDelete this transaction?", default=False):
                console.print("[dim]Cancelled[/dim]")
                return

        delete_transaction(txn_id, db_path)
    except NotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except StoreError as e:
        logger.error("Could not delete transaction %s: %s", txn_id, e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted transaction {txn_id}")


def list_command(
    limit: int = 50,
    all: bool = False,
    search: str | None = None,
    category: str | None = None,
    txn_type: TransactionType | None = None,
    sort_by: SortField = "date",
    ascending: bool = False,
) -> None:
    """List transactions with optional search, filters and sorting."""
    db_path = get_db_path()
    symbol = load_settings()["currency_symbol"]

    try:
        transactions = list_transactions(db_path)
    except StoreError as e:
        logger.error("Could not list transactions: %s", e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    matching = filter_transactions(transactions, search, category, txn_type)
    matching = sort_transactions(matching, sort_by, descending=not ascending)
    shown = matching if all else matching[:limit]

    if not shown:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(title=f"Transactions (showing {len(shown)} of {len(transactions)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Payment", style="blue")
    table.add_column("Amount", justify="right")
    table.add_column("Remarks", style="dim")

    for txn in shown:
        cat = lookup_category(txn.category)
        mode = lookup_payment_mode(txn.payment_mode)
        table.add_row(
            str(txn.id),
            txn.date.strftime("%d %b %Y"),
            txn.description,
            f"{cat.icon} {cat.label}",
            mode.label,
            format_signed_currency(txn.amount, txn.is_income, symbol),
            txn.remarks or "[dim]-[/dim]",
        )

    console.print(table)

    income, expenses = summarize_totals(matching)
    console.print(
        f"\n[bold]Income:[/bold] [green]{format_currency(income, symbol)}[/green]  "
        f"[bold]Expenses:[/bold] [red]{format_currency(expenses, symbol)}[/red]"
    )
