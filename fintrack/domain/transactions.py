"""Pure functions for transaction entry, validation and list handling.

This module contains the functional core for transaction operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in minor units (Money type).
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Literal

import pandas as pd

from fintrack.domain.catalog import category_belongs_to_type, default_category_for_type
from fintrack.domain.models import CREDIT, DEBIT, CategoryId, Money, PaymentModeId, TransactionType
from fintrack.errors import ValidationError

MAX_DESCRIPTION_LENGTH = 200
MAX_REMARKS_LENGTH = 500
# Largest value a SQLite INTEGER column can hold
MAX_AMOUNT = Money(2**63 - 1)

SortField = Literal["date", "amount", "description", "category"]


@dataclass(frozen=True)
class TransactionFields:
    """Validated, user-editable transaction fields."""

    amount: Money
    description: str
    category: CategoryId
    type: TransactionType
    payment_mode: PaymentModeId
    date: date
    remarks: str = ""


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record as held by the store."""

    id: int
    amount: Money
    description: str
    category: CategoryId
    type: TransactionType
    payment_mode: PaymentModeId
    date: date
    remarks: str = ""
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_income(self) -> bool:
        return self.type == CREDIT

    @property
    def is_expense(self) -> bool:
        return self.type == DEBIT

    def fields(self) -> TransactionFields:
        """Return the editable fields of this transaction."""
        return TransactionFields(
            amount=self.amount,
            description=self.description,
            category=self.category,
            type=self.type,
            payment_mode=self.payment_mode,
            date=self.date,
            remarks=self.remarks,
        )


def parse_amount(raw: Any) -> Money:
    """Parse a major-unit amount into minor units.

    Args:
        raw: Amount as a number or numeric string (e.g. 12.5 or "1,250.00").

    Returns:
        Amount in minor units, rounded half-up to the nearest unit.

    Raises:
        ValueError: If the value is not a finite number or has too many digits.
    """
    if isinstance(raw, bool):
        raise ValueError(f"Not a number: {raw!r}")
    text = str(raw).strip().replace(",", "")
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {raw!r}") from e
    if not value.is_finite():
        raise ValueError(f"Not a number: {raw!r}")
    try:
        minor = (value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except ArithmeticError as e:
        raise ValueError(f"Amount out of range: {raw!r}") from e
    return Money(int(minor))


def parse_date(raw: Any) -> date:
    """Parse a calendar date.

    ISO dates are parsed directly; anything else goes through
    pandas.to_datetime with day-first ordering (DD/MM/YYYY, "15 Jan 2025", ...).

    Args:
        raw: A date, datetime or date string.

    Returns:
        The calendar date.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    text = str(raw).strip()
    if not text:
        raise ValueError("Empty date")

    # ISO date, optionally followed by a time part
    if text[10:11] in ("", "T", " "):
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass

    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, OverflowError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}") from e
    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{text}'")
    return parsed.date()


def _required_text(raw: Mapping[str, Any], field: str, errors: dict[str, str]) -> str:
    value = raw.get(field)
    text = str(value).strip() if value is not None else ""
    if not text:
        errors[field] = "is required"
    return text


def validate_transaction_fields(raw: Mapping[str, Any]) -> TransactionFields:
    """Validate raw transaction input.

    Every field is checked, so the error carries all problems at once.

    Args:
        raw: Mapping with keys amount, description, category, type,
            payment_mode, date and optionally remarks. Amount is in major units.

    Returns:
        Validated TransactionFields.

    Raises:
        ValidationError: If any field is missing or malformed.
    """
    errors: dict[str, str] = {}

    amount = Money(0)
    raw_amount = raw.get("amount")
    if raw_amount is None or str(raw_amount).strip() == "":
        errors["amount"] = "is required"
    else:
        try:
            amount = parse_amount(raw_amount)
        except ValueError:
            errors["amount"] = "must be a number"
        else:
            if amount <= 0:
                errors["amount"] = "must be greater than 0"
            elif amount > MAX_AMOUNT:
                errors["amount"] = "is too large"

    description = _required_text(raw, "description", errors)
    if len(description) > MAX_DESCRIPTION_LENGTH:
        errors["description"] = f"must be at most {MAX_DESCRIPTION_LENGTH} characters"

    category = _required_text(raw, "category", errors)

    txn_type = _required_text(raw, "type", errors)
    if txn_type and txn_type not in (CREDIT, DEBIT):
        errors["type"] = "must be 'credit' or 'debit'"

    payment_mode = _required_text(raw, "payment_mode", errors)

    remarks = str(raw.get("remarks") or "").strip()
    if len(remarks) > MAX_REMARKS_LENGTH:
        errors["remarks"] = f"must be at most {MAX_REMARKS_LENGTH} characters"

    txn_date = date.min
    raw_date = raw.get("date")
    if raw_date is None or str(raw_date).strip() == "":
        errors["date"] = "is required"
    else:
        try:
            txn_date = parse_date(raw_date)
        except ValueError:
            errors["date"] = "is not a valid date"

    if errors:
        raise ValidationError(errors)

    return TransactionFields(
        amount=amount,
        description=description,
        category=CategoryId(category),
        type=txn_type,  # type: ignore[arg-type]
        payment_mode=PaymentModeId(payment_mode),
        date=txn_date,
        remarks=remarks,
    )


def change_type(fields: TransactionFields, new_type: TransactionType) -> TransactionFields:
    """Switch a transaction between income and expense.

    The category is reset to the new type's default unless it already
    belongs to the new type's catalog.
    """
    if fields.type == new_type:
        return fields
    category = fields.category
    if not category_belongs_to_type(category, new_type):
        category = default_category_for_type(new_type)
    return replace(fields, type=new_type, category=category)


def apply_created(state: Sequence[Transaction], created: Transaction) -> list[Transaction]:
    """Return a new list with a freshly created transaction prepended."""
    return [created, *state]


def apply_updated(state: Sequence[Transaction], updated: Transaction) -> list[Transaction]:
    """Return a new list with the transaction of the same id replaced."""
    return [updated if txn.id == updated.id else txn for txn in state]


def apply_deleted(state: Sequence[Transaction], txn_id: int) -> list[Transaction]:
    """Return a new list without the transaction with this id."""
    return [txn for txn in state if txn.id != txn_id]


def filter_transactions(
    transactions: Sequence[Transaction],
    search: str | None = None,
    category: str | None = None,
    txn_type: TransactionType | None = None,
) -> list[Transaction]:
    """Filter transactions for the list view.

    Args:
        transactions: Transactions to filter.
        search: Case-insensitive text matched against description and remarks.
        category: Exact category id to keep.
        txn_type: Transaction type to keep.

    Returns:
        Matching transactions in their original order.
    """
    needle = (search or "").lower()

    def matches(txn: Transaction) -> bool:
        if needle and needle not in txn.description.lower() and needle not in txn.remarks.lower():
            return False
        if category and txn.category != category:
            return False
        if txn_type and txn.type != txn_type:
            return False
        return True

    return [txn for txn in transactions if matches(txn)]


def sort_transactions(
    transactions: Sequence[Transaction],
    field: SortField = "date",
    descending: bool = True,
) -> list[Transaction]:
    """Sort transactions for the list view.

    Text fields compare case-insensitively. Equal keys keep their input order.
    """
    if field == "amount":
        return sorted(transactions, key=lambda t: t.amount, reverse=descending)
    if field == "description":
        return sorted(transactions, key=lambda t: t.description.lower(), reverse=descending)
    if field == "category":
        return sorted(transactions, key=lambda t: t.category.lower(), reverse=descending)
    return sorted(transactions, key=lambda t: t.date, reverse=descending)


def summarize_totals(transactions: Sequence[Transaction]) -> tuple[Money, Money]:
    """Sum income and expenses.

    Returns:
        Tuple of (total_income, total_expenses), both non-negative.
    """
    income = sum(t.amount for t in transactions if t.is_income)
    expenses = sum(t.amount for t in transactions if t.is_expense)
    return Money(income), Money(expenses)
