"""Static catalogs of categories, payment modes and report periods.

Lookups are total: an unknown id resolves to a designated fallback entry
instead of None, so callers never need to null-check.
"""

from dataclasses import dataclass

from fintrack.domain.models import CREDIT, DEBIT, CategoryId, PaymentModeId, TransactionType


@dataclass(frozen=True)
class CategoryEntry:
    """Immutable catalog entry for an expense or income category."""

    id: CategoryId
    label: str
    color: str
    icon: str


@dataclass(frozen=True)
class PaymentModeEntry:
    """Immutable catalog entry for a payment channel."""

    id: PaymentModeId
    label: str
    icon: str


@dataclass(frozen=True)
class TransactionTypeEntry:
    """Immutable description of a transaction type."""

    id: TransactionType
    label: str
    color: str
    description: str


@dataclass(frozen=True)
class ReportPeriod:
    """A selectable trailing window for reports."""

    days: int
    label: str
    short_label: str


def _category(id: str, label: str, color: str, icon: str) -> CategoryEntry:
    return CategoryEntry(CategoryId(id), label, color, icon)


def _mode(id: str, label: str, icon: str) -> PaymentModeEntry:
    return PaymentModeEntry(PaymentModeId(id), label, icon)


EXPENSE_CATEGORIES: tuple[CategoryEntry, ...] = (
    _category("food", "Food & Dining", "#FF6B6B", "🍽️"),
    _category("transportation", "Transportation", "#4ECDC4", "🚗"),
    _category("shopping", "Shopping", "#45B7D1", "🛍️"),
    _category("entertainment", "Entertainment", "#96CEB4", "🎬"),
    _category("bills", "Bills & Utilities", "#FECA57", "⚡"),
    _category("healthcare", "Healthcare", "#FF9FF3", "🏥"),
    _category("travel", "Travel", "#5F27CD", "✈️"),
    _category("groceries", "Groceries", "#00D2D3", "🥕"),
    _category("fuel", "Fuel", "#FF9F43", "⛽"),
    _category("investments", "Investments", "#FDCB6E", "📈"),
    _category("saving", "Saving", "#2ECC71", "💎"),
    _category("rent", "Rent/Mortgage", "#6C5CE7", "🏠"),
    _category("other", "Other", "#A0A0A0", "📋"),
)

INCOME_CATEGORIES: tuple[CategoryEntry, ...] = (
    _category("salary", "Salary", "#26DE81", "💰"),
    _category("freelance", "Freelance", "#10B981", "💻"),
    _category("investment", "Investment Returns", "#059669", "📈"),
    _category("bonus", "Bonus", "#065F46", "🎯"),
    _category("other_income", "Other Income", "#6B7280", "💵"),
)

PAYMENT_MODES: tuple[PaymentModeEntry, ...] = (
    _mode("cash", "Cash", "💵"),
    _mode("credit_card", "Credit Card", "💳"),
    _mode("debit_card", "Debit Card", "💳"),
    _mode("upi", "UPI", "📱"),
    _mode("net_banking", "Net Banking", "🏦"),
    _mode("wallet", "Digital Wallet", "📲"),
    _mode("bank_transfer", "Bank Transfer", "💰"),
    _mode("cheque", "Cheque", "📝"),
)

TRANSACTION_TYPES: tuple[TransactionTypeEntry, ...] = (
    TransactionTypeEntry(DEBIT, "Expense", "#FF6B6B", "Money spent"),
    TransactionTypeEntry(CREDIT, "Income", "#26DE81", "Money received"),
)

REPORT_PERIODS: tuple[ReportPeriod, ...] = (
    ReportPeriod(7, "7 Days", "7D"),
    ReportPeriod(15, "15 Days", "15D"),
    ReportPeriod(30, "30 Days", "30D"),
    ReportPeriod(90, "3 Months", "3M"),
    ReportPeriod(365, "1 Year", "1Y"),
)

OTHER_CATEGORY_ID = CategoryId("other")
OTHER_INCOME_CATEGORY_ID = CategoryId("other_income")

_EXPENSE_BY_ID = {entry.id: entry for entry in EXPENSE_CATEGORIES}
_INCOME_BY_ID = {entry.id: entry for entry in INCOME_CATEGORIES}
_PAYMENT_BY_ID = {entry.id: entry for entry in PAYMENT_MODES}

OTHER_CATEGORY = _EXPENSE_BY_ID[OTHER_CATEGORY_ID]
OTHER_INCOME_CATEGORY = _INCOME_BY_ID[OTHER_INCOME_CATEGORY_ID]
DEFAULT_PAYMENT_MODE = PAYMENT_MODES[0]


def lookup_category(category_id: str | None) -> CategoryEntry:
    """Find a category in either catalog.

    Args:
        category_id: Category identifier.

    Returns:
        The matching expense or income entry, or the expense "other" entry.
    """
    if category_id in _EXPENSE_BY_ID:
        return _EXPENSE_BY_ID[CategoryId(category_id)]
    if category_id in _INCOME_BY_ID:
        return _INCOME_BY_ID[CategoryId(category_id)]
    return OTHER_CATEGORY


def lookup_expense_category(category_id: str | None) -> CategoryEntry:
    """Find a category in the expense catalog only, falling back to "other"."""
    return _EXPENSE_BY_ID.get(CategoryId(category_id or ""), OTHER_CATEGORY)


def lookup_income_category(category_id: str | None) -> CategoryEntry:
    """Find a category in the income catalog only, falling back to "other_income"."""
    return _INCOME_BY_ID.get(CategoryId(category_id or ""), OTHER_INCOME_CATEGORY)


def lookup_payment_mode(mode_id: str | None) -> PaymentModeEntry:
    """Find a payment mode, falling back to the first catalog entry."""
    return _PAYMENT_BY_ID.get(PaymentModeId(mode_id or ""), DEFAULT_PAYMENT_MODE)


def lookup_transaction_type(type_id: str) -> TransactionTypeEntry:
    """Find a transaction type entry, falling back to the expense type."""
    for entry in TRANSACTION_TYPES:
        if entry.id == type_id:
            return entry
    return TRANSACTION_TYPES[0]


def categories_for_type(txn_type: TransactionType) -> tuple[CategoryEntry, ...]:
    """Return the catalog that applies to a transaction type."""
    return INCOME_CATEGORIES if txn_type == CREDIT else EXPENSE_CATEGORIES


def default_category_for_type(txn_type: TransactionType) -> CategoryId:
    """Return the category a new transaction of this type starts with."""
    return categories_for_type(txn_type)[0].id


def category_belongs_to_type(category_id: str, txn_type: TransactionType) -> bool:
    """Check whether a category id is listed in the catalog for a type."""
    return any(entry.id == category_id for entry in categories_for_type(txn_type))
