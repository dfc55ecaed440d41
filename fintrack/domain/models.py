"""Domain type definitions for fintrack.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in minor units (paise/pence)
- Month: Month in YYYY-MM format
- CategoryId: Identifier from the expense or income catalog
- PaymentModeId: Identifier from the payment-mode catalog
"""

from typing import Literal, NewType

# Money amounts are stored as minor units to avoid floating point errors
Money = NewType("Money", int)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryId = NewType("CategoryId", str)

PaymentModeId = NewType("PaymentModeId", str)

# "credit" is income, "debit" is an expense
TransactionType = Literal["credit", "debit"]

CREDIT: TransactionType = "credit"
DEBIT: TransactionType = "debit"
