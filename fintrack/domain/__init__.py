"""Domain models and types for fintrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from fintrack.domain.models import CREDIT, DEBIT, CategoryId, Money, Month, PaymentModeId, TransactionType

__all__ = ["CREDIT", "DEBIT", "CategoryId", "Money", "Month", "PaymentModeId", "TransactionType"]
