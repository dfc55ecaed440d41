"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from fintrack.store.queries import (
    create_transaction,
    delete_transaction,
    get_latest_goal,
    get_transaction,
    list_transactions,
    replace_goal,
    update_transaction,
)
from fintrack.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "create_transaction",
    "delete_transaction",
    "get_latest_goal",
    "get_transaction",
    "list_transactions",
    "replace_goal",
    "update_transaction",
]
