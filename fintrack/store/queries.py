"""Database query functions.

Every function opens its own connection. SQLite failures are rolled back
and re-raised as StoreError so commands only deal with fintrack errors.
"""

import logging
import sqlite3
from datetime import date
from pathlib import Path

from fintrack.domain.goal import Goal
from fintrack.domain.models import CategoryId, Money, PaymentModeId
from fintrack.domain.transactions import Transaction, TransactionFields
from fintrack.errors import NotFoundError, StoreError
from fintrack.store.schema import get_db_path

logger = logging.getLogger(__name__)

_TRANSACTION_COLUMNS = "id, amount, description, category, type, payment_mode, remarks, date, created_at, updated_at"
_GOAL_COLUMNS = "id, bank_amount, start_date, created_at, updated_at"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.

    Raises:
        StoreError: If the database cannot be opened.
    """
    if db_path is None:
        db_path = get_db_path()
    try:
        conn = sqlite3.connect(db_path)
    except sqlite3.Error as e:
        raise StoreError(f"Cannot open database {db_path}: {e}") from e
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_transaction(row: sqlite3.Row) -> Transaction:
    try:
        return Transaction(
            id=row["id"],
            amount=Money(row["amount"]),
            description=row["description"],
            category=CategoryId(row["category"]),
            type=row["type"],
            payment_mode=PaymentModeId(row["payment_mode"]),
            remarks=row["remarks"] or "",
            date=date.fromisoformat(row["date"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
    except (TypeError, ValueError) as e:
        raise StoreError(f"Malformed transaction row {row['id']}: {e}") from e


def _row_to_goal(row: sqlite3.Row) -> Goal:
    try:
        return Goal(
            id=row["id"],
            bank_amount=Money(row["bank_amount"]),
            start_date=date.fromisoformat(row["start_date"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
    except (TypeError, ValueError) as e:
        raise StoreError(f"Malformed goal row {row['id']}: {e}") from e


def list_transactions(db_path: Path | None = None, limit: int | None = None) -> list[Transaction]:
    """Get all transactions.

    Args:
        db_path: Path to the database file. If None, uses default location.
        limit: Maximum number of transactions to return. If None, returns all.

    Returns:
        Transactions ordered by date descending, newest insert first on ties.

    Raises:
        StoreError: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = f"SELECT {_TRANSACTION_COLUMNS} FROM transactions ORDER BY date DESC, id DESC"
        params: list[int] = []

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        try:
            cursor.execute(query, params)
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to list transactions: {e}") from e
        return [_row_to_transaction(row) for row in rows]


def get_transaction(txn_id: int, db_path: Path | None = None) -> Transaction:
    """Get a single transaction by id.

    Raises:
        NotFoundError: If no transaction has this id.
        StoreError: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(f"SELECT {_TRANSACTION_COLUMNS} FROM transactions WHERE id = ?", (txn_id,))
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read transaction {txn_id}: {e}") from e
        if row is None:
            raise NotFoundError("transaction", txn_id)
        return _row_to_transaction(row)


def create_transaction(fields: TransactionFields, db_path: Path | None = None) -> Transaction:
    """Insert a new transaction.

    Args:
        fields: Validated transaction fields.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The stored transaction with its id and timestamps.

    Raises:
        StoreError: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO transactions (amount, description, category, type, payment_mode, remarks, date)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    fields.amount,
                    fields.description,
                    fields.category,
                    fields.type,
                    fields.payment_mode,
                    fields.remarks,
                    fields.date.isoformat(),
                ),
            )
            txn_id = cursor.lastrowid
            conn.commit()
        except (sqlite3.Error, OverflowError) as e:
            conn.rollback()
            raise StoreError(f"Failed to create transaction: {e}") from e

    logger.debug("Created transaction %s", txn_id)
    return get_transaction(int(txn_id or 0), db_path)


def update_transaction(txn_id: int, fields: TransactionFields, db_path: Path | None = None) -> Transaction:
    """Replace every editable field of a transaction.

    Args:
        txn_id: Transaction ID.
        fields: Validated transaction fields.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The updated transaction.

    Raises:
        NotFoundError: If no transaction has this id.
        StoreError: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE transactions
                SET amount = ?, description = ?, category = ?, type = ?, payment_mode = ?,
                    remarks = ?, date = ?, updated_at = datetime('now')
                WHERE id = ?
                """,
                (
                    fields.amount,
                    fields.description,
                    fields.category,
                    fields.type,
                    fields.payment_mode,
                    fields.remarks,
                    fields.date.isoformat(),
                    txn_id,
                ),
            )
            updated = cursor.rowcount
            conn.commit()
        except (sqlite3.Error, OverflowError) as e:
            conn.rollback()
            raise StoreError(f"Failed to update transaction {txn_id}: {e}") from e

    if updated == 0:
        raise NotFoundError("transaction", txn_id)
    logger.debug("Updated transaction %s", txn_id)
    return get_transaction(txn_id, db_path)


def delete_transaction(txn_id: int, db_path: Path | None = None) -> None:
    """Delete a transaction by id.

    Raises:
        NotFoundError: If no transaction has this id.
        StoreError: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
            deleted = cursor.rowcount
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Failed to delete transaction {txn_id}: {e}") from e

    if deleted == 0:
        raise NotFoundError("transaction", txn_id)
    logger.info("Deleted transaction %s", txn_id)


def get_latest_goal(db_path: Path | None = None) -> Goal | None:
    """Get the most recently created goal.

    Returns:
        The active goal, or None if no goal has been set.

    Raises:
        StoreError: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(f"SELECT {_GOAL_COLUMNS} FROM goals ORDER BY created_at DESC, id DESC LIMIT 1")
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read goal: {e}") from e
        return _row_to_goal(row) if row else None


def replace_goal(bank_amount: Money, start_date: date, db_path: Path | None = None) -> Goal:
    """Replace any existing goal with a new one.

    The delete and the insert share one SQLite transaction, so at most one
    goal row exists afterwards.

    Args:
        bank_amount: Bank balance in minor units.
        start_date: Date the goal starts tracking from.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The new goal.

    Raises:
        StoreError: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM goals")
            replaced = cursor.rowcount
            cursor.execute(
                "INSERT INTO goals (bank_amount, start_date) VALUES (?, ?)",
                (bank_amount, start_date.isoformat()),
            )
            goal_id = cursor.lastrowid
            conn.commit()
            cursor.execute(f"SELECT {_GOAL_COLUMNS} FROM goals WHERE id = ?", (goal_id,))
            row = cursor.fetchone()
        except (sqlite3.Error, OverflowError) as e:
            conn.rollback()
            raise StoreError(f"Failed to replace goal: {e}") from e

    if replaced:
        logger.info("Replaced %d existing goal(s)", replaced)
    return _row_to_goal(row)
