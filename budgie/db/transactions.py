"""
Transactions repository module for transaction CRUD operations.

Handles all transaction-related database operations including:
- Creating transactions (insert)
- Reading a single transaction or a filtered, recency-ordered listing
- Partial updates
- Deleting transactions
"""

import logging
import uuid
from typing import Optional

from budgie.models.category import TransactionCategory, TransactionType
from budgie.models.transaction import (
    UNSET,
    TransactionFilter,
    TransactionInput,
    TransactionUpdate,
    validate_category_for_type,
)
from budgie.utils.timestamp import advance_past, to_millis, utc_now

from .base import BaseRepository
from .models import Transaction

logger = logging.getLogger(__name__)


class TransactionRepository(BaseRepository):
    """
    Repository for managing transactions.

    Writes stamp timestamps with engine-observed time and return the fully
    materialized record.
    """

    # =========================================================================
    # Create Operations
    # =========================================================================

    def add(self, data: TransactionInput) -> Transaction:
        """
        Insert a new transaction.

        Args:
            data: Amount, type, category, optional description and event
                timestamp (defaults to now)

        Returns:
            The created Transaction with its generated ID

        Raises:
            ValueError: If the amount is not positive or the category does
                not belong to the transaction type
        """
        data.validate()

        now = utc_now()
        transaction = Transaction(
            id=str(uuid.uuid4()),
            amount=data.amount,
            type=data.type,
            category=data.category,
            description=data.description,
            timestamp=data.timestamp or now,
            created_at=now,
            updated_at=now,
        )

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO transactions (
                    id, amount, type, category, description,
                    timestamp, createdAt, updatedAt
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    transaction.id,
                    transaction.amount,
                    transaction.type.value,
                    transaction.category.value,
                    transaction.description,
                    to_millis(transaction.timestamp),
                    to_millis(transaction.created_at),
                    to_millis(transaction.updated_at),
                ),
            )

        logger.info(
            f"Transaction added: {transaction.id} "
            f"({transaction.type.value} {transaction.amount} {transaction.category.value})"
        )
        return transaction

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Get a transaction by its ID, or None when it does not exist."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM transactions WHERE id = ?", (transaction_id,)
            ).fetchone()

        if row is None:
            logger.debug(f"Transaction {transaction_id} not found")
            return None
        return Transaction.from_row(row)

    def list_transactions(
        self, filters: Optional[TransactionFilter] = None
    ) -> list[Transaction]:
        """
        List transactions, most recent first.

        Args:
            filters: Optional AND-combined filters; None returns every row

        Returns:
            Transactions ordered by event timestamp descending
        """
        filters = filters or TransactionFilter()

        query = "SELECT * FROM transactions WHERE 1=1"
        params: list[object] = []

        if filters.type is not None:
            query += " AND type = ?"
            params.append(filters.type.value)

        if filters.category is not None:
            query += " AND category = ?"
            params.append(filters.category.value)

        if filters.start_date is not None:
            query += " AND timestamp >= ?"
            params.append(to_millis(filters.start_date))

        if filters.end_date is not None:
            query += " AND timestamp <= ?"
            params.append(to_millis(filters.end_date))

        query += " ORDER BY timestamp DESC, createdAt DESC"

        if filters.limit is not None or filters.offset:
            # SQLite needs a LIMIT before OFFSET; -1 means unbounded
            query += " LIMIT ? OFFSET ?"
            params.append(filters.limit if filters.limit is not None else -1)
            params.append(filters.offset or 0)

        with self._get_connection() as conn:
            rows = conn.execute(query, params).fetchall()

        logger.debug(f"Listed {len(rows)} transactions with {filters}")
        return [Transaction.from_row(row) for row in rows]

    # =========================================================================
    # Update Operations
    # =========================================================================

    def update(
        self, transaction_id: str, changes: TransactionUpdate
    ) -> Optional[Transaction]:
        """
        Apply a partial update to a transaction.

        Fields left as None (or UNSET for the description) keep their stored
        value. The ID and creation timestamp never change; the update
        timestamp always advances.

        Args:
            transaction_id: ID of the transaction to update
            changes: Fields to change

        Returns:
            The updated Transaction, or None if the ID does not exist

        Raises:
            ValueError: If the resulting category does not belong to the
                resulting transaction type
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM transactions WHERE id = ?", (transaction_id,)
            ).fetchone()
            if row is None:
                logger.debug(f"No transaction to update with id {transaction_id}")
                return None

            current = Transaction.from_row(row)
            new_type = TransactionType(
                changes.type if changes.type is not None else current.type
            )
            new_category = TransactionCategory(
                changes.category if changes.category is not None else current.category
            )
            validate_category_for_type(new_type, new_category)

            updated = Transaction(
                id=current.id,
                amount=(
                    changes.amount if changes.amount is not None else current.amount
                ),
                type=new_type,
                category=new_category,
                description=(
                    changes.description
                    if changes.description is not UNSET
                    else current.description
                ),
                timestamp=(
                    changes.timestamp
                    if changes.timestamp is not None
                    else current.timestamp
                ),
                created_at=current.created_at,
                updated_at=advance_past(current.updated_at),
            )

            conn.execute(
                """
                UPDATE transactions
                SET amount = ?, type = ?, category = ?, description = ?,
                    timestamp = ?, updatedAt = ?
                WHERE id = ?
                """,
                (
                    updated.amount,
                    updated.type.value,
                    updated.category.value,
                    updated.description,
                    to_millis(updated.timestamp),
                    to_millis(updated.updated_at),
                    transaction_id,
                ),
            )

        logger.info(f"Transaction updated: {transaction_id}")
        return updated

    # =========================================================================
    # Delete Operations
    # =========================================================================

    def delete(self, transaction_id: str) -> bool:
        """
        Delete a transaction.

        Returns:
            True if a row was deleted, False if the ID did not exist
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM transactions WHERE id = ?", (transaction_id,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Transaction deleted: {transaction_id}")
        else:
            logger.debug(f"No transaction to delete with id {transaction_id}")
        return deleted

