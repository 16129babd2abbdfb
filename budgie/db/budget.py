"""
Budget repository.

Stores per-category spending ceilings. Category is unique across budgets;
setting a budget for a category that already has one replaces its amount
and period in place.
"""

import logging
import uuid
from typing import Optional

from budgie.models.category import TransactionCategory
from budgie.models.period import Period
from budgie.models.transaction import validate_amount
from budgie.utils.timestamp import to_millis, utc_now

from .base import BaseRepository
from .models import Budget

logger = logging.getLogger(__name__)


class BudgetRepository(BaseRepository):
    """Repository for managing category budgets in SQLite."""

    def get_by_category(self, category: TransactionCategory) -> Optional[Budget]:
        """
        Get the budget for a category.

        Args:
            category: Transaction category

        Returns:
            Budget if found, None otherwise
        """
        category = TransactionCategory(category)

        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM budgets WHERE category = ?", (category.value,)
            ).fetchone()

        if row is None:
            logger.debug(f"No budget found for category {category.value}")
            return None
        return Budget.from_row(row)

    def list_budgets(self) -> list[Budget]:
        """All budgets, ordered by category."""
        with self._get_connection() as conn:
            rows = conn.execute("SELECT * FROM budgets ORDER BY category ASC").fetchall()
        return [Budget.from_row(row) for row in rows]

    def upsert(
        self,
        category: TransactionCategory,
        amount: float,
        period: Period,
    ) -> Budget:
        """
        Create or replace the budget for a category.

        An existing budget keeps its ID and creation timestamp; amount,
        period and update timestamp are overwritten.

        Args:
            category: Transaction category the budget applies to
            amount: Spending ceiling (must be > 0)
            period: weekly, monthly or yearly

        Returns:
            The stored Budget

        Raises:
            ValueError: If any parameter validation fails
        """
        category = TransactionCategory(category)
        period = Period(period)

        validate_amount(amount)

        now = to_millis(utc_now())

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO budgets (id, category, amount, period, createdAt, updatedAt)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(category) DO UPDATE SET
                    amount = excluded.amount,
                    period = excluded.period,
                    updatedAt = excluded.updatedAt
                """,
                (str(uuid.uuid4()), category.value, amount, period.value, now, now),
            )
            # Read back so the ID and creation time reflect the surviving row
            row = conn.execute(
                "SELECT * FROM budgets WHERE category = ?", (category.value,)
            ).fetchone()

        budget = Budget.from_row(row)
        logger.info(f"Budget set: {category.value} {amount} {period.value}")
        return budget

    def delete(self, category: TransactionCategory) -> bool:
        """
        Delete the budget for a category.

        Returns:
            True if deleted, False if not found
        """
        category = TransactionCategory(category)

        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM budgets WHERE category = ?", (category.value,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted budget for category {category.value}")
        else:
            logger.debug(f"No budget to delete for category {category.value}")
        return deleted

