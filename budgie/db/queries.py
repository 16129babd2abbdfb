"""
Queries repository module for aggregations and statistics.

Handles the derived-summary queries the presentation layer consumes:
- Income/expense totals and balance over a timestamp range
- Expense spending grouped by category
- Store-wide statistics
"""

import logging
import sqlite3
from datetime import datetime

from budgie.models.category import TransactionCategory
from budgie.utils.timestamp import from_millis, to_millis

from .base import BaseRepository
from .models import CategorySpending, DatabaseStats, TransactionSummary

logger = logging.getLogger(__name__)


class QueryRepository(BaseRepository):
    """
    Repository for aggregation and analytics queries.

    Provides read-only query operations over the transactions and budgets
    tables. Date bounds are inclusive on both ends.
    """

    # =========================================================================
    # Summaries
    # =========================================================================

    def get_summary(self, start_date: datetime, end_date: datetime) -> TransactionSummary:
        """
        Total income, total expenses and transaction count in a range.

        Sums default to zero when no rows match, so an empty range yields an
        all-zero summary rather than an error.

        Args:
            start_date: Start of the range (inclusive)
            end_date: End of the range (inclusive)

        Returns:
            TransactionSummary; `balance` is income minus expenses
        """
        with self._get_connection() as conn:
            row = conn.execute(
                """
                SELECT
                    COALESCE(SUM(
                        CASE WHEN type = 'income' THEN amount ELSE 0 END
                    ), 0) AS total_income,
                    COALESCE(SUM(
                        CASE WHEN type = 'expense' THEN amount ELSE 0 END
                    ), 0) AS total_expenses,
                    COUNT(*) AS transaction_count
                FROM transactions
                WHERE timestamp >= ? AND timestamp <= ?
                """,
                (to_millis(start_date), to_millis(end_date)),
            ).fetchone()

        summary = TransactionSummary(
            total_income=float(row["total_income"]),
            total_expenses=float(row["total_expenses"]),
            transaction_count=int(row["transaction_count"]),
        )
        logger.debug(f"Summary for {start_date} .. {end_date}: {summary}")
        return summary

    def get_spending_by_category(
        self, start_date: datetime, end_date: datetime
    ) -> list[CategorySpending]:
        """
        Expense totals grouped by category, biggest spender first.

        Income rows are ignored.

        Args:
            start_date: Start of the range (inclusive)
            end_date: End of the range (inclusive)

        Returns:
            List of CategorySpending ordered by total descending
        """
        with self._get_connection() as conn:
            rows = conn.execute(
                """
                SELECT category, SUM(amount) AS total
                FROM transactions
                WHERE type = 'expense' AND timestamp >= ? AND timestamp <= ?
                GROUP BY category
                ORDER BY total DESC
                """,
                (to_millis(start_date), to_millis(end_date)),
            ).fetchall()

        return [
            CategorySpending(
                category=TransactionCategory(row["category"]),
                total=float(row["total"]),
            )
            for row in rows
        ]

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_stats(self) -> DatabaseStats:
        """
        Row counts and the oldest/newest transaction timestamps.

        Display-only data: storage errors are logged and an empty result is
        returned instead of raising. Using an uninitialized store still
        raises StoreNotInitializedError.
        """
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    """
                    SELECT
                        (SELECT COUNT(*) FROM transactions) AS transaction_count,
                        (SELECT COUNT(*) FROM budgets) AS budget_count,
                        (SELECT MIN(timestamp) FROM transactions) AS oldest,
                        (SELECT MAX(timestamp) FROM transactions) AS newest
                    """
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Error getting database stats: {e}", exc_info=True)
            return DatabaseStats()

        return DatabaseStats(
            transaction_count=row["transaction_count"],
            budget_count=row["budget_count"],
            oldest_transaction=from_millis(row["oldest"]),
            newest_transaction=from_millis(row["newest"]),
        )
