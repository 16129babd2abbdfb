"""
Main repository for the Budgie store.

Composes the table repositories over one `Database` and exposes the
operations the presentation layer consumes.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from budgie.models.category import TransactionCategory
from budgie.models.period import Period
from budgie.models.transaction import (
    SettingsUpdate,
    SubscriptionInput,
    TransactionFilter,
    TransactionInput,
    TransactionUpdate,
)

from .base import Database
from .budget import BudgetRepository
from .models import (
    Budget,
    CategorySpending,
    DatabaseStats,
    Subscription,
    Transaction,
    TransactionSummary,
    UserSettings,
)
from .queries import QueryRepository
from .settings import SettingsRepository
from .subscriptions import SubscriptionRepository
from .transactions import TransactionRepository

logger = logging.getLogger(__name__)


class BudgieRepository:
    """
    Facade over every table repository sharing one database connection.

    The repository does not open the store by itself; call `initialize()`
    (or use it as a context manager) before any other operation.
    """

    def __init__(self, database: Database):
        """
        Args:
            database: The store to operate on
        """
        self.database = database
        self.transactions = TransactionRepository(database)
        self.queries = QueryRepository(database)
        self.budgets = BudgetRepository(database)
        self.subscriptions = SubscriptionRepository(database)
        self.settings = SettingsRepository(database)

    def __enter__(self) -> "BudgieRepository":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize(self) -> None:
        """Open the store and create the schema (idempotent)."""
        self.database.initialize()

    def close(self) -> None:
        self.database.close()

    @property
    def is_initialized(self) -> bool:
        return self.database.is_initialized

    # =========================================================================
    # Transactions
    # =========================================================================

    def add_transaction(self, data: TransactionInput) -> Transaction:
        return self.transactions.add(data)

    def update_transaction(
        self, transaction_id: str, changes: TransactionUpdate
    ) -> Optional[Transaction]:
        return self.transactions.update(transaction_id, changes)

    def delete_transaction(self, transaction_id: str) -> bool:
        return self.transactions.delete(transaction_id)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self.transactions.get_by_id(transaction_id)

    def get_transactions(
        self, filters: Optional[TransactionFilter] = None
    ) -> list[Transaction]:
        return self.transactions.list_transactions(filters)

    def get_transaction_summary(
        self, start_date: datetime, end_date: datetime
    ) -> TransactionSummary:
        return self.queries.get_summary(start_date, end_date)

    def get_spending_by_category(
        self, start_date: datetime, end_date: datetime
    ) -> list[CategorySpending]:
        return self.queries.get_spending_by_category(start_date, end_date)

    def get_database_stats(self) -> DatabaseStats:
        return self.queries.get_stats()

    # =========================================================================
    # Budgets
    # =========================================================================

    def set_budget(
        self, category: TransactionCategory, amount: float, period: Period
    ) -> Budget:
        return self.budgets.upsert(category, amount, period)

    def get_budget(self, category: TransactionCategory) -> Optional[Budget]:
        return self.budgets.get_by_category(category)

    def get_budgets(self) -> list[Budget]:
        return self.budgets.list_budgets()

    def delete_budget(self, category: TransactionCategory) -> bool:
        return self.budgets.delete(category)

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def add_subscription(self, data: SubscriptionInput) -> Subscription:
        return self.subscriptions.add(data)

    def get_subscription(self, subscription_id: str) -> Optional[Subscription]:
        return self.subscriptions.get_by_id(subscription_id)

    def get_subscriptions(self) -> list[Subscription]:
        return self.subscriptions.list_subscriptions()

    def delete_subscription(self, subscription_id: str) -> bool:
        return self.subscriptions.delete(subscription_id)

    # =========================================================================
    # Settings
    # =========================================================================

    def get_settings(self) -> UserSettings:
        return self.settings.get()

    def update_settings(self, changes: SettingsUpdate) -> UserSettings:
        return self.settings.update(changes)

    # =========================================================================
    # Utilities
    # =========================================================================

    def clear_all_data(self) -> None:
        """
        Delete every transaction and budget.

        Subscriptions, settings and preferences are left untouched.
        """
        with self.database.transaction() as conn:
            conn.execute("DELETE FROM transactions")
            conn.execute("DELETE FROM budgets")
        logger.info("All transaction and budget data cleared")


def create_repository(
    db_path: Optional[Union[Path, str]] = None, initialize: bool = True
) -> BudgieRepository:
    """
    Build a repository over a new Database.

    Args:
        db_path: Path to the SQLite file (defaults to data/budgie.db)
        initialize: Whether to open the store immediately

    Returns:
        A BudgieRepository owning its Database
    """
    repository = BudgieRepository(Database(db_path))
    if initialize:
        repository.initialize()
    return repository
