"""
Database module for the Budgie store.

This module provides the local-first persistence layer: the SQLite store
holding transactions, budgets, subscriptions and settings, plus the
aggregation queries built on it.

Structure:
- base.py: Database lifecycle (open/close, WAL, migrations, seeding) and BaseRepository
- schema.py: Table and index definitions, versioned migrations
- models.py: Data models (Transaction, Budget, Subscription, UserSettings, ...)
- transactions.py: Transaction CRUD and filtered listing
- queries.py: Summaries, spending by category and statistics
- budget.py: Budget upsert-by-category
- subscriptions.py: Subscription add/list/delete
- settings.py: The singleton settings row
- repository.py: Main facade that composes all sub-repositories
"""

from .base import Database, BaseRepository, StoreNotInitializedError
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
from .repository import BudgieRepository, create_repository
from .settings import SettingsRepository
from .subscriptions import SubscriptionRepository
from .transactions import TransactionRepository

__all__ = [
    # Base
    "BaseRepository",
    "Database",
    "StoreNotInitializedError",
    # Models
    "Budget",
    "CategorySpending",
    "DatabaseStats",
    "Subscription",
    "Transaction",
    "TransactionSummary",
    "UserSettings",
    # Repositories
    "BudgetRepository",
    "BudgieRepository",
    "QueryRepository",
    "SettingsRepository",
    "SubscriptionRepository",
    "TransactionRepository",
    # Utilities
    "create_repository",
]
