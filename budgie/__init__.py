"""
Budgie - Local-first personal finance store

Persistence and aggregation layer for a personal budgeting app: an
on-device SQLite store for transactions, budgets, subscriptions and
settings, a key-value preferences store, and a reactive query façade
for presentation layers.
"""

from .db import (
    BudgieRepository,
    Database,
    StoreNotInitializedError,
    create_repository,
)
from .models import (
    Period,
    SettingsUpdate,
    SubscriptionInput,
    TransactionCategory,
    TransactionFilter,
    TransactionInput,
    TransactionType,
    TransactionUpdate,
)
from .services import PreferencesStore, initialize_store

__version__ = "0.1.0"

__all__ = [
    "BudgieRepository",
    "Database",
    "Period",
    "PreferencesStore",
    "SettingsUpdate",
    "StoreNotInitializedError",
    "SubscriptionInput",
    "TransactionCategory",
    "TransactionFilter",
    "TransactionInput",
    "TransactionType",
    "TransactionUpdate",
    "create_repository",
    "initialize_store",
]
