"""
Database models for the Budgie store.

Defines the persisted records (transactions, budgets, subscriptions and the
settings row) and the derived results of the aggregation queries.
"""

import math
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from budgie.models.category import TransactionCategory, TransactionType
from budgie.models.period import Period
from budgie.models.settings import CurrencyCode, ThemeMode
from budgie.utils.timestamp import from_millis

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class Transaction:
    """
    A single recorded cash movement.

    The amount is always positive; the direction is carried by `type`.
    Currency is a display-time concern and is not stored per transaction.
    """

    id: str
    amount: float
    type: TransactionType
    category: TransactionCategory
    description: Optional[str]
    timestamp: datetime  # When the transaction occurred
    created_at: datetime
    updated_at: datetime

    @property
    def signed_amount(self) -> float:
        """Amount with expenses negated, for running balances."""
        if self.type == TransactionType.EXPENSE:
            return -self.amount
        return self.amount

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "amount": self.amount,
            "type": self.type.value,
            "category": self.category.value,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Transaction":
        """Create a Transaction from a database row."""
        return cls(
            id=row["id"],
            amount=row["amount"],
            type=TransactionType(row["type"]),
            category=TransactionCategory(row["category"]),
            description=row["description"],
            timestamp=from_millis(row["timestamp"]),
            created_at=from_millis(row["createdAt"]),
            updated_at=from_millis(row["updatedAt"]),
        )


@dataclass
class Budget:
    """Spending ceiling for a single category (at most one per category)."""

    id: str
    category: TransactionCategory
    amount: float
    period: Period
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "category": self.category.value,
            "amount": self.amount,
            "period": self.period.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Budget":
        """Create a Budget from a database row."""
        return cls(
            id=row["id"],
            category=TransactionCategory(row["category"]),
            amount=row["amount"],
            period=Period(row["period"]),
            created_at=from_millis(row["createdAt"]),
            updated_at=from_millis(row["updatedAt"]),
        )


@dataclass
class Subscription:
    """
    A recurring expected charge.

    The next billing date is advanced by the caller; the store never rolls
    it forward on its own.
    """

    id: str
    name: str
    amount: float
    currency: CurrencyCode  # Independent of the app-wide currency
    billing_period: Period
    next_billing_date: datetime
    notification_enabled: bool
    category: TransactionCategory
    created_at: datetime
    updated_at: datetime

    def days_until_billing(self, now: datetime) -> int:
        """Whole days until the next billing date (negative when overdue)."""
        seconds = (self.next_billing_date - now).total_seconds()
        return math.ceil(seconds / SECONDS_PER_DAY)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "currency": self.currency.value,
            "billing_period": self.billing_period.value,
            "next_billing_date": self.next_billing_date.isoformat(),
            "notification_enabled": self.notification_enabled,
            "category": self.category.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Subscription":
        """Create a Subscription from a database row."""
        return cls(
            id=row["id"],
            name=row["name"],
            amount=row["amount"],
            currency=CurrencyCode(row["currency"]),
            billing_period=Period(row["billingPeriod"]),
            next_billing_date=from_millis(row["nextBillingDate"]),
            notification_enabled=bool(row["notificationEnabled"]),
            category=TransactionCategory(row["category"]),
            created_at=from_millis(row["createdAt"]),
            updated_at=from_millis(row["updatedAt"]),
        )


@dataclass
class UserSettings:
    """The singleton relational settings row."""

    id: str
    danger_zone_amount: float  # Balance floor that triggers a warning
    currency: CurrencyCode
    theme: ThemeMode
    notifications_enabled: bool
    created_at: datetime
    updated_at: datetime

    def is_in_danger_zone(self, balance: float) -> bool:
        """Check whether a balance has fallen below the danger-zone floor."""
        return balance < self.danger_zone_amount

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "danger_zone_amount": self.danger_zone_amount,
            "currency": self.currency.value,
            "theme": self.theme.value,
            "notifications_enabled": self.notifications_enabled,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "UserSettings":
        """Create UserSettings from a database row."""
        return cls(
            id=row["id"],
            danger_zone_amount=row["dangerZoneAmount"],
            currency=CurrencyCode(row["currency"]),
            theme=ThemeMode(row["theme"]),
            notifications_enabled=bool(row["notificationsEnabled"]),
            created_at=from_millis(row["createdAt"]),
            updated_at=from_millis(row["updatedAt"]),
        )


@dataclass
class TransactionSummary:
    """Totals for a timestamp range. Sums default to zero."""

    total_income: float = 0.0
    total_expenses: float = 0.0
    transaction_count: int = 0

    @property
    def balance(self) -> float:
        """Income minus expenses (may be negative)."""
        return self.total_income - self.total_expenses

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "total_income": self.total_income,
            "total_expenses": self.total_expenses,
            "balance": self.balance,
            "transaction_count": self.transaction_count,
        }


@dataclass
class CategorySpending:
    """Summed expense total for one category."""

    category: TransactionCategory
    total: float

    def to_dict(self) -> dict:
        return {"category": self.category.value, "total": self.total}


@dataclass
class DatabaseStats:
    """Row counts and the span of recorded transactions."""

    transaction_count: int = 0
    budget_count: int = 0
    oldest_transaction: Optional[datetime] = None
    newest_transaction: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "transaction_count": self.transaction_count,
            "budget_count": self.budget_count,
            "oldest_transaction": (
                self.oldest_transaction.isoformat() if self.oldest_transaction else None
            ),
            "newest_transaction": (
                self.newest_transaction.isoformat() if self.newest_transaction else None
            ),
        }
