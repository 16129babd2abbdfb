"""
Input and update models for writes against the store.

These carry caller-supplied values only; identifiers and creation/update
timestamps are always assigned by the storage engine.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from budgie.utils.timestamp import normalize

from .category import TransactionCategory, TransactionType, is_valid_category
from .period import Period
from .settings import CurrencyCode, ThemeMode


def validate_amount(amount: float, field_name: str = "amount") -> None:
    """Raise ValueError unless the amount is a positive number."""
    if amount is None or isinstance(amount, bool) or amount <= 0:
        raise ValueError(f"{field_name} must be > 0, got {amount}")


class _Unset:
    """Marker for an update field that was not given."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


def validate_category_for_type(
    transaction_type: TransactionType, category: TransactionCategory
) -> None:
    """Raise ValueError when the category is outside the type's partition."""
    if not is_valid_category(transaction_type, category):
        raise ValueError(
            f"Category '{TransactionCategory(category).value}' is not valid "
            f"for {TransactionType(transaction_type).value} transactions"
        )


@dataclass
class TransactionInput:
    """Values for a new transaction."""

    amount: float
    type: TransactionType
    category: TransactionCategory
    description: Optional[str] = None
    timestamp: Optional[datetime] = None  # defaults to write time

    def __post_init__(self):
        self.type = TransactionType(self.type)
        self.category = TransactionCategory(self.category)
        if self.timestamp is not None:
            self.timestamp = normalize(self.timestamp)

    def validate(self) -> None:
        """
        Validate the input.

        Raises:
            ValueError: If the amount is not positive or the category does
                not belong to the transaction type
        """
        validate_amount(self.amount)
        validate_category_for_type(self.type, self.category)


@dataclass
class TransactionUpdate:
    """
    Partial update for an existing transaction.

    Every field is optional; None leaves the stored value unchanged. The
    description is nullable in storage, so it defaults to UNSET instead and
    an explicit None clears it. The identifier and creation timestamp can
    never be changed.
    """

    amount: Optional[float] = None
    type: Optional[TransactionType] = None
    category: Optional[TransactionCategory] = None
    description: Union[str, None, _Unset] = UNSET
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if self.type is not None:
            self.type = TransactionType(self.type)
        if self.category is not None:
            self.category = TransactionCategory(self.category)
        if self.amount is not None:
            validate_amount(self.amount)
        if self.timestamp is not None:
            self.timestamp = normalize(self.timestamp)

    def is_empty(self) -> bool:
        return self.description is UNSET and all(
            value is None
            for value in (self.amount, self.type, self.category, self.timestamp)
        )


@dataclass
class TransactionFilter:
    """
    Optional, AND-combined filters for listing transactions.

    Omitted filters impose no constraint. Date bounds are inclusive.
    """

    type: Optional[TransactionType] = None
    category: Optional[TransactionCategory] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def __post_init__(self):
        if self.type is not None:
            self.type = TransactionType(self.type)
        if self.category is not None:
            self.category = TransactionCategory(self.category)
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")
        if self.offset is not None and self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")


@dataclass
class SubscriptionInput:
    """Values for a new recurring subscription."""

    name: str
    amount: float
    currency: CurrencyCode
    billing_period: Period
    next_billing_date: datetime
    category: TransactionCategory
    notification_enabled: bool = False

    def __post_init__(self):
        self.currency = CurrencyCode(self.currency)
        self.billing_period = Period(self.billing_period)
        self.category = TransactionCategory(self.category)
        self.next_billing_date = normalize(self.next_billing_date)
        if self.name:
            self.name = self.name.strip()

    def validate(self) -> None:
        if not self.name:
            raise ValueError("Subscription name is required")
        validate_amount(self.amount)


@dataclass
class SettingsUpdate:
    """Partial update for the relational settings row."""

    danger_zone_amount: Optional[float] = None
    currency: Optional[CurrencyCode] = None
    theme: Optional[ThemeMode] = None
    notifications_enabled: Optional[bool] = None

    def __post_init__(self):
        if self.currency is not None:
            self.currency = CurrencyCode(self.currency)
        if self.theme is not None:
            self.theme = ThemeMode(self.theme)
        if self.danger_zone_amount is not None and self.danger_zone_amount < 0:
            raise ValueError(
                f"danger_zone_amount must be >= 0, got {self.danger_zone_amount}"
            )
