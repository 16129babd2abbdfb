"""
Settings models shared by the relational settings row and the
key-value preferences store.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from budgie.config import (
    DEFAULT_CURRENCY,
    DEFAULT_NOTIFICATIONS_ENABLED,
    DEFAULT_TRANSACTION_TYPE,
    DEFAULT_WEEK_START_DAY,
)

from .category import TransactionType


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class CurrencyCode(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    CNY = "CNY"
    TRY = "TRY"
    INR = "INR"
    BRL = "BRL"
    CAD = "CAD"
    AUD = "AUD"


CURRENCY_INFO = {
    CurrencyCode.USD: {"symbol": "$", "name": "US Dollar"},
    CurrencyCode.EUR: {"symbol": "€", "name": "Euro"},
    CurrencyCode.GBP: {"symbol": "£", "name": "British Pound"},
    CurrencyCode.JPY: {"symbol": "¥", "name": "Japanese Yen"},
    CurrencyCode.CNY: {"symbol": "¥", "name": "Chinese Yuan"},
    CurrencyCode.TRY: {"symbol": "₺", "name": "Turkish Lira"},
    CurrencyCode.INR: {"symbol": "₹", "name": "Indian Rupee"},
    CurrencyCode.BRL: {"symbol": "R$", "name": "Brazilian Real"},
    CurrencyCode.CAD: {"symbol": "C$", "name": "Canadian Dollar"},
    CurrencyCode.AUD: {"symbol": "A$", "name": "Australian Dollar"},
}

# Index matches the week start day value (0 = Sunday)
WEEK_DAYS = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def format_amount(amount: float, currency: CurrencyCode) -> str:
    """Format an amount with the currency symbol, two decimals."""
    symbol = CURRENCY_INFO[CurrencyCode(currency)]["symbol"]
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):.2f}"


@dataclass
class AppSettings:
    """
    Snapshot of every device-level preference.

    Assembled at read time from independent keys; it is never persisted
    as one document.
    """

    currency: CurrencyCode = CurrencyCode(DEFAULT_CURRENCY)
    theme: ThemeMode = ThemeMode.SYSTEM
    notifications_enabled: bool = DEFAULT_NOTIFICATIONS_ENABLED
    daily_reminder_time: Optional[str] = None  # HH:MM
    biometric_enabled: bool = False
    onboarding_completed: bool = False
    last_sync_time: Optional[datetime] = None
    default_transaction_type: TransactionType = TransactionType(DEFAULT_TRANSACTION_TYPE)
    week_start_day: int = DEFAULT_WEEK_START_DAY

    @property
    def week_start_day_name(self) -> str:
        return WEEK_DAYS[self.week_start_day]

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "currency": self.currency.value,
            "theme": self.theme.value,
            "notifications_enabled": self.notifications_enabled,
            "daily_reminder_time": self.daily_reminder_time,
            "biometric_enabled": self.biometric_enabled,
            "onboarding_completed": self.onboarding_completed,
            "last_sync_time": (
                self.last_sync_time.isoformat() if self.last_sync_time else None
            ),
            "default_transaction_type": self.default_transaction_type.value,
            "week_start_day": self.week_start_day,
        }
