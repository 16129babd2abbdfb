from .category import (
    CATEGORY_INFO,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    TransactionCategory,
    TransactionType,
    categories_for,
    is_valid_category,
)
from .period import Period
from .settings import (
    CURRENCY_INFO,
    WEEK_DAYS,
    AppSettings,
    CurrencyCode,
    ThemeMode,
    format_amount,
)
from .transaction import (
    UNSET,
    SettingsUpdate,
    SubscriptionInput,
    TransactionFilter,
    TransactionInput,
    TransactionUpdate,
    validate_amount,
    validate_category_for_type,
)

__all__ = [
    "TransactionType",
    "TransactionCategory",
    "INCOME_CATEGORIES",
    "EXPENSE_CATEGORIES",
    "CATEGORY_INFO",
    "categories_for",
    "is_valid_category",
    "Period",
    "ThemeMode",
    "CurrencyCode",
    "CURRENCY_INFO",
    "WEEK_DAYS",
    "AppSettings",
    "format_amount",
    "TransactionInput",
    "TransactionUpdate",
    "TransactionFilter",
    "SubscriptionInput",
    "SettingsUpdate",
    "UNSET",
    "validate_amount",
    "validate_category_for_type",
]
