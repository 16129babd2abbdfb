from .date_ranges import (
    DateRange,
    get_current_month_range,
    get_current_week_range,
    get_today_range,
)
from .preferences import PreferenceKey, PreferencesStore
from .reactive import (
    BoundQuery,
    BudgetsQuery,
    DatabaseStatsQuery,
    PreferencesQuery,
    QueryState,
    QueryStatus,
    SettingsQuery,
    SpendingByCategoryQuery,
    SubscriptionsQuery,
    SummaryQuery,
    TransactionsQuery,
    initialize_store,
)

__all__ = [
    "BoundQuery",
    "BudgetsQuery",
    "DatabaseStatsQuery",
    "DateRange",
    "PreferenceKey",
    "PreferencesQuery",
    "PreferencesStore",
    "QueryState",
    "QueryStatus",
    "SettingsQuery",
    "SpendingByCategoryQuery",
    "SubscriptionsQuery",
    "SummaryQuery",
    "TransactionsQuery",
    "get_current_month_range",
    "get_current_week_range",
    "get_today_range",
    "initialize_store",
]
