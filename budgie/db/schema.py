"""
Schema definitions for the Budgie store.

Column names follow the on-device layout of the mobile app (camelCase), so
stores created by it stay readable. Timestamps are INTEGER epoch milliseconds.
"""

TRANSACTIONS_TABLE = """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY NOT NULL,
        amount REAL NOT NULL CHECK(amount > 0),
        type TEXT NOT NULL CHECK(type IN ('income', 'expense')),
        category TEXT NOT NULL,
        description TEXT,
        timestamp INTEGER NOT NULL,
        createdAt INTEGER NOT NULL,
        updatedAt INTEGER NOT NULL
    )
"""

BUDGETS_TABLE = """
    CREATE TABLE IF NOT EXISTS budgets (
        id TEXT PRIMARY KEY NOT NULL,
        category TEXT NOT NULL UNIQUE,
        amount REAL NOT NULL CHECK(amount > 0),
        period TEXT NOT NULL CHECK(period IN ('weekly', 'monthly', 'yearly')),
        createdAt INTEGER NOT NULL,
        updatedAt INTEGER NOT NULL
    )
"""

SUBSCRIPTIONS_TABLE = """
    CREATE TABLE IF NOT EXISTS subscriptions (
        id TEXT PRIMARY KEY NOT NULL,
        name TEXT NOT NULL CHECK(length(name) > 0),
        amount REAL NOT NULL CHECK(amount > 0),
        currency TEXT NOT NULL,
        billingPeriod TEXT NOT NULL CHECK(
            billingPeriod IN ('weekly', 'monthly', 'yearly')
        ),
        nextBillingDate INTEGER NOT NULL,
        notificationEnabled INTEGER NOT NULL DEFAULT 0 CHECK(
            notificationEnabled IN (0, 1)
        ),
        category TEXT NOT NULL,
        createdAt INTEGER NOT NULL,
        updatedAt INTEGER NOT NULL
    )
"""

SETTINGS_TABLE = """
    CREATE TABLE IF NOT EXISTS settings (
        id TEXT PRIMARY KEY NOT NULL,
        dangerZoneAmount REAL NOT NULL DEFAULT 0 CHECK(dangerZoneAmount >= 0),
        currency TEXT NOT NULL DEFAULT 'USD',
        theme TEXT NOT NULL DEFAULT 'system' CHECK(
            theme IN ('light', 'dark', 'system')
        ),
        notificationsEnabled INTEGER NOT NULL DEFAULT 1 CHECK(
            notificationsEnabled IN (0, 1)
        ),
        createdAt INTEGER NOT NULL,
        updatedAt INTEGER NOT NULL
    )
"""

# (index name, table, columns)
INDEXES = [
    ("idx_transactions_timestamp", "transactions", "timestamp DESC"),
    ("idx_transactions_type", "transactions", "type"),
    ("idx_transactions_category", "transactions", "category"),
]


def _index_statements() -> list[str]:
    return [
        f"CREATE INDEX IF NOT EXISTS {index_name} ON {table}({columns})"
        for index_name, table, columns in INDEXES
    ]


# Statements applied to move a store from version N-1 to version N,
# recorded in PRAGMA user_version.
MIGRATIONS: dict[int, list[str]] = {
    1: [
        TRANSACTIONS_TABLE,
        BUDGETS_TABLE,
        SUBSCRIPTIONS_TABLE,
        SETTINGS_TABLE,
        *_index_statements(),
    ],
}

SCHEMA_VERSION = max(MIGRATIONS)
