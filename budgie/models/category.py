"""
Transaction type and category models.

Defines the fixed category set, partitioned into income and expense
categories, along with display information for each category.
"""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of a recorded cash movement."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionCategory(str, Enum):
    """
    Fixed set of transaction categories.

    A category belongs to exactly one partition:
    - Income: salary, freelance, investment, gift, other_income
    - Expense: everything else
    """

    # Income categories
    SALARY = "salary"
    FREELANCE = "freelance"
    INVESTMENT = "investment"
    GIFT = "gift"
    OTHER_INCOME = "other_income"

    # Expense categories
    FOOD = "food"
    TRANSPORTATION = "transportation"
    UTILITIES = "utilities"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    TRAVEL = "travel"
    OTHER_EXPENSE = "other_expense"

    @property
    def label(self) -> str:
        """Human readable label for display."""
        return CATEGORY_INFO[self]["label"]

    @property
    def transaction_type(self) -> TransactionType:
        """The transaction type whose partition contains this category."""
        if self in INCOME_CATEGORIES:
            return TransactionType.INCOME
        return TransactionType.EXPENSE


INCOME_CATEGORIES = (
    TransactionCategory.SALARY,
    TransactionCategory.FREELANCE,
    TransactionCategory.INVESTMENT,
    TransactionCategory.GIFT,
    TransactionCategory.OTHER_INCOME,
)

EXPENSE_CATEGORIES = (
    TransactionCategory.FOOD,
    TransactionCategory.TRANSPORTATION,
    TransactionCategory.UTILITIES,
    TransactionCategory.ENTERTAINMENT,
    TransactionCategory.SHOPPING,
    TransactionCategory.HEALTHCARE,
    TransactionCategory.EDUCATION,
    TransactionCategory.TRAVEL,
    TransactionCategory.OTHER_EXPENSE,
)

CATEGORY_INFO = {
    TransactionCategory.SALARY: {"label": "Salary", "emoji": "💰"},
    TransactionCategory.FREELANCE: {"label": "Freelance", "emoji": "💼"},
    TransactionCategory.INVESTMENT: {"label": "Investment", "emoji": "📈"},
    TransactionCategory.GIFT: {"label": "Gift", "emoji": "🎁"},
    TransactionCategory.OTHER_INCOME: {"label": "Other Income", "emoji": "💵"},
    TransactionCategory.FOOD: {"label": "Food & Dining", "emoji": "🍔"},
    TransactionCategory.TRANSPORTATION: {"label": "Transportation", "emoji": "🚗"},
    TransactionCategory.UTILITIES: {"label": "Utilities", "emoji": "💡"},
    TransactionCategory.ENTERTAINMENT: {"label": "Entertainment", "emoji": "🎬"},
    TransactionCategory.SHOPPING: {"label": "Shopping", "emoji": "🛍️"},
    TransactionCategory.HEALTHCARE: {"label": "Healthcare", "emoji": "🏥"},
    TransactionCategory.EDUCATION: {"label": "Education", "emoji": "📚"},
    TransactionCategory.TRAVEL: {"label": "Travel", "emoji": "✈️"},
    TransactionCategory.OTHER_EXPENSE: {"label": "Other", "emoji": "📝"},
}


def categories_for(transaction_type: TransactionType) -> tuple[TransactionCategory, ...]:
    """Return the category partition for a transaction type."""
    if TransactionType(transaction_type) == TransactionType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


def is_valid_category(
    transaction_type: TransactionType, category: TransactionCategory
) -> bool:
    """Check whether a category belongs to the partition of the given type."""
    return TransactionCategory(category) in categories_for(transaction_type)
