from enum import Enum


class Period(str, Enum):
    """Recurrence period shared by budgets and subscription billing."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
