"""
Demo script for the Budgie store.

Records a month of sample transactions in a throwaway database and prints
the summaries a dashboard would show, driven through the reactive façade.
"""

import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

from budgie.config import configure_logging
from budgie.db import BudgieRepository, Database
from budgie.models import (
    Period,
    TransactionCategory,
    TransactionInput,
    TransactionType,
    format_amount,
)
from budgie.services import (
    BudgetsQuery,
    SpendingByCategoryQuery,
    SummaryQuery,
    TransactionsQuery,
    initialize_store,
)

logger = logging.getLogger(__name__)

JANUARY_START = datetime(2024, 1, 1, tzinfo=timezone.utc)
JANUARY_END = datetime(2024, 1, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)

SAMPLE_TRANSACTIONS = [
    TransactionInput(
        amount=3000,
        type=TransactionType.INCOME,
        category=TransactionCategory.SALARY,
        description="Monthly salary",
        timestamp=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
    ),
    TransactionInput(
        amount=50,
        type=TransactionType.EXPENSE,
        category=TransactionCategory.FOOD,
        description="Groceries",
        timestamp=datetime(2024, 1, 5, 18, 30, tzinfo=timezone.utc),
    ),
    TransactionInput(
        amount=30,
        type=TransactionType.EXPENSE,
        category=TransactionCategory.TRANSPORTATION,
        description="Metro card",
        timestamp=datetime(2024, 1, 10, 8, 15, tzinfo=timezone.utc),
    ),
]


async def run_demo(database: Database):
    state = await initialize_store(database)
    if state.error is not None:
        print(f"Could not open the store: {state.error}")
        return

    repository = BudgieRepository(database)

    transactions = TransactionsQuery(repository)
    await transactions.refresh()
    for data in SAMPLE_TRANSACTIONS:
        await transactions.add(data)

    budgets = BudgetsQuery(repository)
    await budgets.refresh()
    await budgets.set(TransactionCategory.FOOD, 400, Period.MONTHLY)

    summary = SummaryQuery(repository, JANUARY_START, JANUARY_END)
    spending = SpendingByCategoryQuery(repository, JANUARY_START, JANUARY_END)
    await summary.refresh()
    await spending.refresh()

    print("=" * 60)
    print("January 2024")
    print("=" * 60)

    for transaction in transactions.data:
        print(
            f"  {transaction.timestamp:%Y-%m-%d}  "
            f"{transaction.category.label:<16} "
            f"{format_amount(transaction.signed_amount, 'USD'):>10}"
        )

    totals = summary.data
    print("-" * 40)
    print(f"  Income:   {format_amount(totals.total_income, 'USD')}")
    print(f"  Expenses: {format_amount(totals.total_expenses, 'USD')}")
    print(f"  Balance:  {format_amount(totals.balance, 'USD')}")
    print(f"  Count:    {totals.transaction_count}")

    print("-" * 40)
    print("  Spending by category:")
    for item in spending.data:
        print(f"    {item.category.label:<16} {format_amount(item.total, 'USD')}")

    print("-" * 40)
    print("  Budgets:")
    for budget in budgets.data:
        print(
            f"    {budget.category.label:<16} "
            f"{format_amount(budget.amount, 'USD')} / {budget.period.value}"
        )


def main():
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    configure_logging(log_to_file=False)

    database = Database(":memory:")
    try:
        asyncio.run(run_demo(database))
    except Exception as e:
        logger.critical(f"Demo failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        database.close()


if __name__ == "__main__":
    main()
