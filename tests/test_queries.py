"""Tests for summaries, spending by category and database statistics."""

import pytest

from budgie.models import Period, TransactionCategory, TransactionInput, TransactionType
from conftest import utc

JANUARY = (utc(2024, 1, 1), utc(2024, 1, 31, 23, 59, 59, 999000))


def test_january_summary(repository, january):
    summary = repository.get_transaction_summary(*JANUARY)

    assert summary.total_income == 3000
    assert summary.total_expenses == 80
    assert summary.balance == 2920
    assert summary.transaction_count == 3


def test_january_spending_by_category(repository, january):
    spending = repository.get_spending_by_category(*JANUARY)

    assert [(s.category, s.total) for s in spending] == [
        (TransactionCategory.FOOD, 50),
        (TransactionCategory.TRANSPORTATION, 30),
    ]


def test_summary_empty_range_is_zero(repository, january):
    summary = repository.get_transaction_summary(utc(2023, 1, 1), utc(2023, 1, 31))

    assert summary.total_income == 0
    assert summary.total_expenses == 0
    assert summary.balance == 0
    assert summary.transaction_count == 0


def test_summary_bounds_are_inclusive(repository, january):
    summary = repository.get_transaction_summary(
        utc(2024, 1, 1, 9, 0), utc(2024, 1, 5, 18, 30)
    )
    assert summary.transaction_count == 2
    assert summary.balance == 2950


def test_balance_can_be_negative(repository):
    repository.add_transaction(
        TransactionInput(
            amount=200,
            type=TransactionType.EXPENSE,
            category=TransactionCategory.TRAVEL,
            timestamp=utc(2024, 1, 15),
        )
    )
    summary = repository.get_transaction_summary(*JANUARY)
    assert summary.balance == -200


def test_spending_groups_and_sorts_descending(repository):
    for amount, category in [
        (10, TransactionCategory.FOOD),
        (15, TransactionCategory.FOOD),
        (40, TransactionCategory.SHOPPING),
        (5, TransactionCategory.UTILITIES),
    ]:
        repository.add_transaction(
            TransactionInput(
                amount=amount,
                type=TransactionType.EXPENSE,
                category=category,
                timestamp=utc(2024, 1, 20),
            )
        )

    spending = repository.get_spending_by_category(*JANUARY)
    assert [(s.category.value, s.total) for s in spending] == [
        ("shopping", 40),
        ("food", 25),
        ("utilities", 5),
    ]


def test_spending_ignores_income(repository):
    repository.add_transaction(
        TransactionInput(
            amount=500,
            type=TransactionType.INCOME,
            category=TransactionCategory.FREELANCE,
            timestamp=utc(2024, 1, 20),
        )
    )
    assert repository.get_spending_by_category(*JANUARY) == []


def test_stats_empty_store(repository):
    stats = repository.get_database_stats()

    assert stats.transaction_count == 0
    assert stats.budget_count == 0
    assert stats.oldest_transaction is None
    assert stats.newest_transaction is None


def test_stats(repository, january):
    repository.set_budget(TransactionCategory.FOOD, 300, Period.MONTHLY)

    stats = repository.get_database_stats()

    assert stats.transaction_count == 3
    assert stats.budget_count == 1
    assert stats.oldest_transaction == utc(2024, 1, 1, 9, 0)
    assert stats.newest_transaction == utc(2024, 1, 10, 8, 15)
    assert stats.to_dict()["oldest_transaction"].startswith("2024-01-01T09:00:00")


def test_clear_all_data(repository, january):
    repository.set_budget(TransactionCategory.FOOD, 300, Period.MONTHLY)

    repository.clear_all_data()

    stats = repository.get_database_stats()
    assert stats.transaction_count == 0
    assert stats.budget_count == 0
    assert repository.get_settings() is not None


@pytest.mark.parametrize(
    "balance, expected",
    [(-1, True), (0, False), (10, False)],
)
def test_danger_zone_default_floor(repository, balance, expected):
    assert repository.get_settings().is_in_danger_zone(balance) is expected
