"""Tests for budget upsert-by-category."""

import pytest

from budgie.models import Period, TransactionCategory


def test_set_and_get_budget(repository):
    budget = repository.set_budget(TransactionCategory.FOOD, 400, Period.MONTHLY)

    assert budget.category == TransactionCategory.FOOD
    assert budget.amount == 400
    assert budget.period == Period.MONTHLY
    assert repository.get_budget(TransactionCategory.FOOD) == budget


def test_set_budget_replaces_existing(repository):
    first = repository.set_budget("food", 400, "monthly")
    second = repository.set_budget("food", 100, "weekly")

    assert second.id == first.id
    assert second.created_at == first.created_at
    assert second.amount == 100
    assert second.period == Period.WEEKLY
    assert len(repository.get_budgets()) == 1


def test_budgets_ordered_by_category(repository):
    repository.set_budget(TransactionCategory.TRAVEL, 1000, Period.YEARLY)
    repository.set_budget(TransactionCategory.ENTERTAINMENT, 50, Period.WEEKLY)
    repository.set_budget(TransactionCategory.FOOD, 400, Period.MONTHLY)

    categories = [b.category.value for b in repository.get_budgets()]
    assert categories == ["entertainment", "food", "travel"]


@pytest.mark.parametrize("amount", [0, -5, True, None])
def test_set_budget_rejects_invalid_amount(repository, amount):
    with pytest.raises(ValueError):
        repository.set_budget(TransactionCategory.FOOD, amount, Period.MONTHLY)
    assert repository.get_budgets() == []


def test_set_budget_rejects_unknown_period(repository):
    with pytest.raises(ValueError):
        repository.set_budget(TransactionCategory.FOOD, 10, "daily")


def test_get_missing_budget(repository):
    assert repository.get_budget(TransactionCategory.SHOPPING) is None


def test_delete_budget(repository):
    repository.set_budget(TransactionCategory.FOOD, 400, Period.MONTHLY)

    assert repository.delete_budget(TransactionCategory.FOOD) is True
    assert repository.get_budget(TransactionCategory.FOOD) is None
    assert repository.delete_budget(TransactionCategory.FOOD) is False
