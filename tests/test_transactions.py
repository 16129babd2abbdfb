"""Tests for transaction CRUD and filtered listing."""

from datetime import datetime, timedelta, timezone

import pytest

from budgie.models import (
    TransactionCategory,
    TransactionFilter,
    TransactionInput,
    TransactionType,
    TransactionUpdate,
)
from conftest import utc


def expense(amount, category=TransactionCategory.FOOD, **kwargs):
    return TransactionInput(
        amount=amount, type=TransactionType.EXPENSE, category=category, **kwargs
    )


def income(amount, category=TransactionCategory.SALARY, **kwargs):
    return TransactionInput(
        amount=amount, type=TransactionType.INCOME, category=category, **kwargs
    )


# =============================================================================
# Add / get
# =============================================================================


def test_add_and_get_round_trip(repository):
    created = repository.add_transaction(
        expense(42.5, description="Lunch", timestamp=utc(2024, 3, 4, 12, 30))
    )

    fetched = repository.get_transaction(created.id)
    assert fetched == created
    assert fetched.amount == 42.5
    assert fetched.type == TransactionType.EXPENSE
    assert fetched.category == TransactionCategory.FOOD
    assert fetched.description == "Lunch"
    assert fetched.timestamp == utc(2024, 3, 4, 12, 30)
    assert fetched.created_at == fetched.updated_at


def test_add_assigns_unique_ids(repository):
    ids = {repository.add_transaction(expense(1)).id for _ in range(10)}
    assert len(ids) == 10


def test_timestamp_defaults_to_now(repository):
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    created = repository.add_transaction(expense(5))
    after = datetime.now(timezone.utc) + timedelta(seconds=1)

    assert before <= created.timestamp <= after
    assert created.timestamp.tzinfo is not None


def test_naive_timestamp_treated_as_utc(repository):
    created = repository.add_transaction(expense(5, timestamp=datetime(2024, 2, 1, 10)))
    assert repository.get_transaction(created.id).timestamp == utc(2024, 2, 1, 10)


def test_timestamp_truncated_to_milliseconds(repository):
    created = repository.add_transaction(
        expense(5, timestamp=datetime(2024, 2, 1, 10, 0, 0, 123456, tzinfo=timezone.utc))
    )
    assert created.timestamp.microsecond == 123000
    assert repository.get_transaction(created.id) == created


def test_get_missing_returns_none(repository):
    assert repository.get_transaction("does-not-exist") is None


@pytest.mark.parametrize("amount", [0, -10])
def test_add_rejects_non_positive_amount(repository, amount):
    with pytest.raises(ValueError):
        repository.add_transaction(expense(amount))
    assert repository.get_transactions() == []


def test_add_rejects_category_outside_type(repository):
    with pytest.raises(ValueError):
        repository.add_transaction(
            TransactionInput(
                amount=10,
                type=TransactionType.INCOME,
                category=TransactionCategory.FOOD,
            )
        )
    assert repository.get_transactions() == []


def test_add_rejects_unknown_category():
    with pytest.raises(ValueError):
        TransactionInput(amount=10, type="expense", category="rent")


def test_add_accepts_plain_strings(repository):
    created = repository.add_transaction(
        TransactionInput(amount=10, type="income", category="gift")
    )
    assert created.type == TransactionType.INCOME
    assert created.category == TransactionCategory.GIFT


# =============================================================================
# Listing
# =============================================================================


def test_list_orders_by_timestamp_descending(repository):
    repository.add_transaction(expense(1, timestamp=utc(2024, 1, 2)))
    repository.add_transaction(expense(2, timestamp=utc(2024, 1, 3)))
    repository.add_transaction(expense(3, timestamp=utc(2024, 1, 1)))

    amounts = [t.amount for t in repository.get_transactions()]
    assert amounts == [2, 1, 3]


def test_list_filters_by_type_and_category(repository, january):
    expenses = repository.get_transactions(TransactionFilter(type=TransactionType.EXPENSE))
    assert {t.category for t in expenses} == {
        TransactionCategory.FOOD,
        TransactionCategory.TRANSPORTATION,
    }

    food = repository.get_transactions(
        TransactionFilter(type="expense", category="food")
    )
    assert [t.amount for t in food] == [50]


def test_list_filters_by_inclusive_date_range(repository, january):
    exact = repository.get_transactions(
        TransactionFilter(start_date=utc(2024, 1, 5, 18, 30), end_date=utc(2024, 1, 10, 8, 15))
    )
    assert [t.amount for t in exact] == [30, 50]

    after = repository.get_transactions(TransactionFilter(start_date=utc(2024, 1, 6)))
    assert [t.amount for t in after] == [30]

    before = repository.get_transactions(TransactionFilter(end_date=utc(2024, 1, 4)))
    assert [t.amount for t in before] == [3000]


def test_list_limit_and_offset(repository):
    for day in range(1, 6):
        repository.add_transaction(expense(day, timestamp=utc(2024, 1, day)))

    page = repository.get_transactions(TransactionFilter(limit=2, offset=1))
    assert [t.amount for t in page] == [4, 3]

    rest = repository.get_transactions(TransactionFilter(offset=3))
    assert [t.amount for t in rest] == [2, 1]

    assert repository.get_transactions(TransactionFilter(limit=0)) == []


def test_list_rejects_negative_paging():
    with pytest.raises(ValueError):
        TransactionFilter(limit=-1)
    with pytest.raises(ValueError):
        TransactionFilter(offset=-1)


def test_list_empty_store(repository):
    assert repository.get_transactions() == []
    assert repository.get_transactions(TransactionFilter(type="income")) == []


# =============================================================================
# Update
# =============================================================================


def test_update_changes_only_given_fields(repository):
    created = repository.add_transaction(
        expense(20, description="Coffee", timestamp=utc(2024, 1, 1))
    )

    updated = repository.update_transaction(created.id, TransactionUpdate(amount=25))

    assert updated.amount == 25
    assert updated.description == "Coffee"
    assert updated.category == TransactionCategory.FOOD
    assert updated.timestamp == utc(2024, 1, 1)
    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert repository.get_transaction(created.id) == updated


def test_update_timestamps_strictly_increase(repository):
    created = repository.add_transaction(expense(1))
    first = repository.update_transaction(created.id, TransactionUpdate(amount=2))
    second = repository.update_transaction(created.id, TransactionUpdate(amount=3))
    assert created.updated_at < first.updated_at < second.updated_at


def test_update_clears_description_with_none(repository):
    created = repository.add_transaction(expense(12, description="Lunch"))

    kept = repository.update_transaction(created.id, TransactionUpdate(amount=14))
    cleared = repository.update_transaction(
        created.id, TransactionUpdate(description=None)
    )

    assert kept.description == "Lunch"
    assert not TransactionUpdate(description=None).is_empty()
    assert cleared.description is None
    assert cleared.amount == 14
    assert repository.get_transaction(created.id).description is None


def test_update_type_and_category_together(repository):
    created = repository.add_transaction(expense(100))
    updated = repository.update_transaction(
        created.id,
        TransactionUpdate(type=TransactionType.INCOME, category=TransactionCategory.GIFT),
    )
    assert updated.type == TransactionType.INCOME
    assert updated.category == TransactionCategory.GIFT


def test_update_rejects_category_mismatch(repository):
    created = repository.add_transaction(expense(100))

    with pytest.raises(ValueError):
        repository.update_transaction(
            created.id, TransactionUpdate(type=TransactionType.INCOME)
        )
    with pytest.raises(ValueError):
        repository.update_transaction(
            created.id, TransactionUpdate(category=TransactionCategory.SALARY)
        )

    assert repository.get_transaction(created.id) == created


def test_update_rejects_non_positive_amount():
    with pytest.raises(ValueError):
        TransactionUpdate(amount=0)


def test_update_missing_returns_none(repository):
    assert repository.update_transaction("missing", TransactionUpdate(amount=5)) is None


def test_empty_update_only_touches_updated_at(repository):
    created = repository.add_transaction(expense(8, description="Snack"))
    updated = repository.update_transaction(created.id, TransactionUpdate())

    assert TransactionUpdate().is_empty()
    assert updated.amount == created.amount
    assert updated.description == created.description
    assert updated.updated_at > created.updated_at


# =============================================================================
# Delete
# =============================================================================


def test_delete(repository):
    created = repository.add_transaction(expense(9))

    assert repository.delete_transaction(created.id) is True
    assert repository.get_transaction(created.id) is None
    assert repository.delete_transaction(created.id) is False


def test_signed_amount(repository, january):
    by_category = {t.category: t for t in january}
    assert by_category[TransactionCategory.SALARY].signed_amount == 3000
    assert by_category[TransactionCategory.FOOD].signed_amount == -50
