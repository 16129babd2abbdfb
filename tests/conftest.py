"""Shared fixtures for the Budgie test suite."""

from datetime import datetime, timezone

import pytest

from budgie.db import BudgieRepository, Database
from budgie.models import TransactionCategory, TransactionInput, TransactionType
from budgie.services import PreferencesStore


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "budgie.db"


@pytest.fixture
def database(db_path):
    db = Database(db_path)
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def repository(database):
    return BudgieRepository(database)


@pytest.fixture
def preferences(tmp_path):
    return PreferencesStore(tmp_path / "preferences.env")


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def january(repository):
    """Salary of 3000 plus food 50 and transportation 30, all in January 2024."""
    return [
        repository.add_transaction(
            TransactionInput(
                amount=3000,
                type=TransactionType.INCOME,
                category=TransactionCategory.SALARY,
                timestamp=utc(2024, 1, 1, 9, 0),
            )
        ),
        repository.add_transaction(
            TransactionInput(
                amount=50,
                type=TransactionType.EXPENSE,
                category=TransactionCategory.FOOD,
                description="Groceries",
                timestamp=utc(2024, 1, 5, 18, 30),
            )
        ),
        repository.add_transaction(
            TransactionInput(
                amount=30,
                type=TransactionType.EXPENSE,
                category=TransactionCategory.TRANSPORTATION,
                timestamp=utc(2024, 1, 10, 8, 15),
            )
        ),
    ]
