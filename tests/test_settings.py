"""Tests for the relational settings row."""

import pytest

from budgie.config import SETTINGS_ROW_ID
from budgie.models import CurrencyCode, SettingsUpdate, ThemeMode


def test_seeded_defaults(repository):
    settings = repository.get_settings()

    assert settings.id == SETTINGS_ROW_ID
    assert settings.danger_zone_amount == 0
    assert settings.currency == CurrencyCode.USD
    assert settings.theme == ThemeMode.SYSTEM
    assert settings.notifications_enabled is True


def test_partial_update(repository):
    before = repository.get_settings()

    updated = repository.update_settings(
        SettingsUpdate(danger_zone_amount=150, theme="dark")
    )

    assert updated.danger_zone_amount == 150
    assert updated.theme == ThemeMode.DARK
    assert updated.currency == before.currency
    assert updated.notifications_enabled == before.notifications_enabled
    assert updated.created_at == before.created_at
    assert repository.get_settings() == updated


def test_update_notifications_off(repository):
    repository.update_settings(SettingsUpdate(notifications_enabled=False))
    assert repository.get_settings().notifications_enabled is False


def test_update_persists_across_reopen(database, repository):
    repository.update_settings(SettingsUpdate(currency=CurrencyCode.GBP))
    database.close()
    database.initialize()

    assert repository.get_settings().currency == CurrencyCode.GBP


def test_rejects_negative_danger_zone():
    with pytest.raises(ValueError):
        SettingsUpdate(danger_zone_amount=-1)


def test_rejects_unknown_theme():
    with pytest.raises(ValueError):
        SettingsUpdate(theme="sepia")


def test_rapid_updates_strictly_advance_updated_at(repository):
    before = repository.get_settings()
    first = repository.update_settings(SettingsUpdate(theme="dark"))
    second = repository.update_settings(SettingsUpdate(theme="light"))

    assert before.updated_at < first.updated_at < second.updated_at
    assert repository.get_settings().updated_at == second.updated_at


def test_update_recreates_missing_row(database, repository):
    database.connection.execute("DELETE FROM settings")
    database.connection.commit()

    updated = repository.update_settings(SettingsUpdate(theme="dark"))
    count = database.connection.execute("SELECT COUNT(*) FROM settings").fetchone()[0]

    assert count == 1
    assert updated.id == SETTINGS_ROW_ID
    assert updated.theme == ThemeMode.DARK
    assert updated.currency == CurrencyCode.USD
    assert repository.get_settings() == updated
