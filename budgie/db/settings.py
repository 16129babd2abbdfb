"""
Relational settings repository.

The settings table holds exactly one row with a fixed ID, seeded during
initialization. It is never deleted, only updated.
"""

import logging

from budgie.config import (
    DEFAULT_CURRENCY,
    DEFAULT_DANGER_ZONE_AMOUNT,
    DEFAULT_NOTIFICATIONS_ENABLED,
    DEFAULT_THEME,
    SETTINGS_ROW_ID,
)
from budgie.models.settings import CurrencyCode, ThemeMode
from budgie.models.transaction import SettingsUpdate
from budgie.utils.timestamp import advance_past, to_millis, utc_now

from .base import BaseRepository
from .models import UserSettings

logger = logging.getLogger(__name__)


def _default_settings() -> UserSettings:
    now = utc_now()
    return UserSettings(
        id=SETTINGS_ROW_ID,
        danger_zone_amount=DEFAULT_DANGER_ZONE_AMOUNT,
        currency=CurrencyCode(DEFAULT_CURRENCY),
        theme=ThemeMode(DEFAULT_THEME),
        notifications_enabled=DEFAULT_NOTIFICATIONS_ENABLED,
        created_at=now,
        updated_at=now,
    )


class SettingsRepository(BaseRepository):
    """Repository for the singleton settings row."""

    def get(self) -> UserSettings:
        """
        Get the settings row.

        Falls back to the seed defaults if the row is missing, which only
        happens when the table was modified outside this package.
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM settings WHERE id = ?", (SETTINGS_ROW_ID,)
            ).fetchone()

        if row is None:
            logger.warning("Settings row missing, returning defaults")
            return _default_settings()
        return UserSettings.from_row(row)

    def update(self, changes: SettingsUpdate) -> UserSettings:
        """
        Apply a partial update to the settings row.

        The read and the write share one unit of work. A missing row is
        re-created from the seed defaults with the changes applied.

        Args:
            changes: Fields to change; None keeps the stored value

        Returns:
            The updated UserSettings, as persisted
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM settings WHERE id = ?", (SETTINGS_ROW_ID,)
            ).fetchone()

            if row is None:
                logger.warning("Settings row missing, re-creating it from defaults")
                current = _default_settings()
            else:
                current = UserSettings.from_row(row)

            updated = UserSettings(
                id=current.id,
                danger_zone_amount=(
                    changes.danger_zone_amount
                    if changes.danger_zone_amount is not None
                    else current.danger_zone_amount
                ),
                currency=(
                    changes.currency if changes.currency is not None else current.currency
                ),
                theme=changes.theme if changes.theme is not None else current.theme,
                notifications_enabled=(
                    changes.notifications_enabled
                    if changes.notifications_enabled is not None
                    else current.notifications_enabled
                ),
                created_at=current.created_at,
                updated_at=advance_past(current.updated_at),
            )

            conn.execute(
                """
                INSERT INTO settings (
                    id, dangerZoneAmount, currency, theme,
                    notificationsEnabled, createdAt, updatedAt
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    dangerZoneAmount = excluded.dangerZoneAmount,
                    currency = excluded.currency,
                    theme = excluded.theme,
                    notificationsEnabled = excluded.notificationsEnabled,
                    updatedAt = excluded.updatedAt
                """,
                (
                    updated.id,
                    updated.danger_zone_amount,
                    updated.currency.value,
                    updated.theme.value,
                    1 if updated.notifications_enabled else 0,
                    to_millis(updated.created_at),
                    to_millis(updated.updated_at),
                ),
            )

        logger.info("Settings updated")
        return updated
