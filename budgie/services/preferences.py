"""
Key-value preferences store.

Device-level app settings kept apart from the relational store. Every
preference is an independently addressable, string-encoded key in a dotenv
file managed with python-dotenv; each getter returns a hardcoded default
when its key is absent.
"""

import logging
import re
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Union

from dotenv import dotenv_values, set_key, unset_key

from budgie.config import (
    DEFAULT_PREFERENCES_PATH,
    PREFERENCES_KEY_PREFIX,
)
from budgie.models.category import TransactionType
from budgie.models.settings import (
    CURRENCY_INFO,
    WEEK_DAYS,
    AppSettings,
    CurrencyCode,
    ThemeMode,
)
from budgie.utils.timestamp import from_millis, to_millis

logger = logging.getLogger(__name__)


class PreferenceKey(str, Enum):
    """Storage key of every known preference."""

    CURRENCY = PREFERENCES_KEY_PREFIX + "currency"
    THEME = PREFERENCES_KEY_PREFIX + "theme"
    NOTIFICATIONS_ENABLED = PREFERENCES_KEY_PREFIX + "notificationsEnabled"
    DAILY_REMINDER_TIME = PREFERENCES_KEY_PREFIX + "dailyReminderTime"
    BIOMETRIC_ENABLED = PREFERENCES_KEY_PREFIX + "biometricEnabled"
    ONBOARDING_COMPLETED = PREFERENCES_KEY_PREFIX + "onboardingCompleted"
    LAST_SYNC_TIME = PREFERENCES_KEY_PREFIX + "lastSyncTime"
    DEFAULT_TRANSACTION_TYPE = PREFERENCES_KEY_PREFIX + "defaultTransactionType"
    WEEK_START_DAY = PREFERENCES_KEY_PREFIX + "weekStartDay"


DEFAULTS = AppSettings()

REMINDER_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class PreferencesStore:
    """
    Independent, individually defaulted preferences.

    Reads never raise for missing or malformed values; they fall back to
    the default. There is no cross-key atomicity.
    """

    def __init__(self, path: Optional[Union[Path, str]] = None):
        """
        Args:
            path: Location of the preferences file. Defaults to
                data/preferences.env
        """
        self.path = Path(path or DEFAULT_PREFERENCES_PATH)

    # =========================================================================
    # Raw key access
    # =========================================================================

    def _read(self, key: PreferenceKey) -> Optional[str]:
        if not self.path.exists():
            return None
        return dotenv_values(self.path).get(key.value)

    def _write(self, key: PreferenceKey, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)
        set_key(self.path, key.value, value)
        logger.debug(f"Preference {key.value} set to {value!r}")

    def _remove(self, key: PreferenceKey) -> None:
        # unset_key warns on missing keys; absence is already the goal
        if self._read(key) is None:
            return
        unset_key(self.path, key.value)
        logger.debug(f"Preference {key.value} removed")

    def _read_enum(self, key: PreferenceKey, enum_cls, default):
        value = self._read(key)
        if value is None:
            return default
        try:
            return enum_cls(value)
        except ValueError:
            logger.warning(f"Invalid value {value!r} for {key.value}, using default")
            return default

    def _read_bool(self, key: PreferenceKey, default: bool) -> bool:
        value = self._read(key)
        if value is None:
            return default
        return value == "true"

    # =========================================================================
    # Currency
    # =========================================================================

    def get_currency(self) -> CurrencyCode:
        return self._read_enum(PreferenceKey.CURRENCY, CurrencyCode, DEFAULTS.currency)

    def set_currency(self, currency: CurrencyCode) -> None:
        self._write(PreferenceKey.CURRENCY, CurrencyCode(currency).value)

    def currency_info(self) -> dict:
        """Symbol and name for the current currency."""
        return CURRENCY_INFO[self.get_currency()]

    # =========================================================================
    # Theme
    # =========================================================================

    def get_theme(self) -> ThemeMode:
        return self._read_enum(PreferenceKey.THEME, ThemeMode, DEFAULTS.theme)

    def set_theme(self, theme: ThemeMode) -> None:
        self._write(PreferenceKey.THEME, ThemeMode(theme).value)

    # =========================================================================
    # Notifications
    # =========================================================================

    def get_notifications_enabled(self) -> bool:
        return self._read_bool(
            PreferenceKey.NOTIFICATIONS_ENABLED, DEFAULTS.notifications_enabled
        )

    def set_notifications_enabled(self, enabled: bool) -> None:
        self._write(PreferenceKey.NOTIFICATIONS_ENABLED, _encode_bool(enabled))

    def get_daily_reminder_time(self) -> Optional[str]:
        value = self._read(PreferenceKey.DAILY_REMINDER_TIME)
        if value is None:
            return DEFAULTS.daily_reminder_time
        if not REMINDER_TIME_PATTERN.match(value):
            logger.warning(f"Invalid reminder time {value!r}, using default")
            return DEFAULTS.daily_reminder_time
        return value

    def set_daily_reminder_time(self, time: Optional[str]) -> None:
        """
        Set the daily reminder time as HH:MM, or remove it with None.

        Raises:
            ValueError: If the time is not a valid HH:MM string
        """
        if time is None:
            self._remove(PreferenceKey.DAILY_REMINDER_TIME)
            return
        if not REMINDER_TIME_PATTERN.match(time):
            raise ValueError(f"Reminder time must be HH:MM, got {time!r}")
        self._write(PreferenceKey.DAILY_REMINDER_TIME, time)

    # =========================================================================
    # Security
    # =========================================================================

    def get_biometric_enabled(self) -> bool:
        return self._read_bool(PreferenceKey.BIOMETRIC_ENABLED, DEFAULTS.biometric_enabled)

    def set_biometric_enabled(self, enabled: bool) -> None:
        self._write(PreferenceKey.BIOMETRIC_ENABLED, _encode_bool(enabled))

    # =========================================================================
    # App state
    # =========================================================================

    def get_onboarding_completed(self) -> bool:
        return self._read_bool(
            PreferenceKey.ONBOARDING_COMPLETED, DEFAULTS.onboarding_completed
        )

    def set_onboarding_completed(self, completed: bool) -> None:
        self._write(PreferenceKey.ONBOARDING_COMPLETED, _encode_bool(completed))

    def is_first_launch(self) -> bool:
        return not self.get_onboarding_completed()

    def get_last_sync_time(self) -> Optional[datetime]:
        value = self._read(PreferenceKey.LAST_SYNC_TIME)
        if value is None:
            return DEFAULTS.last_sync_time
        try:
            return from_millis(int(value))
        except ValueError:
            logger.warning(f"Invalid last sync time {value!r}, using default")
            return DEFAULTS.last_sync_time

    def set_last_sync_time(self, time: Optional[datetime]) -> None:
        if time is None:
            self._remove(PreferenceKey.LAST_SYNC_TIME)
            return
        self._write(PreferenceKey.LAST_SYNC_TIME, str(to_millis(time)))

    # =========================================================================
    # Transaction defaults
    # =========================================================================

    def get_default_transaction_type(self) -> TransactionType:
        return self._read_enum(
            PreferenceKey.DEFAULT_TRANSACTION_TYPE,
            TransactionType,
            DEFAULTS.default_transaction_type,
        )

    def set_default_transaction_type(self, transaction_type: TransactionType) -> None:
        self._write(
            PreferenceKey.DEFAULT_TRANSACTION_TYPE,
            TransactionType(transaction_type).value,
        )

    def get_week_start_day(self) -> int:
        """Week start day, 0 = Sunday through 6 = Saturday."""
        value = self._read(PreferenceKey.WEEK_START_DAY)
        if value is None:
            return DEFAULTS.week_start_day
        try:
            day = int(value)
        except ValueError:
            day = -1
        if not 0 <= day < len(WEEK_DAYS):
            logger.warning(f"Invalid week start day {value!r}, using default")
            return DEFAULTS.week_start_day
        return day

    def set_week_start_day(self, day: int) -> None:
        """
        Raises:
            ValueError: If day is not between 0 (Sunday) and 6 (Saturday)
        """
        if isinstance(day, bool) or not 0 <= int(day) < len(WEEK_DAYS):
            raise ValueError(f"week start day must be between 0 and 6, got {day}")
        self._write(PreferenceKey.WEEK_START_DAY, str(int(day)))

    # =========================================================================
    # Bulk operations
    # =========================================================================

    def get_all(self) -> AppSettings:
        """
        Read every preference into one snapshot.

        Each key is read independently, so a concurrent write to one key may
        or may not be reflected.
        """
        return AppSettings(
            currency=self.get_currency(),
            theme=self.get_theme(),
            notifications_enabled=self.get_notifications_enabled(),
            daily_reminder_time=self.get_daily_reminder_time(),
            biometric_enabled=self.get_biometric_enabled(),
            onboarding_completed=self.get_onboarding_completed(),
            last_sync_time=self.get_last_sync_time(),
            default_transaction_type=self.get_default_transaction_type(),
            week_start_day=self.get_week_start_day(),
        )

    def set(self, name: str, value: Any) -> None:
        """
        Set a preference by its AppSettings field name.

        Raises:
            KeyError: If the name is not a known preference
        """
        setters: dict[str, Callable[[Any], None]] = {
            "currency": self.set_currency,
            "theme": self.set_theme,
            "notifications_enabled": self.set_notifications_enabled,
            "daily_reminder_time": self.set_daily_reminder_time,
            "biometric_enabled": self.set_biometric_enabled,
            "onboarding_completed": self.set_onboarding_completed,
            "last_sync_time": self.set_last_sync_time,
            "default_transaction_type": self.set_default_transaction_type,
            "week_start_day": self.set_week_start_day,
        }
        if name not in setters:
            raise KeyError(f"Unknown preference: {name}")
        setters[name](value)

    def reset_all(self) -> None:
        """
        Remove every known preference key in one rewrite of the file.

        Subsequent reads fall back to defaults. Keys outside the known set
        are preserved.
        """
        if not self.path.exists():
            return

        known = {key.value for key in PreferenceKey}
        foreign = {
            key: value
            for key, value in dotenv_values(self.path).items()
            if key not in known and value is not None
        }

        self.path.unlink()
        if foreign:
            self.path.touch()
        for key, value in foreign.items():
            set_key(self.path, key, value)

        logger.info("All preferences reset to defaults")


def _encode_bool(value: bool) -> str:
    return "true" if value else "false"
