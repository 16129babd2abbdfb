"""
Configuration module for Budgie.

Contains constants, settings, and configuration values used throughout the application.
"""

import logging
import os
import sys
from pathlib import Path


# Application paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("BUDGIE_DATA_DIR", PROJECT_ROOT / "data"))
LOG_DIR = PROJECT_ROOT / "logs"

# Database configuration
DEFAULT_DB_PATH = DATA_DIR / "budgie.db"
DB_TIMEOUT = 10.0  # seconds

# Preferences (key-value) configuration
DEFAULT_PREFERENCES_PATH = DATA_DIR / "preferences.env"
PREFERENCES_KEY_PREFIX = "settings."

# Relational settings defaults (seeded once)
SETTINGS_ROW_ID = "default"
DEFAULT_DANGER_ZONE_AMOUNT = 0.0
DEFAULT_CURRENCY = "USD"
DEFAULT_THEME = "system"
DEFAULT_NOTIFICATIONS_ENABLED = True

# Preference defaults
DEFAULT_WEEK_START_DAY = 1  # Monday
DEFAULT_TRANSACTION_TYPE = "expense"

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "budgie.log"
LOG_LEVEL = os.getenv("BUDGIE_LOG_LEVEL", "INFO")


def ensure_directories():
    """Ensure required directories exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    LOG_DIR.mkdir(parents=True, exist_ok=True)


def get_log_level():
    """Get the configured log level."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    level = os.getenv("BUDGIE_LOG_LEVEL", LOG_LEVEL)
    return level_map.get(level.upper(), logging.INFO)


def configure_logging(log_to_file: bool = True):
    """Configure root logging for scripts and embedding applications."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        ensure_directories()
        handlers.append(logging.FileHandler(LOG_DIR / LOG_FILE))

    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT, handlers=handlers)
