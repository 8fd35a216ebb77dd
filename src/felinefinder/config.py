"""Settings read from the environment, and where files live by default.

| Variable                                 | Used for                                  |
|------------------------------------------|-------------------------------------------|
| ``FELINEFINDER_DB_URL``                  | booking database (required by DB commands)|
| ``FELINEFINDER_ORG_ID``                  | organization the CLI acts for             |
| ``FELINEFINDER_STAFF``                   | name recorded in the audit trail          |
| ``FELINEFINDER_LAYOUTS_PATH``            | saved-layouts JSON file                   |
| ``FELINEFINDER_LOG_PATH``                | flight recorder output                    |
| ``FELINEFINDER_LOGGER_LEVELS``           | per-logger minimum levels                 |
| ``FELINEFINDER_FLIGHT_RECORDER_CAPACITY``| flight recorder buffer size               |
"""

import os
import sys
from importlib.resources import files
from pathlib import Path
from typing import TextIO

from alembic.config import Config
from platformdirs import user_data_dir, user_log_dir

APP_NAME = "felinefinder"

DB_URL_ENV = "FELINEFINDER_DB_URL"
ORG_ID_ENV = "FELINEFINDER_ORG_ID"
STAFF_ENV = "FELINEFINDER_STAFF"
LAYOUTS_PATH_ENV = "FELINEFINDER_LAYOUTS_PATH"
LOG_PATH_ENV = "FELINEFINDER_LOG_PATH"
LOGGER_LEVELS_ENV = "FELINEFINDER_LOGGER_LEVELS"
FLIGHT_RECORDER_CAPACITY_ENV = "FELINEFINDER_FLIGHT_RECORDER_CAPACITY"

LAYOUTS_FILENAME = "bookings-layouts.json"
LOG_FILENAME = "latest.log"
MIGRATIONS_PACKAGE = "felinefinder.adapters.db.alembic"

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """``FELINEFINDER_DB_URL`` is unset or empty."""


def get_db_url() -> str:
    """Return ``FELINEFINDER_DB_URL``.

    Raises:
        DatabaseUrlNotSetError: When the variable is unset or empty.
    """
    url = os.environ.get(DB_URL_ENV, "").strip()
    if not url:
        raise DatabaseUrlNotSetError
    return url


def get_layouts_path() -> Path:
    """``FELINEFINDER_LAYOUTS_PATH``, else a file in the user data directory."""
    if override := os.environ.get(LAYOUTS_PATH_ENV):
        return Path(override)
    return Path(user_data_dir(APP_NAME, appauthor=False, ensure_exists=True)) / LAYOUTS_FILENAME


def default_log_path() -> Path:
    """Flight recorder file in the user log directory."""
    return Path(user_log_dir(APP_NAME, appauthor=False, ensure_exists=True)) / LOG_FILENAME


def build_alembic_config(db_url: str | None = None, stdout: TextIO = sys.stdout) -> Config:
    """Alembic `Config` for the packaged booking migrations.

    There is no alembic.ini; only ``script_location`` and, when given,
    ``sqlalchemy.url`` are set.

    Args:
        db_url: Database to migrate. Commands that only read the migration
            scripts (``heads``, ``history``) can leave it out.
        stdout: Where Alembic prints status lines; tests pass a buffer.
    """
    cfg = Config(stdout=stdout)
    cfg.set_main_option(ALEMBIC_SCRIPT_LOCATION_KEY, str(files(MIGRATIONS_PACKAGE)))
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    return cfg
