"""SQLite engines for store, schema and migration tests.

Two flavours, both built with `make_engine` so the PRAGMAs and the
``BEGIN IMMEDIATE`` hook are in place:

- ``sqlite_engine_memory``: tables from ``metadata.create_all``; fastest.
- ``sqlite_engine_file``: a temp file migrated to head with Alembic, so it
  has exactly the schema the CLI creates and can be shared between threads.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from alembic import command
from sqlalchemy.engine import URL

import felinefinder.adapters.bookings.schema  # noqa: F401 # pylint: disable=unused-import
from felinefinder import config
from felinefinder.adapters.db.engine import make_engine
from felinefinder.adapters.db.metadata import metadata

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def migrate_to_head(url: str) -> None:
    command.upgrade(config.build_alembic_config(url), "head")


@pytest.fixture
def sqlite_url_file(tmp_path: Path) -> str:
    """URL of an empty SQLite file; nothing has been migrated yet."""
    url = URL.create("sqlite+pysqlite", database=str(tmp_path / "bookings.db"))
    return url.render_as_string()


@pytest.fixture
def sqlite_engine_memory() -> Iterator[Engine]:
    engine = make_engine("sqlite+pysqlite:///:memory:")
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_engine_file(sqlite_url_file: str) -> Iterator[Engine]:
    migrate_to_head(sqlite_url_file)
    engine = make_engine(sqlite_url_file)
    try:
        yield engine
    finally:
        engine.dispose()
