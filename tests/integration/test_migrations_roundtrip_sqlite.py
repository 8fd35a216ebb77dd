"""Alembic round-trip smoke test for SQLite.

Upgrading to head creates the booking tables; downgrading to base drops them.
A file (not :memory:) keeps Alembic's changes visible across connections.
"""

from __future__ import annotations

from pathlib import Path

from alembic import command
from sqlalchemy import create_engine, inspect

from felinefinder import config
from felinefinder.adapters.bookings.schema import booking_audit, bookings

TABLES = {"bookings", "booking_audit"}


def test_alembic_upgrade_downgrade_roundtrip_sqlite_tmp(tmp_path: Path):
    url = f"sqlite:///{tmp_path / 'felinefinder.db'}"
    command.upgrade(config.build_alembic_config(url), "head")
    eng = create_engine(url)

    assert TABLES <= set(inspect(eng).get_table_names())
    index_names = {ix["name"] for ix in inspect(eng).get_indexes("bookings")}
    assert any(name.startswith("ix_bookings_") for name in index_names)

    command.downgrade(config.build_alembic_config(url), "base")

    assert not TABLES & set(inspect(eng).get_table_names())
    eng.dispose()


def test_migrated_schema_matches_metadata(sqlite_engine_file):
    """The migration and `metadata` agree on columns (no drift)."""
    inspector = inspect(sqlite_engine_file)
    for table in (bookings, booking_audit):
        migrated = {c["name"] for c in inspector.get_columns(table.name)}
        assert migrated == {c.name for c in table.columns}, table.name
