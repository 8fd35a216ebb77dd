"""Unit tests for the custom column types in felinefinder.adapters.db.sa_types.

These exercise the type decorators directly, without a database:

- UTCDateTime normalizes naive and offset datetimes to UTC (naive on SQLite)
  and hands aware UTC datetimes back.
- EnumValue stores an Enum member's value and reads the member back.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import dialect as PostgresDialect
from sqlalchemy.dialects.sqlite import dialect as SQLiteDialect

from felinefinder.adapters.db.sa_types import EnumValue, UTCDateTime
from felinefinder.domain.value_objects import BookingStatus

MINUS_7 = timezone(timedelta(hours=-7))


def test_utcdatetime_python_type():
    assert UTCDateTime().python_type is datetime


@pytest.mark.parametrize(
    "dialect", [SQLiteDialect(), PostgresDialect()], ids=["sqlite", "postgres"]
)
def test_bind_none_returns_none(dialect):
    assert UTCDateTime().process_bind_param(None, dialect) is None


def test_bind_on_sqlite_is_naive_utc():
    out = UTCDateTime().process_bind_param(
        datetime(2025, 1, 1, 5, 0, tzinfo=MINUS_7), SQLiteDialect()
    )
    assert out == datetime(2025, 1, 1, 12, 0)
    assert out.tzinfo is None


def test_bind_elsewhere_is_aware_utc():
    out = UTCDateTime().process_bind_param(
        datetime(2025, 1, 1, 5, 0, tzinfo=MINUS_7), PostgresDialect()
    )
    assert out == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert out.utcoffset() == timedelta(0)


def test_naive_input_is_taken_as_utc():
    out = UTCDateTime().process_bind_param(datetime(2025, 1, 1, 12), PostgresDialect())
    assert out == datetime(2025, 1, 1, 12, tzinfo=timezone.utc)


def test_result_is_aware_utc():
    out = UTCDateTime().process_result_value(datetime(2025, 1, 1, 12), SQLiteDialect())
    assert out.tzinfo is timezone.utc


def test_literal_compile_sqlite():
    expr = sa.literal(datetime(2025, 1, 1, 5, 0, tzinfo=MINUS_7), type_=UTCDateTime())
    sql = str(
        sa.select(expr.label("dt")).compile(
            dialect=SQLiteDialect(), compile_kwargs={"literal_binds": True}
        )
    )
    assert re.search(r"2025-01-01 12:00:00(\.\d+)?", sql)


def test_enum_value_roundtrip():
    col = EnumValue(BookingStatus)
    stored = col.process_bind_param(BookingStatus.IN_PROGRESS, SQLiteDialect())
    assert stored == "in-progress"
    assert col.process_result_value(stored, SQLiteDialect()) is BookingStatus.IN_PROGRESS
    assert col.process_bind_param("adopted", SQLiteDialect()) == "adopted"
    assert col.process_bind_param(None, SQLiteDialect()) is None
    assert col.python_type is BookingStatus


def test_enum_value_rejects_unknown():
    with pytest.raises(ValueError):
        EnumValue(BookingStatus).process_bind_param("lost", SQLiteDialect())
