"""Fixtures for BookingStore contract tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from felinefinder.adapters.bookings import InMemoryBookingStore, SqlAlchemyBookingStore
from felinefinder.interfaces.booking_store import BookingStore


@pytest.fixture(params=["memory", "sqlite_engine_memory", "sqlite_engine_file"])
def booking_store(request: pytest.FixtureRequest) -> Iterator[BookingStore]:
    """Return an empty BookingStore for each backend.

    SQL-backed stores run inside one connection whose transaction is rolled
    back after the test.
    """
    if request.param == "memory":
        yield InMemoryBookingStore()
        return

    engine = request.getfixturevalue(request.param)
    with engine.connect() as connection:
        yield SqlAlchemyBookingStore(connection)
        connection.rollback()
