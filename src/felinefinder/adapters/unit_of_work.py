"""Unit of Work adapters.

`SqlAlchemyUnitOfWork` opens one connection per ``with`` block; on SQLite the
first statement of the block takes the database write lock (see
`felinefinder.adapters.db.engine`), elsewhere the store locks the booking row.

`InMemoryUnitOfWork` holds the in-memory store's lock for the whole block and
restores the state it had at the start of the block, or at the last commit,
on rollback.

Neither object may be shared between threads that use it at the same time;
bootstrap one per thread.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from felinefinder.adapters.bookings import InMemoryBookingStore, SqlAlchemyBookingStore
from felinefinder.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

    from felinefinder.domain.booking import Booking


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """A connection, and the booking store bound to it, for one block."""

    connection: Connection

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self.connection = self.engine.connect()
        self.bookings = SqlAlchemyBookingStore(self.connection)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self.connection.close()

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Snapshot-and-restore transactions over an `InMemoryBookingStore`.

    `committed` tells whether the current block has committed; handler tests
    assert on it.
    """

    def __init__(self, store: InMemoryBookingStore | None = None) -> None:
        self.bookings = self._store = store or InMemoryBookingStore()
        self._checkpoint: dict[str, Booking] = {}
        self.committed = False

    def __enter__(self) -> InMemoryUnitOfWork:
        self._store.lock.acquire()
        self._checkpoint = self._store.snapshot()
        self.committed = False
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._store.lock.release()

    def commit(self) -> None:
        self._checkpoint = self._store.snapshot()
        self.committed = True

    def rollback(self) -> None:
        self._store.restore(self._checkpoint)
