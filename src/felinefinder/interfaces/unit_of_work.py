"""Unit of Work port.

A booking handler reads, checks and patches a booking inside one ``with uow:``
block and calls `commit` before any calendar or notification call is made.
Leaving the block always calls `rollback`, which discards whatever was not
committed; after a commit it is a no-op.
"""

from __future__ import annotations

import abc
from types import TracebackType

from .booking_store import BookingStore


class AbstractUnitOfWork(abc.ABC):
    """Transaction boundary around the booking store."""

    bookings: BookingStore

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.rollback()

    @abc.abstractmethod
    def commit(self) -> None:
        """Make the patches of this block durable and visible to other readers."""

    @abc.abstractmethod
    def rollback(self) -> None:
        """Discard the patches made since the last commit."""
