"""In memory booking store implementation.

All bookings are stored in memory and lost when the instance is discarded.
Use for unit tests, prototyping, or scenarios where durability is not required.
"""

from collections.abc import Mapping
from datetime import datetime
from threading import RLock
from typing import Any

from felinefinder.domain.booking import Booking
from felinefinder.interfaces.booking_store import (
    BookingNotFoundError,
    BookingStore,
    ConcurrentModificationError,
    DuplicateBookingIdError,
)


class InMemoryBookingStore(BookingStore):
    """In-memory BookingStore for testing and non-durable use cases.

    - Non-durable: all data is lost when the instance is discarded.
    - Snapshots are immutable, so returned bookings can be shared freely.
    - `lock` serializes whole transitions when held by a unit of work.
    """

    def __init__(self, bookings: Mapping[str, Booking] | None = None):
        self._bookings: dict[str, Booking] = dict(bookings or {})
        self.lock = RLock()

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def list(self, org_id: str) -> list[Booking]:
        with self.lock:
            return [b for b in self._bookings.values() if b.org_id == org_id]

    def get(self, booking_id: str, org_id: str) -> Booking:
        with self.lock:
            booking = self._bookings.get(booking_id)
        if booking is None or booking.org_id != org_id:
            raise BookingNotFoundError(booking_id, org_id)
        return booking

    def add(self, booking: Booking) -> None:
        with self.lock:
            if booking.booking_id in self._bookings:
                raise DuplicateBookingIdError(booking.booking_id)
            self._bookings[booking.booking_id] = booking

    def patch(  # pylint: disable=too-many-arguments
        self,
        booking_id: str,
        org_id: str,
        fields: Mapping[str, Any],
        *,
        expected_version: int,
        changed_by: str,
        at: datetime,
    ) -> Booking:
        with self.lock:
            current = self.get(booking_id, org_id)
            if current.version != expected_version:
                raise ConcurrentModificationError(
                    booking_id, current.version, expected_version
                )
            updated = current.patched(fields, changed_by=changed_by, at=at)
            self._bookings[booking_id] = updated
            return updated

    # --------------------------------------------------------------------- #
    # Test helpers
    # --------------------------------------------------------------------- #

    def snapshot(self) -> dict[str, Booking]:
        """Return a shallow copy of the stored bookings, keyed by id."""
        with self.lock:
            return dict(self._bookings)

    def restore(self, bookings: Mapping[str, Booking]) -> None:
        """Replace the stored bookings wholesale (used to roll back)."""
        with self.lock:
            self._bookings = dict(bookings)
