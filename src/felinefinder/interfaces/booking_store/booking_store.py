"""Interface for the organization-scoped booking store."""

import abc
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from felinefinder.domain.booking import Booking


class BookingStore(abc.ABC):
    """Persistent collection of bookings, always queried per organization.

    The store is the sole arbiter of a booking's persisted state. `get` and
    `patch` are expected to run inside one unit of work so that a transition's
    read-modify-write cannot interleave with another transition on the same
    booking; `expected_version` is the last line of defence when it does.
    """

    @abc.abstractmethod
    def list(self, org_id: str) -> list[Booking]:
        """Return every booking of an organization.

        Args:
            org_id (str): The organization to list.

        Returns:
            list[Booking]: The bookings, in no guaranteed order.
        """

    @abc.abstractmethod
    def get(self, booking_id: str, org_id: str) -> Booking:
        """Return a booking by id, scoped to an organization.

        Implementations should lock the booking for the remainder of the
        current transaction where the backend supports it.

        Args:
            booking_id (str): The booking ID.
            org_id (str): The caller's organization.

        Raises:
            BookingNotFoundError: If the id is unknown or belongs to another organization.
        """

    @abc.abstractmethod
    def add(self, booking: Booking) -> None:
        """Persist a new booking, including its audit trail.

        Raises:
            DuplicateBookingIdError: If the booking id is already taken.
        """

    @abc.abstractmethod
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
        """Apply a partial update and return the new snapshot.

        One audit entry is appended per changed field and the version is
        incremented.

        Args:
            booking_id (str): The booking to patch.
            org_id (str): The caller's organization.
            fields (Mapping[str, Any]): Patchable booking attributes and their new values.
            expected_version (int): The version the caller based the patch on.
            changed_by (str): Who made the change (recorded in the audit trail).
            at (datetime): When the change happened (UTC).

        Raises:
            BookingNotFoundError: If the id is unknown or belongs to another organization.
            ConcurrentModificationError: If `expected_version` is not the stored version.
        """
