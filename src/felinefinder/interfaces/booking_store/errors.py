"""Errors raised by the BookingStore."""

from felinefinder.domain.errors import DomainError


class BookingStoreError(DomainError):
    """Base class for BookingStore errors."""


class BookingNotFoundError(BookingStoreError):
    """Raised when a booking id is unknown or belongs to another organization.

    Both cases produce the same error so callers cannot probe for bookings of
    other organizations.

    Attributes:
        booking_id (str): The booking ID that was looked up.
        org_id (str): The organization the lookup was scoped to.
    """

    def __init__(self, booking_id: str, org_id: str):
        super().__init__(f"Booking '{booking_id}' not found in organization '{org_id}'.")
        self.booking_id = booking_id
        self.org_id = org_id


class ConcurrentModificationError(BookingStoreError):
    """Raised when a patch is based on a stale booking version.

    Attributes:
        booking_id (str): The booking being patched.
        head (int): The version currently stored.
        expected (int): The version the caller read.
    """

    def __init__(self, booking_id: str, head: int, expected: int):
        super().__init__(
            f"Booking '{booking_id}' version conflict: head={head}, expected={expected}"
        )
        self.booking_id = booking_id
        self.head = head
        self.expected = expected


class DuplicateBookingIdError(BookingStoreError):
    """Raised when adding a booking whose id already exists.

    Attributes:
        booking_id (str): The duplicated booking ID.
    """

    def __init__(self, booking_id: str):
        super().__init__(f"Booking '{booking_id}' already exists.")
        self.booking_id = booking_id


class BookingStoreUnavailableError(BookingStoreError):
    """Raised when the backing database cannot be reached or rejects the operation."""
