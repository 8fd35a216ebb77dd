"""Booking store interface and related errors."""

from .booking_store import BookingStore
from .errors import (
    BookingNotFoundError,
    BookingStoreError,
    BookingStoreUnavailableError,
    ConcurrentModificationError,
    DuplicateBookingIdError,
)

__all__ = [
    "BookingStore",
    "BookingStoreError",
    "BookingStoreUnavailableError",
    "BookingNotFoundError",
    "ConcurrentModificationError",
    "DuplicateBookingIdError",
]
