"""Booking store adapters.

Two implementations of `BookingStore`:
  - `SqlAlchemyBookingStore`: durable, backed by the `bookings`/`booking_audit` tables.
  - `InMemoryBookingStore`: ephemeral, for tests and demos.
"""

from .memory import InMemoryBookingStore
from .sqlalchemy_store import SqlAlchemyBookingStore

__all__ = ["InMemoryBookingStore", "SqlAlchemyBookingStore"]
