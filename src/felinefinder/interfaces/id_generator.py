"""Booking id generator port."""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Hands out ids for new bookings.

    Ids are opaque strings, unique for the lifetime of the store. They are
    never reused, not even for a cancelled booking.
    """

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return an id no earlier call has returned."""
