"""Read-side helpers: fetch bookings through a unit of work without writing."""

from felinefinder.domain.booking import Booking
from felinefinder.interfaces.unit_of_work import AbstractUnitOfWork


def list_bookings(uow: AbstractUnitOfWork, org_id: str) -> list[Booking]:
    """Return every booking of `org_id`."""
    with uow:
        return uow.bookings.list(org_id)


def get_booking(uow: AbstractUnitOfWork, booking_id: str, org_id: str) -> Booking:
    """Return one booking of `org_id`.

    Raises:
        BookingNotFoundError: If the id is unknown or belongs to another organization.
    """
    with uow:
        return uow.bookings.get(booking_id, org_id)
