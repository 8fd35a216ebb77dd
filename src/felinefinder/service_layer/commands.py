"""Module defining Commands."""

from dataclasses import dataclass

from felinefinder.domain.booking import DEFAULT_STATUS
from felinefinder.domain.value_objects import (
    BookingAction,
    BookingStatus,
    SubjectRef,
    TimeWindow,
)

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class CreateBooking(Command):
    """Command to propose a new booking for an organization."""

    org_id: str
    calendar_id: int
    adopter: SubjectRef
    cat: SubjectRef
    window: TimeWindow
    created_by: str
    volunteer: SubjectRef | None = None
    status: BookingStatus = DEFAULT_STATUS
    summary: str = ""
    description: str = ""
    notes: str | None = None


@dataclass(frozen=True)
class ApplyBookingAction(Command):
    """Command to apply a lifecycle action to a booking.

    `volunteer`, `window` and `notes` are only read by the actions that edit
    the corresponding field.
    """

    booking_id: str
    org_id: str
    action: BookingAction
    changed_by: str
    volunteer: SubjectRef | None = None
    window: TimeWindow | None = None
    notes: str | None = None


@dataclass(frozen=True)
class UpdateBookingNotes(Command):
    """Command to overwrite a booking's staff notes, in any status."""

    booking_id: str
    org_id: str
    notes: str | None
    changed_by: str


@dataclass(frozen=True)
class RetrySideEffects(Command):
    """Command to re-run an action's calendar/notification side effects only."""

    booking_id: str
    org_id: str
    action: BookingAction
