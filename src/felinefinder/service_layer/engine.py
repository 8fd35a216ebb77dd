"""Facade over the message bus for callers that prefer method calls to commands.

The CLI and tests use `LifecycleEngine`; it builds the command, dispatches it
and returns the handler's result unchanged.
"""

from __future__ import annotations

from felinefinder.domain.booking import DEFAULT_STATUS, Booking
from felinefinder.domain.lifecycle import allowed_actions
from felinefinder.domain.value_objects import (
    BookingAction,
    BookingStatus,
    SubjectRef,
    TimeWindow,
)

from . import commands, queries
from .messagebus import MessageBus
from .outcomes import ActionOutcome


class LifecycleEngine:
    """Booking lifecycle operations, scoped per call to one organization."""

    def __init__(self, bus: MessageBus) -> None:
        self.bus = bus

    # --- Writes ---

    def create(  # pylint: disable=too-many-arguments
        self,
        *,
        org_id: str,
        calendar_id: int,
        adopter: SubjectRef,
        cat: SubjectRef,
        window: TimeWindow,
        created_by: str,
        volunteer: SubjectRef | None = None,
        status: BookingStatus = DEFAULT_STATUS,
        summary: str = "",
        description: str = "",
        notes: str | None = None,
    ) -> Booking:
        return self.bus.handle(
            commands.CreateBooking(
                org_id=org_id,
                calendar_id=calendar_id,
                adopter=adopter,
                cat=cat,
                window=window,
                created_by=created_by,
                volunteer=volunteer,
                status=status,
                summary=summary,
                description=description,
                notes=notes,
            )
        )

    def apply(  # pylint: disable=too-many-arguments
        self,
        booking_id: str,
        org_id: str,
        action: BookingAction,
        *,
        changed_by: str,
        volunteer: SubjectRef | None = None,
        window: TimeWindow | None = None,
        notes: str | None = None,
    ) -> ActionOutcome:
        """Apply `action` to a booking.

        Raises:
            BookingNotFoundError: If the booking is unknown to `org_id`.
            InvalidTransitionError: If the action is not allowed from the current status.
            BookingValidationError: If a required payload is missing.
            ConcurrentModificationError: If the booking changed underneath the action.
        """
        return self.bus.handle(
            commands.ApplyBookingAction(
                booking_id=booking_id,
                org_id=org_id,
                action=action,
                changed_by=changed_by,
                volunteer=volunteer,
                window=window,
                notes=notes,
            )
        )

    def update_notes(
        self, booking_id: str, org_id: str, notes: str | None, *, changed_by: str
    ) -> Booking:
        return self.bus.handle(
            commands.UpdateBookingNotes(
                booking_id=booking_id, org_id=org_id, notes=notes, changed_by=changed_by
            )
        )

    def retry_side_effects(
        self, booking_id: str, org_id: str, action: BookingAction
    ) -> ActionOutcome:
        return self.bus.handle(
            commands.RetrySideEffects(
                booking_id=booking_id, org_id=org_id, action=action
            )
        )

    # --- Reads ---

    def list(self, org_id: str) -> list[Booking]:
        return queries.list_bookings(self.bus.uow, org_id)

    def get(self, booking_id: str, org_id: str) -> Booking:
        return queries.get_booking(self.bus.uow, booking_id, org_id)

    @staticmethod
    def allowed_actions(booking: Booking) -> tuple[BookingAction, ...]:
        return allowed_actions(booking.status)
