"""Handlers for the booking lifecycle.

Every write handler reads and patches the booking inside one unit of work and
commits before any calendar or notification call is made. Side-effect failures
are logged and returned in the `ActionOutcome`; they never undo the commit.
"""

import logging
from collections.abc import Callable
from typing import Any

from felinefinder.domain.booking import Booking
from felinefinder.domain.lifecycle import ActionPayload, check_retry, plan_action
from felinefinder.domain.value_objects import CalendarAction, MessageType
from felinefinder.interfaces.id_generator import IdGenerator
from felinefinder.interfaces.side_effects import CalendarSync, NotificationSender
from felinefinder.interfaces.unit_of_work import AbstractUnitOfWork
from felinefinder.service_layer import commands
from felinefinder.service_layer.outcomes import (
    ActionOutcome,
    SideEffectFailure,
    SideEffectKind,
)
from felinefinder.utils.clock import Clock

logger = logging.getLogger(__name__)


def create_booking(
    cmd: commands.CreateBooking,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    clock: Clock,
) -> Booking:
    """Propose a new booking and persist it with its `created` audit entry."""

    booking = Booking.propose(
        booking_id=id_generator.new_id(),
        org_id=cmd.org_id,
        calendar_id=cmd.calendar_id,
        adopter=cmd.adopter,
        cat=cmd.cat,
        window=cmd.window,
        created_by=cmd.created_by,
        at=clock(),
        volunteer=cmd.volunteer,
        status=cmd.status,
        summary=cmd.summary,
        description=cmd.description,
        notes=cmd.notes,
    )

    with uow:
        uow.bookings.add(booking)
        uow.commit()

    logger.info(
        "Created booking %s (%s with %s) in status %s",
        booking.booking_id,
        booking.adopter.display_name,
        booking.cat.display_name,
        booking.status.value,
    )
    return booking


def apply_booking_action(
    cmd: commands.ApplyBookingAction,
    uow: AbstractUnitOfWork,
    calendar: CalendarSync,
    notifier: NotificationSender,
    clock: Clock,
) -> ActionOutcome:
    """Validate and apply a lifecycle action, then run its side effects."""

    payload = ActionPayload(volunteer=cmd.volunteer, window=cmd.window, notes=cmd.notes)

    with uow:
        before = uow.bookings.get(cmd.booking_id, cmd.org_id)
        plan = plan_action(before, cmd.action, payload)
        booking = before
        if plan.writes:
            booking = uow.bookings.patch(
                before.booking_id,
                before.org_id,
                plan.fields,
                expected_version=before.version,
                changed_by=cmd.changed_by,
                at=clock(),
            )
            uow.commit()

    if plan.writes:
        logger.info(
            "Applied %s to booking %s: %s -> %s (version %d)",
            cmd.action.value,
            booking.booking_id,
            before.status.value,
            booking.status.value,
            booking.version,
        )
    else:
        logger.info(
            "Applied %s to booking %s without changes%s",
            cmd.action.value,
            booking.booking_id,
            " (replay)" if plan.replay else "",
        )

    return run_side_effects(
        booking, plan.calendar, plan.notification, calendar, notifier
    )


def update_booking_notes(
    cmd: commands.UpdateBookingNotes,
    uow: AbstractUnitOfWork,
    clock: Clock,
) -> Booking:
    """Overwrite a booking's notes; a no-op when the notes are unchanged."""

    with uow:
        booking = uow.bookings.get(cmd.booking_id, cmd.org_id)
        if not booking.diff({"notes": cmd.notes}):
            return booking
        booking = uow.bookings.patch(
            booking.booking_id,
            booking.org_id,
            {"notes": cmd.notes},
            expected_version=booking.version,
            changed_by=cmd.changed_by,
            at=clock(),
        )
        uow.commit()

    logger.info("Updated notes of booking %s", booking.booking_id)
    return booking


def retry_side_effects(
    cmd: commands.RetrySideEffects,
    uow: AbstractUnitOfWork,
    calendar: CalendarSync,
    notifier: NotificationSender,
) -> ActionOutcome:
    """Re-run an action's side effects against the stored booking.

    The booking is read but never written. The action must already have
    taken effect: the booking is in its target status or, for actions that
    keep the status, in a status the action is allowed from.

    Raises:
        InvalidTransitionError: If the booking is in any other status.
    """

    with uow:
        booking = uow.bookings.get(cmd.booking_id, cmd.org_id)

    rule = check_retry(booking, cmd.action)
    logger.info(
        "Retrying side effects of %s for booking %s", cmd.action.value, booking.booking_id
    )
    return run_side_effects(booking, rule.calendar, rule.notification, calendar, notifier)


def run_side_effects(
    booking: Booking,
    calendar_action: CalendarAction | None,
    message_type: MessageType | None,
    calendar: CalendarSync,
    notifier: NotificationSender,
) -> ActionOutcome:
    """Invoke at most one calendar and one notification side effect.

    Returns:
        ActionOutcome: The booking, which side effects succeeded, and the failures.
    """

    errors: list[SideEffectFailure] = []
    calendar_synced = notified = False

    if calendar_action is not None:
        failure = _attempt(
            SideEffectKind.CALENDAR,
            calendar_action.value,
            booking,
            lambda: calendar.sync(booking, calendar_action),
        )
        calendar_synced = failure is None
        if failure is not None:
            errors.append(failure)

    if message_type is not None:
        failure = _attempt(
            SideEffectKind.NOTIFICATION,
            message_type.value,
            booking,
            lambda: notifier.send(booking, message_type),
        )
        notified = failure is None
        if failure is not None:
            errors.append(failure)

    return ActionOutcome(
        booking=booking,
        calendar_synced=calendar_synced,
        notified=notified,
        errors=tuple(errors),
    )


def _attempt(
    kind: SideEffectKind, operation: str, booking: Booking, call: Callable[[], Any]
) -> SideEffectFailure | None:
    try:
        result = call()
    except Exception as e:  # pylint: disable=broad-except
        # adapters are expected to report failures, not raise them
        logger.warning(
            "%s %s for booking %s raised",
            kind.value,
            operation,
            booking.booking_id,
            exc_info=True,
        )
        return SideEffectFailure(kind, operation, f"{type(e).__name__}: {e}")

    if result.ok:
        return None

    failure = SideEffectFailure(kind, operation, result.error or "unknown error")
    logger.warning("Booking %s saved, but %s", booking.booking_id, failure)
    return failure


COMMAND_HANDLERS: dict[type, Callable[..., Any]] = {
    commands.CreateBooking: create_booking,
    commands.ApplyBookingAction: apply_booking_action,
    commands.UpdateBookingNotes: update_booking_notes,
    commands.RetrySideEffects: retry_side_effects,
}
