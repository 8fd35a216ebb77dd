"""Booking lifecycle rules.

Each `BookingAction` is described by an `ActionRule`: the statuses it may be
applied from, the status it moves the booking to (if any), the non-status
field it edits (if any) and the side effects it requires. `plan_action` turns
a rule plus a booking into a `TransitionPlan` without touching any store.

Only rules marked `replayable` may be re-applied to a booking that already
sits in their target status. `reactivate` and `confirm-setup` land on
`pending-confirmation`, which other paths also reach, and `assign-volunteer`
carries a payload that a replay would drop; those are rejected instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from .booking import Booking
from .errors import InvalidTransitionError, MissingActionPayloadError
from .value_objects import (
    BookingAction,
    BookingStatus,
    CalendarAction,
    MessageType,
    SubjectRef,
    TimeWindow,
)
from .workflow import TERMINAL_STATUSES

S = BookingStatus
A = BookingAction


class PayloadKind(Enum):
    """The non-status booking field an action edits."""

    VOLUNTEER = "volunteer"
    WINDOW = "window"
    NOTES = "notes"


@dataclass(frozen=True, slots=True)
class ActionRule:
    """Static description of what an action does.

    `replayable` marks actions that may be re-applied to a booking already in
    `target`, re-running only their side effects.
    """

    allowed_from: frozenset[BookingStatus]
    target: BookingStatus | None = None
    calendar: CalendarAction | None = None
    notification: MessageType | None = None
    payload: PayloadKind | None = None
    replayable: bool = False


@dataclass(frozen=True, slots=True)
class ActionPayload:
    """Values supplied alongside an action that edits a non-status field."""

    volunteer: SubjectRef | None = None
    window: TimeWindow | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class TransitionPlan:
    """What applying an action to a specific booking will do."""

    action: BookingAction
    fields: MappingProxyType[str, Any]
    calendar: CalendarAction | None
    notification: MessageType | None
    replay: bool = False

    @property
    def writes(self) -> bool:
        """True when the store has to be patched."""
        return bool(self.fields)


_NON_TERMINAL = frozenset(S) - TERMINAL_STATUSES

ACTION_RULES: MappingProxyType[BookingAction, ActionRule] = MappingProxyType(
    {
        A.SEND_SETUP_EMAIL: ActionRule(
            allowed_from=frozenset({S.PENDING_SHELTER_SETUP}),
            notification=MessageType.SETUP,
        ),
        A.CONFIRM_SETUP: ActionRule(
            allowed_from=frozenset({S.PENDING_SHELTER_SETUP}),
            target=S.PENDING_CONFIRMATION,
        ),
        A.RESEND_EMAIL: ActionRule(
            allowed_from=frozenset({S.PENDING_CONFIRMATION}),
            notification=MessageType.CONFIRMATION,
        ),
        A.ASSIGN_VOLUNTEER: ActionRule(
            allowed_from=frozenset({S.PENDING_CONFIRMATION}),
            target=S.VOLUNTEER_ASSIGNED,
            calendar=CalendarAction.UPDATE,
            payload=PayloadKind.VOLUNTEER,
        ),
        A.REASSIGN_VOLUNTEER: ActionRule(
            allowed_from=frozenset({S.VOLUNTEER_ASSIGNED, S.CONFIRMED, S.IN_PROGRESS}),
            calendar=CalendarAction.UPDATE,
            payload=PayloadKind.VOLUNTEER,
        ),
        A.RESCHEDULE: ActionRule(
            allowed_from=frozenset(
                {
                    S.PENDING_SHELTER_SETUP,
                    S.PENDING_CONFIRMATION,
                    S.VOLUNTEER_ASSIGNED,
                    S.CONFIRMED,
                }
            ),
            calendar=CalendarAction.UPDATE,
            payload=PayloadKind.WINDOW,
        ),
        A.CONFIRM: ActionRule(
            allowed_from=frozenset({S.PENDING_CONFIRMATION, S.VOLUNTEER_ASSIGNED}),
            target=S.CONFIRMED,
            calendar=CalendarAction.UPDATE,
            replayable=True,
        ),
        A.START_VISIT: ActionRule(
            allowed_from=frozenset({S.CONFIRMED}),
            target=S.IN_PROGRESS,
            replayable=True,
        ),
        A.COMPLETE_VISIT: ActionRule(
            allowed_from=frozenset({S.IN_PROGRESS}),
            target=S.COMPLETED,
            replayable=True,
        ),
        A.MARK_ADOPTED: ActionRule(
            allowed_from=frozenset({S.IN_PROGRESS, S.COMPLETED}),
            target=S.ADOPTED,
            notification=MessageType.CONGRATULATIONS,
            replayable=True,
        ),
        A.SEND_CONGRATS: ActionRule(
            allowed_from=frozenset({S.ADOPTED}),
            notification=MessageType.CONGRATULATIONS,
        ),
        A.CANCEL: ActionRule(
            allowed_from=_NON_TERMINAL,
            target=S.CANCELLED,
            calendar=CalendarAction.DELETE,
            replayable=True,
        ),
        A.REACTIVATE: ActionRule(
            allowed_from=frozenset({S.CANCELLED}),
            target=S.PENDING_CONFIRMATION,
            calendar=CalendarAction.CREATE,
        ),
        A.ADD_NOTES: ActionRule(
            allowed_from=frozenset({S.COMPLETED, S.ADOPTED, S.CANCELLED}),
            payload=PayloadKind.NOTES,
        ),
    }
)


def allowed_actions(status: BookingStatus) -> tuple[BookingAction, ...]:
    """Actions that may be applied from `status`, in declaration order."""
    return tuple(
        action for action, rule in ACTION_RULES.items() if status in rule.allowed_from
    )


def is_replay(status: BookingStatus, action: BookingAction) -> bool:
    """True when a replayable action meets a booking already in its target status."""
    rule = ACTION_RULES[action]
    return rule.replayable and rule.target is not None and status is rule.target


def check_retry(booking: Booking, action: BookingAction) -> ActionRule:
    """Return the rule whose side effects may be re-run for `booking`.

    A status-changing action can only be retried once the booking is in its
    target status; any other action only from a status it is allowed from.

    Raises:
        InvalidTransitionError: If the booking's status does not match.
    """
    rule = ACTION_RULES[action]
    expected = {rule.target} if rule.target is not None else rule.allowed_from
    if booking.status not in expected:
        raise InvalidTransitionError(
            booking.booking_id, booking.status.value, action.value
        )
    return rule


def plan_action(
    booking: Booking, action: BookingAction, payload: ActionPayload | None = None
) -> TransitionPlan:
    """Validate `action` against `booking` and describe its effect.

    Re-applying a replayable action to a booking already in its target status
    is a replay: no fields change but the side effects are still planned.

    Raises:
        InvalidTransitionError: If the action is not allowed from the booking's status.
        MissingActionPayloadError: If the action edits a field and no value was given.
    """
    rule = ACTION_RULES[action]
    replay = is_replay(booking.status, action)
    if not replay and booking.status not in rule.allowed_from:
        raise InvalidTransitionError(
            booking.booking_id, booking.status.value, action.value
        )

    fields: dict[str, Any] = {}
    if not replay:
        if rule.target is not None:
            fields["status"] = rule.target
        if rule.payload is not None:
            fields[rule.payload.value] = _payload_value(action, rule.payload, payload)

    return TransitionPlan(
        action=action,
        fields=MappingProxyType(
            {name: new for name, (_, new) in booking.diff(fields).items()}
        ),
        calendar=rule.calendar,
        notification=rule.notification,
        replay=replay,
    )


def _payload_value(
    action: BookingAction, kind: PayloadKind, payload: ActionPayload | None
) -> Any:
    value = getattr(payload, kind.value) if payload is not None else None
    if value is None:
        raise MissingActionPayloadError(action.value, kind.value)
    return value
