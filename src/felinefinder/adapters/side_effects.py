"""Recording calendar and notification adapters.

Neither adapter talks to a real provider: each call is logged and recorded so
that the CLI can report what would have been synchronized or sent, and tests can
assert on it. Both can be told to fail, to exercise the engine's handling of a
side effect that fails after the booking was already saved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from felinefinder.domain.booking import Booking
from felinefinder.domain.value_objects import CalendarAction, MessageType
from felinefinder.interfaces.side_effects import (
    CalendarSync,
    NotificationSender,
    SideEffectResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CalendarCall:
    """One recorded calendar sync."""

    booking_id: str
    calendar_id: int
    action: CalendarAction


@dataclass(frozen=True, slots=True)
class NotificationCall:
    """One recorded notification."""

    booking_id: str
    adopter_id: str
    message_type: MessageType


class RecordingCalendarSync(CalendarSync):
    """Calendar adapter that records syncs instead of calling a calendar API.

    Args:
        fail_with: When set, every sync fails with this error message.
    """

    def __init__(self, fail_with: str | None = None) -> None:
        self.fail_with = fail_with
        self.calls: list[CalendarCall] = []

    def sync(self, booking: Booking, action: CalendarAction) -> SideEffectResult:
        self.calls.append(CalendarCall(booking.booking_id, booking.calendar_id, action))
        if self.fail_with is not None:
            return SideEffectResult.failed(self.fail_with)
        logger.info(
            "Calendar %s for booking %s (event %s)",
            action.value,
            booking.booking_id,
            booking.calendar_id,
        )
        return SideEffectResult.succeeded()


class RecordingNotificationSender(NotificationSender):
    """Notification adapter that records emails instead of sending them.

    Args:
        fail_with: When set, every send fails with this error message.
    """

    def __init__(self, fail_with: str | None = None) -> None:
        self.fail_with = fail_with
        self.calls: list[NotificationCall] = []

    def send(self, booking: Booking, message_type: MessageType) -> SideEffectResult:
        self.calls.append(
            NotificationCall(booking.booking_id, booking.adopter.id, message_type)
        )
        if self.fail_with is not None:
            return SideEffectResult.failed(self.fail_with)
        logger.info(
            "Sent %s email to adopter %s for booking %s",
            message_type.value,
            booking.adopter.display_name,
            booking.booking_id,
        )
        return SideEffectResult.succeeded()
