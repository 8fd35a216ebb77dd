"""Interfaces for the external providers a booking transition may call.

Both providers report failure through a `SideEffectResult` rather than by
raising, because a failed side effect never undoes the status change that
preceded it. Adapters that talk to flaky services should catch their
transport errors and return `SideEffectResult.failed(...)`.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass

from felinefinder.domain.booking import Booking
from felinefinder.domain.value_objects import CalendarAction, MessageType

# pylint: disable=too-few-public-methods


@dataclass(frozen=True, slots=True)
class SideEffectResult:
    """Outcome of one calendar or notification call."""

    ok: bool
    error: str | None = None

    @classmethod
    def succeeded(cls) -> SideEffectResult:
        return cls(ok=True)

    @classmethod
    def failed(cls, error: str) -> SideEffectResult:
        return cls(ok=False, error=error)


class CalendarSync(abc.ABC):
    """Keeps the external calendar event of a booking in step with the booking."""

    @abc.abstractmethod
    def sync(self, booking: Booking, action: CalendarAction) -> SideEffectResult:
        """Create, update or delete the calendar event for `booking`.

        Args:
            booking (Booking): The booking as persisted after the transition.
            action (CalendarAction): What to do with the event.

        Returns:
            SideEffectResult: `ok=False` with an error message on failure.
        """


class NotificationSender(abc.ABC):
    """Delivers booking emails."""

    @abc.abstractmethod
    def send(self, booking: Booking, message_type: MessageType) -> SideEffectResult:
        """Send an email of `message_type` about `booking`.

        Args:
            booking (Booking): The booking as persisted after the transition.
            message_type (MessageType): Which email to send.

        Returns:
            SideEffectResult: `ok=False` with an error message on failure.
        """
