"""Results returned by the booking handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from felinefinder.domain.booking import Booking


class SideEffectKind(Enum):
    """Which external provider a side effect went to."""

    CALENDAR = "calendar"
    NOTIFICATION = "notification"


@dataclass(frozen=True, slots=True)
class SideEffectFailure:
    """A calendar or notification call that failed after the booking was saved.

    Never raised: failures are collected in `ActionOutcome.errors` so the
    caller can report "booking updated, but ..." and retry the side effect.
    """

    kind: SideEffectKind
    operation: str
    error: str

    def __str__(self) -> str:
        return f"{self.kind.value} {self.operation} failed: {self.error}"


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """The booking after an action, plus what happened to its side effects.

    `calendar_synced` and `notified` are True only when the side effect was
    required and succeeded.
    """

    booking: Booking
    calendar_synced: bool = False
    notified: bool = False
    errors: tuple[SideEffectFailure, ...] = field(default=())

    @property
    def ok(self) -> bool:
        """True when no side effect failed."""
        return not self.errors
