"""Module including value objects used across the domain layer."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import BookingValidationError


class BookingStatus(Enum):
    """Enumeration of the operational stages a booking moves through."""

    PENDING_SHELTER_SETUP = "pending-shelter-setup"
    PENDING_CONFIRMATION = "pending-confirmation"
    VOLUNTEER_ASSIGNED = "volunteer-assigned"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ADOPTED = "adopted"
    CANCELLED = "cancelled"


class BookingAction(Enum):
    """Enumeration of the staff actions that can be applied to a booking."""

    SEND_SETUP_EMAIL = "send-setup-email"
    CONFIRM_SETUP = "confirm-setup"
    RESEND_EMAIL = "resend-email"
    ASSIGN_VOLUNTEER = "assign-volunteer"
    REASSIGN_VOLUNTEER = "reassign-volunteer"
    RESCHEDULE = "reschedule"
    CONFIRM = "confirm"
    START_VISIT = "start-visit"
    COMPLETE_VISIT = "complete-visit"
    MARK_ADOPTED = "mark-adopted"
    SEND_CONGRATS = "send-congrats"
    CANCEL = "cancel"
    REACTIVATE = "reactivate"
    ADD_NOTES = "add-notes"


class CalendarAction(Enum):
    """What to do with the external calendar event mirroring a booking."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class MessageType(Enum):
    """Kinds of email the notification sender can deliver for a booking."""

    SETUP = "setup"
    CONFIRMATION = "confirmation"
    CONGRATULATIONS = "congratulations"


@dataclass(frozen=True, slots=True)
class SubjectRef:
    """Reference to a person or animal owned by an external registry.

    Only the id is authoritative; the display name is a denormalized copy used
    for filtering, sorting and rendering.
    """

    id: str
    display_name: str

    def __post_init__(self) -> None:
        if not str(self.id).strip():
            raise BookingValidationError("reference id must be non-empty")
        object.__setattr__(self, "id", str(self.id))


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Value object for the scheduled slot of a booking.

    Conventions:
      - `start`/`end` are timezone-aware datetimes; `start < end`.
      - `start_time_zone`/`end_time_zone` are IANA labels (e.g. "America/Denver")
        used when rendering the slot to staff.
    """

    start: datetime
    end: datetime
    start_time_zone: str = "UTC"
    end_time_zone: str = "UTC"

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise BookingValidationError("start and end must be timezone-aware")
        if self.start >= self.end:
            raise BookingValidationError(
                f"start ({self.start.isoformat()}) must be before end "
                f"({self.end.isoformat()})"
            )
        for label in (self.start_time_zone, self.end_time_zone):
            try:
                ZoneInfo(label)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise BookingValidationError(f"unknown time zone '{label}'") from e

    @property
    def local_start(self) -> datetime:
        """The start timestamp expressed in its own time zone."""
        return self.start.astimezone(ZoneInfo(self.start_time_zone))

    @property
    def local_end(self) -> datetime:
        """The end timestamp expressed in its own time zone."""
        return self.end.astimezone(ZoneInfo(self.end_time_zone))

    def describe(self) -> str:
        """Compact ISO rendering used in audit entries."""
        return f"{self.start.isoformat()}/{self.end.isoformat()}"


@dataclass(frozen=True, slots=True)
class AuditEntry:
    """One recorded change to one booking field."""

    field_name: str
    from_value: str
    to_value: str
    changed_at: datetime
    changed_by: str
