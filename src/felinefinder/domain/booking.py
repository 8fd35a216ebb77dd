"""Booking entity."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .errors import BookingValidationError
from .value_objects import AuditEntry, BookingStatus, SubjectRef, TimeWindow

# pylint: disable=too-many-instance-attributes

DEFAULT_STATUS = BookingStatus.PENDING_SHELTER_SETUP

#: Booking attributes a patch may touch.
PATCHABLE_FIELDS = frozenset({"status", "volunteer", "window", "notes"})

CREATED_AUDIT_FIELD = "created"


@dataclass(frozen=True, slots=True)
class Booking:
    """One scheduled adopter-cat meeting, scoped to a single organization.

    Bookings are immutable snapshots; a store patch returns a new snapshot with
    an incremented `version`.
    """

    booking_id: str
    org_id: str
    calendar_id: int
    adopter: SubjectRef
    cat: SubjectRef
    window: TimeWindow
    volunteer: SubjectRef | None = None
    status: BookingStatus = DEFAULT_STATUS
    summary: str = ""
    description: str = ""
    notes: str | None = None
    version: int = 1
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    audit_trail: tuple[AuditEntry, ...] = ()

    def __post_init__(self) -> None:
        if not self.org_id:
            raise BookingValidationError("org_id is required")
        if self.adopter is None:
            raise BookingValidationError("adopter reference is required")
        if self.cat is None:
            raise BookingValidationError("cat reference is required")

    # --- Convenience accessors used by views and exports ---

    @property
    def start(self) -> datetime:
        return self.window.start

    @property
    def end(self) -> datetime:
        return self.window.end

    @property
    def volunteer_name(self) -> str:
        return self.volunteer.display_name if self.volunteer is not None else ""

    # --- Patching ---

    def diff(self, fields: Mapping[str, Any]) -> dict[str, tuple[Any, Any]]:
        """Return the subset of `fields` that would change, as {name: (old, new)}.

        Raises:
            BookingValidationError: If a field is not patchable.
        """
        unknown = set(fields) - PATCHABLE_FIELDS
        if unknown:
            raise BookingValidationError(
                f"fields not patchable: {', '.join(sorted(unknown))}"
            )
        changes: dict[str, tuple[Any, Any]] = {}
        for name, new_value in fields.items():
            old_value = getattr(self, name)
            if old_value != new_value:
                changes[name] = (old_value, new_value)
        return changes

    def patched(
        self, fields: Mapping[str, Any], *, changed_by: str, at: datetime
    ) -> Booking:
        """Return a new snapshot with `fields` applied and audited.

        The version is bumped even when nothing changed; callers that want a
        no-op should check `diff()` first.
        """
        changes = self.diff(fields)
        entries = tuple(
            AuditEntry(
                field_name=name,
                from_value=audit_repr(old),
                to_value=audit_repr(new),
                changed_at=at,
                changed_by=changed_by,
            )
            for name, (old, new) in changes.items()
        )
        return dataclasses.replace(
            self,
            **{name: new for name, (_, new) in changes.items()},
            version=self.version + 1,
            updated_at=at,
            audit_trail=self.audit_trail + entries,
        )

    # --- Construction ---

    @classmethod
    def propose(  # pylint: disable=too-many-arguments
        cls,
        *,
        booking_id: str,
        org_id: str,
        calendar_id: int,
        adopter: SubjectRef,
        cat: SubjectRef,
        window: TimeWindow,
        created_by: str,
        at: datetime,
        volunteer: SubjectRef | None = None,
        status: BookingStatus = DEFAULT_STATUS,
        summary: str = "",
        description: str = "",
        notes: str | None = None,
    ) -> Booking:
        """Create a brand-new booking with its `created` audit entry."""
        return cls(
            booking_id=booking_id,
            org_id=org_id,
            calendar_id=calendar_id,
            adopter=adopter,
            cat=cat,
            window=window,
            volunteer=volunteer,
            status=status,
            summary=summary,
            description=description,
            notes=notes,
            version=1,
            created_at=at,
            updated_at=at,
            created_by=created_by,
            audit_trail=(
                AuditEntry(
                    field_name=CREATED_AUDIT_FIELD,
                    from_value="",
                    to_value=status.value,
                    changed_at=at,
                    changed_by=created_by,
                ),
            ),
        )


def audit_repr(value: Any) -> str:
    """Render a field value the way it is recorded in the audit trail."""
    match value:
        case None:
            return ""
        case BookingStatus():
            return value.value
        case SubjectRef():
            return value.display_name
        case TimeWindow():
            return value.describe()
        case _:
            return str(value)
