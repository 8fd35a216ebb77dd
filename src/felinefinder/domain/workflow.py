"""Workflow tables for booking statuses.

The rank table is an explicit lookup rather than being derived from the
declaration order of `BookingStatus`, so the ordering can change (or be tested)
independently of the enum.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from .value_objects import BookingStatus

WORKFLOW_RANK: MappingProxyType[BookingStatus, int] = MappingProxyType(
    {
        BookingStatus.PENDING_SHELTER_SETUP: 1,
        BookingStatus.PENDING_CONFIRMATION: 2,
        BookingStatus.VOLUNTEER_ASSIGNED: 3,
        BookingStatus.CONFIRMED: 4,
        BookingStatus.IN_PROGRESS: 5,
        BookingStatus.COMPLETED: 6,
        BookingStatus.ADOPTED: 7,
        BookingStatus.CANCELLED: 8,
    }
)

STATUS_LABELS: MappingProxyType[BookingStatus, str] = MappingProxyType(
    {
        BookingStatus.PENDING_SHELTER_SETUP: "Pending Shelter Setup",
        BookingStatus.PENDING_CONFIRMATION: "Pending Confirmation",
        BookingStatus.VOLUNTEER_ASSIGNED: "Volunteer Assigned",
        BookingStatus.CONFIRMED: "Confirmed",
        BookingStatus.IN_PROGRESS: "In Progress",
        BookingStatus.COMPLETED: "Completed",
        BookingStatus.ADOPTED: "Adopted",
        BookingStatus.CANCELLED: "Cancelled",
    }
)


class StatusGroupKey(Enum):
    """Coarse status buckets used as a filter."""

    EARLY_STAGE = "early-stage"
    ASSIGNED = "assigned"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class StatusGroup:
    """A labelled set of statuses."""

    key: StatusGroupKey
    label: str
    statuses: frozenset[BookingStatus]


STATUS_GROUPS: MappingProxyType[StatusGroupKey, StatusGroup] = MappingProxyType(
    {
        StatusGroupKey.EARLY_STAGE: StatusGroup(
            StatusGroupKey.EARLY_STAGE,
            "Early Stage",
            frozenset(
                {BookingStatus.PENDING_SHELTER_SETUP, BookingStatus.PENDING_CONFIRMATION}
            ),
        ),
        StatusGroupKey.ASSIGNED: StatusGroup(
            StatusGroupKey.ASSIGNED,
            "Assigned",
            frozenset({BookingStatus.VOLUNTEER_ASSIGNED, BookingStatus.CONFIRMED}),
        ),
        StatusGroupKey.ACTIVE: StatusGroup(
            StatusGroupKey.ACTIVE,
            "Active",
            frozenset({BookingStatus.IN_PROGRESS}),
        ),
        StatusGroupKey.FINISHED: StatusGroup(
            StatusGroupKey.FINISHED,
            "Finished",
            frozenset(
                {
                    BookingStatus.COMPLETED,
                    BookingStatus.ADOPTED,
                    BookingStatus.CANCELLED,
                }
            ),
        ),
    }
)

TERMINAL_STATUSES: frozenset[BookingStatus] = STATUS_GROUPS[
    StatusGroupKey.FINISHED
].statuses


def workflow_rank(status: BookingStatus) -> int:
    """Return the workflow rank of a status (0 for anything unranked)."""
    return WORKFLOW_RANK.get(status, 0)


def status_label(status: BookingStatus) -> str:
    """Human-readable label for a status."""
    return STATUS_LABELS.get(status, "Unknown")


def is_terminal(status: BookingStatus) -> bool:
    """True for statuses of the finished group."""
    return status in TERMINAL_STATUSES
