"""Booking tables.

Defines the ``bookings`` table (one row per booking, current state only) and
the append-only ``booking_audit`` table (one row per changed field).

Constraints (enforced here):

| Constraint                          | Purpose                              |
|-------------------------------------|--------------------------------------|
| PK(booking_id)                      | store-assigned opaque id             |
| CHECK(start_ts < end_ts)            | well-formed time window              |
| CHECK(status IN (...))              | only known workflow statuses         |
| CHECK(version >= 1)                 | optimistic concurrency counter       |
| FK(booking_audit.booking_id)        | audit rows belong to a booking       |
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Index,
    Integer,
    String,
    Table,
    Text,
)

from felinefinder.adapters.db.metadata import metadata
from felinefinder.adapters.db.sa_types import BIGINT_PK, EnumValue, UTCDateTime
from felinefinder.domain.value_objects import BookingStatus

__all__ = ["bookings", "booking_audit", "STATUS_CHECK_SQL"]

STATUS_CHECK_SQL = "status IN ({})".format(  # pylint: disable=consider-using-f-string
    ", ".join(f"'{status.value}'" for status in BookingStatus)
)

bookings = Table(
    "bookings",
    metadata,
    Column("booking_id", String(64), primary_key=True, comment="Opaque store-assigned id."),
    Column("org_id", String(128), nullable=False, comment="Owning organization."),
    Column(
        "calendar_id",
        Integer,
        nullable=False,
        comment="External calendar event; shared by multi-slot bookings.",
    ),
    Column("adopter_id", String(128), nullable=False),
    Column("adopter_name", String(200), nullable=False),
    Column("cat_id", String(128), nullable=False),
    Column("cat_name", String(200), nullable=False),
    Column("volunteer_id", String(128), nullable=True),
    Column("volunteer_name", String(200), nullable=True),
    Column("start_ts", UTCDateTime(), nullable=False),
    Column("start_time_zone", String(64), nullable=False),
    Column("end_ts", UTCDateTime(), nullable=False),
    Column("end_time_zone", String(64), nullable=False),
    Column("status", EnumValue(BookingStatus), nullable=False),
    Column("summary", Text, nullable=False, default=""),
    Column("description", Text, nullable=False, default=""),
    Column("notes", Text, nullable=True),
    Column(
        "version",
        Integer,
        nullable=False,
        comment="Incremented on every patch; used for optimistic concurrency.",
    ),
    Column("created_at", UTCDateTime(), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
    Column("created_by", String(128), nullable=True),
    CheckConstraint("start_ts < end_ts", name="window_ordered"),
    CheckConstraint(STATUS_CHECK_SQL, name="known_status"),
    CheckConstraint("version >= 1", name="positive_version"),
    Index("ix_bookings_org_id_start_ts", "org_id", "start_ts"),
    Index("ix_bookings_org_id_calendar_id", "org_id", "calendar_id"),
    comment="Adoption appointments. Current state only; history lives in booking_audit.",
)

booking_audit = Table(
    "booking_audit",
    metadata,
    Column(
        "seq",
        BIGINT_PK,
        Identity(start=1),
        primary_key=True,
        comment="Global insertion order; orders a booking's trail.",
    ),
    Column(
        "booking_id",
        String(64),
        ForeignKey("bookings.booking_id"),
        nullable=False,
    ),
    Column("field_name", String(64), nullable=False),
    Column("from_value", Text, nullable=False),
    Column("to_value", Text, nullable=False),
    Column("changed_at", UTCDateTime(), nullable=False),
    Column("changed_by", String(128), nullable=False),
    Index("ix_booking_audit_booking_id_seq", "booking_id", "seq"),
    comment="Append-only field-level change log for bookings.",
)
