"""create bookings and booking_audit tables

Revision ID: 3f9c2a7d1b10
Revises:
Create Date: 2026-10-18 09:12:44.081233

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from felinefinder.adapters.bookings.schema import STATUS_CHECK_SQL
from felinefinder.adapters.db.sa_types import BIGINT_PK, UTCDateTime

# pylint: disable=no-member

revision: str = "3f9c2a7d1b10"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "bookings",
        sa.Column(
            "booking_id",
            sa.String(length=64),
            nullable=False,
            comment="Opaque store-assigned id.",
        ),
        sa.Column(
            "org_id", sa.String(length=128), nullable=False, comment="Owning organization."
        ),
        sa.Column(
            "calendar_id",
            sa.Integer(),
            nullable=False,
            comment="External calendar event; shared by multi-slot bookings.",
        ),
        sa.Column("adopter_id", sa.String(length=128), nullable=False),
        sa.Column("adopter_name", sa.String(length=200), nullable=False),
        sa.Column("cat_id", sa.String(length=128), nullable=False),
        sa.Column("cat_name", sa.String(length=200), nullable=False),
        sa.Column("volunteer_id", sa.String(length=128), nullable=True),
        sa.Column("volunteer_name", sa.String(length=200), nullable=True),
        sa.Column("start_ts", UTCDateTime(), nullable=False),
        sa.Column("start_time_zone", sa.String(length=64), nullable=False),
        sa.Column("end_ts", UTCDateTime(), nullable=False),
        sa.Column("end_time_zone", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            comment="Incremented on every patch; used for optimistic concurrency.",
        ),
        sa.Column("created_at", UTCDateTime(), nullable=True),
        sa.Column("updated_at", UTCDateTime(), nullable=True),
        sa.Column("created_by", sa.String(length=128), nullable=True),
        sa.CheckConstraint(
            "start_ts < end_ts", name=op.f("ck_bookings_window_ordered")
        ),
        sa.CheckConstraint(STATUS_CHECK_SQL, name=op.f("ck_bookings_known_status")),
        sa.CheckConstraint("version >= 1", name=op.f("ck_bookings_positive_version")),
        sa.PrimaryKeyConstraint("booking_id", name=op.f("pk_bookings")),
        comment="Adoption appointments. Current state only; history lives in booking_audit.",
    )
    op.create_index(
        op.f("ix_bookings_org_id_start_ts"), "bookings", ["org_id", "start_ts"]
    )
    op.create_index(
        op.f("ix_bookings_org_id_calendar_id"), "bookings", ["org_id", "calendar_id"]
    )

    op.create_table(
        "booking_audit",
        sa.Column(
            "seq",
            BIGINT_PK,
            sa.Identity(start=1),
            nullable=False,
            comment="Global insertion order; orders a booking's trail.",
        ),
        sa.Column("booking_id", sa.String(length=64), nullable=False),
        sa.Column("field_name", sa.String(length=64), nullable=False),
        sa.Column("from_value", sa.Text(), nullable=False),
        sa.Column("to_value", sa.Text(), nullable=False),
        sa.Column("changed_at", UTCDateTime(), nullable=False),
        sa.Column("changed_by", sa.String(length=128), nullable=False),
        sa.ForeignKeyConstraint(
            ["booking_id"],
            ["bookings.booking_id"],
            name=op.f("fk_booking_audit_booking_id_bookings"),
        ),
        sa.PrimaryKeyConstraint("seq", name=op.f("pk_booking_audit")),
        comment="Append-only field-level change log for bookings.",
    )
    op.create_index(
        op.f("ix_booking_audit_booking_id_seq"), "booking_audit", ["booking_id", "seq"]
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(op.f("ix_booking_audit_booking_id_seq"), table_name="booking_audit")
    op.drop_table("booking_audit")
    op.drop_index(op.f("ix_bookings_org_id_calendar_id"), table_name="bookings")
    op.drop_index(op.f("ix_bookings_org_id_start_ts"), table_name="bookings")
    op.drop_table("bookings")
