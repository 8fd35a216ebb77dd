"""SQLAlchemy-backed BookingStore adapter for Feline Finder.

Bookings live in the ``bookings`` table (current state) and their history in
``booking_audit`` (one row per changed field). Every query is scoped to an
organization; a booking of another organization is indistinguishable from a
missing one.

`get` reads with ``SELECT ... FOR UPDATE`` so a transition's read-modify-write
holds the row until the unit of work ends. On SQLite the clause is a no-op and
the engine's ``BEGIN IMMEDIATE`` serializes writers instead. `patch` also
guards the ``UPDATE`` with the expected version, so a stale snapshot can never
overwrite a newer one.

Usage:
    Instantiate SqlAlchemyBookingStore with a SQLAlchemy Connection; the unit
    of work owns the transaction.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import RowMapping, insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError, IntegrityError

from felinefinder.domain.booking import Booking
from felinefinder.domain.value_objects import AuditEntry, SubjectRef, TimeWindow
from felinefinder.interfaces.booking_store import (
    BookingNotFoundError,
    BookingStore,
    BookingStoreUnavailableError,
    ConcurrentModificationError,
    DuplicateBookingIdError,
)

from .schema import booking_audit, bookings


class SqlAlchemyBookingStore(BookingStore):
    """SQLAlchemy-backed BookingStore.

    - Uses the `bookings` and `booking_audit` tables (see adapters.bookings.schema).
    - Locks the row on `get`; guards `patch` with the expected version.
    - Appends one audit row per changed field.
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def list(self, org_id: str) -> list[Booking]:
        rows = (
            self.connection.execute(
                select(bookings).where(bookings.c.org_id == org_id)
            )
            .mappings()
            .all()
        )
        trails = self._fetch_audit_trails(row["booking_id"] for row in rows)
        return [_row_to_booking(row, trails.get(row["booking_id"], ())) for row in rows]

    def get(self, booking_id: str, org_id: str) -> Booking:
        row = (
            self.connection.execute(
                select(bookings)
                .where(bookings.c.booking_id == booking_id)
                .where(bookings.c.org_id == org_id)
                .with_for_update()
            )
            .mappings()
            .one_or_none()
        )
        if row is None:
            raise BookingNotFoundError(booking_id, org_id)
        trails = self._fetch_audit_trails([booking_id])
        return _row_to_booking(row, trails.get(booking_id, ()))

    def add(self, booking: Booking) -> None:
        try:
            self.connection.execute(insert(bookings).values(_booking_to_row(booking)))
        except IntegrityError as e:
            if self._exists(booking.booking_id):
                raise DuplicateBookingIdError(booking.booking_id) from e
            raise BookingStoreUnavailableError(str(e.orig or e)) from e
        except DBAPIError as e:
            raise BookingStoreUnavailableError(str(e)) from e
        self._insert_audit(booking.booking_id, booking.audit_trail)

    def patch(  # pylint: disable=too-many-arguments
        self,
        booking_id: str,
        org_id: str,
        fields: Mapping[str, Any],
        *,
        expected_version: int,
        changed_by: str,
        at: datetime,
    ) -> Booking:
        current = self.get(booking_id, org_id)
        if current.version != expected_version:
            raise ConcurrentModificationError(
                booking_id, current.version, expected_version
            )

        updated = current.patched(fields, changed_by=changed_by, at=at)
        values = _booking_to_row(updated)
        for key in ("booking_id", "org_id", "created_at", "created_by"):
            values.pop(key)

        result = self.connection.execute(
            update(bookings)
            .where(bookings.c.booking_id == booking_id)
            .where(bookings.c.org_id == org_id)
            .where(bookings.c.version == expected_version)
            .values(values)
        )
        if result.rowcount != 1:
            raise ConcurrentModificationError(
                booking_id, self._head_version(booking_id), expected_version
            )

        self._insert_audit(booking_id, updated.audit_trail[len(current.audit_trail) :])
        return updated

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _fetch_audit_trails(
        self, booking_ids: Iterable[str]
    ) -> dict[str, tuple[AuditEntry, ...]]:
        """Load the audit trails of several bookings, each ordered by insertion."""
        ids = list(booking_ids)
        if not ids:
            return {}
        rows = (
            self.connection.execute(
                select(booking_audit)
                .where(booking_audit.c.booking_id.in_(ids))
                .order_by(booking_audit.c.seq.asc())
            )
            .mappings()
            .all()
        )
        trails: defaultdict[str, list[AuditEntry]] = defaultdict(list)
        for row in rows:
            trails[row["booking_id"]].append(
                AuditEntry(
                    field_name=row["field_name"],
                    from_value=row["from_value"],
                    to_value=row["to_value"],
                    changed_at=row["changed_at"],
                    changed_by=row["changed_by"],
                )
            )
        return {key: tuple(entries) for key, entries in trails.items()}

    def _insert_audit(self, booking_id: str, entries: Sequence[AuditEntry]) -> None:
        if not entries:
            return
        self.connection.execute(
            insert(booking_audit).values(
                [
                    {
                        "booking_id": booking_id,
                        "field_name": entry.field_name,
                        "from_value": entry.from_value,
                        "to_value": entry.to_value,
                        "changed_at": entry.changed_at,
                        "changed_by": entry.changed_by,
                    }
                    for entry in entries
                ]
            )
        )

    def _exists(self, booking_id: str) -> bool:
        stmt = select(bookings.c.booking_id).where(bookings.c.booking_id == booking_id)
        return self.connection.execute(stmt).first() is not None

    def _head_version(self, booking_id: str) -> int:
        stmt = select(bookings.c.version).where(bookings.c.booking_id == booking_id)
        return self.connection.execute(stmt).scalar_one_or_none() or 0


def _booking_to_row(booking: Booking) -> dict[str, Any]:
    volunteer = booking.volunteer
    return {
        "booking_id": booking.booking_id,
        "org_id": booking.org_id,
        "calendar_id": booking.calendar_id,
        "adopter_id": booking.adopter.id,
        "adopter_name": booking.adopter.display_name,
        "cat_id": booking.cat.id,
        "cat_name": booking.cat.display_name,
        "volunteer_id": volunteer.id if volunteer is not None else None,
        "volunteer_name": volunteer.display_name if volunteer is not None else None,
        "start_ts": booking.window.start,
        "start_time_zone": booking.window.start_time_zone,
        "end_ts": booking.window.end,
        "end_time_zone": booking.window.end_time_zone,
        "status": booking.status,
        "summary": booking.summary,
        "description": booking.description,
        "notes": booking.notes,
        "version": booking.version,
        "created_at": booking.created_at,
        "updated_at": booking.updated_at,
        "created_by": booking.created_by,
    }


def _row_to_booking(row: RowMapping, audit_trail: tuple[AuditEntry, ...]) -> Booking:
    volunteer = (
        SubjectRef(row["volunteer_id"], row["volunteer_name"] or "")
        if row["volunteer_id"] is not None
        else None
    )
    return Booking(
        booking_id=row["booking_id"],
        org_id=row["org_id"],
        calendar_id=row["calendar_id"],
        adopter=SubjectRef(row["adopter_id"], row["adopter_name"]),
        cat=SubjectRef(row["cat_id"], row["cat_name"]),
        window=TimeWindow(
            start=row["start_ts"],
            end=row["end_ts"],
            start_time_zone=row["start_time_zone"],
            end_time_zone=row["end_time_zone"],
        ),
        volunteer=volunteer,
        status=row["status"],
        summary=row["summary"],
        description=row["description"],
        notes=row["notes"],
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        created_by=row["created_by"],
        audit_trail=audit_trail,
    )
