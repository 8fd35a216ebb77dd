"""Column types for the booking tables.

The Python side stays typed (aware datetimes, `BookingStatus` members) while the
database stores portable primitives (UTC timestamps, status strings).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.types import DateTime, TypeDecorator

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

__all__ = ["BIGINT_PK", "EnumValue", "UTCDateTime", "as_utc"]

SQLITE = "sqlite"

BIGINT_PK = BigInteger().with_variant(Integer(), SQLITE)

E = TypeVar("E", bound=Enum)


def as_utc(value: datetime) -> datetime:
    """`value` converted to UTC; a naive value is taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator[datetime]):  # pylint: disable=too-many-ancestors
    """Instants stored in UTC and always read back as aware UTC datetimes.

    A booking keeps its own IANA time zone in a separate column; this type only
    carries the instant. SQLite has no time zone support, so the value is
    written there as naive UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        utc = as_utc(value)
        return utc.replace(tzinfo=None) if dialect.name == SQLITE else utc

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        return as_utc(value) if isinstance(value, datetime) else value

    process_literal_param = process_bind_param

    @property
    def python_type(self) -> type[datetime]:
        return datetime


class EnumValue(TypeDecorator[E]):  # pylint: disable=too-many-ancestors
    """Store a domain ``Enum`` member as its string ``value``.

    Unlike ``sqlalchemy.Enum`` this stores the value ("pending-confirmation")
    rather than the member name, and leaves the allowed-values check to an
    explicit ``CheckConstraint`` on the table.
    """

    impl = String(32)
    cache_ok = True

    def __init__(self, enum_class: type[E], length: int = 32) -> None:
        super().__init__(length)
        self.enum_class = enum_class

    def process_bind_param(self, value: E | str | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        return self.enum_class(value).value

    def process_result_value(self, value: Any, dialect: Dialect) -> E | None:
        if value is None:
            return None
        return self.enum_class(value)

    process_literal_param = process_bind_param

    @property
    def python_type(self) -> type[E]:
        return self.enum_class
