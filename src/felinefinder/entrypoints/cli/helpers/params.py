"""Click parameter types for booking input."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import click

from felinefinder.domain.errors import BookingValidationError
from felinefinder.domain.value_objects import SubjectRef


class SubjectRefType(click.ParamType):
    """``ID:Display Name`` (or a bare ``ID``, used as its own name)."""

    name = "ID:NAME"

    def convert(self, value: Any, param, ctx) -> SubjectRef:
        if isinstance(value, SubjectRef):
            return value
        ref_id, _, display_name = str(value).partition(":")
        try:
            return SubjectRef(ref_id.strip(), display_name.strip() or ref_id.strip())
        except BookingValidationError as e:
            self.fail(str(e), param, ctx)


class IsoDateTimeType(click.ParamType):
    """ISO 8601 timestamp, with or without a UTC offset."""

    name = "DATETIME"

    def convert(self, value: Any, param, ctx) -> datetime:
        if isinstance(value, datetime):
            return value
        try:
            return datetime.fromisoformat(str(value))
        except ValueError:
            self.fail(f"{value!r} is not an ISO 8601 timestamp", param, ctx)


class IsoDateType(click.ParamType):
    """ISO 8601 calendar date (YYYY-MM-DD)."""

    name = "DATE"

    def convert(self, value: Any, param, ctx) -> date:
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value))
        except ValueError:
            self.fail(f"{value!r} is not a YYYY-MM-DD date", param, ctx)


class TimeZoneType(click.ParamType):
    """IANA time zone name, e.g. ``America/Denver``."""

    name = "TZ"

    def convert(self, value: Any, param, ctx) -> str:
        try:
            ZoneInfo(str(value))
        except (ZoneInfoNotFoundError, ValueError):
            self.fail(f"unknown time zone {value!r}", param, ctx)
        return str(value)


class EnumValueType(click.Choice):
    """Choice over an Enum's values, converted back to the member."""

    def __init__(self, enum_class: type[Enum]) -> None:
        super().__init__([member.value for member in enum_class], case_sensitive=False)
        self.enum_class = enum_class

    def convert(self, value: Any, param, ctx) -> Enum:
        if isinstance(value, self.enum_class):
            return value
        return self.enum_class(super().convert(value, param, ctx))


def localize(value: datetime, time_zone: str) -> datetime:
    """Attach `time_zone` to a naive timestamp; aware timestamps are left as is."""
    if value.tzinfo is None:
        return value.replace(tzinfo=ZoneInfo(time_zone))
    return value


SUBJECT_REF = SubjectRefType()
ISO_DATETIME = IsoDateTimeType()
ISO_DATE = IsoDateType()
TIME_ZONE = TimeZoneType()
