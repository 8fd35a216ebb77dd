"""Fixtures for generating test bookings."""

from __future__ import annotations

import dataclasses
import itertools
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from felinefinder.domain.booking import Booking
from felinefinder.domain.value_objects import BookingStatus, SubjectRef, TimeWindow

# pylint: disable=redefined-outer-name

ORG = "org-1"
T0 = datetime(2025, 3, 10, 15, 0, tzinfo=timezone.utc)

_counter = itertools.count(1)  # for next_booking_id()


def next_booking_id() -> str:
    """Return a unique, zero-padded booking id (``bk-000001``, ...)."""
    return f"bk-{next(_counter):06d}"


def make_window(
    start: datetime = T0,
    minutes: int = 60,
    time_zone: str = "UTC",
) -> TimeWindow:
    """A window of `minutes` starting at `start`, labelled with `time_zone`."""
    return TimeWindow(
        start=start,
        end=start + timedelta(minutes=minutes),
        start_time_zone=time_zone,
        end_time_zone=time_zone,
    )


def build_booking(**overrides: Any) -> Booking:
    """Build a freshly proposed booking, then override any attribute.

    Plain strings are accepted for `adopter`, `cat` and `volunteer` and turned
    into `SubjectRef`s named after themselves; `start` shifts the window.
    """
    refs = {}
    for key in ("adopter", "cat", "volunteer"):
        value = overrides.pop(key, None)
        if isinstance(value, str):
            value = SubjectRef(f"{key[0]}-{value.lower()}", value)
        refs[key] = value

    start = overrides.pop("start", None)
    window = overrides.pop("window", None) or make_window(start or T0)
    status = overrides.pop("status", BookingStatus.PENDING_SHELTER_SETUP)

    booking = Booking.propose(
        booking_id=overrides.pop("booking_id", None) or next_booking_id(),
        org_id=overrides.pop("org_id", ORG),
        calendar_id=overrides.pop("calendar_id", 100),
        adopter=refs["adopter"] or SubjectRef("a-1", "Alice"),
        cat=refs["cat"] or SubjectRef("c-1", "Mittens"),
        window=window,
        created_by=overrides.pop("created_by", "tester"),
        at=overrides.pop("at", T0 - timedelta(days=7)),
        volunteer=refs["volunteer"],
        status=status,
        summary=overrides.pop("summary", ""),
        description=overrides.pop("description", ""),
        notes=overrides.pop("notes", None),
    )
    return dataclasses.replace(booking, **overrides) if overrides else booking


@pytest.fixture
def make_booking() -> Callable[..., Booking]:
    """Factory fixture: build a valid `Booking` with keyword overrides.

    Example:
        make_booking(status=BookingStatus.CONFIRMED, adopter="Bob", calendar_id=7)
    """
    return build_booking


@pytest.fixture
def make_create_params() -> Callable[..., dict[str, Any]]:
    """Factory for `CreateBooking` keyword arguments with sensible defaults."""

    def _make(**overrides: Any) -> dict[str, Any]:
        params: dict[str, Any] = {
            "org_id": ORG,
            "calendar_id": 100,
            "adopter": SubjectRef("a-1", "Alice"),
            "cat": SubjectRef("c-1", "Mittens"),
            "window": make_window(),
            "created_by": "tester",
        }
        params.update(overrides)
        return params

    return _make


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """A clock frozen one day after `T0`."""
    return lambda: T0 + timedelta(days=1)
