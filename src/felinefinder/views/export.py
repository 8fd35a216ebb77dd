"""CSV export of a composed booking list."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from datetime import date, datetime
from typing import TextIO

from felinefinder.domain.booking import Booking

CSV_HEADER = ("Adopter", "Cat", "Start Time", "End Time", "Volunteer", "Status")


def format_datetime(value: datetime) -> str:
    """Format as ``M/D/YYYY h:mm am|pm`` (no zero padding on month, day or hour)."""
    hour = value.hour % 12 or 12
    meridiem = "pm" if value.hour >= 12 else "am"
    return f"{value.month}/{value.day}/{value.year} {hour}:{value.minute:02d} {meridiem}"


def booking_row(booking: Booking) -> tuple[str, ...]:
    """One CSV row; times are rendered in the booking's own time zones."""
    return (
        booking.adopter.display_name,
        booking.cat.display_name,
        format_datetime(booking.window.local_start),
        format_datetime(booking.window.local_end),
        booking.volunteer_name,
        booking.status.value,
    )


def write_csv(bookings: Iterable[Booking], fp: TextIO) -> int:
    """Write the header and one row per booking; return the number of rows."""
    writer = csv.writer(fp, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    count = 0
    for booking in bookings:
        writer.writerow(booking_row(booking))
        count += 1
    return count


def to_csv(bookings: Iterable[Booking]) -> str:
    buffer = io.StringIO()
    write_csv(bookings, buffer)
    return buffer.getvalue()


def default_export_filename(today: date) -> str:
    return f"bookings-{today.isoformat()}.csv"
