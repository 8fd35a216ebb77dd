"""Booking list views: preferences, the composer pipeline, pagination and CSV export.

Everything here is pure and synchronous; it only reads already-fetched bookings.
"""

from .composer import BookingGroup, ComposedView, compose
from .preferences import (
    Filters,
    SortDirection,
    SortField,
    ViewPreferences,
    ViewState,
)

__all__ = [
    "BookingGroup",
    "ComposedView",
    "compose",
    "Filters",
    "SortDirection",
    "SortField",
    "ViewPreferences",
    "ViewState",
]
