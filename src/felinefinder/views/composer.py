"""Compose the booking list shown to staff.

The pipeline is a pure function of the bookings and the view state:

1. filter  - every configured predicate must hold;
2. sort    - workflow rank (optional), then the user's sort field (optional),
             then ascending calendar id;
3. group   - consecutive bookings with the same calendar id form one group;
4. paginate - slice the sorted sequence, then group the slice on its own.

Grouping is by adjacency after sorting: two runs of the same calendar id that
are separated by another id stay two groups, and a run cut by a page boundary
is grouped separately on each page.
"""

from __future__ import annotations

import itertools
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from felinefinder.domain.booking import Booking
from felinefinder.domain.workflow import STATUS_GROUPS, workflow_rank

from .pagination import PageMarker, page_numbers
from .preferences import Filters, SortDirection, SortField, ViewPreferences, ViewState

# --------------------------------------------------------------------------- #
# Filter
# --------------------------------------------------------------------------- #


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def _local_start_date(booking: Booking) -> date:
    return booking.window.local_start.date()


def matches(booking: Booking, filters: Filters) -> bool:
    """True when `booking` satisfies every configured filter.

    Date bounds compare against the calendar day the booking starts on, in the
    booking's own time zone; both bounds are inclusive.
    """
    if not _contains(booking.adopter.display_name, filters.adopter):
        return False
    if not _contains(booking.cat.display_name, filters.cat):
        return False
    if not _contains(booking.volunteer_name, filters.volunteer):
        return False
    if filters.date_from is not None and _local_start_date(booking) < filters.date_from:
        return False
    if filters.date_to is not None and _local_start_date(booking) > filters.date_to:
        return False
    if filters.status is not None and booking.status is not filters.status:
        return False
    if (
        filters.status_group is not None
        and booking.status not in STATUS_GROUPS[filters.status_group].statuses
    ):
        return False
    return True


def filter_bookings(bookings: Iterable[Booking], filters: Filters) -> list[Booking]:
    return [b for b in bookings if matches(b, filters)]


# --------------------------------------------------------------------------- #
# Sort
# --------------------------------------------------------------------------- #


def _id_key(value: str) -> tuple[int, int, str]:
    """Numeric ids sort numerically and before non-numeric ones."""
    if value.isascii() and value.isdigit():
        return (0, int(value), "")
    return (1, 0, value.lower())


SORT_KEYS: dict[SortField, Callable[[Booking], Any]] = {
    SortField.ADOPTER: lambda b: b.adopter.display_name.lower(),
    SortField.CAT: lambda b: b.cat.display_name.lower(),
    SortField.VOLUNTEER: lambda b: b.volunteer_name.lower(),
    SortField.STATUS: lambda b: b.status.value,
    SortField.START: lambda b: b.start.timestamp(),
    SortField.END: lambda b: b.end.timestamp(),
    SortField.CALENDAR_ID: lambda b: b.calendar_id,
    SortField.ADOPTER_ID: lambda b: _id_key(b.adopter.id),
    SortField.CAT_ID: lambda b: _id_key(b.cat.id),
}


def sort_bookings(bookings: Iterable[Booking], prefs: ViewPreferences) -> list[Booking]:
    """Return the bookings in presentation order.

    Implemented as successive stable sorts from the least to the most
    significant key, which is equivalent to one lexicographic comparison and
    lets the user field be reversed independently. Full ties keep input order.
    """
    ordered = sorted(bookings, key=lambda b: b.calendar_id)
    if prefs.sort_field is not None:
        ordered.sort(
            key=SORT_KEYS[prefs.sort_field],
            reverse=prefs.sort_direction is SortDirection.DESC,
        )
    if prefs.workflow_sort:
        ordered.sort(key=lambda b: workflow_rank(b.status))
    return ordered


# --------------------------------------------------------------------------- #
# Group
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class BookingGroup:
    """A run of adjacent bookings sharing one calendar event."""

    calendar_id: int
    bookings: tuple[Booking, ...]

    @property
    def is_shared(self) -> bool:
        """True when the group spans several bookings and gets a summary header."""
        return len(self.bookings) > 1

    @property
    def summary(self) -> str:
        return self.bookings[0].summary

    def __len__(self) -> int:
        return len(self.bookings)


def group_adjacent(bookings: Iterable[Booking]) -> list[BookingGroup]:
    """Split an ordered sequence into runs of equal calendar id."""
    return [
        BookingGroup(calendar_id, tuple(run))
        for calendar_id, run in itertools.groupby(bookings, key=lambda b: b.calendar_id)
    ]


# --------------------------------------------------------------------------- #
# Paginate
# --------------------------------------------------------------------------- #


def total_pages(total_items: int, page_size: int) -> int:
    """Number of pages; an empty list still has one (empty) page."""
    return max(1, math.ceil(total_items / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), pages)


@dataclass(frozen=True, slots=True)
class ComposedView:
    """Everything needed to render one page of the booking list."""

    groups: tuple[BookingGroup, ...]
    ordered: tuple[Booking, ...]
    current_page: int
    page_size: int
    total_pages: int

    @property
    def total_items(self) -> int:
        return len(self.ordered)

    @property
    def is_empty(self) -> bool:
        """True when no booking passed the filters."""
        return not self.ordered

    @property
    def page_bookings(self) -> tuple[Booking, ...]:
        return tuple(b for group in self.groups for b in group.bookings)

    @property
    def start_index(self) -> int:
        return (self.current_page - 1) * self.page_size

    @property
    def end_index(self) -> int:
        return min(self.start_index + self.page_size, self.total_items)

    def showing(self) -> str:
        """The "Showing X-Y of N" caption; X and Y are 1-based and inclusive."""
        first = self.start_index + 1 if self.total_items else 0
        return f"Showing {first}-{self.end_index} of {self.total_items} bookings"

    def page_numbers(self) -> list[PageMarker]:
        return page_numbers(self.current_page, self.total_pages)


def paginate(
    ordered: Sequence[Booking], page: int, page_size: int
) -> tuple[int, list[BookingGroup]]:
    """Return the clamped page number and the groups of that page's slice."""
    page = clamp_page(page, total_pages(len(ordered), page_size))
    start = (page - 1) * page_size
    return page, group_adjacent(ordered[start : start + page_size])


def compose(bookings: Iterable[Booking], state: ViewState) -> ComposedView:
    """Filter, sort, group and paginate `bookings` according to `state`.

    A page beyond the last one is clamped to the last page.
    """
    prefs = state.preferences
    ordered = sort_bookings(filter_bookings(bookings, prefs.filters), prefs)
    page, groups = paginate(ordered, state.current_page, prefs.page_size)
    return ComposedView(
        groups=tuple(groups),
        ordered=tuple(ordered),
        current_page=page,
        page_size=prefs.page_size,
        total_pages=total_pages(len(ordered), prefs.page_size),
    )
