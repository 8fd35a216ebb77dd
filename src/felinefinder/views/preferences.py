"""Booking list preferences and the transitions staff apply to them.

`ViewPreferences` is the part that can be saved as a named layout: filters,
sort, page size and the workflow-sort toggle. `ViewState` adds the current page
and implements the list-page interactions (changing a filter, cycling a sort
header, changing the page size, loading a layout) as pure functions returning a
new state.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from felinefinder.domain.value_objects import BookingStatus
from felinefinder.domain.workflow import StatusGroupKey

DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_CHOICES = (10, 25, 50, 100)

TEXT_FILTERS = ("adopter", "cat", "volunteer")
DATE_FILTERS = ("date_from", "date_to")


class SortField(Enum):
    """Booking attributes the list can be sorted by."""

    ADOPTER = "adopter"
    CAT = "cat"
    VOLUNTEER = "volunteer"
    STATUS = "status"
    START = "start"
    END = "end"
    CALENDAR_ID = "calendar_id"
    ADOPTER_ID = "adopter_id"
    CAT_ID = "cat_id"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


class UnknownFilterError(ValueError):
    """Raised for a filter name that `Filters` does not have."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown filter '{name}'")
        self.name = name


@dataclass(frozen=True, slots=True)
class Filters:
    """Predicates a booking must satisfy to be listed.

    Empty strings and ``None`` mean "no constraint". `status` and
    `status_group` are mutually exclusive; use `with_value` to change one so the
    other is cleared.
    """

    adopter: str = ""
    cat: str = ""
    volunteer: str = ""
    date_from: date | None = None
    date_to: date | None = None
    status: BookingStatus | None = None
    status_group: StatusGroupKey | None = None

    def __post_init__(self) -> None:
        if self.status is not None and self.status_group is not None:
            raise ValueError("status and status_group filters are mutually exclusive")

    @property
    def is_empty(self) -> bool:
        return self == Filters()

    def with_value(self, name: str, value: Any) -> Filters:
        """Return a copy with one filter changed; the others are kept.

        Setting a non-empty `status` clears `status_group` and vice versa.
        """
        if name not in _FILTER_NAMES:
            raise UnknownFilterError(name)
        value = _coerce_filter(name, value)
        changes: dict[str, Any] = {name: value}
        if value is not None and name == "status":
            changes["status_group"] = None
        if value is not None and name == "status_group":
            changes["status"] = None
        return dataclasses.replace(self, **changes)

    def cleared(self, name: str) -> Filters:
        """Return a copy with one filter reset to "no constraint"."""
        return self.with_value(name, None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "adopter": self.adopter,
            "cat": self.cat,
            "volunteer": self.volunteer,
            "date_from": self.date_from.isoformat() if self.date_from else None,
            "date_to": self.date_to.isoformat() if self.date_to else None,
            "status": self.status.value if self.status else None,
            "status_group": self.status_group.value if self.status_group else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Filters:
        filters = cls()
        for name in _FILTER_NAMES:
            if data.get(name) not in (None, ""):
                filters = filters.with_value(name, data[name])
        return filters


_FILTER_NAMES = tuple(f.name for f in dataclasses.fields(Filters))


def _coerce_filter(name: str, value: Any) -> Any:
    """Normalize a raw filter value; empty values become the field's default."""
    if name in TEXT_FILTERS:
        return "" if value is None else str(value)
    if value in (None, ""):
        return None
    if name in DATE_FILTERS:
        return value if isinstance(value, date) else date.fromisoformat(value)
    if name == "status":
        return BookingStatus(value)
    return StatusGroupKey(value)


@dataclass(frozen=True, slots=True)
class ViewPreferences:
    """A saveable bundle of list preferences."""

    filters: Filters = field(default_factory=Filters)
    sort_field: SortField | None = None
    sort_direction: SortDirection | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    workflow_sort: bool = True

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        if (self.sort_field is None) != (self.sort_direction is None):
            raise ValueError("sort_field and sort_direction must be set together")

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation, as stored in a layout."""
        return {
            "filters": self.filters.to_dict(),
            "sort_field": self.sort_field.value if self.sort_field else None,
            "sort_direction": self.sort_direction.value if self.sort_direction else None,
            "page_size": self.page_size,
            "workflow_sort_enabled": self.workflow_sort,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ViewPreferences:
        """Inverse of `to_dict`; missing keys take their defaults, unknown keys are ignored."""
        sort_field = data.get("sort_field")
        sort_direction = data.get("sort_direction")
        return cls(
            filters=Filters.from_dict(data.get("filters") or {}),
            sort_field=SortField(sort_field) if sort_field else None,
            sort_direction=SortDirection(sort_direction) if sort_direction else None,
            page_size=int(data.get("page_size", DEFAULT_PAGE_SIZE)),
            workflow_sort=bool(data.get("workflow_sort_enabled", True)),
        )


@dataclass(frozen=True, slots=True)
class ViewState:
    """Preferences plus the page currently shown."""

    preferences: ViewPreferences = field(default_factory=ViewPreferences)
    current_page: int = 1

    def __post_init__(self) -> None:
        if self.current_page < 1:
            raise ValueError(f"current_page must be >= 1, got {self.current_page}")

    @property
    def filters(self) -> Filters:
        return self.preferences.filters

    def _with_prefs(self, **changes: Any) -> ViewPreferences:
        return dataclasses.replace(self.preferences, **changes)

    def set_filter(self, name: str, value: Any) -> ViewState:
        """Change one filter. Other filters and the current page are kept."""
        return dataclasses.replace(
            self, preferences=self._with_prefs(filters=self.filters.with_value(name, value))
        )

    def clear_filter(self, name: str) -> ViewState:
        return dataclasses.replace(
            self, preferences=self._with_prefs(filters=self.filters.cleared(name))
        )

    def reset_filters(self) -> ViewState:
        """Clear every filter and go back to page 1."""
        return ViewState(self._with_prefs(filters=Filters()), current_page=1)

    def set_page(self, page: int) -> ViewState:
        return dataclasses.replace(self, current_page=page)

    def set_page_size(self, page_size: int) -> ViewState:
        """Change the page size; always returns to page 1."""
        return ViewState(self._with_prefs(page_size=page_size), current_page=1)

    def set_workflow_sort(self, enabled: bool) -> ViewState:
        return dataclasses.replace(self, preferences=self._with_prefs(workflow_sort=enabled))

    def set_sort(
        self, sort_field: SortField | None, direction: SortDirection | None = None
    ) -> ViewState:
        """Sort by `sort_field` (ascending unless told otherwise); None unsorts."""
        if sort_field is not None and direction is None:
            direction = SortDirection.ASC
        if sort_field is None:
            direction = None
        return dataclasses.replace(
            self,
            preferences=self._with_prefs(sort_field=sort_field, sort_direction=direction),
        )

    def toggle_sort(self, sort_field: SortField) -> ViewState:
        """Cycle a sort header: a new field sorts ascending; the same field
        goes ascending, then descending, then unsorted."""
        prefs = self.preferences
        if prefs.sort_field is not sort_field:
            new_field, direction = sort_field, SortDirection.ASC
        elif prefs.sort_direction is SortDirection.ASC:
            new_field, direction = sort_field, SortDirection.DESC
        else:
            new_field, direction = None, None
        return dataclasses.replace(
            self,
            preferences=self._with_prefs(sort_field=new_field, sort_direction=direction),
        )

    def load_layout(self, preferences: ViewPreferences) -> ViewState:
        """Adopt saved preferences and go back to page 1."""
        return ViewState(preferences, current_page=1)
