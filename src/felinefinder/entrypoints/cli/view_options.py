"""Options shared by the commands that compose a booking list.

`bookings list`, `bookings export` and `layouts save` accept the same filter,
sort and paging options. They are applied on top of an optional saved layout,
in the same way a staff member would adjust the list after loading a layout.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from datetime import date
from typing import Any

import click

from felinefinder.domain.value_objects import BookingStatus
from felinefinder.domain.workflow import StatusGroupKey
from felinefinder.interfaces.layout_store import LayoutStore
from felinefinder.views.preferences import (
    SortDirection,
    SortField,
    ViewPreferences,
    ViewState,
)

from .helpers.params import ISO_DATE, EnumValueType

_OPTIONS = [
    click.option("--layout", "layout_name", help="Start from a saved layout."),
    click.option("--adopter", help="Adopter name contains (case-insensitive)."),
    click.option("--cat", help="Cat name contains (case-insensitive)."),
    click.option("--volunteer", help="Volunteer name contains (case-insensitive)."),
    click.option(
        "--from", "date_from", type=ISO_DATE, help="Starts on or after this day."
    ),
    click.option("--to", "date_to", type=ISO_DATE, help="Starts on or before this day."),
    click.option("--status", type=EnumValueType(BookingStatus), help="Exact status."),
    click.option(
        "--group",
        "status_group",
        type=EnumValueType(StatusGroupKey),
        help="Status group (replaces --status).",
    ),
    click.option("--sort", "sort_field", type=EnumValueType(SortField), help="Sort field."),
    click.option("--desc", is_flag=True, default=False, help="Sort descending."),
    click.option(
        "--workflow-sort/--no-workflow-sort",
        default=None,
        help="Order by workflow stage first (layout/default: on).",
    ),
    click.option("--page-size", type=click.IntRange(min=1), help="Bookings per page."),
    click.option("--page", type=click.IntRange(min=1), help="Page to show."),
]

VIEW_OPTION_NAMES = (
    "layout_name",
    "adopter",
    "cat",
    "volunteer",
    "date_from",
    "date_to",
    "status",
    "status_group",
    "sort_field",
    "desc",
    "workflow_sort",
    "page_size",
    "page",
)


def view_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Add the view options to a command; they reach it as one `view` dict."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        view = {name: kwargs.pop(name) for name in VIEW_OPTION_NAMES}
        return fn(*args, view=view, **kwargs)

    for option in reversed(_OPTIONS):
        wrapper = option(wrapper)
    return wrapper


def build_view_state(view: dict[str, Any], layouts: LayoutStore) -> ViewState:
    """Turn parsed view options (and an optional layout) into a `ViewState`.

    Raises:
        click.UsageError: If both --status and --group are given.
        LayoutNotFoundError: If --layout names a layout that does not exist.
    """
    if view["status"] is not None and view["status_group"] is not None:
        raise click.UsageError("--status and --group are mutually exclusive.")

    state = ViewState()
    if view["layout_name"]:
        state = state.load_layout(
            ViewPreferences.from_dict(layouts.load(view["layout_name"]))
        )

    for name in ("adopter", "cat", "volunteer", "date_from", "date_to"):
        value: str | date | None = view[name]
        if value is not None:
            state = state.set_filter(name, value)
    if view["status"] is not None:
        state = state.set_filter("status", view["status"])
    if view["status_group"] is not None:
        state = state.set_filter("status_group", view["status_group"])

    if view["sort_field"] is not None:
        direction = SortDirection.DESC if view["desc"] else SortDirection.ASC
        state = state.set_sort(view["sort_field"], direction)
    if view["workflow_sort"] is not None:
        state = state.set_workflow_sort(view["workflow_sort"])
    if view["page_size"] is not None:
        state = state.set_page_size(view["page_size"])
    if view["page"] is not None:
        state = state.set_page(view["page"])
    return state
