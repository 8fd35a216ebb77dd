"""Feline Finder bookings CLI.

Commands
- `list`    : Show one page of the booking list (filters, sort, layouts).
- `show`    : Show one booking with its audit trail and allowed actions.
- `create`  : Propose a new booking.
- `act`     : Apply a lifecycle action (confirm, cancel, assign-volunteer, ...).
- `notes`   : Replace or clear a booking's staff notes.
- `retry`   : Re-run the calendar/email side effects of an action.
- `export`  : Write the filtered, sorted list (all pages) as CSV.

Every command is scoped to one organization (`--org` or `FELINEFINDER_ORG_ID`)
and needs `FELINEFINDER_DB_URL`. A failed calendar sync or email does not fail
the command: the booking change is kept and the failure is printed as a warning,
ready for `felinefinder bookings retry`.

Examples
    $ felinefinder bookings list --group early-stage --sort start
    $ felinefinder bookings act 01J9Z... assign-volunteer --volunteer v-7:Sam
    $ felinefinder bookings export --status confirmed -o confirmed.csv
"""

from __future__ import annotations

import sys
from datetime import date
from typing import TYPE_CHECKING, Any

import click
import click_extra as clickx
from rich.console import Console
from rich.table import Table
from rich.text import Text

from felinefinder import config
from felinefinder.bootstrap import AppContainer, bootstrap
from felinefinder.domain.value_objects import BookingAction, TimeWindow
from felinefinder.domain.workflow import status_label
from felinefinder.views.composer import ComposedView, compose
from felinefinder.views.export import default_export_filename, format_datetime, write_csv

from .db import get_checked_url
from .helpers import success, warn
from .helpers.errors import reported_as_click_errors
from .helpers.params import (
    ISO_DATETIME,
    SUBJECT_REF,
    TIME_ZONE,
    EnumValueType,
    localize,
)
from .view_options import build_view_state, view_options

if TYPE_CHECKING:
    from datetime import datetime

    from felinefinder.domain.booking import Booking
    from felinefinder.domain.value_objects import SubjectRef
    from felinefinder.service_layer.outcomes import ActionOutcome

DEFAULT_STAFF = "cli"

org_option = click.option(
    "--org",
    "org_id",
    envvar=config.ORG_ID_ENV,
    required=True,
    show_envvar=True,
    help="Organization whose bookings to use.",
)

staff_option = click.option(
    "--staff",
    envvar=config.STAFF_ENV,
    default=DEFAULT_STAFF,
    show_default=True,
    show_envvar=True,
    help="Who is making the change (recorded in the audit trail).",
)


def _container() -> AppContainer:
    return bootstrap(get_checked_url())


def _window(
    start: datetime | None, end: datetime | None, time_zone: str
) -> TimeWindow | None:
    if start is None and end is None:
        return None
    if start is None or end is None:
        raise click.UsageError("--start and --end must be given together.")
    return TimeWindow(
        start=localize(start, time_zone),
        end=localize(end, time_zone),
        start_time_zone=time_zone,
        end_time_zone=time_zone,
    )


@click.group(cls=clickx.ExtraGroup)
def bookings() -> None:
    """Adoption appointment (booking) commands."""


# --------------------------------------------------------------------------- #
# Reading
# --------------------------------------------------------------------------- #


def render_view(view: ComposedView, console: Console) -> None:
    """Print one page of the booking list as a rich table plus the pager line."""
    if view.is_empty:
        console.print("No bookings match the current filters.")
        return

    table = Table(show_lines=False, highlight=False)
    for column in ("ID", "Adopter", "Cat", "Start", "End", "Volunteer", "Status", "Event"):
        table.add_column(column, overflow="fold")

    for group in view.groups:
        if group.is_shared:
            header = Text(
                f"Event {group.calendar_id}: {group.summary or '(no summary)'} "
                f"[{len(group)} bookings]",
                style="bold",
            )
            table.add_row(header, *[""] * 7)
        for booking in group.bookings:
            table.add_row(
                booking.booking_id,
                booking.adopter.display_name,
                booking.cat.display_name,
                format_datetime(booking.window.local_start),
                format_datetime(booking.window.local_end),
                booking.volunteer_name or "-",
                status_label(booking.status),
                str(booking.calendar_id),
            )
        table.add_section()

    console.print(table)
    pages = " ".join(
        f"[{marker}]" if marker == view.current_page else str(marker)
        for marker in view.page_numbers()
    )
    console.print(
        f"{view.showing()}  |  Page {view.current_page} of {view.total_pages}: {pages}",
        highlight=False,
    )


@bookings.command("list")
@org_option
@view_options
def list_bookings(org_id: str, view: dict[str, Any]) -> None:
    """List bookings, one page at a time."""
    app = _container()
    with reported_as_click_errors():
        state = build_view_state(view, app.layouts)
        composed = compose(app.engine.list(org_id), state)
    render_view(composed, Console())


@bookings.command()
@org_option
@click.argument("booking_id")
def show(org_id: str, booking_id: str) -> None:
    """Show a booking, its audit trail and the actions allowed next."""
    app = _container()
    with reported_as_click_errors():
        booking = app.engine.get(booking_id, org_id)

    console = Console()
    details = Table.grid(padding=(0, 2))
    details.add_column(style="bold")
    details.add_column()
    for label, value in _detail_rows(booking):
        details.add_row(label, value)
    console.print(details)

    trail = Table(title="Audit trail")
    for column in ("When", "Field", "From", "To", "By"):
        trail.add_column(column, overflow="fold")
    for entry in booking.audit_trail:
        trail.add_row(
            entry.changed_at.isoformat(timespec="seconds"),
            entry.field_name,
            entry.from_value,
            entry.to_value,
            entry.changed_by,
        )
    console.print(trail)

    actions = ", ".join(a.value for a in app.engine.allowed_actions(booking))
    console.print(f"Allowed actions: {actions or '(none)'}", highlight=False)


def _detail_rows(booking: Booking) -> list[tuple[str, str]]:
    return [
        ("Booking", booking.booking_id),
        ("Status", f"{status_label(booking.status)} ({booking.status.value})"),
        ("Adopter", f"{booking.adopter.display_name} ({booking.adopter.id})"),
        ("Cat", f"{booking.cat.display_name} ({booking.cat.id})"),
        (
            "Volunteer",
            f"{booking.volunteer.display_name} ({booking.volunteer.id})"
            if booking.volunteer
            else "-",
        ),
        (
            "When",
            f"{format_datetime(booking.window.local_start)} - "
            f"{format_datetime(booking.window.local_end)} "
            f"({booking.window.start_time_zone})",
        ),
        ("Event", f"{booking.calendar_id} {booking.summary}".rstrip()),
        ("Notes", booking.notes or "-"),
        ("Version", str(booking.version)),
    ]


@bookings.command()
@org_option
@view_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, allow_dash=True),
    help="CSV file to write ('-' for stdout). Default: bookings-<today>.csv",
)
def export(org_id: str, view: dict[str, Any], output: str | None) -> None:
    """Export every booking matching the filters (all pages) as CSV."""
    app = _container()
    with reported_as_click_errors():
        state = build_view_state(view, app.layouts)
        composed = compose(app.engine.list(org_id), state)
    target = output or default_export_filename(date.today())
    with click.open_file(target, "w", encoding="utf-8") as fp:
        count = write_csv(composed.ordered, fp)
    if target != "-":
        success(f"Exported {count} bookings to {target}")


# --------------------------------------------------------------------------- #
# Writing
# --------------------------------------------------------------------------- #


def report_outcome(outcome: ActionOutcome, action: BookingAction) -> None:
    """Print the result of an action; side-effect failures become warnings."""
    booking = outcome.booking
    success(
        f"{action.value}: booking {booking.booking_id} is "
        f"{status_label(booking.status)} (version {booking.version})"
    )
    if outcome.calendar_synced:
        click.echo("Calendar updated.", err=True)
    if outcome.notified:
        click.echo("Email sent.", err=True)
    for failure in outcome.errors:
        warn(f"Booking saved, but {failure}")
    if outcome.errors:
        click.echo(
            f"Retry with: felinefinder bookings retry {booking.booking_id} {action.value}",
            err=True,
        )


@bookings.command()
@org_option
@staff_option
@click.option("--adopter", type=SUBJECT_REF, required=True, help="Adopter as ID:NAME.")
@click.option("--cat", type=SUBJECT_REF, required=True, help="Cat as ID:NAME.")
@click.option("--volunteer", type=SUBJECT_REF, help="Volunteer as ID:NAME.")
@click.option("--start", type=ISO_DATETIME, required=True, help="Start (ISO 8601).")
@click.option("--end", type=ISO_DATETIME, required=True, help="End (ISO 8601).")
@click.option(
    "--tz",
    "time_zone",
    type=TIME_ZONE,
    default="UTC",
    show_default=True,
    help="Time zone of the appointment; applied to timestamps without an offset.",
)
@click.option("--calendar-id", type=int, required=True, help="External calendar event id.")
@click.option("--summary", default="", help="Summary shared by the event's bookings.")
@click.option("--description", default="", help="Free-text description.")
def create(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    org_id: str,
    staff: str,
    adopter: SubjectRef,
    cat: SubjectRef,
    volunteer: SubjectRef | None,
    start: datetime,
    end: datetime,
    time_zone: str,
    calendar_id: int,
    summary: str,
    description: str,
) -> None:
    """Propose a new booking (status: pending shelter setup).

    Prints the new booking id on stdout.
    """
    app = _container()
    with reported_as_click_errors():
        booking = app.engine.create(
            org_id=org_id,
            calendar_id=calendar_id,
            adopter=adopter,
            cat=cat,
            window=_window(start, end, time_zone),
            created_by=staff,
            volunteer=volunteer,
            summary=summary,
            description=description,
        )
    click.echo(booking.booking_id)
    success(f"Created booking for {adopter.display_name} and {cat.display_name}")


@bookings.command()
@org_option
@staff_option
@click.argument("booking_id")
@click.argument("action", type=EnumValueType(BookingAction))
@click.option("--volunteer", type=SUBJECT_REF, help="For (re)assign-volunteer: ID:NAME.")
@click.option("--start", type=ISO_DATETIME, help="For reschedule: new start.")
@click.option("--end", type=ISO_DATETIME, help="For reschedule: new end.")
@click.option(
    "--tz",
    "time_zone",
    type=TIME_ZONE,
    default="UTC",
    show_default=True,
    help="For reschedule: time zone of the new slot.",
)
@click.option("--notes", help="For add-notes: the notes text.")
def act(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    org_id: str,
    staff: str,
    booking_id: str,
    action: BookingAction,
    volunteer: SubjectRef | None,
    start: datetime | None,
    end: datetime | None,
    time_zone: str,
    notes: str | None,
) -> None:
    """Apply a lifecycle ACTION to a booking."""
    app = _container()
    with reported_as_click_errors():
        outcome = app.engine.apply(
            booking_id,
            org_id,
            action,
            changed_by=staff,
            volunteer=volunteer,
            window=_window(start, end, time_zone),
            notes=notes,
        )
    report_outcome(outcome, action)


@bookings.command()
@org_option
@staff_option
@click.argument("booking_id")
@click.argument("text", required=False)
@click.option("--clear", is_flag=True, help="Remove the notes.")
def notes(
    org_id: str, staff: str, booking_id: str, text: str | None, clear: bool
) -> None:
    """Replace a booking's notes with TEXT (or read them from stdin with '-')."""
    if clear == (text is not None):
        raise click.UsageError("Give either TEXT or --clear.")
    if text == "-":
        text = sys.stdin.read().rstrip("\n")
    app = _container()
    with reported_as_click_errors():
        booking = app.engine.update_notes(
            booking_id, org_id, None if clear else text, changed_by=staff
        )
    success(f"Notes of booking {booking.booking_id} saved (version {booking.version})")


@bookings.command()
@org_option
@click.argument("booking_id")
@click.argument("action", type=EnumValueType(BookingAction))
def retry(org_id: str, booking_id: str, action: BookingAction) -> None:
    """Re-run the calendar/email side effects of ACTION without changing the booking.

    The booking must already show ACTION's effect, e.g. `cancel` can only be
    retried on a cancelled booking.
    """
    app = _container()
    with reported_as_click_errors():
        outcome = app.engine.retry_side_effects(booking_id, org_id, action)
    report_outcome(outcome, action)
