"""Saved booking-list layouts.

A layout is a named bundle of list preferences (filters, sort, page size and
the workflow-sort toggle). Layouts are stored per user in a JSON file
(``FELINEFINDER_LAYOUTS_PATH`` or the platform data directory) and need no
database.

Examples
    $ felinefinder layouts save "Needs volunteer" --status pending-confirmation --sort start
    $ felinefinder bookings list --layout "Needs volunteer"
    $ felinefinder layouts delete "Needs volunteer"
"""

from __future__ import annotations

import json
from typing import Any

import click
import click_extra as clickx

from felinefinder.adapters.layouts import JsonFileLayoutStore
from felinefinder.bootstrap import bootstrap_layouts

from .helpers import file_link, success
from .helpers.errors import reported_as_click_errors
from .view_options import build_view_state, view_options


@click.group(cls=clickx.ExtraGroup)
def layouts() -> None:
    """Saved booking-list layouts."""


@layouts.command()
@click.argument("name")
@view_options
def save(name: str, view: dict[str, Any]) -> None:
    """Save the given view options as layout NAME (overwrites an existing one).

    With --layout, the saved layout is copied and the other options are applied
    on top of it.
    """
    store = bootstrap_layouts()
    with reported_as_click_errors():
        state = build_view_state(view, store)
        key = store.save(name, state.preferences.to_dict())
    success(f"Saved layout '{key}'")


@layouts.command("list")
def list_layouts() -> None:
    """List saved layout names, one per line."""
    store = bootstrap_layouts()
    with reported_as_click_errors():
        names = store.names()
    for name in names:
        click.echo(name)
    if isinstance(store, JsonFileLayoutStore):
        click.echo(f"{len(names)} layout(s) in {file_link(store.path)}", err=True)


@layouts.command()
@click.argument("name")
def show(name: str) -> None:
    """Print layout NAME as JSON."""
    store = bootstrap_layouts()
    with reported_as_click_errors():
        layout = store.load(name)
    click.echo(json.dumps(layout, indent=2, sort_keys=True))


@layouts.command()
@click.argument("name")
def delete(name: str) -> None:
    """Delete layout NAME."""
    store = bootstrap_layouts()
    with reported_as_click_errors():
        store.delete(name)
    success(f"Deleted layout '{name.strip()}'")
