"""Feline Finder DB CLI: forward-only Alembic wrappers.

Provides the `felinefinder db` command group. Bookings are never hard-deleted
and their audit trail is append-only, so destructive operations like
`downgrade` or `stamp` are not exposed.

Commands
- `current`  : Show the current DB revision.
- `heads`    : Show available head revisions.
- `history`  : Show migration history (supports `-v` and `-i`).
- `upgrade`  : Apply migrations up to `head`. Prompts for confirmation unless
               `--force` is provided. Supports `--sql` to print SQL instead.
- `status`   : Show connectivity, whether the schema is up to date and, if it
               is, how many bookings and audit entries are stored.

Requirements
- Environment variable **`FELINEFINDER_DB_URL`** must be set, e.g.
      export FELINEFINDER_DB_URL='sqlite:///bookings.db'

Examples
    $ felinefinder db upgrade --force
    $ felinefinder db history -vi
"""

from __future__ import annotations

import sys
from enum import Enum

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import func, select, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, OperationalError

from felinefinder import config
from felinefinder.adapters.bookings.schema import booking_audit, bookings
from felinefinder.adapters.db.engine import make_engine

from .helpers import error, file_link, sanitize_url, sqlite_file, success, warn

EXAMPLE_URL = "sqlite:///bookings.db"

MISSING_DB_URL_MSG = (
    f"{config.DB_URL_ENV} is not set.\n\n"
    "Point it at the booking database before running this command, e.g.:\n"
    f"  export {config.DB_URL_ENV}='{EXAMPLE_URL}'\n"
    "  or in PowerShell:\n"
    f"  $env:{config.DB_URL_ENV}='{EXAMPLE_URL}'"
)

INVALID_URL_FORMAT_MSG = (
    f"The value of {config.DB_URL_ENV} is not a valid SQLAlchemy database URL."
)

CANNOT_CONNECT_MSG = (
    f"{config.DB_URL_ENV} is set, but the booking database is not reachable.\n"
    "Check that the database server is running and the URL is correct."
)

UPGRADE_SCHEMA_WARNING = (
    "This will upgrade the booking tables to the latest schema.\n"
    "Bookings and their audit trail cannot be restored without a backup; "
    "take one before proceeding."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'felinefinder db upgrade' to update the schema."


def _ping(url: str) -> None:
    engine = make_engine(url)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))  # pragma: no mutate
    finally:
        engine.dispose()


def get_checked_url() -> str:
    """Return the configured DB URL after checking that it connects.

    Raises:
        click.ClickException: With a setup hint when the URL is missing,
            malformed or unreachable.
    """
    try:
        url = config.get_db_url()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e
    try:
        _ping(url)
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    return url


alembic_verbose = click.option(
    "--verbose", "-v", "verbose", is_flag=True, help="Show Alembic's verbose output."
)


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Create and migrate the booking database."""


@db.command()
@alembic_verbose
def current(verbose: bool) -> None:
    """Print the revision the booking database is stamped with."""
    cfg = config.build_alembic_config(db_url=get_checked_url(), stdout=sys.stdout)
    command.current(cfg, verbose=verbose)


@db.command()
@alembic_verbose
def heads(verbose: bool) -> None:
    """Print the newest packaged migration."""
    cfg = config.build_alembic_config(stdout=sys.stdout)
    command.heads(cfg, verbose=verbose)


@db.command()
@alembic_verbose
@click.option(
    "--indicate-current",
    "-i",
    "indicate_current",
    is_flag=True,
    help="Mark the revision the database is at.",
)
def history(verbose: bool, indicate_current: bool) -> None:
    """List the packaged migrations, newest first."""
    cfg = (
        config.build_alembic_config(db_url=get_checked_url(), stdout=sys.stdout)
        if indicate_current
        else config.build_alembic_config(stdout=sys.stdout)
    )
    command.history(cfg, verbose=verbose, indicate_current=indicate_current)


@db.command()
@click.option("--sql", is_flag=True, help="Print the migration SQL instead of running it.")
@click.option("--force", is_flag=True, help="Skip the backup reminder and confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Migrate the booking tables to the newest schema."""
    url = get_checked_url()
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    if not force and not sql:
        warn(UPGRADE_SCHEMA_WARNING)
        click.secho(f"db: {click.style(sanitize_url(url), underline=True)}")
        click.confirm("Migrate this database now?", abort=True)
    command.upgrade(cfg, revision="head", sql=sql)
    if not sql:
        success("Booking tables are up to date.")


class SchemaState(Enum):
    UP_TO_DATE = "up to date"
    OUT_OF_DATE = "out of date"
    UNINITIALIZED = "uninitialized"

    @classmethod
    def compare(cls, current: str | None, head: str | None) -> SchemaState:
        if current == head:
            return cls.UP_TO_DATE
        if current is None:
            return cls.UNINITIALIZED
        return cls.OUT_OF_DATE  # pragma: nocover


def schema_revisions(url: str) -> tuple[str | None, str | None]:
    """The revision stamped in the database and the newest packaged one."""
    engine = make_engine(url)
    try:
        with engine.connect() as conn:
            current = MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()
    script = ScriptDirectory.from_config(config.build_alembic_config(db_url=url))
    return current, script.get_current_head()


def booking_counts(url: str) -> tuple[int, int]:
    """Bookings and audit entries stored, across all organizations."""
    engine = make_engine(url)
    try:
        with engine.connect() as conn:
            total = conn.scalar(select(func.count()).select_from(bookings))
            audited = conn.scalar(select(func.count()).select_from(booking_audit))
    finally:
        engine.dispose()
    return total or 0, audited or 0


@db.command()
def status() -> None:
    """Report whether the booking database is reachable and migrated."""
    try:
        url = get_checked_url()
    except click.ClickException as e:
        error("Cannot connect to database")
        click.echo(e.format_message())
        return

    success("Database reachable")
    click.echo(f"Backend : {make_url(url).get_backend_name()}")
    click.echo(f"URL     : {sanitize_url(url)}")
    if (path := sqlite_file(url)) is not None:
        click.echo(f"File    : {file_link(path)}")

    current, head = schema_revisions(url)
    state = SchemaState.compare(current, head)
    label = f"{current} ({state.value})" if current else state.value
    click.echo(f"Schema  : {label}")
    if state is not SchemaState.UP_TO_DATE:
        warn(UPGRADE_SCHEMA_INSTRUCTIONS)
        return
    total, audited = booking_counts(url)
    click.echo(f"Bookings: {total} ({audited} audit entries)")
