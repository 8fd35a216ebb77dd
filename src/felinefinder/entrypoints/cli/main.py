"""Feline Finder CLI entry point.

Defines the top-level ``felinefinder`` command (via Click-Extra), configures
logging once for every subcommand, and registers the command groups:

- ``felinefinder db``       forward-only database management.
- ``felinefinder bookings`` list, create, act on, annotate and export bookings.
- ``felinefinder layouts``  saved booking-list layouts.

Examples
    $ felinefinder --version
    $ felinefinder db upgrade
    $ felinefinder bookings list --group early-stage --sort start
"""

import logging
from pathlib import Path

import click
import click_extra as clickx

from felinefinder import __version__, config
from felinefinder.logging import (
    DEFAULT_CAPACITY,
    LogSettings,
    configure_logging,
    console_level,
    log_startup,
)

from .bookings import bookings as bookings_group
from .db import db as db_group
from .helpers.log_level_parser import parse_log_level
from .layouts import layouts as layouts_group

logger = logging.getLogger(__name__)


HELP = """Feline Finder command-line interface.

    Staff tooling for adoption appointments: move bookings through their
    workflow (setup, confirmation, volunteer assignment, visit, adoption),
    keep the shelter calendar and adopter emails in step, and review the
    booking list with filters, sorting and saved layouts.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        f"  Environment: {config.DB_URL_ENV}, {config.ORG_ID_ENV}, {config.STAFF_ENV}",
        f"  Layouts    : {config.LAYOUTS_PATH_ENV}",
        f"  Logging    : {config.LOG_PATH_ENV}, {config.LOGGER_LEVELS_ENV}",
    ]
)


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Show more on the console: -v adds INFO (side effects), -vv adds DEBUG.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Show less on the console: -q hides warnings, -qq hides errors too.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Debug console output: DEBUG level, source paths, tracebacks with locals.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=config.default_log_path,
    envvar=config.LOG_PATH_ENV,
    show_envvar=True,
    help="File the flight recorder writes to (truncated at every run).",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=DEFAULT_CAPACITY,
    hidden=True,
    envvar=config.FLIGHT_RECORDER_CAPACITY_ENV,
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    show_envvar=True,
    help=(
        "Keep recent DEBUG records in memory, whatever -v/-q say, and write "
        "them to --log-path as soon as a WARNING is logged. Rejected actions "
        "and failed calendar syncs or emails are warnings."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    show_default=True,
    show_envvar=True,
    help="Also write the flight recorder to --log-path when the command ends.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar=config.LOGGER_LEVELS_ENV,
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
    help=(
        "Minimum level for one logger, as NAME=LEVEL; applies to the console "
        "and the flight recorder. Repeatable, e.g. -L sqlalchemy.engine=INFO "
        "-L felinefinder.adapters=DEBUG."
    ),
)
@clickx.pass_context
def felinefinder(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Feline Finder command-line interface."""

    settings = LogSettings(
        level=console_level(verbose_count, quiet_count),
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path if flight_recorder else None,
        capacity=flight_recorder_capacity,
        flush_on_exit=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, __version__, settings, handlers)

    ctx.call_on_close(logging.shutdown)


felinefinder.add_command(db_group)
felinefinder.add_command(bookings_group)
felinefinder.add_command(layouts_group)
