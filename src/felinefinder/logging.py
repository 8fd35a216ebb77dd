"""Logging setup for the Feline Finder CLI.

Two handlers hang off the root logger:

- a Rich console handler on stderr, at the level chosen with ``-v``/``-q``;
- an optional "flight recorder": a `MemoryHandler` that keeps the most recent
  records at DEBUG and writes them to a file only when something goes wrong
  (a WARNING or worse, e.g. a failed calendar sync) or, with ``--force-flush``,
  when the command exits.

The root logger itself is left at DEBUG so the flight recorder sees everything;
each handler filters on its own.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

from felinefinder import config

# pylint: disable=too-few-public-methods

PROJECT_LOGGER = "felinefinder"
DEFAULT_CONSOLE_LEVEL = logging.WARNING
DEFAULT_CAPACITY = 2000

RECORDER_FORMAT = (
    "%(asctime)s %(levelname)-8s %(name)s [%(threadName)s] "
    "%(filename)s:%(lineno)d %(message)s"
)
REPORTED_LIBRARIES = ("sqlalchemy", "alembic", "click", "click-extra", "rich")

ColorSystem = Literal["auto", "standard", "256", "truecolor", "windows"]


def console_level(verbose: int = 0, quiet: int = 0) -> int:
    """Each ``-v`` lowers the WARNING default by one level, each ``-q`` raises it."""
    level = DEFAULT_CONSOLE_LEVEL - 10 * verbose + 10 * quiet
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@dataclass(frozen=True)
class LogSettings:
    """How the CLI wants logging set up for one invocation.

    `log_path=None` turns the flight recorder off.
    """

    level: int = DEFAULT_CONSOLE_LEVEL
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    capacity: int = DEFAULT_CAPACITY
    flush_on_exit: bool = False
    logger_levels: Mapping[str, int] = field(default_factory=dict)

    @property
    def effective_level(self) -> int:
        return logging.DEBUG if self.debug else self.level


class LibraryTagFilter(logging.Filter):
    """Tag records from other libraries with their top-level package.

    Sets ``record.tag`` to e.g. ``"[alembic] "`` for ``alembic.runtime.migration``
    and to ``""`` for Feline Finder's own loggers. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.partition(".")[0]
        record.tag = "" if top == PROJECT_LOGGER else f"[{top}] "
        return True


def console_handler(settings: LogSettings) -> RichHandler:
    """Rich handler on stderr; in debug mode it shows paths and timestamps."""
    color_system: ColorSystem | None = "auto" if settings.color else None
    handler = RichHandler(
        level=settings.effective_level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=settings.debug,
        show_time=False,
        show_path=settings.debug,
        enable_link_path=settings.debug,
    )
    if settings.debug:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.addFilter(LibraryTagFilter())
        handler.setFormatter(logging.Formatter("%(tag)s%(message)s"))
    return handler


def flight_recorder(
    path: Path,
    capacity: int = DEFAULT_CAPACITY,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Buffer up to `capacity` records and dump them to `path` on WARNING.

    The target file is truncated when the recorder is created, so the file
    always describes the latest invocation only.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=flush_on_close,
    )


def configure_logging(settings: LogSettings) -> list[logging.Handler]:
    """Install the console handler and, if enabled, the flight recorder.

    Replaces any handlers already on the root logger and applies the
    per-logger minimum levels. Returns the installed handlers.
    """
    handlers: list[logging.Handler] = [console_handler(settings)]
    if settings.log_path is not None:
        handlers.append(
            flight_recorder(
                settings.log_path,
                capacity=settings.capacity,
                flush_on_close=settings.flush_on_exit,
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def _library_version(dist: str) -> str:
    try:
        return version(dist)
    except PackageNotFoundError:
        return "<not installed>"


def log_startup(
    logger: logging.Logger,
    app_version: str,
    settings: LogSettings,
    handlers: list[logging.Handler],
) -> None:
    """One INFO line describing the run, then DEBUG context for bug reports."""
    logger.info(
        "Feline Finder %s (console=%s, flight-recorder=%s)",
        app_version,
        logging.getLevelName(settings.effective_level),
        settings.log_path or "OFF",
    )
    logger.debug(
        "Python %s on %s %s (pid %s, cwd %s)",
        sys.version.split()[0],
        platform.system(),
        platform.release(),
        os.getpid(),
        Path.cwd(),
    )
    logger.debug(
        "Libraries: %s",
        ", ".join(f"{dist} {_library_version(dist)}" for dist in REPORTED_LIBRARIES),
    )
    logger.debug(
        "Organization %s, staff %s",
        os.environ.get(config.ORG_ID_ENV) or "<unset>",
        os.environ.get(config.STAFF_ENV) or "<unset>",
    )
    logger.debug("Handlers: %s", ", ".join(type(h).__name__ for h in handlers))
    if settings.logger_levels:
        logger.debug(
            "Logger levels: %s",
            ", ".join(
                f"{name}={logging.getLevelName(level)}"
                for name, level in sorted(settings.logger_levels.items())
            ),
        )
