"""Unit tests for the CLI logging setup."""

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from felinefinder.logging import (
    LibraryTagFilter,
    LogSettings,
    configure_logging,
    console_level,
    flight_recorder,
)

# pylint: disable=redefined-outer-name, magic-value-comparison


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    for handler in [h for h in root.handlers if h not in saved_handlers]:
        root.removeHandler(handler)
        target = getattr(handler, "target", None)
        handler.close()
        if target is not None:
            target.close()
    root.setLevel(saved_level)


def _record(name: str, level: int = logging.INFO, msg: str = "hello"):
    return logging.LogRecord(name, level, __file__, 1, msg, None, None)


@pytest.mark.parametrize(
    "verbose, quiet, expected",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (5, 0, logging.DEBUG),
        (0, 1, logging.ERROR),
        (0, 9, logging.CRITICAL),
        (1, 1, logging.WARNING),
    ],
)
def test_console_level_is_clamped(verbose, quiet, expected):
    assert console_level(verbose, quiet) == expected


def test_library_tag_filter_tags_only_other_packages():
    tag = LibraryTagFilter()
    ours = _record("felinefinder.service_layer.messagebus")
    theirs = _record("alembic.runtime.migration")

    assert tag.filter(ours) and ours.tag == ""
    assert tag.filter(theirs) and theirs.tag == "[alembic] "


def test_debug_overrides_console_level():
    assert LogSettings(level=logging.ERROR, debug=True).effective_level == logging.DEBUG
    assert LogSettings(level=logging.ERROR).effective_level == logging.ERROR


def test_flight_recorder_writes_only_after_a_warning(tmp_path: Path):
    path = tmp_path / "latest.log"
    recorder = flight_recorder(path, capacity=50)
    target = recorder.target
    try:
        recorder.handle(_record("felinefinder.x", logging.DEBUG, "quiet detail"))
        target.flush()
        assert path.read_text(encoding="utf-8") == ""

        recorder.handle(_record("felinefinder.x", logging.WARNING, "calendar down"))
        content = path.read_text(encoding="utf-8")
        assert "quiet detail" in content
        assert "WARNING" in content and "calendar down" in content
    finally:
        recorder.close()
        target.close()


def test_flight_recorder_truncates_previous_run(tmp_path: Path):
    path = tmp_path / "latest.log"
    path.write_text("old run\n", encoding="utf-8")
    recorder = flight_recorder(path)
    recorder.target.close()
    recorder.close()
    assert path.read_text(encoding="utf-8") == ""


def test_configure_logging_without_recorder(restore_root_logger):
    handlers = configure_logging(LogSettings(level=logging.INFO))

    assert [type(h) for h in handlers] == [RichHandler]
    assert restore_root_logger.handlers == handlers
    assert restore_root_logger.level == logging.DEBUG
    assert handlers[0].level == logging.INFO


def test_configure_logging_applies_logger_levels(restore_root_logger, tmp_path):
    settings = LogSettings(
        log_path=tmp_path / "latest.log",
        logger_levels={"felinefinder.tests.noisy": logging.ERROR},
    )
    handlers = configure_logging(settings)

    assert len(handlers) == 2
    assert logging.getLogger("felinefinder.tests.noisy").level == logging.ERROR
    logging.getLogger("felinefinder.tests.noisy").setLevel(logging.NOTSET)
