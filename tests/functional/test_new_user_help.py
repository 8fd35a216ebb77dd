"""A staff member new to the tool finds their way around from the help output."""

import re
from textwrap import dedent

import pytest
from click.testing import CliRunner

import felinefinder
from felinefinder.entrypoints.cli import main

# pylint: disable=magic-value-comparison

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def run(*args: str, check: bool = True) -> str:
    """Invoke the CLI and return its output without colour codes."""
    result = CliRunner().invoke(main.felinefinder, list(args))
    if check:
        assert result.exit_code == 0, result.output
    return ANSI_RE.sub("", result.output)


def squash(text: str) -> str:
    return " ".join(text.split())


@pytest.mark.parametrize("args", [(), ("-h",), ("--help",)])
def test_top_level_help_introduces_the_tool(args):
    # A bare group invocation exits 2 on newer click releases.
    text = run(*args, check=bool(args))

    intro = squash(dedent(main.HELP))
    assert intro and intro in squash(text)
    for heading in ("Usage:", "Options:", "Commands:"):
        assert heading in text
    for group in ("db", "bookings", "layouts"):
        assert re.search(rf"^\s+{group}\b", text, re.MULTILINE), group
    assert "FELINEFINDER_DB_URL" in text


def test_version_is_printed():
    assert felinefinder.__version__ in run("--version")


def test_bookings_help_lists_its_commands():
    text = run("bookings", "--help")
    for command in ("list", "show", "create", "act", "notes", "retry", "export"):
        assert re.search(rf"^\s+{command}\b", text, re.MULTILINE), command


def test_act_help_names_the_actions():
    usage = "".join(run("bookings", "act", "--help").split())
    for action in ("assign-volunteer", "confirm-setup", "mark-adopted", "cancel"):
        assert action in usage
