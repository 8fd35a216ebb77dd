"""Unit tests for :mod:`felinefinder.entrypoints.cli.helpers.messages`.

Glyph choice must follow the *current* stderr encoding, and every message is a
styled line on stderr so stdout stays clean for tables and CSV.
"""

import io

import click
import pytest

from felinefinder.entrypoints.cli.helpers.messages import (
    GLYPHS,
    _supports_character,
    error,
    glyph,
    success,
    warn,
)

ANSI_BOLD = "\x1b[1m"
ANSI_RESET = "\x1b[0m"
ANSI_FG = {"yellow": "\x1b[33m", "green": "\x1b[32m", "red": "\x1b[31m"}


class Terminal(io.StringIO):
    def __init__(self, encoding: str):
        super().__init__()
        self.terminal_encoding = encoding

    @property
    def encoding(self) -> str:
        return self.terminal_encoding

    def isatty(self) -> bool:
        return True


@pytest.fixture
def stderr_as(monkeypatch):
    """Route click's stderr to a `Terminal` with the given encoding."""

    def install(encoding: str) -> Terminal:
        term = Terminal(encoding)
        monkeypatch.setattr(click, "get_text_stream", lambda name: term)
        monkeypatch.setattr("sys.stderr", term)
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CLICOLOR", "1")
        return term

    return install


@pytest.mark.parametrize("kind", sorted(GLYPHS))
def test_ascii_terminal_gets_the_fallback(stderr_as, kind):
    stderr_as("ascii")
    assert glyph(kind) == GLYPHS[kind][1]


@pytest.mark.parametrize("kind", sorted(GLYPHS))
def test_utf8_terminal_gets_the_emoji(stderr_as, kind):
    stderr_as("utf-8")
    assert glyph(kind) == GLYPHS[kind][0]


def test_encoding_is_checked_on_every_call(monkeypatch):
    terminals = iter([Terminal("ascii"), Terminal("utf-8")])
    monkeypatch.setattr(click, "get_text_stream", lambda name: next(terminals))

    assert not _supports_character("✅")
    assert _supports_character("✅")


@pytest.mark.parametrize(
    ("emit", "kind", "colour"),
    [(warn, "caution", "yellow"), (success, "success", "green"), (error, "error", "red")],
)
@pytest.mark.parametrize("encoding", ["ascii", "utf-8"])
def test_message_is_a_bold_coloured_line(stderr_as, emit, kind, colour, encoding):
    term = stderr_as(encoding)

    emit("Booking bk-000001 saved")

    line = term.getvalue()
    expected_glyph = GLYPHS[kind][0 if encoding == "utf-8" else 1]
    assert f"{expected_glyph}  Booking bk-000001 saved" in line
    assert ANSI_BOLD in line
    assert ANSI_FG[colour] in line
    assert line.rstrip("\n").endswith(ANSI_RESET)


def test_warnings_do_not_reach_stdout(monkeypatch, capsys):
    monkeypatch.setattr(click, "get_text_stream", lambda name: Terminal("utf-8"))

    warn("calendar update failed")

    out, err = capsys.readouterr()
    assert out == ""
    assert "calendar update failed" in err
