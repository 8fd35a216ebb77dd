"""CLI fixtures for tests under `tests/functional/`."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from felinefinder.config import DB_URL_ENV, LAYOUTS_PATH_ENV, ORG_ID_ENV, STAFF_ENV
from felinefinder.entrypoints.cli.main import felinefinder

# pylint: disable=redefined-outer-name


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """A SQLite file URL under the test's temp dir (not yet migrated)."""
    return f"sqlite:///{tmp_path / 'bookings.db'}"


@pytest.fixture
def cli_env(tmp_path: Path, db_url: str) -> dict[str, str]:
    """Environment of a staff member whose shell is fully configured."""
    return {
        DB_URL_ENV: db_url,
        LAYOUTS_PATH_ENV: str(tmp_path / "layouts.json"),
        ORG_ID_ENV: "org-1",
        STAFF_ENV: "jordan",
        "FELINEFINDER_LOG_PATH": str(tmp_path / "latest.log"),
        "COLUMNS": "200",
    }


@pytest.fixture
def runner(cli_env: dict[str, str]) -> CliRunner:
    return CliRunner(env=cli_env)


@pytest.fixture
def migrated_runner(runner: CliRunner) -> CliRunner:
    """A runner whose database has been upgraded to head."""
    result = runner.invoke(felinefinder, ["db", "upgrade", "--force"])
    assert result.exit_code == 0, result.output
    return runner
