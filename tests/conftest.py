"""Shared pytest configuration for the Feline Finder test suite."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from tests.helpers.markers import mark_by_tier

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=unused-argument

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.datagen",
]

TESTS_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    mark_by_tier(TESTS_ROOT, items)


@pytest.fixture
def engine(request: pytest.FixtureRequest) -> Engine:
    """The engine fixture named by an indirect parameter.

    Lets one test run against both SQLite flavours::

        @pytest.mark.parametrize(
            "engine", ["sqlite_engine_memory", "sqlite_engine_file"], indirect=True
        )
    """
    return request.getfixturevalue(request.param)
