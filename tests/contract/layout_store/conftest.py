"""Fixtures for LayoutStore contract tests."""

from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

import pytest

from felinefinder.adapters.layouts import InMemoryLayoutStore, JsonFileLayoutStore
from felinefinder.interfaces.layout_store import LayoutStore

SAVED_AT = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(params=["memory", "json_file"])
def layout_store(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[LayoutStore]:
    """Return an empty LayoutStore with a frozen clock for each backend."""
    match request.param:
        case "memory":
            yield InMemoryLayoutStore(clock=lambda: SAVED_AT)
        case "json_file":
            yield JsonFileLayoutStore(tmp_path / "layouts.json", clock=lambda: SAVED_AT)
        case _:
            raise ValueError(f"unknown layout store type: {request.param}")


@pytest.fixture
def saved_at() -> datetime:
    """The instant every `layout_store` records as ``saved_at``."""
    return SAVED_AT
