"""Fixtures for id_generator contract tests."""

from collections.abc import Iterable

import pytest

from felinefinder.adapters.id_generators import SimpleIdGenerator, ULIDGenerator
from felinefinder.interfaces.id_generator import IdGenerator


@pytest.fixture(params=["ulid", "simple"])
def id_generator(request: pytest.FixtureRequest) -> Iterable[IdGenerator]:
    """Return a fresh IdGenerator for each backend."""
    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")


@pytest.fixture(params=["ulid", "simple"])
def ordered_id_generator(request: pytest.FixtureRequest) -> Iterable[IdGenerator]:
    """Generators whose ids sort in creation order within one thread."""
    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown ordered id generator type: {request.param}")
