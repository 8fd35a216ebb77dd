"""Contract tests every booking id generator must pass."""

from __future__ import annotations

import concurrent.futures as cf
from typing import TYPE_CHECKING

from felinefinder.adapters.bookings.schema import bookings

if TYPE_CHECKING:
    from felinefinder.interfaces.id_generator import IdGenerator

# pylint: disable=magic-value-comparison


def test_id_fits_the_bookings_primary_key(id_generator: IdGenerator) -> None:
    new_id = id_generator.new_id()
    assert isinstance(new_id, str)
    assert 0 < len(new_id) <= bookings.c.booking_id.type.length


def test_id_is_usable_as_a_cli_argument(id_generator: IdGenerator) -> None:
    """Staff paste booking ids into `felinefinder bookings act ID ...`."""
    new_id = id_generator.new_id()
    assert new_id.isprintable()
    assert not any(ch.isspace() for ch in new_id)
    assert not new_id.startswith("-")


def test_ids_are_never_repeated(id_generator: IdGenerator) -> None:
    ids = [id_generator.new_id() for _ in range(5000)]
    assert len(set(ids)) == len(ids)


def test_concurrent_booking_creation_gets_distinct_ids(id_generator: IdGenerator) -> None:
    with cf.ThreadPoolExecutor(max_workers=16) as pool:
        ids = list(pool.map(lambda _: id_generator.new_id(), range(8000)))
    assert len(set(ids)) == len(ids)
