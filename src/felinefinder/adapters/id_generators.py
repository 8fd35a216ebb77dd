"""Booking id generators.

`ULIDGenerator` is the production default. `SimpleIdGenerator` gives readable,
predictable ids (``bk-000001``) for demos and tests.
"""

import itertools
import threading

from ulid import monotonic

from felinefinder.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Monotonic ULIDs: 26-character ids that sort in creation order.

    `ulid.monotonic` guarantees ordering within one millisecond; the lock
    keeps that guarantee when several threads create bookings at once.
    """

    _lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            return str(monotonic.new())


class SimpleIdGenerator(IdGenerator):
    """``<prefix><counter>`` ids, zero-padded so they also sort as text.

    Counting restarts with every instance, so two instances hand out the same
    ids. Never use it against a store that outlives the generator.
    """

    def __init__(self, prefix: str = "bk-", width: int = 6, start: int = 1) -> None:
        self._prefix = prefix
        self._width = width
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            number = next(self._counter)
        return f"{self._prefix}{number:0{self._width}d}"
