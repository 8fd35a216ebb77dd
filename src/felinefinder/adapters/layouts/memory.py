"""In-memory LayoutStore."""

from typing import Any

from felinefinder.interfaces.layout_store import (
    LayoutNotFoundError,
    LayoutStore,
    normalize_layout_name,
)
from felinefinder.utils.clock import Clock, utc_now

SAVED_AT_KEY = "saved_at"


class InMemoryLayoutStore(LayoutStore):
    """Layouts kept in a dict; lost when the instance is discarded."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._layouts: dict[str, dict[str, Any]] = {}
        self._clock = clock

    def save(self, name: str, layout: dict[str, Any]) -> str:
        key = normalize_layout_name(name)
        self._layouts[key] = {**layout, SAVED_AT_KEY: self._clock().isoformat()}
        return key

    def load(self, name: str) -> dict[str, Any]:
        key = name.strip()
        if key not in self._layouts:
            raise LayoutNotFoundError(key)
        return dict(self._layouts[key])

    def names(self) -> list[str]:
        return sorted(self._layouts)

    def delete(self, name: str) -> None:
        key = name.strip()
        if self._layouts.pop(key, None) is None:
            raise LayoutNotFoundError(key)
