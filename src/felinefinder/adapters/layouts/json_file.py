"""JSON-file LayoutStore.

All layouts live in one JSON object, ``{name: layout}``, in a file under the
user data directory (see `felinefinder.config.get_layouts_path`). Every write
rewrites the whole file through a temporary file and an atomic ``os.replace``,
so a crash mid-write leaves the previous file intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from felinefinder.interfaces.layout_store import (
    LayoutNotFoundError,
    LayoutStore,
    LayoutStoreError,
    normalize_layout_name,
)
from felinefinder.utils.clock import Clock, utc_now

from .memory import SAVED_AT_KEY

logger = logging.getLogger(__name__)


class JsonFileLayoutStore(LayoutStore):
    """LayoutStore persisted to a single JSON file."""

    def __init__(self, path: str | Path, clock: Clock = utc_now) -> None:
        self._path = Path(path)
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def save(self, name: str, layout: dict[str, Any]) -> str:
        key = normalize_layout_name(name)
        layouts = self._read()
        layouts[key] = {**layout, SAVED_AT_KEY: self._clock().isoformat()}
        self._write(layouts)
        logger.debug("Saved layout %r to %s", key, self._path)
        return key

    def load(self, name: str) -> dict[str, Any]:
        key = name.strip()
        layouts = self._read()
        if key not in layouts:
            raise LayoutNotFoundError(key)
        return layouts[key]

    def names(self) -> list[str]:
        return sorted(self._read())

    def delete(self, name: str) -> None:
        key = name.strip()
        layouts = self._read()
        if layouts.pop(key, None) is None:
            raise LayoutNotFoundError(key)
        self._write(layouts)
        logger.debug("Deleted layout %r from %s", key, self._path)

    # --- Internal Helpers ---

    def _read(self) -> dict[str, dict[str, Any]]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LayoutStoreError(f"Layout file {self._path} is not valid JSON") from e
        if not isinstance(data, dict):
            raise LayoutStoreError(f"Layout file {self._path} must hold a JSON object")
        return data

    def _write(self, layouts: dict[str, dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._path.parent,
            delete=False,
            suffix=".tmp",
        ) as tmp:
            json.dump(layouts, tmp, indent=2, sort_keys=True)
            tmp_path = Path(tmp.name)
        os.replace(tmp_path, self._path)
