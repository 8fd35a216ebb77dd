"""Interface for client-side storage of named booking layouts.

A layout is a JSON-compatible mapping produced by
`felinefinder.views.preferences.ViewPreferences.to_dict`; the store does not
interpret it.
"""

import abc
from typing import Any


class LayoutStoreError(Exception):
    """Base class for layout store errors."""


class LayoutNotFoundError(LayoutStoreError):
    """Raised when loading or deleting a layout name that was never saved."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Layout '{name}' not found.")
        self.name = name


class InvalidLayoutNameError(LayoutStoreError):
    """Raised when a layout name is empty after trimming whitespace."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid layout name: {name!r}")
        self.name = name


def normalize_layout_name(name: str) -> str:
    """Trim a layout name.

    Raises:
        InvalidLayoutNameError: If nothing is left after trimming.
    """
    if not (trimmed := name.strip()):
        raise InvalidLayoutNameError(name)
    return trimmed


class LayoutStore(abc.ABC):
    """Named layouts, keyed by their trimmed name. Saving an existing name overwrites it."""

    @abc.abstractmethod
    def save(self, name: str, layout: dict[str, Any]) -> str:
        """Save a layout and return the normalized name it was stored under.

        Raises:
            InvalidLayoutNameError: If the name is blank.
        """

    @abc.abstractmethod
    def load(self, name: str) -> dict[str, Any]:
        """Return a saved layout.

        Raises:
            LayoutNotFoundError: If no layout has this name.
        """

    @abc.abstractmethod
    def names(self) -> list[str]:
        """Return saved layout names, sorted."""

    @abc.abstractmethod
    def delete(self, name: str) -> None:
        """Remove a saved layout.

        Raises:
            LayoutNotFoundError: If no layout has this name.
        """
