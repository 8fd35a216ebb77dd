"""Layout store adapters: a JSON file for the CLI and an in-memory dict for tests."""

from .json_file import JsonFileLayoutStore
from .memory import InMemoryLayoutStore

__all__ = ["JsonFileLayoutStore", "InMemoryLayoutStore"]
