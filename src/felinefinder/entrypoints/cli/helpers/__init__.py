"""CLI helpers for Feline Finder.

Display of database URLs and local files, stderr messages with emoji to ASCII
fallbacks, domain-error translation and parameter types for booking input.
"""

from .display import file_link, hyperlink, sanitize_url, sqlite_file
from .messages import error, success, warn

__all__ = [
    "error",
    "file_link",
    "hyperlink",
    "sanitize_url",
    "sqlite_file",
    "success",
    "warn",
]
