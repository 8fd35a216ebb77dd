"""FELINE FINDER

Bookings core for the Feline Finder rescue-organization portal.
It moves adoption appointments through their workflow stages, triggers
calendar and notification side effects at stage boundaries, and composes
the filtered, sorted and grouped booking views staff work from.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
