"""Service layer handlers."""

from collections.abc import Callable
from typing import Any

from .booking_handlers import COMMAND_HANDLERS as BOOKING_COMMAND_HANDLERS

__all__ = ["COMMAND_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., Any]] = {
    **BOOKING_COMMAND_HANDLERS,
}
