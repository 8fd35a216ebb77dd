"""Command dispatch for the booking service layer."""

import functools
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from felinefinder.domain.errors import DomainError
from felinefinder.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command

logger = logging.getLogger(__name__)

Handler = Callable[[Command], Any]

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Raised when a command type has no registered handler."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")
        self.command = cmd


def describe_handler(handler: Callable[..., Any]) -> str:
    """Name used for a handler in log lines.

    Bootstrapped handlers are `functools.partial` objects; they are named after
    the function they wrap.
    """
    while isinstance(handler, functools.partial):
        handler = handler.func
    return getattr(handler, "__name__", None) or repr(handler)


class MessageBus:
    """Route each command to its handler and return the handler's result.

    A `DomainError` (invalid transition, unknown booking, stale version...) is
    an expected rejection: it is logged at WARNING, which is enough to flush
    the CLI flight recorder. Anything else is logged with its traceback. Both
    are re-raised unchanged.

    Args:
        uow: The unit of work the handlers were bootstrapped with; queries
            read through it too.
        command_handlers: Command type to handler. Handlers take the command
            only; their other dependencies are bound by `felinefinder.bootstrap`.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: Mapping[type[Command], Handler],
    ) -> None:
        self.uow = uow
        self._command_handlers = dict(command_handlers)

    def handler_for(self, cmd: Command) -> Handler:
        try:
            return self._command_handlers[type(cmd)]
        except KeyError:
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd) from None

    def handle(self, cmd: Command) -> Any:
        """Dispatch `cmd` and return what its handler returns.

        Raises:
            NoHandlerForCommand: If no handler is registered for the command type.
        """
        handler = self.handler_for(cmd)
        name = describe_handler(handler)
        logger.debug("Handling command %s with handler %s", cmd, name)
        started = time.perf_counter()
        try:
            result = handler(cmd)
        except DomainError as exc:
            logger.warning(
                "Command %s rejected by handler %s: %s", type(cmd).__name__, name, exc
            )
            raise
        except Exception:  # pylint: disable=broad-except
            logger.exception("Exception handling command %s with handler %s", cmd, name)
            raise
        logger.debug(
            "Handled %s in %.1f ms",
            type(cmd).__name__,
            (time.perf_counter() - started) * 1000,
        )
        return result
