"""Bootstrap the message bus with handlers, unit of work and side-effect adapters."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from felinefinder import config
from felinefinder.adapters.db.engine import make_engine
from felinefinder.adapters.id_generators import ULIDGenerator
from felinefinder.adapters.layouts import InMemoryLayoutStore, JsonFileLayoutStore
from felinefinder.adapters.side_effects import (
    RecordingCalendarSync,
    RecordingNotificationSender,
)
from felinefinder.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from felinefinder.service_layer.engine import LifecycleEngine
from felinefinder.service_layer.handlers import COMMAND_HANDLERS
from felinefinder.service_layer.messagebus import MessageBus
from felinefinder.utils.clock import Clock, utc_now

if TYPE_CHECKING:
    from felinefinder.interfaces.id_generator import IdGenerator
    from felinefinder.interfaces.layout_store import LayoutStore
    from felinefinder.interfaces.side_effects import CalendarSync, NotificationSender
    from felinefinder.interfaces.unit_of_work import AbstractUnitOfWork
    from felinefinder.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """A class to hold the wired application."""

    message_bus: MessageBus
    engine: LifecycleEngine
    layouts: LayoutStore
    calendar: CalendarSync
    notifier: NotificationSender


def build_write_uow(url: str) -> AbstractUnitOfWork:
    """Build a new unit of work for write operations."""
    return SqlAlchemyUnitOfWork(make_engine(url))


def build_message_bus(  # pylint: disable=too-many-arguments
    uow: AbstractUnitOfWork,
    command_handlers: Mapping[type[Command], Callable[..., Any]],
    *,
    calendar: CalendarSync | None = None,
    notifier: NotificationSender | None = None,
    id_generator: IdGenerator | None = None,
    clock: Clock = utc_now,
) -> MessageBus:
    """Build a message bus with injected dependencies."""
    dependencies = {
        "uow": uow,
        "calendar": calendar or RecordingCalendarSync(),
        "notifier": notifier or RecordingNotificationSender(),
        "id_generator": id_generator or ULIDGenerator(),
        "clock": clock,
    }
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(
        uow,
        command_handlers=injected_command_handlers,
    )


def _assemble(
    uow: AbstractUnitOfWork,
    layouts: LayoutStore,
    calendar: CalendarSync,
    notifier: NotificationSender,
    **kwargs: Any,
) -> AppContainer:
    message_bus = build_message_bus(
        uow, COMMAND_HANDLERS, calendar=calendar, notifier=notifier, **kwargs
    )
    return AppContainer(
        message_bus=message_bus,
        engine=LifecycleEngine(message_bus),
        layouts=layouts,
        calendar=calendar,
        notifier=notifier,
    )


def bootstrap(db_url: str | None = None) -> AppContainer:
    """Wire the application against the configured database and layout file."""
    return _assemble(
        uow=build_write_uow(db_url or config.get_db_url()),
        layouts=bootstrap_layouts(),
        calendar=RecordingCalendarSync(),
        notifier=RecordingNotificationSender(),
    )


def bootstrap_layouts() -> LayoutStore:
    """Return the layout store; it needs no database."""
    return JsonFileLayoutStore(config.get_layouts_path())


def bootstrap_in_memory(  # pylint: disable=too-many-arguments
    *,
    uow: AbstractUnitOfWork | None = None,
    layouts: LayoutStore | None = None,
    calendar: CalendarSync | None = None,
    notifier: NotificationSender | None = None,
    id_generator: IdGenerator | None = None,
    clock: Clock = utc_now,
) -> AppContainer:
    """Wire the application on in-memory adapters (tests, demos)."""
    return _assemble(
        uow=uow or InMemoryUnitOfWork(),
        layouts=layouts or InMemoryLayoutStore(clock),
        calendar=calendar or RecordingCalendarSync(),
        notifier=notifier or RecordingNotificationSender(),
        id_generator=id_generator,
        clock=clock,
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler declares as parameters, by name."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
