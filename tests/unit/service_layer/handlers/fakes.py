"""Fake implementations for testing service layer handlers."""

from __future__ import annotations

from typing import Any

from felinefinder.adapters.bookings import InMemoryBookingStore
from felinefinder.bootstrap.bootstrap import build_message_bus
from felinefinder.interfaces.unit_of_work import AbstractUnitOfWork
from felinefinder.service_layer.handlers import COMMAND_HANDLERS
from felinefinder.service_layer.messagebus import MessageBus


class FakeUoW(AbstractUnitOfWork):
    """A fake unit of work for testing purposes.

    Commits only flip `committed`; nothing is rolled back.
    """

    def __init__(self) -> None:
        self.bookings = InMemoryBookingStore()
        self.committed = False

    def commit(self):
        self.committed = True

    def rollback(self):
        pass


def bootstrap_test_bus(**kwargs: Any) -> MessageBus:
    """Bootstrap a message bus for testing purposes.

    Keyword arguments (calendar, notifier, id_generator, clock) are passed to
    `build_message_bus`.
    """
    return build_message_bus(FakeUoW(), COMMAND_HANDLERS, **kwargs)
