"""Pytest fixtures for service layer handler unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from felinefinder.adapters.id_generators import SimpleIdGenerator
from felinefinder.adapters.side_effects import (
    RecordingCalendarSync,
    RecordingNotificationSender,
)

from .fakes import bootstrap_test_bus

if TYPE_CHECKING:
    from felinefinder.service_layer.messagebus import MessageBus

# pylint: disable=redefined-outer-name


@pytest.fixture
def calendar() -> RecordingCalendarSync:
    """Calendar adapter handed to the bus. Classes can override this fixture."""
    return RecordingCalendarSync()


@pytest.fixture
def notifier() -> RecordingNotificationSender:
    """Notification adapter handed to the bus. Classes can override this fixture."""
    return RecordingNotificationSender()


@pytest.fixture
def bus_params(calendar, notifier, fixed_clock):
    """Default bus parameters. Classes can override this fixture"""
    return {
        "calendar": calendar,
        "notifier": notifier,
        "id_generator": SimpleIdGenerator(),
        "clock": fixed_clock,
    }


@pytest.fixture
def make_test_bus(bus_params) -> Callable[..., MessageBus]:
    """Factory to create a message bus with an in-memory store and fake UoW."""

    def _make():
        return bootstrap_test_bus(**bus_params)

    return _make
