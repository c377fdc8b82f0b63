"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest

from stablesocket.config import reset_default_values
from stablesocket.connection_config import ControllerConfig
from stablesocket.controller import ConnectionController
from tests.helpers.fake_transport import FakeTransport
from tests.helpers.manual_scheduler import ManualScheduler

# Set required environment variables for tests
os.environ.setdefault("STABLESOCKET_DEBOUNCE_SECONDS", "1.0")
os.environ.setdefault("STABLESOCKET_OPEN_TIMEOUT_SECONDS", "5")
os.environ.setdefault("STABLESOCKET_CLOSE_TIMEOUT_SECONDS", "2")
os.environ.setdefault("STABLESOCKET_PING_INTERVAL_SECONDS", "0")
os.environ.setdefault("STABLESOCKET_MAX_MESSAGE_BYTES", "1048576")


@pytest.fixture(autouse=True)
def _fresh_dotenv_cache():
    reset_default_values()
    yield
    reset_default_values()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def controller(fake_transport, scheduler):
    ctrl = ConnectionController(
        fake_transport,
        config=ControllerConfig(debounce_seconds=1.0),
        scheduler=scheduler,
        name="test",
    )
    yield ctrl
    ctrl.dispose()
