"""
conftest.py
-----------
Shared pytest configuration and fixtures for modeshift tests.

Contains:
- Headless pygame setup (dummy video/audio drivers)
- FakeStage and RecordingHost collaborators for the mode controller
- Pytest markers
"""

import asyncio
import os

# Must be set before pygame creates a display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from modeshift.core.debug.debug_logger import LoggerConfig
from modeshift.core.runtime.base_stage import ResourceStage
from modeshift.core.runtime.mode_controller import ModeController
from modeshift.core.services.event_manager import EventManager, reset_events
from modeshift.core.services.stage_host import StageHost


# ===========================================================
# Fake Collaborators
# ===========================================================

class FakeStage(ResourceStage):
    """
    Stage that records its lifecycle into the host journal.

    gate: asyncio.Event the load waits on (None = finish on next tick)
    error: exception raised at the end of load
    """

    def __init__(self, mode, host, gate=None, error=None):
        super().__init__(mode, surface=object())
        self.host = host
        self.gate = gate
        self.error = error
        self.load_calls = 0
        self.frames = 0
        self.inputs = []
        self.detach_calls = 0
        self.release_calls = 0

    async def load(self):
        self.load_calls += 1
        self.host.journal.append(("load", self.mode))
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        self.host.journal.append(("ready", self.mode))

    def draw(self):
        self.frames += 1

    def handle_input(self, signal):
        self.inputs.append(signal)

    def on_attach(self):
        self.host.journal.append(("attach", self.mode))
        self.host.max_attached = max(self.host.max_attached, len(self.host.attached_stages()))

    def on_detach(self):
        self.detach_calls += 1
        self.host.journal.append(("detach", self.mode))

    def release(self):
        self.release_calls += 1
        self.host.journal.append(("dispose", self.mode))


class RecordingHost(StageHost):
    """StageHost that builds FakeStages and records every call."""

    def __init__(self):
        self.journal = []
        self.created = []
        self.gates = {}          # mode -> asyncio.Event for the next stage of that mode
        self.failures = {}       # mode -> exception raised by the next stage's load
        self.create_errors = {}  # mode -> exception raised by create_stage itself
        self.busy = False
        self.busy_shows = 0
        self.max_attached = 0
        self.resized = None
        self.debug_visible = False

    def create_stage(self, mode):
        if mode in self.create_errors:
            raise self.create_errors.pop(mode)
        stage = FakeStage(
            mode, self,
            gate=self.gates.pop(mode, None),
            error=self.failures.pop(mode, None),
        )
        self.created.append(stage)
        self.journal.append(("create", mode))
        return stage

    def show_busy_indicator(self):
        self.busy = True
        self.busy_shows += 1
        self.journal.append(("busy_on", None))

    def hide_busy_indicator(self):
        self.busy = False
        self.journal.append(("busy_off", None))

    def resize(self, width, height):
        self.resized = (width, height)

    def toggle_debug_overlay(self):
        self.debug_visible = not self.debug_visible
        return self.debug_visible

    # ===========================================================
    # Test Helpers
    # ===========================================================

    def attached_stages(self):
        return [s for s in self.created if s.attached]

    def stages_for(self, mode):
        return [s for s in self.created if s.mode is mode]

    def index(self, entry):
        return self.journal.index(entry)


async def settle(predicate, ticks=200):
    """Yield to the loop until predicate() is true or ticks run out."""
    for _ in range(ticks):
        if predicate():
            return True
        await asyncio.sleep(0)
    return predicate()


# ===========================================================
# Fixtures
# ===========================================================

@pytest.fixture(autouse=True)
def quiet_logger():
    """Silence DebugLogger output during tests."""
    previous = LoggerConfig.ENABLE_LOGGING
    LoggerConfig.ENABLE_LOGGING = False
    yield
    LoggerConfig.ENABLE_LOGGING = previous


@pytest.fixture
def events():
    """Fresh EventManager; the global singleton is reset around each test."""
    reset_events()
    manager = EventManager()
    yield manager
    reset_events()


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def controller(host, events):
    """ModeController with preloading enabled."""
    return ModeController(host, events, preload=True)


@pytest.fixture(name="settle")
def settle_fixture():
    return settle


@pytest.fixture
def collect(events):
    """Subscribe a list collector to an event type: collect(EventType) -> list."""
    def _collect(event_type):
        received = []
        events.subscribe(event_type, received.append)
        return received
    return _collect


# ===========================================================
# Pytest configuration
# ===========================================================

def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests that drive real pygame stages")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to everything not marked integration."""
    for item in items:
        if "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)
