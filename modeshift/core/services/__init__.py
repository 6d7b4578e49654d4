"""
Core services exports.

Event bus, configuration loading and the host interface. The pygame-backed
DisplayManager and InputManager are imported from their modules directly.
"""

from modeshift.core.services.config_manager import load_config
from modeshift.core.services.event_manager import (
    get_events,
    reset_events,
    EventManager,
    BaseEvent,
    TriggerEvent,
    LoadingStartedEvent,
    LoadingFinishedEvent,
    ModeChangedEvent,
    TransitionFailedEvent,
    DebugOverlayToggledEvent,
)
from modeshift.core.services.stage_host import StageHost

__all__ = [
    # Config
    'load_config',
    # Events
    'get_events',
    'reset_events',
    'EventManager',
    'BaseEvent',
    'TriggerEvent',
    'LoadingStartedEvent',
    'LoadingFinishedEvent',
    'ModeChangedEvent',
    'TransitionFailedEvent',
    'DebugOverlayToggledEvent',
    # Host
    'StageHost',
]
