"""
Runtime exports.

Mode state machine, stage contract and transition results. The pygame
MainLoop is imported from its module directly to keep this package
importable without a display.
"""

from modeshift.core.runtime.app_settings import Display, Loading, Debug, Palette, apply_settings
from modeshift.core.runtime.mode import Mode, Trigger, TRANSITIONS, PRELOADS, INITIAL_MODE
from modeshift.core.runtime.stage_state import StageState
from modeshift.core.runtime.base_stage import ResourceStage
from modeshift.core.runtime.errors import (
    ModeShiftError,
    LoadFailure,
    StageContractError,
    StageDisposedError,
    StageNotReadyError,
    TransitionResult,
    TransitionStatus,
)
from modeshift.core.runtime.mode_controller import (
    ModeController,
    ControllerState,
    TransitionInProgressError,
)

__all__ = [
    # Settings
    'Display',
    'Loading',
    'Debug',
    'Palette',
    'apply_settings',
    # State machine
    'Mode',
    'Trigger',
    'TRANSITIONS',
    'PRELOADS',
    'INITIAL_MODE',
    'ModeController',
    'ControllerState',
    # Stages
    'StageState',
    'ResourceStage',
    # Errors
    'ModeShiftError',
    'LoadFailure',
    'StageContractError',
    'StageDisposedError',
    'StageNotReadyError',
    'TransitionInProgressError',
    'TransitionResult',
    'TransitionStatus',
]
