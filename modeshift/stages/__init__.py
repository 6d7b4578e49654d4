"""
Built-in pygame stages, one per mode.
"""

from modeshift.core.runtime.mode import Mode
from modeshift.stages.start_stage import StartStage
from modeshift.stages.cutscene_stage import CutsceneStage
from modeshift.stages.session_stage import SessionStage
from modeshift.stages.failed_stage import FailedStage

STAGE_CLASSES = {
    Mode.START: StartStage,
    Mode.CUTSCENE: CutsceneStage,
    Mode.ACTIVE: SessionStage,
    Mode.FAILED: FailedStage,
}

__all__ = [
    'StartStage',
    'CutsceneStage',
    'SessionStage',
    'FailedStage',
    'STAGE_CLASSES',
]
