"""
mode.py
-------
Top-level presentation modes, the triggers that move between them,
and the directed transition table.
"""

from enum import Enum


class Mode(Enum):
    """Presentation modes owned by the ModeController."""
    START = "start"         # Start menu
    CUTSCENE = "cutscene"   # Story card shown while the session preloads
    ACTIVE = "active"       # Running session
    FAILED = "failed"       # Failure screen


class Trigger(Enum):
    """External events that request a mode transition."""
    START = "start"
    ADVANCE = "advance"
    FAIL = "fail"
    RETURN_TO_MENU = "return_to_menu"


# (current mode, trigger) -> next mode
TRANSITIONS = {
    (Mode.START, Trigger.START): Mode.CUTSCENE,
    (Mode.CUTSCENE, Trigger.ADVANCE): Mode.ACTIVE,
    (Mode.ACTIVE, Trigger.FAIL): Mode.FAILED,
    (Mode.FAILED, Trigger.RETURN_TO_MENU): Mode.START,
}

INITIAL_MODE = Mode.START

# Arriving in the key mode starts loading the value mode's stage in the background
PRELOADS = {
    Mode.CUTSCENE: Mode.ACTIVE,
}


def next_mode(current, trigger):
    """
    Look up the destination of a trigger.

    Args:
        current: Mode the controller is in (None before bootstrap)
        trigger: Trigger that fired

    Returns:
        Mode or None if the edge does not exist
    """
    return TRANSITIONS.get((current, trigger))
