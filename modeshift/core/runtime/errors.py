"""
errors.py
---------
Exception hierarchy and structured results for mode transitions.

LoadFailure is recoverable and reported to the host. The stage contract
errors are programming mistakes and are never caught by the controller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ModeShiftError(Exception):
    """Base class for all controller errors."""


class LoadFailure(ModeShiftError):
    """A stage could not be created or did not become ready."""

    def __init__(self, mode, cause: Optional[BaseException] = None):
        self.mode = mode
        self.cause = cause
        name = mode.name if mode is not None else "?"
        super().__init__(f"Failed to load stage for {name}: {cause!r}")


class StageContractError(ModeShiftError):
    """A stage was used outside of its lifecycle. Always fatal."""


class StageDisposedError(StageContractError):
    """Render, attach or readiness was requested on a disposed stage."""


class StageNotReadyError(StageContractError):
    """Render or attach was requested before the stage became ready."""


# ===========================================================
# Transition Results
# ===========================================================

class TransitionStatus(Enum):
    COMPLETED = "completed"
    FAILED = "failed"       # LoadFailure, previous stage kept
    IGNORED = "ignored"     # Another transition was in progress
    REJECTED = "rejected"   # No edge for (mode, trigger)


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of one trigger, returned to whoever fired it."""
    status: TransitionStatus
    source: object = None
    target: object = None
    error: Optional[LoadFailure] = None

    @property
    def ok(self) -> bool:
        return self.status is TransitionStatus.COMPLETED
