"""
base_stage.py
-------------
Abstract base class for resource stages.

A stage bundles one renderable context with the assets it needs. The
ModeController drives every stage through the same lifecycle:

    CREATED -> LOADING -> READY -> DISPOSED
                     \\-> FAILED -> DISPOSED

Subclasses implement load() and draw(); the base class enforces the
ordering rules around them.
"""

import asyncio
from abc import ABC, abstractmethod

from modeshift.core.runtime.stage_state import StageState
from modeshift.core.runtime.errors import (
    LoadFailure,
    StageContractError,
    StageDisposedError,
    StageNotReadyError,
)


class ResourceStage(ABC):
    """
    Base class for all stages.

    Attributes:
        mode: Mode this stage presents
        surface: Opaque backing render-surface handle (owned by the host)
        state: Current lifecycle state
        attached: True while the stage receives input
    """

    def __init__(self, mode=None, surface=None):
        self.mode = mode
        self.surface = surface
        self.state = StageState.CREATED
        self.attached = False
        self._load_task = None

    # ===========================================================
    # Lifecycle Hooks (Override in subclasses)
    # ===========================================================

    @abstractmethod
    async def load(self):
        """Load every asset this stage needs. Raise to signal failure."""
        pass

    @abstractmethod
    def draw(self):
        """Render the current visual state."""
        pass

    def handle_input(self, signal):
        """Called with an InputSignal while attached."""
        pass

    def on_attach(self):
        """Called when the stage starts receiving input."""
        pass

    def on_detach(self):
        """Called when the stage stops receiving input."""
        pass

    def release(self):
        """Release backing resources. Called once from dispose()."""
        pass

    # ===========================================================
    # Readiness
    # ===========================================================

    @property
    def is_ready(self) -> bool:
        return self.state is StageState.READY

    @property
    def is_disposed(self) -> bool:
        return self.state is StageState.DISPOSED

    async def when_ready(self):
        """
        Suspend until load() has finished.

        The load runs once; repeated or concurrent awaits share its outcome.

        Raises:
            LoadFailure: load() raised
            StageDisposedError: stage was disposed before or during the load
        """
        if self.is_disposed:
            raise StageDisposedError(f"{self!r} awaited after dispose")

        if self._load_task is None:
            self.state = StageState.LOADING
            self._load_task = asyncio.ensure_future(self._run_load())

        await self._load_task

    async def _run_load(self):
        try:
            await self.load()
        except (LoadFailure, StageContractError):
            self._mark_failed()
            raise
        except Exception as e:
            self._mark_failed()
            raise LoadFailure(self.mode, e) from e

        if self.is_disposed:
            raise StageDisposedError(f"{self!r} disposed while loading")
        self.state = StageState.READY

    def _mark_failed(self):
        if not self.is_disposed:
            self.state = StageState.FAILED

    # ===========================================================
    # Input
    # ===========================================================

    def attach_input(self):
        """Start delivering input to this stage. Idempotent."""
        self._require_ready("attach_input")
        if self.attached:
            return
        self.attached = True
        self.on_attach()

    def detach_input(self):
        """Stop delivering input. Safe on a never-attached or disposed stage."""
        if not self.attached:
            return
        self.attached = False
        self.on_detach()

    # ===========================================================
    # Rendering
    # ===========================================================

    def render_frame(self):
        """Draw one frame."""
        self._require_ready("render_frame")
        self.draw()

    # ===========================================================
    # Disposal
    # ===========================================================

    def dispose(self):
        """Release all resources. Irreversible; repeated calls are no-ops."""
        if self.is_disposed:
            return

        self.detach_input()
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()

        self.state = StageState.DISPOSED
        self.release()
        self.surface = None

    def _require_ready(self, operation):
        if self.is_disposed:
            raise StageDisposedError(f"{operation} called on disposed {self!r}")
        if not self.is_ready:
            raise StageNotReadyError(f"{operation} called on {self!r} in state {self.state.value}")

    def __repr__(self):
        mode = self.mode.name if self.mode is not None else "-"
        return f"<{self.__class__.__name__} mode={mode} state={self.state.value}>"
