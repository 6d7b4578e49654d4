"""
mode_controller.py
------------------
Owns the current presentation mode and the stage that presents it.

Responsibilities
----------------
- Run the transition procedure for every mode change.
- Keep at most one stage attached for input.
- Dispose an outgoing stage only after its successor is ready.
- Preload the session stage while the cutscene is showing.
- Forward render, input, resize and debug calls to the right collaborator.

Every transition follows the same order:

    1. loading begins (busy indicator)
    2. detach input from the current stage
    3. create the next stage, or take the preloaded one
    4. await readiness                  <- the only suspension point
    5. loading ends
    6. dispose the previous stage
    7. publish (mode, stage) as one value
    8. attach input to the new stage

Steps 5-8 run without yielding, so no frame sees a half-finished swap.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from modeshift.core.debug.debug_logger import DebugLogger
from modeshift.core.runtime.app_settings import Loading
from modeshift.core.runtime.base_stage import ResourceStage
from modeshift.core.runtime.errors import (
    LoadFailure,
    ModeShiftError,
    TransitionResult,
    TransitionStatus,
)
from modeshift.core.runtime.mode import INITIAL_MODE, PRELOADS, Mode, Trigger, next_mode
from modeshift.core.services.event_manager import (
    LoadingFinishedEvent,
    LoadingStartedEvent,
    ModeChangedEvent,
    TransitionFailedEvent,
    TriggerEvent,
    DebugOverlayToggledEvent,
    get_events,
)


class TransitionInProgressError(ModeShiftError):
    """transition_to() was called while another transition was running."""


@dataclass(frozen=True)
class ControllerState:
    """The current mode and its stage, always replaced together."""
    mode: Optional[Mode] = None
    stage: Optional[ResourceStage] = None


class ModeController:
    """Top-level state machine over presentation modes."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, host, events=None, preload=None):
        """
        Args:
            host: StageHost that builds stages and shows the busy indicator
            events: EventManager (defaults to the global one)
            preload: Override Loading.PRELOAD_ACTIVE
        """
        self.host = host
        self.events = events or get_events()
        self.preload = Loading.PRELOAD_ACTIVE if preload is None else preload

        self._state = ControllerState()
        self._transitioning = False

        # Preloaded stage, never attached or rendered while held here
        self._pending_stage = None
        self._preload_task = None

        self._trigger_tasks = set()
        self._fatal_error = None

        DebugLogger.init_entry("ModeController")

    # ===========================================================
    # Read Access
    # ===========================================================

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def mode(self) -> Optional[Mode]:
        return self._state.mode

    @property
    def current_stage(self) -> Optional[ResourceStage]:
        return self._state.stage

    @property
    def pending_stage(self) -> Optional[ResourceStage]:
        return self._pending_stage

    @property
    def is_transitioning(self) -> bool:
        return self._transitioning

    # ===========================================================
    # Event Wiring
    # ===========================================================

    def bind_events(self):
        """Start receiving TriggerEvents from the event bus."""
        self.events.subscribe(TriggerEvent, self._on_trigger_event)

    def unbind_events(self):
        self.events.unsubscribe(TriggerEvent, self._on_trigger_event)

    def _on_trigger_event(self, event):
        """Schedule the trigger on the running loop; dispatch stays synchronous."""
        task = asyncio.get_running_loop().create_task(self.handle_trigger(event.trigger))
        self._trigger_tasks.add(task)
        task.add_done_callback(self._on_trigger_done)

    def _on_trigger_done(self, task):
        self._trigger_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            # Contract violations surface on the next render_frame()
            DebugLogger.fail(f"Fatal error in transition: {error!r}", category="mode")
            self._fatal_error = error

    # ===========================================================
    # Triggers
    # ===========================================================

    async def handle_trigger(self, trigger: Trigger) -> TransitionResult:
        """
        Run the transition a trigger maps to.

        Never raises LoadFailure; failures come back as a FAILED result.

        Returns:
            TransitionResult describing what happened
        """
        source = self.mode

        if self._transitioning:
            DebugLogger.warn(f"Ignoring '{trigger.value}': transition already in progress", category="mode")
            return TransitionResult(TransitionStatus.IGNORED, source)

        target = next_mode(source, trigger)
        if target is None:
            source_name = source.name if source else "None"
            DebugLogger.warn(f"No transition for '{trigger.value}' from [{source_name}]", category="mode")
            return TransitionResult(TransitionStatus.REJECTED, source)

        try:
            await self.transition_to(target)
        except LoadFailure as error:
            return TransitionResult(TransitionStatus.FAILED, source, target, error)
        return TransitionResult(TransitionStatus.COMPLETED, source, target)

    async def start(self):
        return await self.handle_trigger(Trigger.START)

    async def advance(self):
        return await self.handle_trigger(Trigger.ADVANCE)

    async def fail(self):
        return await self.handle_trigger(Trigger.FAIL)

    async def return_to_menu(self):
        return await self.handle_trigger(Trigger.RETURN_TO_MENU)

    async def boot(self):
        """
        Enter the initial mode before the render loop starts.

        Raises:
            LoadFailure: the initial stage could not be loaded
        """
        if self._state.stage is not None:
            raise ModeShiftError("ModeController already booted")
        DebugLogger.system(f"Loading initial mode: [{INITIAL_MODE.name}]", category="mode")
        await self.transition_to(INITIAL_MODE)

    # ===========================================================
    # Transition Procedure
    # ===========================================================

    async def transition_to(self, target: Mode):
        """
        Switch to a mode, awaiting its stage before it becomes visible.

        Raises:
            LoadFailure: the new stage failed; the previous one stays current
            TransitionInProgressError: another transition is running
        """
        if self._transitioning:
            raise TransitionInProgressError(f"Cannot enter {target.name} while transitioning")

        self._transitioning = True
        previous = self._state
        prev_name = previous.mode.name if previous.mode else "None"
        DebugLogger.system(f"Transitioning [{prev_name}] → [{target.name}]", category="mode")

        try:
            self._begin_loading(target)
            if previous.stage is not None:
                previous.stage.detach_input()

            try:
                stage = await self._acquire_stage(target)
            except LoadFailure as error:
                self._abort(previous, target, error)
                raise

            self._end_loading(target)
            self._swap(previous, target, stage)
        finally:
            self._transitioning = False

        if self.preload and target in PRELOADS:
            self._start_preload(PRELOADS[target])

    def _begin_loading(self, target):
        self.events.dispatch(LoadingStartedEvent(target))
        self.host.show_busy_indicator()

    def _end_loading(self, target):
        self.host.hide_busy_indicator()
        self.events.dispatch(LoadingFinishedEvent(target))

    async def _acquire_stage(self, target):
        """Return a ready stage for target (steps 3 and 4)."""
        pending = self._pending_stage
        if pending is not None and pending.mode is target:
            DebugLogger.state(f"Awaiting preloaded {target.name} stage", category="loading")
            try:
                await self._preload_task
            except LoadFailure:
                self._discard_pending()
                raise
            return pending

        stage = self._create_stage(target)
        DebugLogger.state(f"Loading {target.name} stage", category="loading")
        try:
            await stage.when_ready()
        except BaseException:
            # Failed or cancelled; nothing else owns this stage yet
            self.host.dispose_stage(stage)
            raise
        return stage

    def _create_stage(self, mode):
        try:
            stage = self.host.create_stage(mode)
        except Exception as e:
            raise LoadFailure(mode, e) from e
        if stage.mode is None:
            stage.mode = mode
        return stage

    def _swap(self, previous, target, stage):
        """Steps 6-8. Must not yield."""
        if previous.stage is not None:
            DebugLogger.state(f"Disposing {previous.mode.name} stage", category="stage")
            self.host.dispose_stage(previous.stage)

        if stage is self._pending_stage:
            self._pending_stage = None
            self._preload_task = None

        self._state = ControllerState(target, stage)
        stage.attach_input()

        DebugLogger.section(f"Active Mode: {target.name}")
        self.events.dispatch(ModeChangedEvent(previous.mode, target))

    def _abort(self, previous, target, error):
        """Leave the previous stage current and attached, report once."""
        self._end_loading(target)
        if previous.stage is not None:
            previous.stage.attach_input()

        DebugLogger.fail(f"Transition to {target.name} aborted: {error}", category="mode")
        self.events.dispatch(TransitionFailedEvent(previous.mode, target, error))

    # ===========================================================
    # Preload
    # ===========================================================

    def _start_preload(self, mode):
        """Begin loading a future mode's stage while the current one stays attached."""
        if self._pending_stage is not None:
            return

        try:
            stage = self._create_stage(mode)
        except LoadFailure as error:
            # Reported when the transition into that mode loads it in-line
            DebugLogger.warn(f"Preload of {mode.name} could not start: {error}", category="loading")
            return

        DebugLogger.state(f"Preloading {mode.name} stage", category="loading")
        self._pending_stage = stage
        self._preload_task = asyncio.ensure_future(stage.when_ready())
        self._preload_task.add_done_callback(self._on_preload_done)

    def _on_preload_done(self, task):
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            DebugLogger.warn(f"Preload failed: {error}", category="loading")
        else:
            DebugLogger.action("Preload complete", category="loading")

    def _discard_pending(self):
        stage = self._pending_stage
        self._pending_stage = None
        if self._preload_task is not None and not self._preload_task.done():
            self._preload_task.cancel()
        self._preload_task = None
        if stage is not None:
            self.host.dispose_stage(stage)

    # ===========================================================
    # Driver Calls
    # ===========================================================

    def render_frame(self):
        """Render one frame of the current stage. No-op before boot."""
        if self._fatal_error is not None:
            error, self._fatal_error = self._fatal_error, None
            raise error

        stage = self._state.stage
        if stage is None:
            return
        stage.render_frame()

    def handle_input(self, signal) -> bool:
        """
        Deliver an input signal to the attached stage.

        Returns:
            True if a stage received it
        """
        stage = self._state.stage
        if stage is None or not stage.attached:
            return False
        stage.handle_input(signal)
        return True

    def on_resize(self, width, height):
        self.host.resize(width, height)

    def toggle_debug_overlay(self):
        visible = self.host.toggle_debug_overlay()
        self.events.dispatch(DebugOverlayToggledEvent(visible))
        return visible

    # ===========================================================
    # Shutdown
    # ===========================================================

    def shutdown(self):
        """Cancel background work and dispose every owned stage."""
        self.unbind_events()
        for task in list(self._trigger_tasks):
            task.cancel()
        self._trigger_tasks.clear()

        self._discard_pending()

        stage = self._state.stage
        self._state = ControllerState()
        if stage is not None:
            self.host.dispose_stage(stage)
        DebugLogger.system("ModeController shut down", category="mode")
