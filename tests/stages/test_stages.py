"""
test_stages.py
--------------
Tests for the built-in pygame stages and a full cycle through DisplayManager.
"""

import pygame
import pytest

from modeshift.core.runtime.mode import Mode, Trigger
from modeshift.core.runtime.mode_controller import ModeController
from modeshift.core.services.display_manager import DisplayManager
from modeshift.core.services.event_manager import ModeChangedEvent, TriggerEvent
from modeshift.core.services.input_manager import POINTER_ACTION, InputSignal
from modeshift.stages import STAGE_CLASSES
from modeshift.stages.cutscene_stage import CutsceneStage
from modeshift.stages.failed_stage import FailedStage
from modeshift.stages.session_stage import SessionStage
from modeshift.stages.start_stage import StartStage
from modeshift.stages.world import PLAYER_SPAWN


# ===========================================================
# Fixtures
# ===========================================================

@pytest.fixture(autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def surface():
    return pygame.Surface((1280, 720))


def click(stage, pos):
    stage.handle_input(InputSignal(POINTER_ACTION, True, pos))
    stage.handle_input(InputSignal(POINTER_ACTION, False, pos))


# ===========================================================
# Stages
# ===========================================================

class TestStartStage:

    @pytest.mark.asyncio
    async def test_button_fires_start(self, surface, events, collect):
        triggers = collect(TriggerEvent)
        stage = StartStage(Mode.START, surface, events)
        await stage.when_ready()

        assert len(stage.buttons) == 1
        button = stage.buttons[0]
        assert button.rect.centerx == surface.get_width() // 2

        click(stage, button.rect.center)
        assert triggers == [TriggerEvent(Trigger.START)]

    @pytest.mark.asyncio
    async def test_click_outside_does_nothing(self, surface, events, collect):
        triggers = collect(TriggerEvent)
        stage = StartStage(Mode.START, surface, events)
        await stage.when_ready()

        click(stage, (1, 1))
        assert triggers == []

    @pytest.mark.asyncio
    async def test_press_then_release_elsewhere_does_nothing(self, surface, events, collect):
        triggers = collect(TriggerEvent)
        stage = StartStage(Mode.START, surface, events)
        await stage.when_ready()

        stage.handle_input(InputSignal(POINTER_ACTION, True, stage.buttons[0].rect.center))
        stage.handle_input(InputSignal(POINTER_ACTION, False, (1, 1)))
        assert triggers == []

    @pytest.mark.asyncio
    async def test_draw_and_release(self, surface, events):
        stage = StartStage(Mode.START, surface, events)
        await stage.when_ready()
        stage.render_frame()

        stage.dispose()
        assert stage.buttons == []
        assert stage.font is None


class TestCutsceneStage:

    @pytest.mark.asyncio
    async def test_next_fires_advance(self, surface, events, collect):
        triggers = collect(TriggerEvent)
        stage = CutsceneStage(Mode.CUTSCENE, surface, events)
        await stage.when_ready()

        button = stage.buttons[0]
        assert button.label == "NEXT"
        assert button.rect.right < surface.get_width()
        assert button.rect.bottom < surface.get_height()

        click(stage, button.rect.center)
        assert triggers == [TriggerEvent(Trigger.ADVANCE)]

    @pytest.mark.asyncio
    async def test_confirm_activates_first_button(self, surface, events, collect):
        triggers = collect(TriggerEvent)
        stage = CutsceneStage(Mode.CUTSCENE, surface, events)
        await stage.when_ready()

        stage.handle_input(InputSignal("confirm", True))
        stage.handle_input(InputSignal("confirm", False))
        assert triggers == [TriggerEvent(Trigger.ADVANCE)]


class TestSessionStage:

    @pytest.mark.asyncio
    async def test_player_spawned(self, surface, events):
        stage = SessionStage(Mode.ACTIVE, surface, events)
        await stage.when_ready()

        assert stage.player.position == PLAYER_SPAWN
        stage.render_frame()

    @pytest.mark.asyncio
    async def test_lose_fires_on_press(self, surface, events, collect):
        triggers = collect(TriggerEvent)
        stage = SessionStage(Mode.ACTIVE, surface, events)
        await stage.when_ready()

        button = stage.buttons[0]
        stage.handle_input(InputSignal(POINTER_ACTION, True, button.rect.center))
        assert triggers == [TriggerEvent(Trigger.FAIL)]

        stage.handle_input(InputSignal(POINTER_ACTION, False, button.rect.center))
        assert len(triggers) == 1

    @pytest.mark.asyncio
    async def test_confirm_key_does_not_fire_lose(self, surface, events, collect):
        triggers = collect(TriggerEvent)
        stage = SessionStage(Mode.ACTIVE, surface, events)
        await stage.when_ready()

        stage.handle_input(InputSignal("confirm", True))
        stage.handle_input(InputSignal("confirm", False))
        assert triggers == []

    @pytest.mark.asyncio
    async def test_release_drops_world(self, surface, events):
        stage = SessionStage(Mode.ACTIVE, surface, events)
        await stage.when_ready()
        stage.dispose()

        assert stage.player is None
        assert stage.environment is None


class TestFailedStage:

    @pytest.mark.asyncio
    async def test_menu_button_returns(self, surface, events, collect):
        triggers = collect(TriggerEvent)
        stage = FailedStage(Mode.FAILED, surface, events)
        await stage.when_ready()

        click(stage, stage.buttons[0].rect.center)
        assert triggers == [TriggerEvent(Trigger.RETURN_TO_MENU)]


# ===========================================================
# Integration
# ===========================================================

@pytest.mark.integration
class TestDisplayCycle:

    @pytest.fixture
    def display(self, events):
        return DisplayManager(STAGE_CLASSES, events)

    @pytest.mark.asyncio
    async def test_full_cycle(self, display, events, collect):
        changes = collect(ModeChangedEvent)
        controller = ModeController(display, events, preload=True)

        await controller.boot()
        display.present(controller.current_stage, controller.mode)

        for step, expected in (
            (controller.start, Mode.CUTSCENE),
            (controller.advance, Mode.ACTIVE),
            (controller.fail, Mode.FAILED),
            (controller.return_to_menu, Mode.START),
        ):
            result = await step()
            assert result.ok
            assert controller.mode is expected
            assert not display.busy

            controller.render_frame()
            display.present(controller.current_stage, controller.mode, 60.0)

        assert [c.current for c in changes] == [
            Mode.START, Mode.CUTSCENE, Mode.ACTIVE, Mode.FAILED, Mode.START,
        ]
        controller.shutdown()

    @pytest.mark.asyncio
    async def test_button_click_drives_controller(self, display, events, settle):
        controller = ModeController(display, events, preload=False)
        controller.bind_events()
        await controller.boot()

        button = controller.current_stage.buttons[0]
        controller.handle_input(InputSignal(POINTER_ACTION, True, button.rect.center))
        controller.handle_input(InputSignal(POINTER_ACTION, False, button.rect.center))

        assert await settle(lambda: controller.mode is Mode.CUTSCENE)
        controller.render_frame()
        controller.shutdown()

    @pytest.mark.asyncio
    async def test_overlays_render(self, display, events):
        controller = ModeController(display, events)
        await controller.boot()

        display.show_busy_indicator()
        controller.toggle_debug_overlay()
        display.present(controller.current_stage, controller.mode, 30.0)

        assert display.debug_visible
        stage_pos = display.screen_to_stage_pos(display.offset_x, display.offset_y)
        assert stage_pos == (0.0, 0.0)
        controller.shutdown()
