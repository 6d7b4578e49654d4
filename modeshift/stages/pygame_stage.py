"""
pygame_stage.py
---------------
Shared base for the built-in pygame stages.

Each stage draws into its own surface and owns a list of buttons.
Loading is split into steps that yield to the event loop so the previous
stage keeps rendering while this one loads.
"""

import asyncio

import pygame

from modeshift.core.debug.debug_logger import DebugLogger
from modeshift.core.runtime.app_settings import Loading, Palette
from modeshift.core.runtime.base_stage import ResourceStage
from modeshift.core.services.input_manager import POINTER_ACTION
from modeshift.stages.stage_button import StageButton


class PygameStage(ResourceStage):
    """ResourceStage drawing to a pygame surface."""

    clear_color = Palette.BLACK
    confirm_activates = True   # Enter/Space presses the first button

    def __init__(self, mode, surface, events):
        super().__init__(mode, surface)
        self.events = events
        self.buttons = []
        self.font = None

    # ===========================================================
    # Loading
    # ===========================================================

    async def load(self):
        self.font = pygame.font.SysFont("arial", 24)
        await self.load_step()
        await self.build()
        DebugLogger.state(f"{self.__class__.__name__} ready", category="stage")

    async def build(self):
        """Create stage content. Await load_step() between heavy pieces."""
        pass

    async def load_step(self):
        await asyncio.sleep(Loading.STAGE_LOAD_STEP_DELAY)

    def add_button(self, label, rect, trigger, **kwargs):
        button = StageButton(label, rect, trigger, self.font, **kwargs)
        self.buttons.append(button)
        return button

    def centered_rect(self, width, height, y):
        """Rect of the given size, horizontally centered at height y."""
        return ((self.surface.get_width() - width) // 2, y, width, height)

    # ===========================================================
    # Input
    # ===========================================================

    def handle_input(self, signal):
        if signal.action == POINTER_ACTION:
            for button in self.buttons:
                if button.handle_signal(signal, self.events):
                    return
        elif signal.action == "confirm" and signal.pressed and self.confirm_activates and self.buttons:
            self.buttons[0].activate(self.events)

    def on_detach(self):
        for button in self.buttons:
            button.is_pressed = False

    # ===========================================================
    # Rendering
    # ===========================================================

    def draw(self):
        self.surface.fill(self.clear_color)
        self.draw_content()
        for button in self.buttons:
            button.draw(self.surface)

    def draw_content(self):
        pass

    def release(self):
        self.buttons.clear()
        self.font = None

