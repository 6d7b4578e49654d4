"""
main_loop.py
------------
Host driver: owns pygame, pumps events and renders one frame per tick.

Responsibilities:
- Initialize pygame and the host services
- Boot the ModeController before the first frame
- Per tick: route events, render the current stage, present, yield to asyncio
- Shut everything down on quit

The loop is a coroutine. Transitions and preloads are asyncio tasks on the
same loop, so they progress during the await at the end of every tick while
the previous stage keeps rendering.
"""

import asyncio
import time

import pygame

from modeshift.core.debug.debug_logger import DebugLogger
from modeshift.core.runtime.app_settings import Display
from modeshift.core.runtime.mode_controller import ModeController
from modeshift.core.services.display_manager import DisplayManager
from modeshift.core.services.event_manager import get_events
from modeshift.core.services.input_manager import InputManager


class MainLoop:
    """Runtime driver for the mode controller."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, stage_classes):
        """
        Args:
            stage_classes: dict of Mode -> ResourceStage subclass
        """
        DebugLogger.section("Initializing MainLoop")

        self._init_pygame()
        self._init_core_systems(stage_classes)
        self._init_controller()

    def _init_pygame(self):
        pygame.init()
        pygame.font.init()
        DebugLogger.init_entry("Pygame")

    def _init_core_systems(self, stage_classes):
        self.events = get_events()
        self.display = DisplayManager(stage_classes, self.events)
        self.input_manager = InputManager(display_manager=self.display)

    def _init_controller(self):
        self.controller = ModeController(self.display, self.events)
        self.controller.bind_events()

        self.clock = pygame.time.Clock()
        self.running = True

        DebugLogger.init_entry("Main Loop Runtime")
        DebugLogger.init_sub("Frame Clock Initialized")

    # ===========================================================
    # Main Loop
    # ===========================================================

    async def run(self):
        """Boot the controller and tick until quit."""
        frame_budget = 1.0 / Display.FPS

        try:
            await self.controller.boot()
            DebugLogger.section("Main Loop")

            while self.running:
                frame_start = time.perf_counter()

                self._handle_events()
                self._draw()
                self.clock.tick()

                elapsed = time.perf_counter() - frame_start
                await asyncio.sleep(max(frame_budget - elapsed, 0.0))
        finally:
            self.controller.shutdown()
            pygame.quit()
            DebugLogger.system("Pygame terminated")

    def stop(self):
        self.running = False

    # ===========================================================
    # Event Handling
    # ===========================================================

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                DebugLogger.action("Quit signal received")
                self.stop()
                break
            self.input_manager.route(event, self.controller)

    # ===========================================================
    # Rendering
    # ===========================================================

    def _draw(self):
        self.controller.render_frame()
        self.display.present(
            self.controller.current_stage,
            self.controller.mode,
            self.clock.get_fps(),
        )
