"""
display_manager.py
------------------
pygame implementation of the StageHost.

Responsibilities
----------------
- Create the resizable window and keep the 16:9 letterbox scaling.
- Build stages from the mode registry, each with its own backing surface.
- Present the current stage's surface, then the busy and debug overlays.
- Convert window coordinates to stage coordinates for pointer input.
"""

import pygame

from modeshift.core.debug.debug_logger import DebugLogger
from modeshift.core.runtime.app_settings import Debug, Display, Loading, Palette
from modeshift.core.services.stage_host import StageHost


class DisplayManager(StageHost):
    """Window management, stage construction and overlays."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, stage_classes, events, width=None, height=None):
        """
        Args:
            stage_classes: dict of Mode -> ResourceStage subclass
            events: EventManager handed to each stage for firing triggers
            width: Logical stage width (Display.WIDTH if None)
            height: Logical stage height (Display.HEIGHT if None)
        """
        self.stage_classes = dict(stage_classes)
        self.events = events
        self.stage_width = width or Display.WIDTH
        self.stage_height = height or Display.HEIGHT

        self.window = pygame.display.set_mode((self.stage_width, self.stage_height), pygame.RESIZABLE)
        pygame.display.set_caption(Display.CAPTION)

        self.scale = 1.0
        self.offset_x = 0
        self.offset_y = 0
        self.scaled_size = (self.stage_width, self.stage_height)
        self._calculate_scale()

        self.busy = False
        self.debug_visible = Debug.OVERLAY_VISIBLE
        self.font = pygame.font.SysFont("consolas", 18)

        self._live_stages = 0

        DebugLogger.init_entry("DisplayManager")
        DebugLogger.init_sub(f"Window {self.stage_width}x{self.stage_height}")
        DebugLogger.init_sub(f"Registered stages: {[m.name for m in self.stage_classes]}")

    # ===========================================================
    # StageHost
    # ===========================================================

    def create_stage(self, mode):
        stage_class = self.stage_classes[mode]
        surface = pygame.Surface((self.stage_width, self.stage_height))
        stage = stage_class(mode, surface, self.events)
        self._live_stages += 1
        DebugLogger.state(f"Created {stage_class.__name__} ({self._live_stages} live)", category="display")
        return stage

    def dispose_stage(self, stage):
        stage.dispose()
        self._live_stages -= 1
        DebugLogger.state(f"Disposed {stage.__class__.__name__} ({self._live_stages} live)", category="display")

    def show_busy_indicator(self):
        self.busy = True

    def hide_busy_indicator(self):
        self.busy = False

    def resize(self, width, height):
        """Recreate the window at the new size (windowed mode)."""
        self.window = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self._calculate_scale()
        DebugLogger.state(f"Window resized → {width}x{height}", category="display")

    def toggle_debug_overlay(self):
        self.debug_visible = not self.debug_visible
        DebugLogger.action(f"Debug overlay → {'ON' if self.debug_visible else 'OFF'}", category="display")
        return self.debug_visible

    # ===========================================================
    # Scaling
    # ===========================================================

    def _calculate_scale(self):
        """Calculate scaling and letterbox offsets to keep the stage aspect ratio."""
        window_width, window_height = self.window.get_size()
        self.scale = min(window_width / self.stage_width, window_height / self.stage_height)

        scaled_width = int(self.stage_width * self.scale)
        scaled_height = int(self.stage_height * self.scale)
        self.offset_x = (window_width - scaled_width) // 2
        self.offset_y = (window_height - scaled_height) // 2
        self.scaled_size = (scaled_width, scaled_height)

    def screen_to_stage_pos(self, screen_x, screen_y):
        """Convert window coordinates to stage coordinates."""
        if self.scale == 0:
            return 0.0, 0.0
        return (screen_x - self.offset_x) / self.scale, (screen_y - self.offset_y) / self.scale

    # ===========================================================
    # Rendering
    # ===========================================================

    def present(self, stage, mode=None, fps=0.0):
        """
        Scale the stage surface to the window and draw overlays.

        Args:
            stage: Current stage (None before boot)
            mode: Current mode, shown in the debug overlay
            fps: Measured frame rate
        """
        self.window.fill(Palette.BLACK)

        if stage is not None and stage.surface is not None:
            scaled = pygame.transform.scale(stage.surface, self.scaled_size)
            self.window.blit(scaled, (self.offset_x, self.offset_y))

        if self.busy:
            self._draw_busy_indicator()
        if self.debug_visible:
            self._draw_debug_overlay(mode, fps)

        pygame.display.flip()

    def _draw_busy_indicator(self):
        tint = pygame.Surface(self.window.get_size(), pygame.SRCALPHA)
        tint.fill(Palette.OVERLAY_TINT)
        self.window.blit(tint, (0, 0))

        text = self.font.render(Loading.BUSY_TEXT, True, Palette.WHITE)
        rect = text.get_rect(center=self.window.get_rect().center)
        self.window.blit(text, rect)

    def _draw_debug_overlay(self, mode, fps):
        lines = [f"mode: {mode.name if mode else '-'}", f"stages: {self._live_stages}"]
        if Debug.SHOW_FPS:
            lines.append(f"fps: {fps:.1f}")
        for i, line in enumerate(lines):
            text = self.font.render(line, True, Palette.WHITE)
            self.window.blit(text, (8, 8 + i * 20))
