"""
start_stage.py
--------------
Start menu - a single "Start Game" button.
"""

from modeshift.core.runtime.app_settings import Palette
from modeshift.core.runtime.mode import Trigger
from modeshift.stages.pygame_stage import PygameStage


class StartStage(PygameStage):
    """Start menu stage."""

    async def build(self):
        width = int(self.surface.get_width() * 0.2)
        y = (self.surface.get_height() - 40) // 2
        self.add_button(
            "Start Game",
            self.centered_rect(width, 40, y),
            Trigger.START,
            background=Palette.BUTTON_GREEN,
        )
