"""
failed_stage.py
---------------
Failure screen - returns to the start menu.
"""

from modeshift.core.runtime.mode import Trigger
from modeshift.stages.pygame_stage import PygameStage


class FailedStage(PygameStage):
    """Failure stage with a MAIN MENU button."""

    async def build(self):
        width = int(self.surface.get_width() * 0.2)
        y = (self.surface.get_height() - 40) // 2
        self.add_button("MAIN MENU", self.centered_rect(width, 40, y), Trigger.RETURN_TO_MENU)
