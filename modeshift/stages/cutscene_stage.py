"""
cutscene_stage.py
-----------------
Cutscene card shown while the session stage preloads in the background.
"NEXT" advances to the session once it is ready.
"""

from modeshift.core.runtime.mode import Trigger
from modeshift.stages.pygame_stage import PygameStage


class CutsceneStage(PygameStage):
    """Cutscene stage with a bottom-right NEXT button."""

    BUTTON_SIZE = 64

    async def build(self):
        width, height = self.surface.get_size()
        size = self.BUTTON_SIZE
        x = width - size - int(width * 0.12)
        y = height - size - int(height * 0.03)
        self.add_button("NEXT", (x, y, size, size), Trigger.ADVANCE)
