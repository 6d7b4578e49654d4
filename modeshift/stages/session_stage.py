"""
session_stage.py
----------------
The active session. This is the heavy stage the controller preloads while
the cutscene is showing.
"""

from modeshift.core.debug.debug_logger import DebugLogger
from modeshift.core.runtime.app_settings import Palette
from modeshift.core.runtime.mode import Trigger
from modeshift.stages.pygame_stage import PygameStage
from modeshift.stages.world import PLAYER_SPAWN, Environment, Player, load_character_assets


class SessionStage(PygameStage):
    """Environment, player and a LOSE button."""

    clear_color = Palette.SESSION_SKY
    confirm_activates = False  # LOSE is pointer-only

    def __init__(self, mode, surface, events):
        super().__init__(mode, surface, events)
        self.environment = Environment()
        self.player = None

    async def build(self):
        await self.environment.load(self.load_step)
        assets = await load_character_assets(self.load_step)
        self.player = Player(assets)
        self.player.spawn(*PLAYER_SPAWN)
        DebugLogger.state(f"Player spawned at {self.player.position}", category="stage")

        width, height = self.surface.get_size()
        button_width = int(width * 0.2)
        self.add_button(
            "LOSE",
            self.centered_rect(button_width, 40, height - 40 - 14),
            Trigger.FAIL,
            on_press=True,
        )

    def draw_content(self):
        width, height = self.surface.get_size()
        origin = (width // 2, int(height * 0.75))
        self.environment.draw(self.surface, origin)
        if self.player is not None:
            self.player.draw(self.surface, origin)

    def release(self):
        super().release()
        self.environment = None
        self.player = None
