"""
world.py
--------
Session content: the ground slab and the player character.

Shapes live in world units and are drawn as a side view, origin at the
center of the ground's top face, +y up.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pygame

from modeshift.core.runtime.app_settings import Palette


PIXELS_PER_UNIT = 20
PLAYER_SPAWN = (0.0, 3.0)


@dataclass
class Block:
    """Axis-aligned box; (x, y) is the bottom-center relative to its parent."""
    name: str
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0
    color: Optional[Tuple[int, int, int]] = None
    children: List["Block"] = field(default_factory=list)

    def draw(self, surface, origin, parent=(0.0, 0.0)):
        wx, wy = parent[0] + self.x, parent[1] + self.y
        if self.color is not None:
            left = origin[0] + (wx - self.width / 2) * PIXELS_PER_UNIT
            top = origin[1] - (wy + self.height) * PIXELS_PER_UNIT
            rect = pygame.Rect(int(left), int(top),
                               max(int(self.width * PIXELS_PER_UNIT), 1),
                               max(int(self.height * PIXELS_PER_UNIT), 1))
            pygame.draw.rect(surface, self.color, rect)
        for child in self.children:
            child.draw(surface, origin, (wx, wy))


class Environment:
    """Static level geometry."""

    SIZE = 24

    def __init__(self):
        self.ground = None

    async def load(self, step):
        self.ground = Block("ground", self.SIZE, self.SIZE * 0.02, y=-self.SIZE * 0.02, color=Palette.GROUND)
        await step()

    def draw(self, surface, origin):
        if self.ground is not None:
            self.ground.draw(surface, origin)


async def load_character_assets(step):
    """
    Build the player's blocks.

    Returns:
        dict with the invisible collision block under "mesh"
    """
    # Collision box; drawn only through its children
    outer = Block("outer", 2, 3)
    await step()

    body = Block("body", 2, 3, color=Palette.PLAYER_BODY)
    visor = Block("visor", 0.5, 0.25, x=0.5, y=1.5, color=Palette.PLAYER_VISOR)
    body.children.append(visor)
    outer.children.append(body)
    await step()

    return {"mesh": outer}


class Player:
    """Player character placed in the session."""

    def __init__(self, assets):
        self.mesh = assets["mesh"]

    @property
    def position(self):
        return self.mesh.x, self.mesh.y

    def spawn(self, x, y):
        self.mesh.x = x
        self.mesh.y = y

    def draw(self, surface, origin):
        self.mesh.draw(surface, origin)
