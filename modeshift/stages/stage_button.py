"""
stage_button.py
---------------
Clickable rectangle that fires a mode trigger.
"""

import pygame

from modeshift.core.runtime.app_settings import Palette
from modeshift.core.services.event_manager import TriggerEvent


class StageButton:
    """Fires TriggerEvent(trigger) when pressed and released inside its rect."""

    def __init__(self, label, rect, trigger, font, background=Palette.BUTTON_IDLE,
                 color=Palette.WHITE, on_press=False):
        """
        Args:
            label: Text shown on the button
            rect: (x, y, w, h) in stage coordinates
            trigger: Trigger fired on activation
            font: pygame font used for the label
            on_press: Fire on press instead of release
        """
        self.label = label
        self.rect = pygame.Rect(rect)
        self.trigger = trigger
        self.background = background
        self.color = color
        self.on_press = on_press

        self.is_pressed = False
        self._text = font.render(label, True, color)

    def handle_signal(self, signal, events) -> bool:
        """
        Process a pointer signal.

        Returns:
            True if the button fired
        """
        if signal.pos is None or not self.rect.collidepoint(signal.pos):
            self.is_pressed = False
            return False

        if signal.pressed:
            self.is_pressed = True
            if self.on_press:
                return self.activate(events)
            return False

        fired = self.is_pressed and not self.on_press
        self.is_pressed = False
        if fired:
            return self.activate(events)
        return False

    def activate(self, events) -> bool:
        events.dispatch(TriggerEvent(self.trigger))
        return True

    def draw(self, surface):
        pygame.draw.rect(surface, self.background, self.rect, border_radius=12)
        surface.blit(self._text, self._text.get_rect(center=self.rect.center))
