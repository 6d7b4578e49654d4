"""
input_manager.py
----------------
Turns pygame events into abstract input signals and host calls.

Stages never see pygame events. They receive InputSignal(action, pressed)
through the ModeController, which only delivers to the attached stage.
System events (resize, debug combo) go straight to the controller's
pass-through calls.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import pygame

from modeshift.core.debug.debug_logger import DebugLogger
from modeshift.core.runtime.app_settings import Debug


# ===========================================================
# Default Key Bindings
# ===========================================================

DEFAULT_KEY_BINDINGS = {
    "confirm": [pygame.K_RETURN, pygame.K_SPACE],
    "back": [pygame.K_ESCAPE],
    "navigate_up": [pygame.K_UP, pygame.K_w],
    "navigate_down": [pygame.K_DOWN, pygame.K_s],
}

POINTER_ACTION = "pointer"

_MODIFIERS = {
    "shift": pygame.KMOD_SHIFT,
    "ctrl": pygame.KMOD_CTRL,
    "alt": pygame.KMOD_ALT,
}


@dataclass(frozen=True)
class InputSignal:
    """Pressed/released signal for one abstract action."""
    action: str
    pressed: bool
    pos: Optional[Tuple[float, float]] = None


class InputManager:
    """Maps pygame events to InputSignals and controller calls."""

    def __init__(self, key_bindings=None, display_manager=None):
        """
        Args:
            key_bindings: action -> list of key codes (DEFAULT_KEY_BINDINGS if None)
            display_manager: Used to convert pointer positions to stage space
        """
        self.key_bindings = key_bindings or DEFAULT_KEY_BINDINGS
        self.display_manager = display_manager

        self._key_to_action = {}
        for action, keys in self.key_bindings.items():
            for key in keys:
                self._key_to_action[key] = action

        self._debug_key = getattr(pygame, f"K_{Debug.TOGGLE_KEY}")
        self._debug_mods = [_MODIFIERS[name] for name in Debug.TOGGLE_MODS]

        DebugLogger.init_entry("InputManager")

    # ===========================================================
    # Translation
    # ===========================================================

    def is_debug_combo(self, event) -> bool:
        """True for a key press of the debug overlay combination."""
        if event.type != pygame.KEYDOWN or event.key != self._debug_key:
            return False
        mods = getattr(event, "mod", 0)
        return all(mods & mask for mask in self._debug_mods)

    def translate(self, event) -> Optional[InputSignal]:
        """
        Convert a pygame event into an InputSignal.

        Returns:
            InputSignal or None if the event is not bound
        """
        if event.type in (pygame.KEYDOWN, pygame.KEYUP):
            action = self._key_to_action.get(event.key)
            if action is None:
                return None
            return InputSignal(action, event.type == pygame.KEYDOWN)

        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if event.button != 1:
                return None
            pos = event.pos
            if self.display_manager is not None:
                pos = self.display_manager.screen_to_stage_pos(*pos)
            return InputSignal(POINTER_ACTION, event.type == pygame.MOUSEBUTTONDOWN, pos)

        return None

    # ===========================================================
    # Routing
    # ===========================================================

    def route(self, event, controller) -> bool:
        """
        Send one event where it belongs.

        Args:
            event: pygame event
            controller: ModeController

        Returns:
            True if something consumed the event
        """
        if self.is_debug_combo(event):
            controller.toggle_debug_overlay()
            return True

        if event.type == pygame.VIDEORESIZE:
            controller.on_resize(event.w, event.h)
            return True

        signal = self.translate(event)
        if signal is None:
            return False

        DebugLogger.trace(f"{signal.action} {'pressed' if signal.pressed else 'released'}", category="input")
        return controller.handle_input(signal)
