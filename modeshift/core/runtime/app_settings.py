"""
app_settings.py
---------------
Centralized constants for the application shell and mode controller.

Values are class constants so they can be read without initialization.
apply_settings() overlays a loaded config dict on top of them at startup.
"""

from modeshift.core.debug.debug_logger import DebugLogger, LoggerConfig


# ===========================================================
# Display & Performance
# ===========================================================

class Display:
    """Screen and window configuration."""
    WIDTH: int = 1280
    HEIGHT: int = 720
    FPS: int = 60
    CAPTION: str = "modeshift"


# ===========================================================
# Loading
# ===========================================================

class Loading:
    """Stage loading and busy indicator behaviour."""
    BUSY_TEXT: str = "Loading..."
    PRELOAD_ACTIVE: bool = True       # Load the session during the cutscene
    STAGE_LOAD_STEP_DELAY: float = 0.0  # Seconds yielded between asset steps


# ===========================================================
# Palette
# ===========================================================

class Palette:
    """Colors shared by the built-in stages."""
    BLACK = (0, 0, 0)
    WHITE = (255, 255, 255)
    BUTTON_GREEN = (0, 128, 0)
    BUTTON_IDLE = (40, 40, 40)
    SESSION_SKY = (4, 4, 52)
    GROUND = (60, 70, 60)
    PLAYER_BODY = (204, 128, 128)
    PLAYER_VISOR = (0, 0, 0)
    OVERLAY_TINT = (0, 0, 0, 170)


# ===========================================================
# Debug Display
# ===========================================================

class Debug:
    """Visual debug toggles -- not related to logging."""
    SHOW_FPS: bool = True
    OVERLAY_VISIBLE: bool = False
    TOGGLE_KEY: str = "i"
    TOGGLE_MODS: tuple = ("shift", "ctrl", "alt")


_SECTIONS = {
    "display": Display,
    "loading": Loading,
    "debug": Debug,
}


def apply_settings(config: dict):
    """
    Overlay a config dict onto the settings classes.

    Keys are matched case-insensitively against existing attributes;
    unknown keys are reported and skipped.

    Args:
        config: Dict with optional display/loading/debug/logging blocks
    """
    for section_name, target in _SECTIONS.items():
        for key, value in config.get(section_name, {}).items():
            attr = key.upper()
            if not hasattr(target, attr):
                DebugLogger.warn(f"Unknown setting '{section_name}.{key}'")
                continue
            if isinstance(getattr(target, attr), tuple):
                value = tuple(value)
            setattr(target, attr, value)

    LoggerConfig.apply(config.get("logging", {}))
