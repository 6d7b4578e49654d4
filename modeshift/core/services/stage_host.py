"""
stage_host.py
-------------
Interface for the presentation shell the ModeController drives.

The controller never touches windows, fonts or surfaces. It asks the host
to build and release stages and to show feedback while loading.
"""

from abc import ABC, abstractmethod


class StageHost(ABC):
    """Outbound lifecycle calls made by the ModeController."""

    @abstractmethod
    def show_busy_indicator(self):
        """Show the loading indicator. Must not block."""
        pass

    @abstractmethod
    def hide_busy_indicator(self):
        """Hide the loading indicator."""
        pass

    @abstractmethod
    def create_stage(self, mode):
        """
        Build a new, not-yet-ready stage for a mode.

        Args:
            mode: Mode the stage will present

        Returns:
            ResourceStage in the CREATED state
        """
        pass

    def dispose_stage(self, stage):
        """Release a stage the controller no longer needs."""
        stage.dispose()

    def resize(self, width, height):
        """Forwarded surface size change."""
        pass

    def toggle_debug_overlay(self):
        """Flip the debug overlay. Returns the new visibility."""
        return False
