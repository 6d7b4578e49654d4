"""
event_manager.py
----------------
Event-driven dispatch between the input layer, the mode controller and the host.
Buttons fire triggers without holding a reference to the controller, and the
controller reports loading progress and failures without knowing who listens.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from modeshift.core.debug.debug_logger import DebugLogger


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    """Base class for all events."""
    pass


@dataclass(frozen=True)
class TriggerEvent(BaseEvent):
    """Dispatched by the UI layer to request a mode transition."""
    trigger: Any


@dataclass(frozen=True)
class LoadingStartedEvent(BaseEvent):
    """Dispatched when a transition starts loading its target stage."""
    target: Any


@dataclass(frozen=True)
class LoadingFinishedEvent(BaseEvent):
    """Dispatched when the target stage resolved (successfully or not)."""
    target: Any


@dataclass(frozen=True)
class ModeChangedEvent(BaseEvent):
    """Dispatched after the new stage is current and attached."""
    previous: Optional[Any]
    current: Any


@dataclass(frozen=True)
class TransitionFailedEvent(BaseEvent):
    """Dispatched once per aborted transition."""
    source: Optional[Any]
    target: Any
    error: Exception


@dataclass(frozen=True)
class DebugOverlayToggledEvent(BaseEvent):
    """Dispatched when the debug overlay is shown or hidden."""
    visible: bool


# ===========================================================
# Event Manager
# ===========================================================

class EventManager:
    """Central event dispatcher using pub-sub pattern."""

    def __init__(self):
        self._subscribers: Dict[Type[BaseEvent], List[Callable]] = {}
        DebugLogger.init("EventManager initialized", category="event")

    # ===========================================================
    # Subscription
    # ===========================================================

    def subscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """
        Register a callback for an event type.

        Args:
            event_type: Event class to listen for
            callback: Function to call when event fires
        """
        subscribers = self._subscribers.setdefault(event_type, [])
        if callback in subscribers:
            return

        subscribers.append(callback)
        callback_name = getattr(callback, '__name__', repr(callback))
        DebugLogger.system(
            f"Subscribed '{callback_name}' to '{event_type.__name__}'",
            category="event"
        )

    def unsubscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """
        Remove a callback from an event type.

        Args:
            event_type: Event class
            callback: Function to remove
        """
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(callback)
            except ValueError:
                pass

    # ===========================================================
    # Dispatch
    # ===========================================================

    def dispatch(self, event: BaseEvent) -> None:
        """
        Send event to all registered callbacks.

        A failing callback is logged and does not stop the others.

        Args:
            event: Event instance to dispatch
        """
        event_type = type(event)

        if event_type not in self._subscribers:
            return

        for callback in list(self._subscribers[event_type]):
            try:
                callback(event)
            except Exception as e:
                callback_name = getattr(callback, '__name__', repr(callback))
                DebugLogger.warn(f"Error in event callback {callback_name}: {e}", category="event")

    # ===========================================================
    # Introspection
    # ===========================================================

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        """
        Get count of subscribers.

        Args:
            event_type: Specific event type, or None for total

        Returns:
            Number of subscribers
        """
        if event_type:
            return len(self._subscribers.get(event_type, []))
        return sum(len(subs) for subs in self._subscribers.values())


# ===========================================================
# Singleton Access
# ===========================================================

_EVENTS = None


def get_events() -> EventManager:
    """Get or create the event manager singleton."""
    global _EVENTS
    if _EVENTS is None:
        _EVENTS = EventManager()
    return _EVENTS


def reset_events() -> None:
    """Reset the singleton. Call on full restart and between tests."""
    global _EVENTS
    _EVENTS = None
