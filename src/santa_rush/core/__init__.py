"""Core framework components for Santa Rush."""

from .errors import SantaRushError, ConfigurationError
from .events import EventBus, Event, EventType
from .physics import Physics, Rect, Circle
from .state import State, StateMachine

__all__ = [
    "SantaRushError",
    "ConfigurationError",
    "EventBus",
    "Event",
    "EventType",
    "Physics",
    "Rect",
    "Circle",
    "State",
    "StateMachine",
]
