"""Core framework components for MOUTH TRAP."""

from .state import State, StateMachine
from .events import EventBus, Event, EventType
from .exceptions import MouthTrapError, ConfigurationError, StorageError

__all__ = [
    "State",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "MouthTrapError",
    "ConfigurationError",
    "StorageError",
]
