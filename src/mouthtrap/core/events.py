"""
Event bus for MOUTH TRAP.

Provides pub/sub messaging between the host window, the simulation
and anything else that wants to follow the game (HUD, logging).
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import asyncio
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    ACTIVATE = auto()
    RESIZE = auto()

    # Game events
    STATE_CHANGED = auto()
    SCORE_CHANGED = auto()
    BEST_SCORE = auto()
    GAME_OVER = auto()

    # Asset events
    ASSET_LOADED = auto()

    # System events
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Handlers run immediately on emit. Events that come from outside the
    frame (window resizes) are queued instead and drained by the host
    loop once per frame, after input and before rendering.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._event_history: list[Event] = []
        self._history_limit = 100

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately."""
        self._add_to_history(event)
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for processing on the next frame."""
        self._queue.put_nowait(event)

    async def process_queue(self) -> None:
        """Process all queued events, in arrival order."""
        while not self._queue.empty():
            event = await self._queue.get()
            self._add_to_history(event)
            self._dispatch(event)
            self._queue.task_done()

    def _dispatch(self, event: Event) -> None:
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    def _add_to_history(self, event: Event) -> None:
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]


def activate_event(source: str = "keyboard") -> Event:
    """Create an activate (flap / start / restart) event."""
    return Event(EventType.ACTIVATE, source=source)


def resize_event(width: int, height: int) -> Event:
    """Create a viewport resize event."""
    return Event(EventType.RESIZE, data={"width": width, "height": height}, source="window")
