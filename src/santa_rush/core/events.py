"""
Event bus for Santa Rush.

The session, the game loop and the window publish what happened during a
frame; the HUD, score services and tests listen. Handlers run inline with
``emit``; coroutine handlers only run through ``emit_async`` or the queue so
a frame never waits on them.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Everything the game announces."""
    # Input
    BOOST_PRESS = auto()
    BOOST_RELEASE = auto()

    # Round lifecycle
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()
    NEW_HIGH_SCORE = auto()

    # Inside a round
    OBSTACLE_PASSED = auto()
    FOLLOWER_ADDED = auto()
    FOLLOWERS_LOST = auto()
    GIFT_COLLECTED = auto()
    PLAYER_DIED = auto()

    # System
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    A published event.

    Attributes:
        type: Event type (EventType or a custom string)
        data: Payload, e.g. ``{"score": 12}``
        source: Who emitted it ("session", "loop", "window", ...)
        timestamp: Wall clock time of creation
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """Publish/subscribe hub with a bounded history of recent events."""

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._catch_all: list[Handler] = []
        self._pending: asyncio.Queue[Event] = asyncio.Queue()
        self._history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """
        Listen for one event type.

        Returns:
            A function that removes the handler again
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)!s} to {event_type}")
        return lambda: self._remove(self._handlers[event_type], handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Listen for every event type."""
        self._catch_all.append(handler)
        return lambda: self._remove(self._catch_all, handler)

    @staticmethod
    def _remove(handlers: list[Handler], handler: Handler) -> None:
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: Event) -> None:
        """Record the event and run plain handlers now. Coroutine handlers are skipped."""
        self._history.append(event)
        for handler in self._listeners(event):
            if not inspect.iscoroutinefunction(handler):
                self._call(handler, event)

    async def emit_async(self, event: Event) -> None:
        """Record the event and run every handler, awaiting coroutines together."""
        self._history.append(event)
        await self._deliver(event)

    def queue_event(self, event: Event) -> None:
        """Defer an event until the next ``process_queue``."""
        self._pending.put_nowait(event)

    async def process_queue(self) -> None:
        """Deliver everything queued so far, oldest first."""
        while not self._pending.empty():
            event = self._pending.get_nowait()
            self._history.append(event)
            await self._deliver(event)
            self._pending.task_done()

    def _listeners(self, event: Event) -> list[Handler]:
        return [*self._handlers.get(event.type, ()), *self._catch_all]

    def _call(self, handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Error in {event.type} handler: {e}")

    async def _deliver(self, event: Event) -> None:
        coroutines = []
        for handler in self._listeners(event):
            if inspect.iscoroutinefunction(handler):
                coroutines.append(handler(event))
            else:
                self._call(handler, event)

        for result in await asyncio.gather(*coroutines, return_exceptions=True):
            if isinstance(result, Exception):
                logger.error(f"Error in async {event.type} handler: {result}")

    def get_history(self, event_type: EventType | str | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first, optionally of one type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]

    def clear_history(self) -> None:
        self._history.clear()


def tick_event(frame: int) -> Event:
    """Event emitted by the loop after each frame."""
    return Event(EventType.TICK, data={"frame": frame}, source="loop")
