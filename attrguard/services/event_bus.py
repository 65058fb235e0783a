"""Event bus: synchronous pub/sub used by models for change, invalid and error events."""

from typing import Any, Callable, Dict, List, Optional, Tuple
from collections import defaultdict

import structlog

logger = structlog.get_logger()

# Type alias for event listeners; called with the published positional args
EventListener = Callable[..., Any]


class EventBus:
    """In-memory pub/sub keyed by event name.

    Listeners run in subscription order on the publishing thread. A listener
    that raises is logged and the exception propagates to the publisher.
    """

    def __init__(self, max_history: int = 100):
        self._listeners: Dict[str, List[EventListener]] = defaultdict(list)
        self._event_history: Dict[str, List[Tuple[Any, ...]]] = defaultdict(list)
        self._max_history = max_history

    def subscribe(self, event: str, listener: EventListener) -> None:
        """Subscribe a listener to an event. Subscribing twice is a no-op."""
        if listener not in self._listeners[event]:
            self._listeners[event].append(listener)
        logger.debug("event_bus_subscribe", event_name=event, total_listeners=len(self._listeners[event]))

    def unsubscribe(self, event: str, listener: EventListener) -> None:
        """Unsubscribe a listener from an event."""
        listeners = self._listeners.get(event)
        if not listeners:
            return
        if listener in listeners:
            listeners.remove(listener)
        if not listeners:
            del self._listeners[event]

    def publish(self, event: str, *args: Any) -> None:
        """Publish an event to all of its listeners."""
        # Store in history for inspection
        self._event_history[event].append(args)
        if len(self._event_history[event]) > self._max_history:
            self._event_history[event] = self._event_history[event][-self._max_history:]

        # Copy so listeners may unsubscribe while being called
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(*args)
            except Exception as e:
                logger.warning("event_listener_failed", event_name=event, error=str(e))
                raise

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def get_history(self, event: str) -> list[tuple]:
        """Get the args of recent publications of ``event``, oldest first."""
        return list(self._event_history.get(event, []))

    def clear_history(self, event: Optional[str] = None) -> None:
        if event is None:
            self._event_history.clear()
        else:
            self._event_history.pop(event, None)
