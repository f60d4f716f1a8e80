"""In-process status event bus.

Keeps a bounded history of status events and dispatches each emitted event
synchronously to subscribers of its type, then to wildcard subscribers.
"""

import logging
from collections import deque
from typing import Any, Callable, Optional

from promptduel.events.models import (
    APIRequestEvent,
    EventStats,
    StatusEvent,
    StreamEvent,
    SystemEvent,
    SystemLevel,
    ToolCallEvent,
)

logger = logging.getLogger(__name__)

WILDCARD = "*"
DEFAULT_MAX_EVENTS = 50

EventCallback = Callable[[StatusEvent], None]


class StatusEventBus:
    """Publish/subscribe channel for status events.

    History is a ring buffer: once ``max_events`` is exceeded the oldest
    event is dropped. A subscriber that raises is logged and skipped; the
    remaining subscribers still receive the event.
    """

    def __init__(self, max_events: int = DEFAULT_MAX_EVENTS):
        """Initialize the bus.

        Args:
            max_events: Maximum number of events kept in history
        """
        if max_events < 1:
            raise ValueError("max_events must be at least 1")

        self.max_events = max_events
        self._events: deque[StatusEvent] = deque(maxlen=max_events)
        # dicts keep subscription order and ignore duplicate subscriptions
        self._listeners: dict[str, dict[EventCallback, None]] = {}

    def on(self, event_type: str, callback: EventCallback) -> None:
        """Subscribe to an event type, or ``"*"`` for every event."""
        self._listeners.setdefault(event_type, {})[callback] = None

    def off(self, event_type: str, callback: EventCallback) -> None:
        """Unsubscribe. Unknown callbacks are ignored."""
        callbacks = self._listeners.get(event_type)
        if callbacks:
            callbacks.pop(callback, None)

    def emit(self, event: StatusEvent) -> None:
        """Record an event and notify subscribers.

        Args:
            event: Event to emit
        """
        self._events.append(event)

        for callback in list(self._listeners.get(event.type, {})):
            self._dispatch(callback, event)

        for callback in list(self._listeners.get(WILDCARD, {})):
            self._dispatch(callback, event)

    def _dispatch(self, callback: EventCallback, event: StatusEvent) -> None:
        try:
            callback(event)
        except Exception as e:
            logger.warning(f"Event callback error for {event.type} event {event.id}: {e}")

    def get_recent_events(self, count: int = 20) -> list[StatusEvent]:
        """Get the most recent events in chronological order.

        Args:
            count: Maximum number of events to return

        Returns:
            Up to ``count`` events, oldest first
        """
        if count <= 0:
            return []
        return list(self._events)[-count:]

    def get_events_by_type(self, event_type: str) -> list[StatusEvent]:
        """Get buffered events of one type."""
        return [event for event in self._events if event.type == event_type]

    def clear(self) -> None:
        """Clear event history. Subscriptions are kept."""
        self._events.clear()

    def get_stats(self) -> EventStats:
        """Compute statistics over the buffered events.

        Returns:
            EventStats; ``avg_response_time`` averages api_request durations
            and is 0 when no api_request event carries one
        """
        api_events = self.get_events_by_type("api_request")
        durations = [e.duration for e in api_events if e.duration is not None]

        return EventStats(
            total_events=len(self._events),
            api_requests=len(api_events),
            tool_calls=len(self.get_events_by_type("tool_call")),
            errors=sum(
                1
                for e in self._events
                if isinstance(e, SystemEvent) and e.level == SystemLevel.ERROR
            ),
            last_activity=self._events[-1].timestamp if self._events else None,
            avg_response_time=sum(durations) / len(durations) if durations else 0.0,
        )

    # Convenience creators: build, emit and return an event

    def emit_api_request(self, **fields: Any) -> APIRequestEvent:
        """Create and emit an api_request event."""
        event = APIRequestEvent(**fields)
        self.emit(event)
        return event

    def emit_tool_call(self, **fields: Any) -> ToolCallEvent:
        """Create and emit a tool_call event."""
        event = ToolCallEvent(**fields)
        self.emit(event)
        return event

    def emit_stream(self, **fields: Any) -> StreamEvent:
        """Create and emit a stream event."""
        event = StreamEvent(**fields)
        self.emit(event)
        return event

    def emit_system(
        self,
        message: str,
        level: SystemLevel = SystemLevel.INFO,
        details: Optional[dict[str, Any]] = None,
    ) -> SystemEvent:
        """Create and emit a system event."""
        event = SystemEvent(message=message, level=level, details=details)
        self.emit(event)
        return event

    def __len__(self) -> int:
        """Number of buffered events."""
        return len(self._events)

    def __repr__(self) -> str:
        """Representation."""
        return f"<StatusEventBus events={len(self._events)}/{self.max_events}>"
