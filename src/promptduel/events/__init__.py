"""Status events and the in-process event bus used for telemetry."""

from promptduel.events.bus import DEFAULT_MAX_EVENTS, WILDCARD, EventCallback, StatusEventBus
from promptduel.events.models import (
    EVENT_TYPES,
    APIRequestEvent,
    EventStats,
    EventStatus,
    MessageSnapshot,
    RequestSettings,
    StatusEvent,
    StreamEvent,
    SystemEvent,
    SystemLevel,
    TokenCounts,
    ToolCallEvent,
    generate_event_id,
)

__all__ = [
    "DEFAULT_MAX_EVENTS",
    "WILDCARD",
    "EventCallback",
    "StatusEventBus",
    "EVENT_TYPES",
    "APIRequestEvent",
    "EventStats",
    "EventStatus",
    "MessageSnapshot",
    "RequestSettings",
    "StatusEvent",
    "StreamEvent",
    "SystemEvent",
    "SystemLevel",
    "TokenCounts",
    "ToolCallEvent",
    "generate_event_id",
]
