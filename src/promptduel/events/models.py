"""Status event models.

Events are a tagged union discriminated on ``type``. Every event gets a
generated id and a timestamp when it is created.
"""

import random
import string
import time
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


def generate_event_id(prefix: str) -> str:
    """Generate an id of the form ``<prefix>_<epoch ms>_<9 random chars>``."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


class EventStatus(str, Enum):
    """Lifecycle status of a request or tool call."""

    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"


class SystemLevel(str, Enum):
    """Severity of a system event."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class MessageSnapshot(BaseModel):
    """Role/content pair recorded on api_request events."""

    role: str
    content: str


class RequestSettings(BaseModel):
    """Sampling settings recorded on api_request events."""

    temperature: float
    top_p: float


class TokenCounts(BaseModel):
    """Token usage recorded on api_request events."""

    prompt: int = 0
    completion: int = 0
    total: int = 0


class APIRequestEvent(BaseModel):
    """One orchestration run against the completion endpoint."""

    type: Literal["api_request"] = "api_request"
    id: str = Field(default_factory=lambda: generate_event_id("api"))
    timestamp: datetime = Field(default_factory=datetime.now)
    model: str
    messages: list[MessageSnapshot] = Field(default_factory=list)
    settings: RequestSettings
    status: EventStatus
    duration: Optional[float] = None  # milliseconds
    error: Optional[str] = None
    tokens: Optional[TokenCounts] = None
    run_label: Optional[str] = None


class ToolCallEvent(BaseModel):
    """One tool invocation. ``tool_call_id`` matches the model's call id."""

    type: Literal["tool_call"] = "tool_call"
    id: str = Field(default_factory=lambda: generate_event_id("tool"))
    timestamp: datetime = Field(default_factory=datetime.now)
    tool_call_id: Optional[str] = None
    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    status: EventStatus
    duration: Optional[float] = None  # milliseconds
    result: Optional[Any] = None
    error: Optional[str] = None
    run_label: Optional[str] = None


class StreamEvent(BaseModel):
    """Streaming progress notice."""

    type: Literal["stream"] = "stream"
    id: str = Field(default_factory=lambda: generate_event_id("stream"))
    timestamp: datetime = Field(default_factory=datetime.now)
    content: str
    is_complete: bool = False
    run_label: Optional[str] = None


class SystemEvent(BaseModel):
    """Free-text system notice."""

    type: Literal["system"] = "system"
    id: str = Field(default_factory=lambda: generate_event_id("system"))
    timestamp: datetime = Field(default_factory=datetime.now)
    level: SystemLevel = SystemLevel.INFO
    message: str
    details: Optional[dict[str, Any]] = None


StatusEvent = Annotated[
    Union[APIRequestEvent, ToolCallEvent, StreamEvent, SystemEvent],
    Field(discriminator="type"),
]

EVENT_TYPES = ("api_request", "tool_call", "stream", "system")


class EventStats(BaseModel):
    """Aggregate view over the buffered events."""

    total_events: int = 0
    api_requests: int = 0
    tool_calls: int = 0
    errors: int = 0
    last_activity: Optional[datetime] = None
    avg_response_time: float = 0.0  # milliseconds
