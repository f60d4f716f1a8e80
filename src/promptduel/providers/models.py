"""
Provider data models for promptduel.

Defines the conversation message type and the completion response variant
consumed by the orchestrator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from promptduel.tools.models import ToolCall


class MessageRole(str, Enum):
    """Valid message roles."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass
class Message:
    """Conversation message."""

    role: str  # "system" | "user" | "assistant" | "tool"
    content: str
    tool_calls: list[dict[str, Any]] | None = None  # raw records on assistant messages
    tool_call_id: str | None = None  # set on tool messages

    def to_dict(self) -> dict[str, Any]:
        """Convert to the OpenAI-compatible wire format."""
        result: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            result["tool_calls"] = self.tool_calls
        if self.tool_call_id:
            result["tool_call_id"] = self.tool_call_id
        return result

    @classmethod
    def system(cls, content: str) -> "Message":
        """Create a system message."""
        return cls(role=MessageRole.SYSTEM.value, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role=MessageRole.USER.value, content=content)

    @classmethod
    def assistant(
        cls, content: str, tool_calls: list[dict[str, Any]] | None = None
    ) -> "Message":
        """Create an assistant message, optionally echoing tool calls."""
        return cls(role=MessageRole.ASSISTANT.value, content=content, tool_calls=tool_calls)

    @classmethod
    def tool(cls, content: str, tool_call_id: str) -> "Message":
        """Create a tool-result message."""
        return cls(role=MessageRole.TOOL.value, content=content, tool_call_id=tool_call_id)


@dataclass
class TokenUsage:
    """Token usage statistics."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self) -> None:
        if self.total_tokens == 0:
            self.total_tokens = self.input_tokens + self.output_tokens

    def add(self, other: "TokenUsage") -> None:
        """Accumulate another usage record."""
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens
        self.total_tokens += other.total_tokens


class ResponseKind(str, Enum):
    """Discriminator for completion responses."""

    TOOL_CALLS = "tool_calls"
    CONTENT = "content"


@dataclass
class CompletionResponse:
    """First choice of a completion, reduced to what the orchestrator needs."""

    content: str
    model: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    finish_reason: str = "stop"
    usage: TokenUsage = field(default_factory=TokenUsage)

    @property
    def kind(self) -> ResponseKind:
        """TOOL_CALLS when structured tool calls are attached, else CONTENT."""
        if self.tool_calls:
            return ResponseKind.TOOL_CALLS
        return ResponseKind.CONTENT
