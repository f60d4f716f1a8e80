"""Data models for orchestration runs."""

from dataclasses import dataclass, field
from enum import Enum

from promptduel.config.schema import OrchestratorConfig
from promptduel.providers.models import Message, TokenUsage
from promptduel.tools.models import ToolCall, ToolExecutionResult

__all__ = [
    "OrchestrationResult",
    "OrchestratorConfig",
    "OrchestratorState",
    "StopReason",
]


class OrchestratorState(str, Enum):
    """States of the tool-calling loop."""

    AWAITING_MODEL = "awaiting_model"
    TOOL_DISPATCH = "tool_dispatch"
    TERMINAL = "terminal"


class StopReason(str, Enum):
    """Why an orchestration run ended."""

    COMPLETED = "completed"  # model answered without tool calls
    MAX_ITERATIONS = "max_iterations"  # iteration cap reached, soft stop


@dataclass
class OrchestrationResult:
    """Result of one orchestration run."""

    content: str
    iterations: int
    stopped_reason: StopReason
    tool_calls: list[ToolCall] = field(default_factory=list)
    tool_results: list[ToolExecutionResult] = field(default_factory=list)
    duration_ms: float = 0.0
    messages: list[Message] = field(default_factory=list)
    usage: TokenUsage = field(default_factory=TokenUsage)
    state: OrchestratorState = OrchestratorState.TERMINAL

    @property
    def hit_iteration_cap(self) -> bool:
        """Whether the run was cut off by the iteration cap."""
        return self.stopped_reason == StopReason.MAX_ITERATIONS
