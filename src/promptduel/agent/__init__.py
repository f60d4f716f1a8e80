"""Conversation orchestration for promptduel.

The orchestrator runs the model/tool loop for one system prompt; the
comparison session runs two prompts side by side.
"""

from promptduel.agent.chunker import StreamChunker
from promptduel.agent.comparison import ComparisonSession
from promptduel.agent.extractors import (
    IntentExtractor,
    IntentExtractorChain,
    PatternIntentExtractor,
    StructuredIntentExtractor,
)
from promptduel.agent.models import (
    OrchestrationResult,
    OrchestratorConfig,
    OrchestratorState,
    StopReason,
)
from promptduel.agent.orchestrator import ConversationOrchestrator

__all__ = [
    "StreamChunker",
    "ComparisonSession",
    "IntentExtractor",
    "IntentExtractorChain",
    "PatternIntentExtractor",
    "StructuredIntentExtractor",
    "OrchestrationResult",
    "OrchestratorConfig",
    "OrchestratorState",
    "StopReason",
    "ConversationOrchestrator",
]
