"""Tool-call intent extraction from completion responses.

Two strategies are chained: structured ``tool_calls`` fields first, then a
best-effort scan of the text content for tool-call JSON embedded by models
or endpoints that do not support native function calling.
"""

import json
import logging
import re
import uuid
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from promptduel.providers.models import CompletionResponse
from promptduel.tools.models import ToolCall

logger = logging.getLogger(__name__)

TOOL_CALLS_ARRAY_PATTERN = re.compile(r'"tool_calls"\s*:\s*(?=\[)')
TOOL_CALL_OBJECT_PATTERN = re.compile(r'\{\s*"id"\s*:')


class IntentExtractor(ABC):
    """Finds tool calls requested by a completion response."""

    @abstractmethod
    def extract(self, response: CompletionResponse) -> list[ToolCall]:
        """Extract tool calls.

        Args:
            response: Completion response

        Returns:
            Tool calls in request order (empty if none)
        """
        pass


class StructuredIntentExtractor(IntentExtractor):
    """Uses the structured tool calls attached to the response."""

    def extract(self, response: CompletionResponse) -> list[ToolCall]:
        return list(response.tool_calls)


class PatternIntentExtractor(IntentExtractor):
    """Recovers tool calls written into the text content.

    Looks for a ``"tool_calls": [...]`` array first. If there is none, scans
    for individual ``{"id": ..., "type": ..., "function": {...}}`` objects.
    """

    def __init__(self):
        self._decoder = json.JSONDecoder()

    def extract(self, response: CompletionResponse) -> list[ToolCall]:
        content = response.content
        if not content:
            return []

        calls = self._extract_array(content)
        if calls:
            return calls
        return self._extract_objects(content)

    def _extract_array(self, content: str) -> list[ToolCall]:
        for match in TOOL_CALLS_ARRAY_PATTERN.finditer(content):
            value, _ = self._decode_at(content, match.end())
            if isinstance(value, list):
                calls = [c for c in map(self._to_tool_call, value) if c is not None]
                if calls:
                    logger.debug(f"Recovered {len(calls)} tool calls from tool_calls array")
                    return calls
        return []

    def _extract_objects(self, content: str) -> list[ToolCall]:
        calls = []
        position = 0
        while True:
            match = TOOL_CALL_OBJECT_PATTERN.search(content, position)
            if match is None:
                break

            value, end = self._decode_at(content, match.start())
            call = self._to_tool_call(value, require_shape=True)
            if call is not None:
                calls.append(call)
                position = end
            else:
                position = match.end()

        if calls:
            logger.debug(f"Recovered {len(calls)} tool call objects from text")
        return calls

    def _decode_at(self, content: str, index: int) -> tuple[Any, int]:
        try:
            return self._decoder.raw_decode(content, index)
        except json.JSONDecodeError:
            return None, index

    @staticmethod
    def _to_tool_call(value: Any, require_shape: bool = False) -> Optional[ToolCall]:
        if not isinstance(value, dict):
            return None

        function = value.get("function")
        if not isinstance(function, dict) or not function.get("name"):
            return None
        if require_shape and not ("id" in value and "type" in value):
            return None

        arguments = function.get("arguments", "{}")
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments, ensure_ascii=False)

        call_id = value.get("id") or f"call_{uuid.uuid4().hex[:12]}"
        return ToolCall(id=str(call_id), name=str(function["name"]), arguments=arguments)


class IntentExtractorChain(IntentExtractor):
    """Tries extractors in priority order; the first non-empty result wins."""

    def __init__(self, extractors: Optional[Iterable[IntentExtractor]] = None):
        self.extractors = list(extractors) if extractors is not None else [
            StructuredIntentExtractor(),
            PatternIntentExtractor(),
        ]

    def extract(self, response: CompletionResponse) -> list[ToolCall]:
        for extractor in self.extractors:
            calls = extractor.extract(response)
            if calls:
                return calls
        return []
