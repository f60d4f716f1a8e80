"""Data models for the tool system."""

import json
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ToolParameter(BaseModel):
    """Schema of a single tool parameter."""

    model_config = ConfigDict(frozen=True)

    type: str  # "string", "integer", "boolean", "array", "object"
    description: str


class ToolDefinition(BaseModel):
    """Callable capability advertised to the model."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, ToolParameter] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    def to_openai(self) -> dict[str, Any]:
        """Render the definition in OpenAI function-calling format.

        Returns:
            Tool definition as sent in the ``tools`` request field
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": {
                        name: {"type": param.type, "description": param.description}
                        for name, param in self.parameters.items()
                    },
                    "required": list(self.required),
                },
            },
        }


class ToolMetadata(BaseModel):
    """Descriptive metadata for a registered tool."""

    name: str
    description: str
    version: str = "1.0.0"
    category: str = "general"


class ToolCall(BaseModel):
    """A tool invocation requested by the model.

    ``arguments`` holds the raw JSON text exactly as the model produced it.
    """

    id: str
    name: str
    arguments: str = "{}"

    def parse_arguments(self) -> dict[str, Any]:
        """Parse the raw argument text.

        Returns:
            Argument dict, or an empty dict if the text is not a JSON object
        """
        if not self.arguments:
            return {}

        try:
            parsed = json.loads(self.arguments)
        except (json.JSONDecodeError, TypeError):
            logger.warning(f"Malformed tool arguments for {self.name}: {self.arguments!r}")
            return {}

        if not isinstance(parsed, dict):
            logger.warning(f"Tool arguments for {self.name} are not an object: {parsed!r}")
            return {}

        return parsed

    def to_dict(self) -> dict[str, Any]:
        """Raw tool-call record as echoed back in assistant messages."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name}({self.arguments})"


class ToolExecutionResult(BaseModel):
    """Outcome of a tool execution.

    Extra keys are allowed so diagnostics (for example ``availableTools``)
    travel back to the model alongside the error.
    """

    model_config = ConfigDict(extra="allow")

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ToolExecutionResult":
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, **extra: Any) -> "ToolExecutionResult":
        """Create a failed result with optional diagnostic fields."""
        return cls(success=False, error=error, **extra)

    def to_content(self) -> str:
        """Serialize for a tool-role message."""
        return json.dumps(self.model_dump(exclude_none=True), ensure_ascii=False)

    def __str__(self) -> str:
        """String representation."""
        if not self.success:
            return f"Error: {self.error}"
        return self.to_content()[:200]
