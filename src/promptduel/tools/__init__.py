"""Tool system for promptduel.

Tools are capabilities the model may ask to invoke. Each tool pairs a
definition (advertised to the model) with an executor that runs against an
ExecutionContext, and lives in an explicitly constructed ToolRegistry.
"""

from promptduel.tools.base import Tool, ToolArgumentError, ToolExecutor, require_string
from promptduel.tools.context import ExecutionContext, UnknownResourceError
from promptduel.tools.models import (
    ToolCall,
    ToolDefinition,
    ToolExecutionResult,
    ToolMetadata,
    ToolParameter,
)
from promptduel.tools.registry import ToolRegistry

__all__ = [
    "Tool",
    "ToolArgumentError",
    "ToolExecutor",
    "require_string",
    "ExecutionContext",
    "UnknownResourceError",
    "ToolCall",
    "ToolDefinition",
    "ToolExecutionResult",
    "ToolMetadata",
    "ToolParameter",
    "ToolRegistry",
]
