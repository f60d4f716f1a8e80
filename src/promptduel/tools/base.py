"""Base classes for tool implementation."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from promptduel.tools.context import ExecutionContext
from promptduel.tools.models import ToolDefinition, ToolExecutionResult, ToolMetadata

logger = logging.getLogger(__name__)


class ToolArgumentError(ValueError):
    """Raised when a tool receives a missing or invalid argument."""

    def __init__(self, message: str, parameter: str):
        """Initialize error.

        Args:
            message: Error message
            parameter: Name of the offending parameter
        """
        super().__init__(message)
        self.parameter = parameter


def require_string(arguments: dict[str, Any], name: str) -> str:
    """Fetch a required string argument.

    Args:
        arguments: Parsed tool arguments
        name: Parameter name

    Returns:
        The argument value with surrounding whitespace removed

    Raises:
        ToolArgumentError: If the argument is absent, not a string, or blank
    """
    value = arguments.get(name)
    if value is None:
        raise ToolArgumentError(f"Missing required parameter: {name}", name)
    if not isinstance(value, str):
        raise ToolArgumentError(f"Parameter '{name}' must be a string", name)

    value = value.strip()
    if not value:
        raise ToolArgumentError(f"Parameter '{name}' cannot be empty", name)
    return value


class ToolExecutor(ABC):
    """Executes a tool against parsed arguments.

    Subclasses implement :meth:`run`. :meth:`execute` is the boundary the
    orchestrator calls: it never raises, every failure comes back as a
    ``ToolExecutionResult`` with ``success=False``.
    """

    @abstractmethod
    async def run(
        self, arguments: dict[str, Any], context: ExecutionContext
    ) -> ToolExecutionResult:
        """Run the tool.

        Args:
            arguments: Parsed tool arguments
            context: Execution context for resource lookup

        Returns:
            ToolExecutionResult

        Raises:
            ToolArgumentError: If a required argument is invalid
        """
        pass

    async def execute(
        self, arguments: dict[str, Any], context: ExecutionContext
    ) -> ToolExecutionResult:
        """Run the tool, converting any exception into a failed result.

        Args:
            arguments: Parsed tool arguments
            context: Execution context for resource lookup

        Returns:
            ToolExecutionResult (never raises)
        """
        try:
            return await self.run(arguments, context)
        except ToolArgumentError as e:
            return ToolExecutionResult.fail(str(e))
        except Exception as e:
            logger.error(f"{type(self).__name__} failed: {e}", exc_info=True)
            return ToolExecutionResult.fail(f"Tool execution failed: {e}")


class Tool:
    """A registered capability: metadata, wire definition and executor."""

    def __init__(
        self,
        metadata: ToolMetadata,
        definition: ToolDefinition,
        executor: ToolExecutor,
    ):
        """Initialize the tool.

        Args:
            metadata: Descriptive metadata (registry key is ``metadata.name``)
            definition: Definition advertised to the model
            executor: Executor invoked for tool calls

        Raises:
            ValueError: If the definition is inconsistent
        """
        self.metadata = metadata
        self.definition = definition
        self.executor = executor
        self._validate_definition()

    @property
    def name(self) -> str:
        """Registry key."""
        return self.metadata.name

    def get_tool_definition(self) -> dict[str, Any]:
        """Definition in the format sent to the model."""
        return self.definition.to_openai()

    def _validate_definition(self) -> None:
        """Validate tool definition is correct.

        Raises:
            ValueError: If tool definition is invalid
        """
        if not self.metadata.name:
            raise ValueError("Tool name cannot be empty")

        if not self.definition.description:
            raise ValueError("Tool description cannot be empty")

        unknown = set(self.definition.required) - set(self.definition.parameters)
        if unknown:
            raise ValueError(f"Required parameters not declared: {', '.join(sorted(unknown))}")

    def __str__(self) -> str:
        """String representation."""
        return f"Tool({self.name})"

    def __repr__(self) -> str:
        """Representation."""
        return f"<Tool name={self.name} version={self.metadata.version}>"
