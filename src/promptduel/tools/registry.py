"""Tool registry for managing available tools."""

import logging
from typing import Any, Optional

from promptduel.tools.base import Tool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry for managing available tools.

    Tools are keyed by ``metadata.name``. Registering a name twice replaces
    the earlier tool. Instances are created by the application and passed
    around explicitly; there is no global registry.
    """

    def __init__(self):
        """Initialize the tool registry."""
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool, replacing any tool with the same name.

        Args:
            tool: Tool instance to register
        """
        if tool.name in self._tools:
            logger.warning(f"Tool '{tool.name}' is already registered and will be replaced")

        self._tools[tool.name] = tool
        logger.info(f"Registered tool: {tool.name} ({tool.metadata.description})")

    def unregister(self, name: str) -> bool:
        """Unregister a tool.

        Args:
            name: Tool name to unregister

        Returns:
            True if tool was unregistered, False if not found
        """
        if name in self._tools:
            del self._tools[name]
            logger.info(f"Unregistered tool: {name}")
            return True
        return False

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name.

        Args:
            name: Tool name

        Returns:
            Tool instance or None if not found
        """
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._tools

    def get_all(self) -> list[Tool]:
        """Get all registered tools in registration order."""
        return list(self._tools.values())

    def list_tool_names(self) -> list[str]:
        """Get list of all registered tool names."""
        return list(self._tools.keys())

    def get_definitions(self) -> list[dict[str, Any]]:
        """Get wire definitions for all registered tools.

        Returns:
            List of tool definitions in OpenAI function-calling format
        """
        return [tool.get_tool_definition() for tool in self._tools.values()]

    def get_stats(self) -> dict[str, Any]:
        """Summarize the registry contents.

        Returns:
            Dict with ``total`` and per-tool name/category/version
        """
        return {
            "total": len(self._tools),
            "tools": [
                {
                    "name": tool.metadata.name,
                    "category": tool.metadata.category,
                    "version": tool.metadata.version,
                }
                for tool in self._tools.values()
            ],
        }

    def clear(self) -> None:
        """Clear all registered tools."""
        self._tools.clear()
        logger.info("Cleared all tools from registry")

    def __len__(self) -> int:
        """Get number of registered tools."""
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        """Check if tool is registered."""
        return name in self._tools

    def __str__(self) -> str:
        """String representation."""
        return f"ToolRegistry({len(self._tools)} tools)"

    def __repr__(self) -> str:
        """Representation."""
        tools = ", ".join(self._tools.keys())
        return f"<ToolRegistry tools=[{tools}]>"
