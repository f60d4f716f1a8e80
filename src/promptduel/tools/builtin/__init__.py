"""Built-in tools.

Currently a single data-query tool that looks up people in a small
packaged character table.
"""

import logging

from promptduel.tools.builtin.characters import (
    CHARACTERS_RESOURCE,
    Character,
    CharacterQueryExecutor,
    create_character_query_tool,
    load_characters,
)
from promptduel.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def register_builtin_tools(registry: ToolRegistry) -> None:
    """Register all built-in tools.

    Args:
        registry: ToolRegistry to register tools in
    """
    registry.register(create_character_query_tool())
    logger.info(f"Registered built-in tools: {registry.list_tool_names()}")


__all__ = [
    "CHARACTERS_RESOURCE",
    "Character",
    "CharacterQueryExecutor",
    "create_character_query_tool",
    "load_characters",
    "register_builtin_tools",
]
