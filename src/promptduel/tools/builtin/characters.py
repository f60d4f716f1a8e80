"""Character lookup tool backed by the packaged character table."""

import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any

from pydantic import BaseModel

from promptduel.tools.base import Tool, ToolExecutor, require_string
from promptduel.tools.context import ExecutionContext
from promptduel.tools.models import (
    ToolDefinition,
    ToolExecutionResult,
    ToolMetadata,
    ToolParameter,
)

logger = logging.getLogger(__name__)

CHARACTERS_RESOURCE = "charactersData"
TOOL_NAME = "get_character_info"


class Character(BaseModel):
    """A person record in the character table."""

    name: str
    age: int
    occupation: str
    background: str
    personality: str


@lru_cache(maxsize=1)
def _load_raw_characters() -> tuple[dict[str, Any], ...]:
    text = resources.files(__package__).joinpath("characters.json").read_text(encoding="utf-8")
    return tuple(json.loads(text))


def load_characters() -> list[Character]:
    """Load the packaged character table.

    Returns:
        List of Character records
    """
    return [Character.model_validate(record) for record in _load_raw_characters()]


class CharacterQueryExecutor(ToolExecutor):
    """Looks up a person by exact name in the ``charactersData`` resource."""

    async def run(
        self, arguments: dict[str, Any], context: ExecutionContext
    ) -> ToolExecutionResult:
        name = require_string(arguments, "name")

        if not context.has_resource(CHARACTERS_RESOURCE):
            return ToolExecutionResult.fail("Character data resource is not configured")

        characters: list[Character] = context.get_resource(CHARACTERS_RESOURCE)
        character = next((c for c in characters if c.name == name), None)

        if character is None:
            logger.debug(f"Character not found: {name}")
            return ToolExecutionResult(
                success=False,
                error=f'No character named "{name}" was found',
                data={"availableCharacters": [c.name for c in characters]},
            )

        return ToolExecutionResult.ok(character.model_dump())


CHARACTER_TOOL_DEFINITION = ToolDefinition(
    name=TOOL_NAME,
    description=(
        "Mandatory: whenever the user asks about a person (name, age, occupation, "
        "background, personality), call this tool to query the character database. "
        "Never answer questions about people directly. "
        "强制使用：当用户询问任何人物信息时，必须立即调用此工具查询数据库。"
    ),
    parameters={
        "name": ToolParameter(
            type="string",
            description=(
                "Name of the person to look up, taken from the user's question. "
                "Available: 张三、李四、王五、赵六、孙七. "
                "If several people are mentioned, call the tool once per person."
            ),
        ),
    },
    required=["name"],
)


def create_character_query_tool() -> Tool:
    """Create the character lookup tool."""
    return Tool(
        metadata=ToolMetadata(
            name=TOOL_NAME,
            description="Character information lookup",
            version="1.0.0",
            category="data-query",
        ),
        definition=CHARACTER_TOOL_DEFINITION,
        executor=CharacterQueryExecutor(),
    )
