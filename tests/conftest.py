"""
Pytest configuration and fixtures for promptduel tests.
"""

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
from typer.testing import CliRunner

from promptduel.agent import ConversationOrchestrator, OrchestratorConfig
from promptduel.config import clear_config_cache
from promptduel.events import StatusEventBus
from promptduel.providers import CompletionClient
from promptduel.settings import KeyValueStore, SettingsProvider
from promptduel.tools import ExecutionContext, ToolRegistry
from promptduel.tools.builtin import register_builtin_tools


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_promptduel_home(temp_dir: Path, monkeypatch) -> Generator[Path, None, None]:
    """Point PROMPTDUEL_HOME at a fresh directory and reset cached config."""
    home = temp_dir / ".promptduel"
    home.mkdir()
    monkeypatch.setenv("PROMPTDUEL_HOME", str(home))
    clear_config_cache()

    yield home

    clear_config_cache()


@pytest.fixture
def registry() -> ToolRegistry:
    """Provide a registry holding the built-in tools."""
    registry = ToolRegistry()
    register_builtin_tools(registry)
    return registry


@pytest.fixture
def bus() -> StatusEventBus:
    """Provide an empty event bus."""
    return StatusEventBus()


@pytest.fixture
def settings_provider() -> SettingsProvider:
    """Provide an in-memory settings provider with an API key configured."""
    provider = SettingsProvider(KeyValueStore())
    provider.update_model_settings(api_key="sk-test-1234", model_name="gpt-4o-mini")
    return provider


@pytest.fixture
def orchestrator_config() -> OrchestratorConfig:
    """Orchestrator settings with streaming delay disabled."""
    return OrchestratorConfig(chunk_delay=0.0)


@pytest.fixture
def orchestrator(
    registry: ToolRegistry,
    bus: StatusEventBus,
    settings_provider: SettingsProvider,
    orchestrator_config: OrchestratorConfig,
) -> ConversationOrchestrator:
    """Provide an orchestrator wired to the built-in tools."""
    return ConversationOrchestrator(
        client=CompletionClient(timeout=30.0),
        registry=registry,
        bus=bus,
        settings_provider=settings_provider,
        context=ExecutionContext.with_builtin_resources(),
        config=orchestrator_config,
    )


@pytest.fixture
def make_completion() -> Callable[..., Any]:
    """
    Factory for objects shaped like a LiteLLM completion response.

    ``tool_calls`` is a list of ``(id, name, arguments)`` tuples.
    """

    def _make(
        content: str | None = None,
        tool_calls: list[tuple[str, str, Any]] | None = None,
        prompt_tokens: int = 10,
        completion_tokens: int = 5,
    ) -> SimpleNamespace:
        raw_calls = None
        if tool_calls:
            raw_calls = [
                SimpleNamespace(
                    id=call_id,
                    type="function",
                    function=SimpleNamespace(name=name, arguments=arguments),
                )
                for call_id, name, arguments in tool_calls
            ]

        message = SimpleNamespace(role="assistant", content=content, tool_calls=raw_calls)
        return SimpleNamespace(
            choices=[
                SimpleNamespace(
                    message=message,
                    finish_reason="tool_calls" if raw_calls else "stop",
                )
            ],
            usage=SimpleNamespace(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )

    return _make
