"""
Unit tests for CLI commands.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from promptduel import __version__
from promptduel.cli.app import app
from promptduel.settings import DEFAULT_SYSTEM_PROMPT, PromptSlot, SettingsProvider

ACOMPLETION = "promptduel.providers.client.acompletion"


@pytest.fixture
def home(mock_promptduel_home, monkeypatch):
    """Isolated home with streaming delay disabled."""
    monkeypatch.setenv("PROMPTDUEL_ORCHESTRATOR_CHUNK_DELAY", "0")
    return mock_promptduel_home


@pytest.fixture
def configured_home(home):
    """Home with an API key saved."""
    SettingsProvider.default().update_model_settings(api_key="sk-test-7890")
    return home


def test_version(cli_runner: CliRunner) -> None:
    """Test --version flag."""
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_help(cli_runner: CliRunner, home) -> None:
    """Test --help flag."""
    result = cli_runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "promptduel" in result.stdout
    assert "compare" in result.stdout
    assert "settings" in result.stdout
    assert "prompt" in result.stdout


# =============================================================================
# settings
# =============================================================================


def test_settings_show_without_key(cli_runner: CliRunner, home) -> None:
    """Test settings show reports a missing key."""
    result = cli_runner.invoke(app, ["settings", "show"])
    assert result.exit_code == 0
    assert "not set" in result.stdout
    assert "gpt-4" in result.stdout


def test_settings_set_api_key(cli_runner: CliRunner, home) -> None:
    """Test saving the API key masks it in output."""
    result = cli_runner.invoke(app, ["settings", "set", "api_key", "sk-secret-4321"])
    assert result.exit_code == 0
    assert "sk-secret" not in result.stdout

    stored = json.loads((home / "settings.json").read_text(encoding="utf-8"))
    assert json.loads(stored["modelSettings"])["apiKey"] == "sk-secret-4321"

    result = cli_runner.invoke(app, ["settings", "show"])
    assert "4321" in result.stdout
    assert "sk-secret" not in result.stdout


def test_settings_set_by_alias(cli_runner: CliRunner, home) -> None:
    """Test stored key names are accepted."""
    result = cli_runner.invoke(app, ["settings", "set", "modelName", "qwen-plus"])
    assert result.exit_code == 0
    assert SettingsProvider.default().get_model_settings().model_name == "qwen-plus"


def test_settings_set_unknown_key(cli_runner: CliRunner, home) -> None:
    """Test unknown settings are rejected."""
    result = cli_runner.invoke(app, ["settings", "set", "color", "blue"])
    assert result.exit_code == 1
    assert "Unknown setting" in result.stdout


def test_settings_set_invalid_value(cli_runner: CliRunner, home) -> None:
    """Test out-of-range values are rejected."""
    result = cli_runner.invoke(app, ["settings", "set", "temperature", "5"])
    assert result.exit_code == 1
    assert SettingsProvider.default().get_model_settings().temperature == 0.7


def test_settings_reset(cli_runner: CliRunner, configured_home) -> None:
    """Test resetting drops the saved key."""
    result = cli_runner.invoke(app, ["settings", "reset", "--force"])
    assert result.exit_code == 0
    assert SettingsProvider.default().is_api_configured() is False


# =============================================================================
# prompt
# =============================================================================


def test_prompt_set_show_reset(cli_runner: CliRunner, home) -> None:
    """Test the prompt lifecycle."""
    result = cli_runner.invoke(app, ["prompt", "set", "B", "Answer in one sentence."])
    assert result.exit_code == 0
    assert SettingsProvider.default().get_prompt(PromptSlot.B) == "Answer in one sentence."

    result = cli_runner.invoke(app, ["prompt", "show", "B"])
    assert result.exit_code == 0
    assert "Answer in one sentence." in result.stdout

    result = cli_runner.invoke(app, ["prompt", "reset", "B"])
    assert result.exit_code == 0
    assert SettingsProvider.default().get_prompt(PromptSlot.B) == DEFAULT_SYSTEM_PROMPT


def test_prompt_set_from_file(cli_runner: CliRunner, home, temp_dir) -> None:
    """Test reading a prompt from a file."""
    prompt_file = temp_dir / "prompt.txt"
    prompt_file.write_text("来自文件的提示词", encoding="utf-8")

    result = cli_runner.invoke(app, ["prompt", "set", "A", "--file", str(prompt_file)])

    assert result.exit_code == 0
    assert SettingsProvider.default().get_prompt(PromptSlot.A) == "来自文件的提示词"


def test_prompt_set_empty(cli_runner: CliRunner, home) -> None:
    """Test an empty prompt is rejected."""
    result = cli_runner.invoke(app, ["prompt", "set", "A", "  "])
    assert result.exit_code == 1


# =============================================================================
# tools
# =============================================================================


def test_tools_list(cli_runner: CliRunner, home) -> None:
    """Test listing tools."""
    result = cli_runner.invoke(app, ["tools", "list"])
    assert result.exit_code == 0
    assert "get_character_info" in result.stdout


def test_tools_info_unknown(cli_runner: CliRunner, home) -> None:
    """Test info for an unknown tool."""
    result = cli_runner.invoke(app, ["tools", "info", "nope"])
    assert result.exit_code == 1
    assert "Tool not found" in result.stdout


def test_tools_test(cli_runner: CliRunner, home) -> None:
    """Test running a tool directly."""
    result = cli_runner.invoke(
        app, ["tools", "test", "get_character_info", "--params", '{"name": "张三"}']
    )
    assert result.exit_code == 0
    assert '"success": true' in result.stdout


def test_tools_test_miss(cli_runner: CliRunner, home) -> None:
    """Test a failed tool run exits non-zero."""
    result = cli_runner.invoke(
        app, ["tools", "test", "get_character_info", "--params", '{"name": "周八"}']
    )
    assert result.exit_code == 1
    assert "availableCharacters" in result.stdout


# =============================================================================
# config
# =============================================================================


def test_config_show(cli_runner: CliRunner, home) -> None:
    """Test config show."""
    result = cli_runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "max_iterations" in result.stdout


def test_config_set_and_validate(cli_runner: CliRunner, home) -> None:
    """Test writing a config value."""
    result = cli_runner.invoke(app, ["config", "set", "orchestrator.max_iterations", "3"])
    assert result.exit_code == 0
    assert "max_iterations: 3" in (home / "config.yaml").read_text(encoding="utf-8")

    result = cli_runner.invoke(app, ["config", "validate"])
    assert result.exit_code == 0


def test_config_set_invalid(cli_runner: CliRunner, home) -> None:
    """Test invalid values are not written."""
    result = cli_runner.invoke(app, ["config", "set", "orchestrator.max_iterations", "0"])
    assert result.exit_code == 1
    assert not (home / "config.yaml").exists()


def test_config_set_keeps_unreadable_file(cli_runner: CliRunner, home) -> None:
    """Test an unparsable config file is left alone instead of overwritten."""
    broken = "orchestrator:\n  chunk_count: 20\nevents: [unclosed\n"
    (home / "config.yaml").write_text(broken, encoding="utf-8")

    result = cli_runner.invoke(app, ["config", "set", "orchestrator.max_iterations", "3"])

    assert result.exit_code == 1
    assert "Cannot update configuration" in result.stdout
    assert (home / "config.yaml").read_text(encoding="utf-8") == broken


# =============================================================================
# compare
# =============================================================================


def test_compare_without_api_key(cli_runner: CliRunner, home) -> None:
    """Test compare refuses to run without a key."""
    mock = AsyncMock()

    with patch(ACOMPLETION, new=mock):
        result = cli_runner.invoke(app, ["compare", "张三"])

    assert result.exit_code == 2
    assert "API key is not configured" in result.stdout
    mock.assert_not_awaited()


def test_compare(cli_runner: CliRunner, configured_home, make_completion) -> None:
    """Test both prompts are answered."""
    mock = AsyncMock(return_value=make_completion(content="Hello from the model"))

    with patch(ACOMPLETION, new=mock):
        result = cli_runner.invoke(app, ["compare", "hi", "--json"])

    assert result.exit_code == 0
    assert mock.await_count == 2
    assert '"A"' in result.stdout
    assert '"B"' in result.stdout
    assert "Hello from the model" in result.stdout


def test_compare_auth_failure(cli_runner: CliRunner, configured_home) -> None:
    """Test an invalid key is reported."""
    error = Exception("unauthorized")
    error.status_code = 401

    with patch(ACOMPLETION, new=AsyncMock(side_effect=error)):
        result = cli_runner.invoke(app, ["compare", "hi", "--no-events"])

    assert result.exit_code == 3
    assert "Invalid API key" in result.stdout
