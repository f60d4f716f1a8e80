"""
Unit tests for the promptduel provider layer.
"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from litellm.exceptions import AuthenticationError as LiteLLMAuthError

from promptduel.providers import (
    AuthenticationError,
    CompletionClient,
    CompletionResponse,
    FailureType,
    Message,
    MessageRole,
    MissingCredentialError,
    ProviderError,
    RateLimitError,
    ResponseKind,
    ServerError,
    TokenUsage,
    classify_error,
    resolve_api_base,
    resolve_model,
    to_provider_error,
)
from promptduel.settings import ModelSettings


class StatusError(Exception):
    def __init__(self, status_code: int, message: str = ""):
        super().__init__(message)
        self.status_code = status_code


# =============================================================================
# Model Tests
# =============================================================================


class TestMessage:
    """Tests for Message."""

    def test_factories(self):
        """Test role factories."""
        assert Message.system("s").role == MessageRole.SYSTEM.value
        assert Message.user("u").role == "user"
        assert Message.assistant("a").role == "assistant"
        assert Message.tool("t", "call_1").tool_call_id == "call_1"

    def test_to_dict_plain(self):
        """Test plain messages omit tool fields."""
        assert Message.user("hi").to_dict() == {"role": "user", "content": "hi"}

    def test_to_dict_tool_fields(self):
        """Test tool fields are included when set."""
        record = {"id": "c", "type": "function", "function": {"name": "f", "arguments": "{}"}}

        assert Message.assistant("", [record]).to_dict() == {
            "role": "assistant",
            "content": "",
            "tool_calls": [record],
        }
        assert Message.tool("{}", "c").to_dict() == {
            "role": "tool",
            "content": "{}",
            "tool_call_id": "c",
        }


class TestTokenUsage:
    """Tests for TokenUsage."""

    def test_default_total(self):
        """Test total is derived when not given."""
        assert TokenUsage(input_tokens=3, output_tokens=4).total_tokens == 7

    def test_add(self):
        """Test accumulation."""
        usage = TokenUsage()
        usage.add(TokenUsage(input_tokens=1, output_tokens=2))
        usage.add(TokenUsage(input_tokens=3, output_tokens=4))

        assert (usage.input_tokens, usage.output_tokens, usage.total_tokens) == (4, 6, 10)


class TestCompletionResponse:
    """Tests for CompletionResponse."""

    def test_kind(self):
        """Test the response variant."""
        assert CompletionResponse(content="x", model="m").kind == ResponseKind.CONTENT


# =============================================================================
# Exception Tests
# =============================================================================


class TestExceptions:
    """Tests for error classification."""

    @pytest.mark.parametrize(
        "status_code, failure",
        [
            (401, FailureType.AUTH_ERROR),
            (429, FailureType.RATE_LIMIT),
            (500, FailureType.SERVER_ERROR),
            (504, FailureType.SERVER_ERROR),
            (404, FailureType.UNKNOWN),
        ],
    )
    def test_classify_status_code(self, status_code, failure):
        """Test classification by HTTP status."""
        assert classify_error(StatusError(status_code)) == failure

    def test_classify_response_status(self):
        """Test status read from an attached response."""
        error = Exception("bad")
        error.response = SimpleNamespace(status_code=429)

        assert classify_error(error) == FailureType.RATE_LIMIT

    def test_classify_litellm_auth_error(self):
        """Test LiteLLM exception types are recognised."""
        error = LiteLLMAuthError(message="bad key", llm_provider="openai", model="gpt-4")

        assert classify_error(error) == FailureType.AUTH_ERROR
        assert isinstance(to_provider_error(error), AuthenticationError)

    def test_classify_unknown(self):
        """Test unrelated exceptions."""
        assert classify_error(ValueError("nope")) == FailureType.UNKNOWN

    def test_to_provider_error_types(self):
        """Test conversion picks the matching subclass."""
        assert isinstance(to_provider_error(StatusError(401)), AuthenticationError)
        assert isinstance(to_provider_error(StatusError(429)), RateLimitError)
        assert isinstance(to_provider_error(StatusError(502)), ServerError)

    def test_to_provider_error_generic(self):
        """Test unclassified errors keep their message."""
        error = to_provider_error(StatusError(418, "teapot"))

        assert type(error) is ProviderError
        assert str(error) == "API call failed: teapot"
        assert error.status_code == 418

    def test_to_provider_error_without_message(self):
        """Test an empty message gets a placeholder."""
        assert str(to_provider_error(RuntimeError())) == "API call failed: unknown error"

    def test_provider_error_passthrough(self):
        """Test ProviderError instances are returned unchanged."""
        error = MissingCredentialError()
        assert to_provider_error(error) is error
        assert "API key is not configured" in str(error)


# =============================================================================
# Client Tests
# =============================================================================


class TestResolve:
    """Tests for endpoint and model resolution."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://api.openai.com/v1/chat/completions", None),
            ("", None),
            ("https://llm.example.com/v1/chat/completions", "https://llm.example.com/v1"),
            ("https://llm.example.com/v1/", "https://llm.example.com/v1"),
            ("http://localhost:11434/v1", "http://localhost:11434/v1"),
        ],
    )
    def test_resolve_api_base(self, url, expected):
        """Test endpoint URL normalisation."""
        assert resolve_api_base(url) == expected

    def test_resolve_model(self):
        """Test models are routed through the OpenAI-compatible provider."""
        assert resolve_model("gpt-4") == "openai/gpt-4"
        assert resolve_model(" qwen-plus ") == "openai/qwen-plus"
        assert resolve_model("openai/gpt-4") == "openai/gpt-4"


class TestCompletionClient:
    """Tests for CompletionClient."""

    def test_build_request_requires_key(self):
        """Test a missing key fails before any request."""
        with pytest.raises(MissingCredentialError):
            CompletionClient().build_request([Message.user("hi")], None, ModelSettings())

    def test_build_request(self):
        """Test request keyword arguments."""
        settings = ModelSettings(
            api_url="https://llm.example.com/v1/chat/completions",
            api_key=" sk-abc ",
            model_name="qwen-plus",
            temperature=0.2,
            top_p=0.5,
        )
        tools = [{"type": "function", "function": {"name": "f"}}]

        request = CompletionClient(timeout=12.0).build_request(
            [Message.user("hi")], tools, settings
        )

        assert request == {
            "model": "openai/qwen-plus",
            "messages": [{"role": "user", "content": "hi"}],
            "temperature": 0.2,
            "top_p": 0.5,
            "api_key": "sk-abc",
            "api_base": "https://llm.example.com/v1",
            "tools": tools,
            "timeout": 12.0,
        }

    def test_build_request_without_tools_or_timeout(self):
        """Test optional arguments are omitted."""
        request = CompletionClient(timeout=None).build_request(
            [Message.user("hi")], [], ModelSettings(api_key="sk")
        )

        assert "tools" not in request
        assert "timeout" not in request

    @pytest.mark.asyncio
    async def test_complete_parses_tool_calls(self, make_completion):
        """Test structured tool calls and usage are parsed."""
        raw = make_completion(
            content=None,
            tool_calls=[("call_1", "get_character_info", {"name": "张三"})],
            prompt_tokens=7,
            completion_tokens=3,
        )

        with patch("promptduel.providers.client.acompletion", new=AsyncMock(return_value=raw)):
            response = await CompletionClient().complete(
                [Message.user("张三")], None, ModelSettings(api_key="sk")
            )

        assert response.kind == ResponseKind.TOOL_CALLS
        assert response.content == ""
        assert response.finish_reason == "tool_calls"
        assert response.tool_calls[0].id == "call_1"
        assert json.loads(response.tool_calls[0].arguments) == {"name": "张三"}
        assert response.usage.total_tokens == 10

    @pytest.mark.asyncio
    async def test_complete_wraps_errors(self):
        """Test endpoint errors are converted."""
        mock = AsyncMock(side_effect=StatusError(429, "slow down"))

        with patch("promptduel.providers.client.acompletion", new=mock):
            with pytest.raises(RateLimitError) as exc_info:
                await CompletionClient().complete(
                    [Message.user("hi")], None, ModelSettings(api_key="sk")
                )

        assert str(exc_info.value) == "Too many requests, please try again later"
