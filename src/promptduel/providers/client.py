"""
Completion client for promptduel.

Sends chat-completion requests to an OpenAI-compatible endpoint via LiteLLM
and reduces the reply to a CompletionResponse.
"""

import json
import logging
from typing import Any

import litellm
from litellm import acompletion

from promptduel.providers.exceptions import MissingCredentialError, to_provider_error
from promptduel.providers.models import CompletionResponse, Message, TokenUsage
from promptduel.settings.models import DEFAULT_API_URL, ModelSettings
from promptduel.tools.models import ToolCall

logger = logging.getLogger(__name__)

# Configure LiteLLM defaults
litellm.drop_params = True  # Drop unsupported params per-provider

CHAT_COMPLETIONS_SUFFIX = "/chat/completions"


def resolve_api_base(api_url: str) -> str | None:
    """
    Turn a configured endpoint URL into a LiteLLM ``api_base``.

    The public OpenAI endpoint maps to None (LiteLLM's default); any other
    URL has a trailing ``/chat/completions`` removed.
    """
    url = (api_url or "").strip().rstrip("/")
    if not url or url == DEFAULT_API_URL:
        return None
    if url.endswith(CHAT_COMPLETIONS_SUFFIX):
        url = url[: -len(CHAT_COMPLETIONS_SUFFIX)]
    return url


def resolve_model(model_name: str) -> str:
    """Route the model through LiteLLM's OpenAI-compatible provider."""
    model_name = model_name.strip()
    if model_name.startswith("openai/"):
        return model_name
    return f"openai/{model_name}"


class CompletionClient:
    """
    Thin async client around ``litellm.acompletion``.

    Every exception raised by the call is converted to a user-facing
    ProviderError subclass.
    """

    def __init__(self, timeout: float | None = 60.0):
        """
        Initialize the client.

        Args:
            timeout: Per-request timeout in seconds, None for LiteLLM's default.
        """
        self.timeout = timeout

    def build_request(
        self,
        messages: list[Message],
        tools: list[dict[str, Any]] | None,
        settings: ModelSettings,
    ) -> dict[str, Any]:
        """
        Build the keyword arguments for ``acompletion``.

        Raises:
            MissingCredentialError: If no API key is configured.
        """
        if not settings.has_api_key:
            raise MissingCredentialError()

        request: dict[str, Any] = {
            "model": resolve_model(settings.model_name),
            "messages": [msg.to_dict() for msg in messages],
            "temperature": settings.temperature,
            "top_p": settings.top_p,
            "api_key": settings.api_key.strip(),
        }
        api_base = resolve_api_base(settings.api_url)
        if api_base:
            request["api_base"] = api_base
        if tools:
            request["tools"] = tools
        if self.timeout is not None:
            request["timeout"] = self.timeout
        return request

    async def complete(
        self,
        messages: list[Message],
        tools: list[dict[str, Any]] | None,
        settings: ModelSettings,
    ) -> CompletionResponse:
        """
        Send one completion request.

        Args:
            messages: Full conversation history.
            tools: Tool definitions in OpenAI format.
            settings: Connection and sampling settings.

        Returns:
            Parsed CompletionResponse.

        Raises:
            ProviderError: On any configuration or endpoint failure.
        """
        request = self.build_request(messages, tools, settings)
        logger.debug(
            f"Completion request: model={request['model']} messages={len(messages)} "
            f"tools={len(tools or [])}"
        )

        try:
            response = await acompletion(**request)
        except Exception as e:
            error = to_provider_error(e)
            logger.error(f"Completion request failed: {e}")
            raise error from e

        return self._parse_response(response, settings.model_name)

    def _parse_response(self, response: Any, model: str) -> CompletionResponse:
        """Reduce a LiteLLM response to its first choice."""
        choice = response.choices[0]
        message = choice.message

        tool_calls = []
        for raw in getattr(message, "tool_calls", None) or []:
            function = raw.function
            arguments = function.arguments
            if not isinstance(arguments, str):
                arguments = json.dumps(arguments or {}, ensure_ascii=False)
            tool_calls.append(ToolCall(id=raw.id, name=function.name, arguments=arguments))

        usage = TokenUsage()
        raw_usage = getattr(response, "usage", None)
        if raw_usage is not None:
            usage = TokenUsage(
                input_tokens=getattr(raw_usage, "prompt_tokens", 0) or 0,
                output_tokens=getattr(raw_usage, "completion_tokens", 0) or 0,
                total_tokens=getattr(raw_usage, "total_tokens", 0) or 0,
            )

        return CompletionResponse(
            content=message.content or "",
            model=model,
            tool_calls=tool_calls,
            finish_reason=getattr(choice, "finish_reason", None) or "stop",
            usage=usage,
        )
