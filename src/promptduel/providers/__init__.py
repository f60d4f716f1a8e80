"""
promptduel provider layer.

Async access to OpenAI-compatible chat-completion endpoints via LiteLLM,
with user-facing error classification.
"""

from promptduel.providers.client import CompletionClient, resolve_api_base, resolve_model
from promptduel.providers.exceptions import (
    AuthenticationError,
    FailureType,
    MissingCredentialError,
    ProviderError,
    RateLimitError,
    ServerError,
    classify_error,
    to_provider_error,
)
from promptduel.providers.models import (
    CompletionResponse,
    Message,
    MessageRole,
    ResponseKind,
    TokenUsage,
)

__all__ = [
    # Client
    "CompletionClient",
    "resolve_api_base",
    "resolve_model",
    # Models
    "CompletionResponse",
    "Message",
    "MessageRole",
    "ResponseKind",
    "TokenUsage",
    # Exceptions
    "AuthenticationError",
    "FailureType",
    "MissingCredentialError",
    "ProviderError",
    "RateLimitError",
    "ServerError",
    "classify_error",
    "to_provider_error",
]
