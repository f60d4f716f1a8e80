"""
Provider exceptions for promptduel.

Every failure that aborts an orchestration run is raised as a ProviderError
subclass whose message is suitable for showing to the user.
"""

from enum import Enum


class FailureType(Enum):
    """Classification of endpoint failures."""

    AUTH_ERROR = "auth_error"
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialError(ProviderError):
    """No API key configured. Raised before any network call."""

    def __init__(self, message: str = "API key is not configured. Set it in the model settings."):
        super().__init__(message)


class AuthenticationError(ProviderError):
    """API key rejected by the endpoint."""

    pass


class RateLimitError(ProviderError):
    """Endpoint rate limit exceeded."""

    pass


class ServerError(ProviderError):
    """Endpoint server error (5xx status codes)."""

    pass


USER_MESSAGES = {
    FailureType.AUTH_ERROR: "Invalid API key, please check your API key settings",
    FailureType.RATE_LIMIT: "Too many requests, please try again later",
    FailureType.SERVER_ERROR: "Server error, please try again later",
}


def _status_code(error: Exception) -> int | None:
    status = getattr(error, "status_code", None)
    if status is None:
        status = getattr(getattr(error, "response", None), "status_code", None)
    return status if isinstance(status, int) else None


def classify_error(error: Exception) -> FailureType:
    """
    Classify an exception raised while calling the endpoint.

    Args:
        error: The exception to classify.

    Returns:
        The failure type classification.
    """
    from litellm.exceptions import (
        AuthenticationError as LiteLLMAuthError,
        InternalServerError,
        RateLimitError as LiteLLMRateLimitError,
        ServiceUnavailableError,
    )

    if isinstance(error, (LiteLLMAuthError, AuthenticationError)):
        return FailureType.AUTH_ERROR
    if isinstance(error, (LiteLLMRateLimitError, RateLimitError)):
        return FailureType.RATE_LIMIT
    if isinstance(error, (InternalServerError, ServiceUnavailableError, ServerError)):
        return FailureType.SERVER_ERROR

    status = _status_code(error)
    if status == 401:
        return FailureType.AUTH_ERROR
    if status == 429:
        return FailureType.RATE_LIMIT
    if status is not None and 500 <= status < 600:
        return FailureType.SERVER_ERROR

    return FailureType.UNKNOWN


def to_provider_error(error: Exception) -> ProviderError:
    """
    Convert an arbitrary exception into a user-facing ProviderError.

    ProviderError instances are returned unchanged.

    Args:
        error: The exception to convert.

    Returns:
        ProviderError subclass matching the failure type.
    """
    if isinstance(error, ProviderError):
        return error

    failure = classify_error(error)
    status = _status_code(error)

    if failure == FailureType.AUTH_ERROR:
        return AuthenticationError(USER_MESSAGES[failure], status)
    if failure == FailureType.RATE_LIMIT:
        return RateLimitError(USER_MESSAGES[failure], status)
    if failure == FailureType.SERVER_ERROR:
        return ServerError(USER_MESSAGES[failure], status)

    return ProviderError(f"API call failed: {str(error) or 'unknown error'}", status)
