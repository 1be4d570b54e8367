"""
Custom exceptions and error handling for the Intelligence Processing Engine.

Provides:
- Typed exception hierarchy for different failure modes
- Error context preservation for debugging
- Classification of completion-service failures
"""

from typing import Any

import openai


class IntelligenceEngineError(Exception):
    """Base exception for all intelligence engine errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Configuration / Input Errors
# =============================================================================


class ConfigurationError(IntelligenceEngineError):
    """Missing or invalid configuration (e.g. an empty credential)."""

    pass


class InputValidationError(IntelligenceEngineError):
    """Customer data violates the input contract."""

    pass


# =============================================================================
# Upstream (completion service) Errors
# =============================================================================


class UpstreamServiceError(IntelligenceEngineError):
    """
    The completion service failed. Fatal to the current call.

    str() is the upstream error text unchanged; debugging detail stays in
    context.
    """

    def __str__(self) -> str:
        return self.message


class UpstreamRateLimitError(UpstreamServiceError):
    """Rate limit exceeded on the completion service."""

    pass


class UpstreamAuthenticationError(UpstreamServiceError):
    """The completion service rejected the credential."""

    pass


class UpstreamConnectionError(UpstreamServiceError):
    """Transport failure talking to the completion service."""

    pass


# =============================================================================
# Pipeline Errors
# =============================================================================


class PipelineError(IntelligenceEngineError):
    """Base class for pipeline-related errors."""

    pass


class MalformedResponseError(PipelineError):
    """
    The completion body could not be parsed into the expected shape.

    Recorded on the degraded extraction path; never raised out of
    process_customer_data.
    """

    pass


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_upstream_error(
    exc: Exception, context: dict[str, Any] | None = None
) -> UpstreamServiceError:
    """
    Wrap a completion-service exception in our typed error hierarchy.

    The wrapped error's message is the original error text, unchanged.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        Typed UpstreamServiceError subclass
    """
    error_str = str(exc).lower()
    ctx = context or {}
    ctx['error_type'] = type(exc).__name__
    status_code = getattr(exc, 'status_code', None)
    if status_code is not None:
        ctx['status_code'] = status_code

    if isinstance(exc, openai.RateLimitError) or 'rate limit' in error_str or 'rate_limit' in error_str:
        return UpstreamRateLimitError(str(exc), context=ctx)
    elif isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return UpstreamAuthenticationError(str(exc), context=ctx)
    elif isinstance(exc, (openai.APIConnectionError, openai.APITimeoutError)):
        return UpstreamConnectionError(str(exc), context=ctx)
    else:
        return UpstreamServiceError(str(exc), context=ctx)
