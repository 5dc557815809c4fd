"""
Custom exceptions and error handling for the procurement AI pipeline.

Provides:
- Typed exception hierarchy for different failure modes
- A closed set of model failure kinds that drive retry policy
- Error context preservation for debugging
"""

from enum import Enum
from typing import Any

import openai


class ProcurementAIError(Exception):
    """Base exception for all procurement AI errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class ConfigurationError(ProcurementAIError):
    """Required configuration (e.g. the model API key) is missing."""

    pass


# =============================================================================
# Input Errors
# =============================================================================


class InvalidInput(ProcurementAIError):
    """Caller-supplied argument violates a precondition."""

    pass


class InsufficientInput(InvalidInput):
    """Fewer than two proposals were supplied for comparison."""

    pass


class RecordNotFound(ProcurementAIError):
    """The record store has no record for the requested identifier."""

    pass


# =============================================================================
# Model Errors
# =============================================================================


class FailureKind(str, Enum):
    """Classified failure kinds at the model gateway boundary."""

    RATE_LIMITED = 'rate_limited'
    SERVER_ERROR = 'server_error'
    CLIENT_ERROR = 'client_error'
    NETWORK_ERROR = 'network_error'
    TIMEOUT = 'timeout'
    MALFORMED_RESPONSE = 'malformed_response'

    @property
    def retryable(self) -> bool:
        return self in _RETRYABLE_KINDS

    @property
    def backs_off(self) -> bool:
        return self in _BACKOFF_KINDS


_BACKOFF_KINDS = frozenset({FailureKind.RATE_LIMITED, FailureKind.SERVER_ERROR})
_RETRYABLE_KINDS = _BACKOFF_KINDS | {FailureKind.MALFORMED_RESPONSE}


class ModelError(ProcurementAIError):
    """Base class for failures calling or reading the language model."""

    default_kind = FailureKind.CLIENT_ERROR

    def __init__(
        self,
        message: str,
        kind: FailureKind | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.kind = kind or self.default_kind

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    def with_attempts(self, attempts: int) -> 'ModelError':
        """Return a copy of this error annotated with the number of attempts made."""
        return type(self)(
            f"{self.message} (failed after {attempts} attempts)",
            kind=self.kind,
            context={**self.context, 'attempts': attempts},
        )


class ModelUnavailable(ModelError):
    """Transport-level failure: rate limited, server error, client error or network."""

    default_kind = FailureKind.SERVER_ERROR


class ModelTimeout(ModelError):
    """The model call did not complete within the request deadline."""

    default_kind = FailureKind.TIMEOUT


class MalformedResponse(ModelError):
    """Model output could not be coerced into a structured value."""

    default_kind = FailureKind.MALFORMED_RESPONSE


# =============================================================================
# Pipeline Errors
# =============================================================================


class PipelineError(ProcurementAIError):
    """Base class for domain-level pipeline failures."""

    pass


class GenerationFailed(PipelineError):
    """RFP synthesis or proposal extraction produced an unusable result."""

    pass


class ComparisonFailed(PipelineError):
    """Proposal comparison produced an unusable result."""

    pass


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_openai_error(exc: Exception, context: dict[str, Any] | None = None) -> ModelError:
    """
    Wrap an OpenAI SDK exception in our typed error hierarchy.

    Classification uses the exception type and HTTP status code only.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        Typed ModelError subclass carrying its FailureKind
    """
    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    if isinstance(exc, openai.APITimeoutError):
        return ModelTimeout(f"OpenAI request timed out: {exc}", context=ctx)
    if isinstance(exc, openai.APIConnectionError):
        return ModelUnavailable(
            f"OpenAI connection failed: {exc}",
            kind=FailureKind.NETWORK_ERROR,
            context=ctx,
        )
    if isinstance(exc, openai.APIStatusError):
        status = exc.status_code
        ctx['status_code'] = status
        if status == 429:
            return ModelUnavailable(
                f"OpenAI rate limit exceeded: {exc}",
                kind=FailureKind.RATE_LIMITED,
                context=ctx,
            )
        if status >= 500:
            return ModelUnavailable(
                f"OpenAI server error ({status}): {exc}",
                kind=FailureKind.SERVER_ERROR,
                context=ctx,
            )
        return ModelUnavailable(
            f"OpenAI request rejected ({status}): {exc}",
            kind=FailureKind.CLIENT_ERROR,
            context=ctx,
        )
    return ModelUnavailable(
        f"OpenAI API error: {exc}",
        kind=FailureKind.CLIENT_ERROR,
        context=ctx,
    )
