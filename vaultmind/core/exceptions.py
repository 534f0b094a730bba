"""
Exception hierarchy for the vault knowledge pipelines.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, and an
ErrorKind that callers use to build flat error results.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from enum import Enum
from typing import Any

RATE_LIMIT_MESSAGE = (
    "Rate limit exceeded for the AI model. Please wait a minute and try again, "
    "or upgrade your API plan."
)

_STATUS_ATTRIBUTES = ("status_code", "code", "http_status", "status")


class ErrorKind(str, Enum):
    """Caller-facing error categories."""

    INPUT_VALIDATION = "input_validation"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_FAILURE = "upstream_failure"
    NON_CONVERGENCE = "non_convergence"


class VaultMindException(Exception):
    """Base exception for all application errors."""

    error_kind: ErrorKind = ErrorKind.UPSTREAM_FAILURE

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(VaultMindException):
    """Raised when input validation fails."""

    error_kind = ErrorKind.INPUT_VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(VaultMindException):
    """Raised when a vault has no sources or no usable content."""

    error_kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str,
        vault_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if vault_id is not None:
            details["vault_id"] = vault_id
        super().__init__(message, details)


class RateLimitedError(VaultMindException):
    """Raised when the language model provider signals quota exhaustion."""

    error_kind = ErrorKind.RATE_LIMITED


class UpstreamFailureError(VaultMindException):
    """Raised for any other gateway or vector index failure."""

    error_kind = ErrorKind.UPSTREAM_FAILURE


class NonConvergenceError(VaultMindException):
    """Raised when the summarizer collapse loop exceeds its iteration bound."""

    error_kind = ErrorKind.NON_CONVERGENCE

    def __init__(
        self,
        iterations: int,
        total_tokens: int,
        token_max: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize non-convergence error.

        Args:
            iterations: Collapse rounds performed
            total_tokens: Token total still present after the last round
            token_max: Configured token ceiling
            details: Additional context
        """
        details = details or {}
        details.update({
            "iterations": iterations,
            "total_tokens": total_tokens,
            "token_max": token_max,
        })
        super().__init__(
            f"Summary did not converge under {token_max} tokens after {iterations} collapse rounds",
            details,
        )


class VectorStoreError(UpstreamFailureError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class DocumentLoadError(VaultMindException):
    """Raised when a single source file cannot be loaded."""

    error_kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str,
        source_ref: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if source_ref:
            details["source_ref"] = source_ref
        super().__init__(message, details)


def is_rate_limit_error(exc: BaseException) -> bool:
    """
    Check whether an arbitrary exception signals an HTTP 429 / rate limit.

    Inspects common status attributes and the error text; provider clients
    do not share a typed rate-limit exception.

    Args:
        exc: Exception raised by a gateway or its client library

    Returns:
        bool: True when the error is a rate-limit condition
    """
    if isinstance(exc, RateLimitedError):
        return True

    for attribute in _STATUS_ATTRIBUTES:
        if getattr(exc, attribute, None) == 429:
            return True

    text = str(exc)
    return "429" in text or "rate limit" in text.lower()


def classify_exception(exc: BaseException) -> VaultMindException:
    """
    Map any exception onto the application taxonomy.

    Args:
        exc: Exception caught at a pipeline boundary

    Returns:
        VaultMindException: Typed exception (input returned unchanged if already typed)
    """
    if isinstance(exc, VaultMindException) and not isinstance(exc, UpstreamFailureError):
        return exc

    if is_rate_limit_error(exc):
        return RateLimitedError(
            RATE_LIMIT_MESSAGE,
            details={"error_type": type(exc).__name__, "error": str(exc)},
        )

    if isinstance(exc, UpstreamFailureError):
        return exc

    return UpstreamFailureError(
        f"{type(exc).__name__}: {exc}",
        details={"error_type": type(exc).__name__},
    )
