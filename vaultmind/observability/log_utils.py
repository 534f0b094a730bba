"""
Logging utilities for pipeline step boundaries.

Renders context values safely (message lists as role sequences, long text
truncated) and appends them to the log line, since the stdout formatter does
not print `extra` fields.

Dependencies: logging (stdlib), langchain_core.messages
System role: Logging helper functions
"""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from langchain_core.messages import BaseMessage

from vaultmind.core.exceptions import ErrorKind, VaultMindException

MAX_VALUE_LENGTH = 200

# Expected outcomes are logged without a traceback
EXPECTED_ERROR_KINDS = frozenset({ErrorKind.INPUT_VALIDATION, ErrorKind.NOT_FOUND})


def describe_messages(messages: Sequence[BaseMessage]) -> str:
    """Render a conversation as its role sequence, e.g. "human>ai>tool>ai"."""
    return ">".join(message.type for message in messages)


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Convert a context value to a short string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, Enum):
        val_str = str(value.value)
    elif isinstance(value, str):
        val_str = value
    elif isinstance(value, BaseMessage):
        val_str = f"{value.type}({len(str(value.content))} chars)"
    elif isinstance(value, Sequence) and value and all(isinstance(v, BaseMessage) for v in value):
        val_str = describe_messages(value)
    elif isinstance(value, (list, tuple, set, frozenset)):
        val_str = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, Mapping):
        val_str = f"dict({len(value)} keys)"
    else:
        val_str = str(value)

    if len(val_str) > max_length:
        return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
    return val_str


def format_context(**context) -> dict[str, str]:
    return {key: safe_log_value(val) for key, val in context.items()}


def _with_suffix(message: str, safe_context: dict[str, str]) -> str:
    if not safe_context:
        return message
    rendered = ", ".join(f"{key}={val}" for key, val in safe_context.items())
    return f"{message} | {rendered}"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message followed by its rendered context.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    safe_context = format_context(**context)
    logger.log(level, _with_suffix(message, safe_context), extra={"context": safe_context})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log a failed pipeline run.

    Validation and not-found errors are logged as warnings without a
    traceback; everything else is logged as an error with exc_info.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = format_context(**context)
    safe_context["error_type"] = type(exc).__name__
    safe_context["error_msg"] = safe_log_value(str(exc))

    line = _with_suffix(message, safe_context)
    extra = {"context": safe_context}
    if isinstance(exc, VaultMindException) and exc.error_kind in EXPECTED_ERROR_KINDS:
        logger.warning(line, extra=extra)
    else:
        logger.error(line, exc_info=exc, extra=extra)
