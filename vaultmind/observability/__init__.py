"""
Observability module.

Provides logging configuration and safe structured-logging helpers.
"""

from vaultmind.observability.log_utils import (
    describe_messages,
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from vaultmind.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "describe_messages",
    "log_with_context",
    "log_exception_with_context",
    "safe_log_value",
]
