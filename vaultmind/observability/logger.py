"""
Logger configuration.

One stdout handler on the root logger; level taken from Settings.log_level
(or DEBUG when Settings.debug is set) unless given explicitly.

Dependencies: logging (stdlib), vaultmind.configs
System role: Centralized logging configuration
"""

import logging
import sys
from typing import TextIO

NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "faiss", "google_genai", "aiosqlite")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        from vaultmind.configs import get_settings

        level = get_settings().effective_log_level
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int | None = None, stream: TextIO | None = None) -> None:
    """
    Install the application log handler on the root logger.

    Safe to call more than once: previous root handlers are replaced.

    Args:
        level: Log level name or number (Settings.log_level if None)
        stream: Output stream (sys.stdout if None)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(_resolve_level(level))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
