"""Logging utilities for appimage-integration.

This package provides structured logging with:
- Colored console output with ANSI color codes
- Optional file rotation using RotatingFileHandler
- Thread-safe QueueHandler/QueueListener delivery
- Hierarchical logger naming (e.g., appimage_integration.integration)

Usage:
    Library components receive a ``logging.Logger`` at construction and
    default to their module logger:

        >>> from appimage_integration.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Deploying %s", path)  # Use %-style formatting

Rules:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Handlers are only attached to the root 'appimage_integration' logger
    4. Never use f-strings in log calls
"""

from appimage_integration.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
)
from appimage_integration.logger.handlers import ConfigurationError
from appimage_integration.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from appimage_integration.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "setup_logging",
]
