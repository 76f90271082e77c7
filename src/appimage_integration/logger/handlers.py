"""Handler creation and management for logging system.

Handlers are attached to a QueueListener thread so console and file I/O
happen off the calling thread.
"""

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from appimage_integration.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROOT_NAME,
    LOG_ROTATION_THRESHOLD_BYTES,
)
from appimage_integration.logger.formatters import HybridConsoleFormatter
from appimage_integration.logger.state import _LoggerState


class ConfigurationError(Exception):
    """Error in logging configuration."""


def _create_console_handler(console_level: str) -> logging.StreamHandler:
    """Create console handler with hybrid formatting.

    Args:
        console_level: Log level for console (e.g., "DEBUG", "WARNING")

    Returns:
        Configured StreamHandler writing to stderr

    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        HybridConsoleFormatter(
            LOG_CONSOLE_FORMAT,
            datefmt=LOG_CONSOLE_DATE_FORMAT,
        )
    )
    console_handler.setLevel(getattr(logging, console_level, logging.WARNING))
    return console_handler


def _create_file_handler(log_file: Path, file_level: str) -> RotatingFileHandler:
    """Create rotating file handler.

    Args:
        log_file: Path to log file
        file_level: Log level for file (e.g., "DEBUG", "INFO")

    Returns:
        Configured RotatingFileHandler

    Raises:
        ConfigurationError: If the log file cannot be opened

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"Failed to setup file logging: {e}"
        raise ConfigurationError(msg) from e

    file_handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    file_handler.setLevel(getattr(logging, file_level, logging.INFO))
    return file_handler


def stop_listener(state: _LoggerState) -> None:
    """Stop the running QueueListener and close its handlers."""
    if state.queue_listener is None:
        return
    state.queue_listener.stop()
    for handler in state.queue_listener.handlers:
        handler.close()
    state.queue_listener = None
    state.log_queue = None


def setup_root_logger(
    state: _LoggerState,
    console_level: str,
    file_level: str,
    log_file: Path | None,
) -> None:
    """Initialize root logger with handlers via QueueListener.

    Calling it again replaces the previous handlers, which is how the CLI
    upgrades the console-only bootstrap configuration to file logging.

    Args:
        state: Logger state object (from logger.state module)
        console_level: Console log level (e.g., "INFO", "WARNING")
        file_level: File log level (e.g., "DEBUG", "INFO")
        log_file: Path to log file, or None to disable file logging

    Raises:
        ConfigurationError: If handler setup fails

    """
    root_logger = logging.getLogger(LOG_ROOT_NAME)
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handlers
    root_logger.propagate = False

    stop_listener(state)
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = [_create_console_handler(console_level)]
    if log_file is not None:
        handlers.append(_create_file_handler(log_file, file_level))

    state.log_queue = queue.Queue(-1)
    state.queue_listener = QueueListener(
        state.log_queue,
        *handlers,
        respect_handler_level=True,
    )
    state.queue_listener.start()

    root_logger.addHandler(QueueHandler(state.log_queue))
    state.root_initialized = True
