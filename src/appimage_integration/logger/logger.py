"""Main logger module providing public API functions.

- setup_logging(): Configure the root handlers (console, optional file)
- get_logger(): Get a logger in the appimage_integration hierarchy
- flush_all_handlers(): Ensure all pending log records are written
- clear_logger_state(): Clear global logger state for testing
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from appimage_integration.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_ROOT_NAME,
)
from appimage_integration.logger.handlers import setup_root_logger, stop_listener
from appimage_integration.logger.state import get_state


def flush_all_handlers() -> None:
    """Flush all handlers in the QueueListener to ensure writes complete.

    Waits (bounded) for the queue to drain, then flushes each handler.
    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    timeout = 5.0
    start_time = time.time()
    while not state.log_queue.empty():
        if time.time() - start_time > timeout:
            break
        time.sleep(0.01)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        stop_listener(state)


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = LOG_ROOT_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    *,
    force: bool = False,
) -> logging.Logger:
    """Configure logging and return the requested logger.

    The root ``appimage_integration`` logger is initialized exactly once
    unless ``force`` is set. Child loggers propagate to it.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level (default: WARNING)
        file_level: File log level (default: INFO)
        log_file: Log file path; file logging is disabled when None
        force: Replace an existing root configuration

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    Example:
        >>> logger = setup_logging(
        ...     console_level="INFO",
        ...     log_file=Path("/tmp/appimage-integration.log"),
        ...     force=True,
        ... )

    """
    state = get_state()
    with state.lock:
        if force or not state.root_initialized:
            setup_root_logger(
                state,
                console_level or DEFAULT_CONSOLE_LOG_LEVEL,
                file_level or DEFAULT_LOG_LEVEL,
                log_file,
            )

    return logging.getLogger(name)


def get_logger(name: str = LOG_ROOT_NAME) -> logging.Logger:
    """Get or create logger instance.

    This is the recommended way to get a logger in appimage-integration
    modules:

        >>> logger = get_logger(__name__)

    The first call bootstraps a console-only root configuration.

    Args:
        name: Logger name, typically __name__ for module loggers

    Returns:
        Configured logger instance

    """
    return setup_logging(name=name)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the QueueListener, removes all handlers from appimage_integration
    loggers and resets the initialization flag.

    Warning:
        Intended for tests only.

    """
    state = get_state()
    with state.lock:
        flush_all_handlers()
        stop_listener(state)
        state.root_initialized = False

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(LOG_ROOT_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
