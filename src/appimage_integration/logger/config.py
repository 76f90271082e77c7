"""Apply configured log levels and log file location to the root logger."""

import logging
from pathlib import Path

from appimage_integration.config.paths import Paths
from appimage_integration.config.types import Settings
from appimage_integration.constants import LOG_FILE_NAME
from appimage_integration.logger.logger import setup_logging


def configure_from_settings(
    settings: Settings,
    *,
    verbose: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Reconfigure the root logger from loaded settings.

    Args:
        settings: Loaded settings
        verbose: Force DEBUG console output
        log_file: Override log file path (defaults to the config logs dir)

    Returns:
        The root appimage_integration logger

    """
    console_level = "DEBUG" if verbose else settings["console_log_level"]
    return setup_logging(
        console_level=console_level,
        file_level=settings["log_level"],
        log_file=log_file or Paths.LOGS_DIR / LOG_FILE_NAME,
        force=True,
    )
