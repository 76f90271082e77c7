"""Console formatters.

INFO lines are progress messages for the user and are printed bare; every
other level gets a timestamp, the logger name and a colored level name.
"""

import logging

from appimage_integration.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter coloring the level name with ANSI escape codes."""

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` with a colored level name.

        The record is shared with the file handler, so its level name is
        restored once formatted.
        """
        color = LOG_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{LOG_COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class HybridConsoleFormatter(ColoredConsoleFormatter):
    """Bare messages for INFO, colored structured lines for other levels.

    Example Output:
        INFO:     "Registered MyApp.AppImage"
        WARNING:  "12:30:45 - appimage_integration - WARNING - No icons found"
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` according to its level."""
        if record.levelno == logging.INFO:
            return record.getMessage()
        return super().format(record)
