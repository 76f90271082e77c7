"""Main CLI entry point for appimage-integration.

This module provides the minimal entry point for the command-line
interface, delegating all functionality to the CLI runner.
"""

import sys

from appimage_integration.cli import CLIRunner
from appimage_integration.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Run the CLI application and exit with its status code."""
    try:
        sys.exit(CLIRunner().run())
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
