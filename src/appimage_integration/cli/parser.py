"""CLI argument parser for appimage-integration.

Handles parsing of command-line arguments and provides a clean
interface for defining CLI commands and their options.
"""

import argparse
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path


class CLIParser:
    """Command-line argument parser for appimage-integration."""

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse, defaults to ``sys.argv[1:]``

        Returns:
            Namespace: Parsed arguments namespace.

        """
        parser = self._create_main_parser()
        self._add_global_options(parser)
        self._add_subcommands(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        return argparse.ArgumentParser(
            prog="appimage-integration",
            description="Integrate AppImages into the desktop environment",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Add launcher and icons for one or more AppImages
  %(prog)s register ~/Applications/Obsidian.AppImage

  # Remove everything deployed for an AppImage
  %(prog)s unregister ~/Applications/Obsidian.AppImage

  # Check whether AppImages are integrated
  %(prog)s status ~/Applications/*.AppImage

  # Regenerate file manager thumbnails
  %(prog)s thumbnail ~/Applications/Obsidian.AppImage
            """,
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        """Add options shared by every subcommand.

        Args:
            parser (argparse.ArgumentParser): The main parser to add
                options to.

        """
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show appimage-integration version and exit",
        )
        parser.add_argument(
            "--data-home",
            type=Path,
            help="Override the XDG data home receiving desktop files",
        )
        parser.add_argument(
            "--cache-home",
            type=Path,
            help="Override the XDG cache home receiving thumbnails",
        )
        parser.add_argument(
            "--no-thumbnails",
            action="store_true",
            help="Do not create or remove thumbnails",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug output on the console",
        )

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        """Add all subcommands to the parser."""
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )

        for name, help_text in (
            ("register", "Integrate AppImages into the desktop"),
            ("unregister", "Remove the desktop integration of AppImages"),
            ("status", "Show whether AppImages are integrated"),
            ("thumbnail", "Generate thumbnails for AppImages"),
        ):
            command_parser = subparsers.add_parser(name, help=help_text)
            command_parser.add_argument(
                "paths",
                nargs="+",
                type=Path,
                metavar="PATH",
                help="AppImage files or AppDir directories",
            )
