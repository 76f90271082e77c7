"""Command-line interface for appimage-integration."""

from .parser import CLIParser
from .runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
