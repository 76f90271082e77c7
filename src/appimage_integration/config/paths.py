"""Path constants and utilities for appimage-integration configuration.

Base directories follow the XDG Base Directory specification: each
``$XDG_*_HOME`` variable is honoured when set to an absolute path and the
documented default under the home directory is used otherwise.
"""

import os
from pathlib import Path

from appimage_integration.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
    ENV_XDG_CACHE_HOME,
    ENV_XDG_CONFIG_HOME,
    ENV_XDG_DATA_HOME,
)


def _xdg_dir(env_var: str, default: Path) -> Path:
    """Resolve an XDG base directory from the environment.

    Relative values are invalid per the XDG specification and are ignored.
    """
    value = os.environ.get(env_var, "")
    if value and Path(value).is_absolute():
        return Path(value)
    return default


def xdg_data_home() -> Path:
    """Return ``$XDG_DATA_HOME`` (default ``~/.local/share``)."""
    return _xdg_dir(ENV_XDG_DATA_HOME, Path.home() / ".local" / "share")


def xdg_cache_home() -> Path:
    """Return ``$XDG_CACHE_HOME`` (default ``~/.cache``)."""
    return _xdg_dir(ENV_XDG_CACHE_HOME, Path.home() / ".cache")


def xdg_config_home() -> Path:
    """Return ``$XDG_CONFIG_HOME`` (default ``~/.config``)."""
    return _xdg_dir(ENV_XDG_CONFIG_HOME, Path.home() / ".config")


class Paths:
    """Application paths and directory structure."""

    CONFIG_DIR = xdg_config_home() / DEFAULT_CONFIG_SUBDIR
    LOGS_DIR = CONFIG_DIR / "logs"
    SETTINGS_FILE = CONFIG_DIR / CONFIG_FILE_NAME

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand and resolve path with ~ and relative path support.

        Args:
            path_str: Path string to expand (e.g., "~/my-path")

        Returns:
            Expanded and resolved Path object

        """
        return Path(path_str).expanduser().resolve(strict=False)
