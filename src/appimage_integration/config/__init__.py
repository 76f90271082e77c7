"""Configuration management for appimage-integration."""

from appimage_integration.config.paths import (
    Paths,
    xdg_cache_home,
    xdg_config_home,
    xdg_data_home,
)
from appimage_integration.config.settings import SettingsManager
from appimage_integration.config.types import (
    DirectorySettings,
    Settings,
    ThumbnailSettings,
)

__all__ = [
    "DirectorySettings",
    "Paths",
    "Settings",
    "SettingsManager",
    "ThumbnailSettings",
    "xdg_cache_home",
    "xdg_config_home",
    "xdg_data_home",
]
