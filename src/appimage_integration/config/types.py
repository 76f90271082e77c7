"""Typed configuration structures."""

from pathlib import Path
from typing import TypedDict


class DirectorySettings(TypedDict):
    """Base directories that receive deployed artifacts."""

    data_home: Path
    cache_home: Path


class ThumbnailSettings(TypedDict):
    """Thumbnail generation options."""

    enabled: bool


class Settings(TypedDict):
    """Global application settings."""

    log_level: str
    console_log_level: str
    vendor_prefix: str
    directory: DirectorySettings
    thumbnails: ThumbnailSettings
