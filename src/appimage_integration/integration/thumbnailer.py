"""Generate freedesktop thumbnails for packages.

Thumbnails are written to ``{cache}/thumbnails/normal/{hash}.png`` (128px)
and ``{cache}/thumbnails/large/{hash}.png`` (256px), where ``hash`` is the
path hash: the MD5 of the package's canonical ``file://`` URI.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from appimage_integration.constants import (
    DESKTOP_ENTRY_GROUP,
    KEY_ICON,
    LARGE_THUMBNAIL_SIZE,
    LARGE_THUMBNAILS_DIR,
    NORMAL_THUMBNAIL_SIZE,
    NORMAL_THUMBNAILS_DIR,
    THUMBNAIL_FILE_EXTENSION,
)
from appimage_integration.exceptions import (
    IconError,
    InvalidParameterError,
    NotFoundError,
)
from appimage_integration.icon import PNG_FORMAT, IconHandle
from appimage_integration.integration.integrator import load_desktop_entry
from appimage_integration.logger import get_logger
from appimage_integration.payload import Package, ResourcesExtractor
from appimage_integration.utils import hash_path


class Thumbnailer:
    """Create and remove the thumbnails of packages."""

    def __init__(
        self,
        xdg_cache_home: str | os.PathLike[str],
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the thumbnailer.

        Args:
            xdg_cache_home: Cache home holding the thumbnails directories
            logger: Logger receiving progress messages

        Raises:
            InvalidParameterError: If ``xdg_cache_home`` is empty

        """
        if not os.fspath(xdg_cache_home):
            msg = "Invalid XDG_CACHE_HOME: empty path"
            raise InvalidParameterError(msg)

        self.xdg_cache_home = Path(xdg_cache_home)
        self.logger = logger or get_logger(__name__)

    def normal_thumbnail_path(self, path: str | os.PathLike[str]) -> Path:
        """Return the 128px thumbnail location for the package at ``path``."""
        file_name = hash_path(path) + THUMBNAIL_FILE_EXTENSION
        return self.xdg_cache_home / NORMAL_THUMBNAILS_DIR / file_name

    def large_thumbnail_path(self, path: str | os.PathLike[str]) -> Path:
        """Return the 256px thumbnail location for the package at ``path``."""
        file_name = hash_path(path) + THUMBNAIL_FILE_EXTENSION
        return self.xdg_cache_home / LARGE_THUMBNAILS_DIR / file_name

    def generate(self, package: Package) -> list[Path]:
        """Write the normal and large thumbnails of ``package``.

        Each size is taken from the payload icon theme entry whose path
        contains ``128x128`` or ``256x256``; a missing size is skipped.

        Args:
            package: Package to thumbnail

        Returns:
            Paths of the written thumbnails

        Raises:
            NotFoundError: If the desktop entry or its Icon key is missing
            OSError: If a thumbnail cannot be written

        """
        extractor = ResourcesExtractor(package, logger=self.logger)
        entry = load_desktop_entry(extractor, package)

        icon_name = entry.get(f"{DESKTOP_ENTRY_GROUP}/{KEY_ICON}")
        if not icon_name:
            msg = "Missing Icon key in the desktop entry"
            raise NotFoundError(msg, target=str(package.get_path()))

        icon_paths = extractor.get_icon_file_paths(icon_name)
        wanted = {
            self.normal_thumbnail_path(package.get_path()): NORMAL_THUMBNAIL_SIZE,
            self.large_thumbnail_path(package.get_path()): LARGE_THUMBNAIL_SIZE,
        }

        sources: dict[Path, str] = {}
        for target, size in wanted.items():
            marker = f"{size}x{size}"
            source = next((p for p in icon_paths if marker in p), None)
            if source is None:
                self.logger.debug("No %s icon for %s", marker, package.get_path())
                continue
            sources[target] = source

        if not sources:
            self.logger.warning("No thumbnail icons found for %s", package.get_path())
            return []

        icons = extractor.extract_many(set(sources.values()))
        written = []
        for target, source in sources.items():
            self._write_thumbnail(icons[source], target, wanted[target])
            written.append(target)
        return written

    def _write_thumbnail(self, data: bytes, target: Path, size: int) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            icon = IconHandle.from_data(data)
            icon.set_size(size)
            icon.save(target, PNG_FORMAT)
        except IconError as e:
            self.logger.warning("Unable to resize thumbnail %s: %s", target, e)
            target.write_bytes(data)
        self.logger.debug("Wrote thumbnail %s", target)

    def remove(self, path: str | os.PathLike[str]) -> None:
        """Delete the thumbnails of the package at ``path``, if present."""
        for thumbnail in (
            self.normal_thumbnail_path(path),
            self.large_thumbnail_path(path),
        ):
            thumbnail.unlink(missing_ok=True)
            self.logger.debug("Removed thumbnail %s", thumbnail)
