"""Register and unregister packages in the desktop environment.

The manager is the entry point for callers: it drives an :class:`Integrator`
for each registration, rolls back partial deployments and removes every
file a package owns on unregistration.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Self

from appimage_integration.config import Settings
from appimage_integration.constants import (
    APPLICATIONS_DIR_NAME,
    DESKTOP_ENTRY_GROUP,
    ICONS_DIR_NAME,
    KEY_APPIMAGE_INTEGRATE,
    KEY_TERMINAL,
    MIME_DIR_NAME,
    VENDOR_PREFIX,
)
from appimage_integration.desktop_entry import parse_bool
from appimage_integration.exceptions import (
    InvalidParameterError,
    NotSupportedError,
)
from appimage_integration.integration.integrator import (
    Integrator,
    load_desktop_entry,
)
from appimage_integration.integration.thumbnailer import Thumbnailer
from appimage_integration.logger import get_logger
from appimage_integration.payload import Package, ResourcesExtractor
from appimage_integration.utils import hash_path

# Deployment directories scanned for files owned by a package
OWNED_DIRS = (APPLICATIONS_DIR_NAME, ICONS_DIR_NAME, MIME_DIR_NAME)


class IntegrationManager:
    """Manage package integration below one XDG data home."""

    def __init__(
        self,
        xdg_data_home: str | os.PathLike[str],
        thumbnailer: Thumbnailer | None = None,
        vendor_prefix: str = VENDOR_PREFIX,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            xdg_data_home: Existing data home receiving deployed files
            thumbnailer: Optional thumbnailer kept in sync on unregister
            vendor_prefix: Namespace used in every deployed file name
            logger: Logger receiving progress messages

        Raises:
            InvalidParameterError: If ``xdg_data_home`` is empty or is not an
                existing directory

        """
        if not os.fspath(xdg_data_home):
            msg = "Invalid XDG_DATA_HOME: empty path"
            raise InvalidParameterError(msg)

        data_home = Path(xdg_data_home)
        if not data_home.is_dir():
            msg = "Invalid XDG_DATA_HOME: not an existing directory"
            raise InvalidParameterError(msg, target=str(data_home))

        self.xdg_data_home = data_home
        self.thumbnailer = thumbnailer
        self.vendor_prefix = vendor_prefix
        self.logger = logger or get_logger(__name__)

    @classmethod
    def from_settings(
        cls, settings: Settings, logger: logging.Logger | None = None
    ) -> Self:
        """Create a manager from loaded settings.

        The data home is created when missing; a thumbnailer is attached
        when thumbnails are enabled.
        """
        data_home = settings["directory"]["data_home"]
        data_home.mkdir(parents=True, exist_ok=True)

        thumbnailer = None
        if settings["thumbnails"]["enabled"]:
            thumbnailer = Thumbnailer(
                settings["directory"]["cache_home"], logger=logger
            )

        return cls(
            data_home,
            thumbnailer=thumbnailer,
            vendor_prefix=settings["vendor_prefix"],
            logger=logger,
        )

    def _owner_prefix(self, path: str | os.PathLike[str]) -> str:
        return f"{self.vendor_prefix}_{hash_path(path)}"

    def _is_owned(self, file_name: str, owner_prefix: str) -> bool:
        if not file_name.startswith(owner_prefix):
            return False
        return file_name[len(owner_prefix) : len(owner_prefix) + 1] in ("-", "_")

    def register(self, package: Package) -> None:
        """Integrate ``package``; undo partial work when it fails.

        Files deployed by an earlier registration of the same path are
        replaced, so a package whose version changed leaves no stale
        desktop entry behind.

        Raises:
            IntegrationError: Any integration failure, after rollback
            OSError: If writing a deployed file fails, after rollback

        """
        self.logger.info("Registering %s", package.get_path())
        try:
            self._remove_owned_files(package.get_path())
            integrator = Integrator(
                package,
                self.xdg_data_home,
                vendor_prefix=self.vendor_prefix,
                logger=self.logger,
            )
            integrator.integrate()
        except Exception as e:
            try:
                self.unregister(package.get_path())
            except Exception as cleanup_error:
                self.logger.exception(
                    "Rollback of %s failed", package.get_path()
                )
                e.add_note(f"Rollback failed: {cleanup_error}")
            raise

    def unregister(self, path: str | os.PathLike[str]) -> list[Path]:
        """Remove every deployed file owned by the package at ``path``.

        Never registered packages are a no-op.

        Returns:
            Removed files

        Raises:
            OSError: If an owned file cannot be removed

        """
        removed = self._remove_owned_files(path)

        if self.thumbnailer is not None:
            self.thumbnailer.remove(path)

        self.logger.info("Unregistered %s (%d files)", path, len(removed))
        return removed

    def _remove_owned_files(self, path: str | os.PathLike[str]) -> list[Path]:
        owner_prefix = self._owner_prefix(path)
        removed = []

        for dir_name in OWNED_DIRS:
            base_dir = self.xdg_data_home / dir_name
            if not base_dir.is_dir():
                continue
            for root, _dirs, files in os.walk(base_dir):
                for file_name in files:
                    if not self._is_owned(file_name, owner_prefix):
                        continue
                    file_path = Path(root) / file_name
                    if file_path.is_symlink() or not file_path.is_file():
                        continue
                    file_path.unlink()
                    removed.append(file_path)
                    self.logger.debug("Removed %s", file_path)
        return removed

    def is_registered(self, path: str | os.PathLike[str]) -> bool:
        """Whether a desktop entry owned by the package at ``path`` exists."""
        applications_dir = self.xdg_data_home / APPLICATIONS_DIR_NAME
        if not applications_dir.is_dir():
            return False

        owner_prefix = self._owner_prefix(path)
        return any(
            self._is_owned(child.name, owner_prefix) and child.is_file()
            for child in applications_dir.iterdir()
        )

    def should_register(self, package: Package) -> bool:
        """Whether ``package`` asks to be integrated.

        False when its entry sets ``X-AppImage-Integrate=false`` or
        ``Terminal=true``.

        Raises:
            NotFoundError: If the payload has no desktop entry

        """
        extractor = ResourcesExtractor(package, logger=self.logger)
        entry = load_desktop_entry(extractor, package)

        integrate = entry.get(f"{DESKTOP_ENTRY_GROUP}/{KEY_APPIMAGE_INTEGRATE}")
        terminal = entry.get(f"{DESKTOP_ENTRY_GROUP}/{KEY_TERMINAL}")
        if not parse_bool(integrate, default=True):
            return False
        return not parse_bool(terminal, default=False)

    def _require_thumbnailer(self) -> Thumbnailer:
        if self.thumbnailer is None:
            msg = "Thumbnail generation is disabled"
            raise NotSupportedError(msg)
        return self.thumbnailer

    def generate_thumbnails(self, package: Package) -> list[Path]:
        """Generate the thumbnails of ``package``.

        Raises:
            NotSupportedError: If no thumbnailer is configured

        """
        return self._require_thumbnailer().generate(package)

    def remove_thumbnails(self, path: str | os.PathLike[str]) -> None:
        """Remove the thumbnails of the package at ``path``.

        Raises:
            NotSupportedError: If no thumbnailer is configured

        """
        self._require_thumbnailer().remove(path)
