"""Integrate one package into an XDG compliant desktop environment.

Deployment layout, relative to the data home:

- ``applications/{vendor}_{id}-{name}.desktop`` (mode 0755)
- ``icons/<theme>/<size>/apps/{vendor}_{id}_{icon}`` mirrored from the
  payload's ``usr/share/icons`` tree, or a single hicolor icon built from
  ``.DirIcon`` when the payload ships no themed icons
- ``mime/...`` reserved for shared-mime-info packages

Every file name carries ``{vendor}_{id}`` so the manager can find exactly
the files owned by one package.
"""

from __future__ import annotations

import logging
import os
import posixpath
from pathlib import Path

from appimage_integration.constants import (
    APPLICATIONS_DIR_NAME,
    DESKTOP_ENTRY_GROUP,
    DESKTOP_FILE_EXTENSION,
    DESKTOP_FILE_MODE,
    HICOLOR_THEME_DIR,
    KEY_APPIMAGE_INTEGRATE,
    KEY_APPIMAGE_VERSION,
    KEY_ICON,
    KEY_NAME,
    KEY_NO_DISPLAY,
    PAYLOAD_DIR_ICON,
    PAYLOAD_SHARE_DIR,
    SCALABLE_ICON_SIZE_DIR,
    VENDOR_PREFIX,
)
from appimage_integration.desktop_entry import (
    DesktopEntry,
    DesktopEntryEditor,
    parse_bool,
)
from appimage_integration.exceptions import (
    IconError,
    IntegrationError,
    InvalidParameterError,
    NotFoundError,
    NotSupportedError,
)
from appimage_integration.icon import PNG_FORMAT, SVG_FORMAT, IconHandle
from appimage_integration.logger import get_logger
from appimage_integration.payload import Package, ResourcesExtractor
from appimage_integration.utils import hash_path, sanitize_for_path


def load_desktop_entry(
    extractor: ResourcesExtractor, package: Package
) -> DesktopEntry:
    """Extract and parse the desktop entry at the payload root.

    Raises:
        NotFoundError: If the payload has no root desktop entry
        EntryFormatError: If the entry is not valid UTF-8 text

    """
    desktop_entry_path = extractor.get_desktop_entry_path()
    if desktop_entry_path is None:
        msg = "Desktop entry not found"
        raise NotFoundError(msg, target=str(package.get_path()))
    return DesktopEntry.parse(extractor.extract_text(desktop_entry_path))


class Integrator:
    """Deploy one package's desktop entry, icons and mime packages."""

    def __init__(
        self,
        package: Package,
        xdg_data_home: str | os.PathLike[str],
        vendor_prefix: str = VENDOR_PREFIX,
        logger: logging.Logger | None = None,
    ) -> None:
        """Create an integrator and load the package's desktop entry.

        Args:
            package: Package to integrate
            xdg_data_home: Data home receiving the deployed files
            vendor_prefix: Namespace used in every deployed file name
            logger: Logger receiving progress messages

        Raises:
            InvalidParameterError: If ``xdg_data_home`` is empty
            NotFoundError: If the payload has no desktop entry
            EntryFormatError: If the desktop entry is not text

        """
        if not os.fspath(xdg_data_home):
            msg = "Invalid XDG_DATA_HOME: empty path"
            raise InvalidParameterError(msg)

        self.package = package
        self.xdg_data_home = Path(xdg_data_home)
        self.vendor_prefix = vendor_prefix
        self.logger = logger or get_logger(__name__)
        self.app_image_id = hash_path(package.get_path())
        self.resources_extractor = ResourcesExtractor(package, logger=self.logger)
        self.desktop_entry = load_desktop_entry(self.resources_extractor, package)

    @property
    def package_path(self) -> Path:
        """Return the absolute package path written into Exec keys."""
        return Path(os.path.abspath(self.package.get_path()))

    def integrate(self) -> None:
        """Deploy the package into the desktop environment.

        Raises:
            NotSupportedError: If the package opted out of integration
            NotFoundError: If the entry lacks Name or Icon
            ValidationError: If the entry lacks Exec
            OSError: If writing a deployed file fails

        """
        self.assert_should_be_integrated()
        self.deploy_desktop_entry()
        self.deploy_icons()
        self.deploy_mime_type_packages()
        self.logger.info("Integrated %s", self.package.get_path())

    def assert_should_be_integrated(self) -> None:
        """Refuse packages that requested not to be integrated.

        Raises:
            NotSupportedError: If ``X-AppImage-Integrate=false`` or
                ``NoDisplay=true``

        """
        integrate = self.desktop_entry.get(
            f"{DESKTOP_ENTRY_GROUP}/{KEY_APPIMAGE_INTEGRATE}"
        )
        no_display = self.desktop_entry.get(
            f"{DESKTOP_ENTRY_GROUP}/{KEY_NO_DISPLAY}"
        )
        if not parse_bool(integrate, default=True) or parse_bool(
            no_display, default=False
        ):
            msg = "The package explicitly requested to not be integrated"
            raise NotSupportedError(msg, target=str(self.package.get_path()))

    # ------------------------------------------------------------------
    # Desktop entry
    # ------------------------------------------------------------------

    def edited_desktop_entry(self) -> DesktopEntry:
        """Return an edited copy of the package's desktop entry."""
        entry = self.desktop_entry.copy()
        version = self.desktop_entry.get(
            f"{DESKTOP_ENTRY_GROUP}/{KEY_APPIMAGE_VERSION}"
        )
        editor = DesktopEntryEditor(
            self.package_path,
            self.app_image_id,
            version=version or None,
            vendor_prefix=self.vendor_prefix,
            logger=self.logger,
        )
        editor.edit(entry)
        return entry

    def build_desktop_file_path(self, entry: DesktopEntry) -> Path:
        """Compute the deploy path from the entry's ``Name``.

        Raises:
            NotFoundError: If the entry has no Name

        """
        name = entry.get(f"{DESKTOP_ENTRY_GROUP}/{KEY_NAME}")
        if not name:
            msg = "Desktop entry does not contain a Name key"
            raise NotFoundError(msg, target=str(self.package.get_path()))

        file_name = (
            f"{self.vendor_prefix}_{self.app_image_id}-"
            f"{sanitize_for_path(name)}{DESKTOP_FILE_EXTENSION}"
        )
        return self.xdg_data_home / APPLICATIONS_DIR_NAME / file_name

    def deploy_desktop_entry(self) -> Path:
        """Write the edited desktop entry with executable permissions.

        Returns:
            Path of the deployed desktop file

        """
        entry = self.edited_desktop_entry()
        deploy_path = self.build_desktop_file_path(entry)

        deploy_path.parent.mkdir(parents=True, exist_ok=True)
        deploy_path.write_text(entry.to_text(), encoding="utf-8")
        deploy_path.chmod(DESKTOP_FILE_MODE)

        self.logger.debug("Deployed desktop entry %s", deploy_path)
        return deploy_path

    # ------------------------------------------------------------------
    # Icons
    # ------------------------------------------------------------------

    def _icon_name(self) -> str:
        icon_name = self.desktop_entry.get(f"{DESKTOP_ENTRY_GROUP}/{KEY_ICON}")
        if not icon_name:
            msg = "Missing Icon key in the desktop entry"
            raise NotFoundError(msg, target=str(self.package.get_path()))
        if "/" in icon_name:
            msg = f"Icon key contains a path: {icon_name}"
            raise InvalidParameterError(msg, target=str(self.package.get_path()))
        return icon_name

    def deploy_icons(self) -> list[Path]:
        """Deploy the themed icons, or the ``.DirIcon`` fallback.

        Returns:
            Deployed icon paths (empty when no icon could be deployed)

        Raises:
            NotFoundError: If the entry has no Icon key
            InvalidParameterError: If the Icon key is a path
            OSError: If writing a themed icon fails

        """
        icon_name = self._icon_name()
        icon_paths = self.resources_extractor.get_icon_file_paths(icon_name)

        if not icon_paths:
            self.logger.warning(
                "No icons found for %s in the payload icon theme", icon_name
            )
            deployed = self._deploy_fallback_icon(icon_name)
            return [deployed] if deployed else []

        targets = {path: self.generate_deploy_path(path) for path in icon_paths}
        self.resources_extractor.extract_to(targets)
        self.logger.debug("Deployed %d icons", len(targets))
        return list(targets.values())

    def _deploy_fallback_icon(self, icon_name: str) -> Path | None:
        """Deploy ``.DirIcon``; failures are logged, never raised."""
        try:
            icon_data = self.resources_extractor.extract(PAYLOAD_DIR_ICON)
            self.logger.warning("Using %s as default app icon", PAYLOAD_DIR_ICON)
            return self.deploy_application_icon(icon_name, icon_data)
        except (IntegrationError, OSError) as e:
            self.logger.error("%s", e)
            self.logger.error("No icon was generated for: %s", self.package.get_path())
            return None

    def deploy_application_icon(self, icon_name: str, icon_data: bytes) -> Path:
        """Write ``icon_data`` as the application icon in the hicolor theme.

        Vector icons go to ``scalable``; raster icons to ``NxN`` using the
        decoded size, converted to PNG when needed.

        Raises:
            IconError: If the data cannot be decoded
            OSError: If the icon cannot be written

        """
        icon = IconHandle.from_data(icon_data)
        sanitized_name = sanitize_for_path(icon_name)

        if icon.format() == SVG_FORMAT:
            size_dir = SCALABLE_ICON_SIZE_DIR
            file_name = f"{sanitized_name}.{SVG_FORMAT}"
        else:
            if icon.size() <= 0:
                msg = "Icon has no usable size"
                raise IconError(msg, target=icon_name)
            size_dir = f"{icon.size()}x{icon.size()}"
            file_name = f"{sanitized_name}.{PNG_FORMAT}"

        target_path = (
            self.xdg_data_home
            / HICOLOR_THEME_DIR
            / size_dir
            / "apps"
            / f"{self.vendor_prefix}_{self.app_image_id}_{file_name}"
        )
        target_path.parent.mkdir(parents=True, exist_ok=True)
        icon.save(target_path, PNG_FORMAT if icon.format() != SVG_FORMAT else None)

        self.logger.debug("Deployed application icon %s", target_path)
        return target_path

    def generate_deploy_path(self, payload_path: str) -> Path:
        """Map a payload ``usr/share/...`` path into the data home.

        The basename is namespaced as ``{vendor}_{id}_{sanitized-basename}``.
        """
        directory, file_name = posixpath.split(payload_path)
        if not file_name:
            msg = f"Invalid payload file path: {payload_path}"
            raise InvalidParameterError(msg)

        relative_dir = directory.removeprefix(PAYLOAD_SHARE_DIR.rstrip("/"))
        relative_dir = relative_dir.lstrip("/")
        new_name = (
            f"{self.vendor_prefix}_{self.app_image_id}_"
            f"{sanitize_for_path(file_name)}"
        )
        return self.xdg_data_home / relative_dir / new_name

    # ------------------------------------------------------------------
    # Mime types
    # ------------------------------------------------------------------

    def deploy_mime_type_packages(self) -> list[Path]:
        """Deploy shared-mime-info packages.

        Extension point: candidates are discovered and logged, nothing is
        deployed yet, and callers must not rely on mime registration.

        Returns:
            Deployed package paths (currently always empty)

        """
        candidates = self.resources_extractor.get_mime_type_packages_paths()
        if candidates:
            self.logger.info(
                "Mime type package deployment is not implemented; skipping %s",
                ", ".join(candidates),
            )
        return []
