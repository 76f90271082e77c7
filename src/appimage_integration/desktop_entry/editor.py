"""Rewrite a package's embedded desktop entry for deployment.

The entry shipped inside a payload refers to commands and icons relative to
the payload. Before it is deployed the editor:

- points every ``Exec``/``TryExec`` at the package file itself
- namespaces every ``Icon`` with ``{vendor}_{identifier}_`` so icons of
  unrelated packages never collide in the shared icon theme
- appends the package version to the display names
- records the identifier under ``X-AppImage-Identifier``

Original values are kept under ``X-AppImage-Old-*`` keys, and those keys
make re-editing an already edited entry a no-op for icons and names.
"""

import logging
import os

from appimage_integration.constants import (
    DESKTOP_ACTION_GROUP_PREFIX,
    DESKTOP_ENTRY_GROUP,
    KEY_ACTIONS,
    KEY_APPIMAGE_IDENTIFIER,
    KEY_APPIMAGE_OLD_ICON,
    KEY_APPIMAGE_OLD_NAME,
    KEY_APPIMAGE_VERSION,
    KEY_EXEC,
    KEY_ICON,
    KEY_NAME,
    KEY_TRY_EXEC,
    VENDOR_PREFIX,
)
from appimage_integration.desktop_entry.entry import DesktopEntry, split_key_path
from appimage_integration.desktop_entry.values import ExecValue, StringsValue
from appimage_integration.exceptions import ValidationError
from appimage_integration.logger import get_logger
from appimage_integration.utils.sanitizer import sanitize_for_path


def _key_path(group: str, key: str) -> str:
    return f"{group}/{key}"


def _localized_variant(key: str, base: str) -> str | None:
    """Return the locale suffix of ``key`` if it is ``base`` or ``base[xx]``."""
    if key == base:
        return ""
    if key.startswith(f"{base}[") and key.endswith("]"):
        return key[len(base) :]
    return None


class DesktopEntryEditor:
    """Edit desktop entries extracted from a package payload."""

    def __init__(
        self,
        app_image_path: str | os.PathLike[str],
        identifier: str,
        version: str | None = None,
        vendor_prefix: str = VENDOR_PREFIX,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the editor.

        Args:
            app_image_path: Absolute path of the package file
            identifier: Package identifier (path hash)
            version: Package version; falls back to ``X-AppImage-Version``
                from the entry itself when not given
            vendor_prefix: Namespace prepended to icon names
            logger: Logger receiving edit details

        """
        self.app_image_path = os.fspath(app_image_path)
        self.identifier = identifier
        self.version = version or ""
        self.vendor_prefix = vendor_prefix
        self.logger = logger or get_logger(__name__)

    def edit(self, entry: DesktopEntry) -> None:
        """Edit ``entry`` in place.

        Args:
            entry: Desktop entry to rewrite

        Raises:
            ValidationError: If the entry has no ``Exec`` key or the
                identifier is empty

        """
        exec_path = _key_path(DESKTOP_ENTRY_GROUP, KEY_EXEC)
        if not entry.exists(exec_path):
            msg = f"Missing {exec_path} key"
            raise ValidationError(msg, target=self.app_image_path)

        self._set_exec_paths(entry)
        self._set_icons(entry)
        self._append_version_to_name(entry)

        entry.set(
            _key_path(DESKTOP_ENTRY_GROUP, KEY_APPIMAGE_IDENTIFIER),
            self.identifier,
        )

    def _rewrite_exec(self, entry: DesktopEntry, key_path: str) -> None:
        exec_value = ExecValue.parse(entry.get(key_path))
        exec_value.set_executable(self.app_image_path)
        entry.set(key_path, exec_value.to_string())

    def _set_exec_paths(self, entry: DesktopEntry) -> None:
        """Point Exec, TryExec and every action Exec at the package."""
        self._rewrite_exec(entry, _key_path(DESKTOP_ENTRY_GROUP, KEY_EXEC))
        entry.set(
            _key_path(DESKTOP_ENTRY_GROUP, KEY_TRY_EXEC), self.app_image_path
        )

        actions = StringsValue.parse(
            entry.get(_key_path(DESKTOP_ENTRY_GROUP, KEY_ACTIONS))
        )
        for action in actions:
            action_group = f"{DESKTOP_ACTION_GROUP_PREFIX}{action}"
            self._rewrite_exec(entry, _key_path(action_group, KEY_EXEC))
            self.logger.debug("Rewrote Exec of action %s", action)

    def _set_icons(self, entry: DesktopEntry) -> None:
        """Namespace every Icon key, keeping the original value."""
        if not self.identifier:
            msg = "Missing package identifier"
            raise ValidationError(msg, target=self.app_image_path)

        for key_path in entry.paths():
            group, key = split_key_path(key_path)
            locale = _localized_variant(key, KEY_ICON)
            if locale is None:
                continue

            old_key_path = _key_path(group, f"{KEY_APPIMAGE_OLD_ICON}{locale}")
            if entry.exists(old_key_path):
                continue

            icon_name = entry.get(key_path)
            new_icon = (
                f"{self.vendor_prefix}_{self.identifier}_"
                f"{sanitize_for_path(icon_name)}"
            )
            entry.set(old_key_path, icon_name)
            entry.set(key_path, new_icon)
            self.logger.debug("Icon %s: %s -> %s", key_path, icon_name, new_icon)

    def _append_version_to_name(self, entry: DesktopEntry) -> None:
        """Append ``" ({version})"`` to the primary Name keys."""
        version_path = _key_path(DESKTOP_ENTRY_GROUP, KEY_APPIMAGE_VERSION)
        if self.version:
            entry.set(version_path, self.version)

        version = self.version or entry.get(version_path)
        if not version:
            return

        for key_path in entry.paths():
            group, key = split_key_path(key_path)
            if group != DESKTOP_ENTRY_GROUP:
                continue
            locale = _localized_variant(key, KEY_NAME)
            if locale is None:
                continue

            name = entry.get(key_path)
            if version in name:
                continue

            entry.set(_key_path(group, f"{KEY_APPIMAGE_OLD_NAME}{locale}"), name)
            entry.set(key_path, f"{name} ({version})")
