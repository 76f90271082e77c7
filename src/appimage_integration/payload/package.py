"""Package protocol and the directory-backed payload.

A package is anything exposing its own path and an enumeration of its
payload entries. ``AppDir`` wraps an unpacked application directory;
``AppImage`` (see ``payload.appimage``) wraps the single-file format and
serves its payload through ``DirectoryPayload`` once unpacked.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from functools import partial
from pathlib import Path
from typing import Protocol, runtime_checkable

from appimage_integration.exceptions import InvalidParameterError
from appimage_integration.payload.types import PayloadEntry, PayloadEntryType


@runtime_checkable
class Package(Protocol):
    """Package handle consumed by the integration components."""

    def get_path(self) -> Path:
        """Return the package file (or directory) path."""
        ...

    def files(self) -> Iterator[PayloadEntry]:
        """Enumerate every payload entry exactly once."""
        ...


class DirectoryPayload:
    """Enumerate a payload tree stored in a local directory.

    Symbolic links are reported as links, never followed, mirroring what
    an archive listing provides. Reading a link entry yields no bytes.
    """

    def __init__(self, root: Path) -> None:
        """Initialize the payload over ``root``."""
        self.root = root

    def entries(self) -> Iterator[PayloadEntry]:
        """Walk the tree top-down in a stable order."""
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames.sort()
            current = Path(dirpath)
            for name in sorted([*dirnames, *filenames]):
                yield self._entry(current / name)

    def _entry(self, full_path: Path) -> PayloadEntry:
        relative = full_path.relative_to(self.root).as_posix()
        entry_type = PayloadEntryType.from_mode(full_path.lstat().st_mode)

        if entry_type is PayloadEntryType.SYMLINK:
            return PayloadEntry(
                path=relative,
                type=entry_type,
                link_target=os.readlink(full_path),
            )
        if entry_type is PayloadEntryType.FILE:
            return PayloadEntry(
                path=relative,
                type=entry_type,
                opener=partial(full_path.open, "rb"),
            )
        return PayloadEntry(path=relative, type=entry_type)


class AppDir:
    """Package backed by an unpacked application directory."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        """Open an AppDir.

        Args:
            path: Directory holding the payload tree

        Raises:
            InvalidParameterError: If ``path`` is not a directory

        """
        self._path = Path(path)
        if not self._path.is_dir():
            msg = "AppDir must be an existing directory"
            raise InvalidParameterError(msg, target=str(self._path))

    def get_path(self) -> Path:
        """Return the AppDir path."""
        return self._path

    def files(self) -> Iterator[PayloadEntry]:
        """Enumerate the directory tree."""
        return DirectoryPayload(self._path).entries()

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"AppDir({str(self._path)!r})"
