"""Extract resources from a package payload.

Random access by path cannot be trusted to dereference symbolic links for
every container format, so every extraction runs in two phases:

1. classify each requested path against the payload entry index (built once
   per extractor from a full enumeration) and substitute the resolved link
   target as the real read path, while the caller keeps using the path it
   asked for;
2. make exactly one pass over the payload enumeration, copying every
   matched entry to its destination (memory or file).
"""

from __future__ import annotations

import logging
import os
import posixpath
import shutil
from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import BinaryIO

from appimage_integration.constants import (
    DESKTOP_FILE_EXTENSION,
    MAX_SYMLINK_HOPS,
    PAYLOAD_ICONS_DIR,
    PAYLOAD_MIME_PACKAGES_DIR,
)
from appimage_integration.exceptions import EntryFormatError, NotFoundError
from appimage_integration.logger import get_logger
from appimage_integration.payload.package import Package
from appimage_integration.payload.types import PayloadEntry, PayloadEntryType


def normalize_payload_path(path: str) -> str:
    """Normalize a payload path to the form used by the entry index."""
    normalized = posixpath.normpath(path.lstrip("/"))
    return "" if normalized == "." else normalized


class ResourcesExtractor:
    """Locate and extract files from one package's payload.

    The entry index is built lazily on first use and lives as long as the
    extractor; extractors are never shared between packages.
    """

    def __init__(
        self, package: Package, logger: logging.Logger | None = None
    ) -> None:
        """Initialize the extractor.

        Args:
            package: Package whose payload is read
            logger: Logger receiving extraction details

        """
        self.package = package
        self.logger = logger or get_logger(__name__)
        self._entries: dict[str, PayloadEntryType] | None = None
        self._links: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Entry index
    # ------------------------------------------------------------------

    def _index(self) -> dict[str, PayloadEntryType]:
        if self._entries is None:
            entries: dict[str, PayloadEntryType] = {}
            links: dict[str, str] = {}
            for entry in self.package.files():
                path = normalize_payload_path(entry.path)
                entries[path] = entry.type
                if entry.type is PayloadEntryType.SYMLINK and entry.link_target:
                    links[path] = self._link_destination(path, entry.link_target)
            self._entries = entries
            self._links = links
            self.logger.debug(
                "Indexed %d payload entries (%d links) of %s",
                len(entries),
                len(links),
                self.package.get_path(),
            )
        return self._entries

    @staticmethod
    def _link_destination(link_path: str, target: str) -> str:
        """Resolve a raw link target to a payload path.

        Absolute targets are taken relative to the payload root, relative
        targets relative to the directory holding the link.
        """
        if target.startswith("/"):
            return normalize_payload_path(target)
        return normalize_payload_path(
            posixpath.join(posixpath.dirname(link_path), target)
        )

    def entries(self) -> dict[str, PayloadEntryType]:
        """Return a copy of the payload entry index."""
        return dict(self._index())

    def resolve(self, path: str) -> str:
        """Follow symbolic links until a non-link path is reached.

        Args:
            path: Payload path as requested by a caller

        Returns:
            Real read path; unchanged for non-links and for missing paths

        Raises:
            NotFoundError: On link loops or overly long chains

        """
        self._index()
        resolved = normalize_payload_path(path)
        for _ in range(MAX_SYMLINK_HOPS):
            target = self._links.get(resolved)
            if target is None:
                return resolved
            resolved = target
        msg = "Too many levels of symbolic links"
        raise NotFoundError(msg, target=path)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_desktop_entry_path(self) -> str | None:
        """Return the desktop entry at the payload root, if any."""
        for path, entry_type in self._index().items():
            if entry_type is PayloadEntryType.DIRECTORY:
                continue
            if path.endswith(DESKTOP_FILE_EXTENSION) and "/" not in path:
                return path
        return None

    def get_icon_file_paths(self, icon_name: str) -> list[str]:
        """Return icon theme entries whose path contains ``icon_name``."""
        prefix = PAYLOAD_ICONS_DIR + "/"
        return [
            path
            for path, entry_type in self._index().items()
            if entry_type is not PayloadEntryType.DIRECTORY
            and path.startswith(prefix)
            and icon_name in path
        ]

    def get_mime_type_packages_paths(self) -> list[str]:
        """Return the shared-mime-info package files of the payload."""
        paths = []
        for path, entry_type in self._index().items():
            if entry_type is PayloadEntryType.DIRECTORY:
                continue
            if not path.startswith(PAYLOAD_MIME_PACKAGES_DIR):
                continue
            stem, extension = posixpath.splitext(posixpath.basename(path))
            if extension == ".xml" and stem:
                paths.append(path)
        return paths

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def _plan(self, paths: Iterable[str]) -> dict[str, list[str]]:
        """Map each real read path to the caller paths it serves."""
        plan: dict[str, list[str]] = defaultdict(list)
        for path in paths:
            plan[self.resolve(path)].append(path)
        return plan

    def _single_pass(
        self,
        plan: Mapping[str, list[str]],
        sink: Callable[[PayloadEntry, list[str]], None],
    ) -> None:
        """Feed every planned entry to ``sink`` in one enumeration pass.

        Raises:
            NotFoundError: If a planned path is not a regular payload file

        """
        pending = set(plan)
        for entry in self.package.files():
            path = normalize_payload_path(entry.path)
            if path not in pending or entry.type is not PayloadEntryType.FILE:
                continue
            sink(entry, plan[path])
            pending.discard(path)
            if not pending:
                break

        if pending:
            missing = sorted(
                caller for real in pending for caller in plan[real]
            )
            msg = f"Payload entries not found: {', '.join(missing)}"
            raise NotFoundError(msg, target=str(self.package.get_path()))

    def extract_many(self, paths: Iterable[str]) -> dict[str, bytes]:
        """Read several payload files into memory.

        Args:
            paths: Payload paths; links are followed

        Returns:
            Mapping of each requested path to its contents

        Raises:
            NotFoundError: If any path is absent after link resolution

        """
        results: dict[str, bytes] = {}

        def _to_memory(entry: PayloadEntry, callers: list[str]) -> None:
            data = entry.read()
            for caller in callers:
                results[caller] = data

        self._single_pass(self._plan(paths), _to_memory)
        return results

    def extract(self, path: str) -> bytes:
        """Read one payload file into memory.

        Raises:
            NotFoundError: If ``path`` is absent after link resolution

        """
        return self.extract_many([path])[path]

    def extract_text(self, path: str) -> str:
        """Read one payload file as UTF-8 text, dropping a leading BOM.

        Raises:
            NotFoundError: If ``path`` is absent after link resolution
            EntryFormatError: If the contents are not valid UTF-8

        """
        data = self.extract(path)
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            msg = f"Not valid UTF-8 text: {e}"
            raise EntryFormatError(msg, target=path) from e

    def extract_to(
        self, targets: Mapping[str, str | os.PathLike[str]]
    ) -> None:
        """Stream payload files to filesystem paths.

        Parent directories are created as needed and existing targets are
        overwritten.

        Args:
            targets: Mapping of payload path to target file path

        Raises:
            NotFoundError: If any path is absent after link resolution
            OSError: If a target cannot be written

        """
        target_paths = {path: Path(target) for path, target in targets.items()}

        def _to_files(entry: PayloadEntry, callers: list[str]) -> None:
            with entry.open() as source:
                for caller in callers:
                    self._write_stream(source, target_paths[caller])

        self._single_pass(self._plan(target_paths), _to_files)

    def _write_stream(self, source: BinaryIO, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        if source.seekable():
            source.seek(0)
        with target.open("wb") as out:
            shutil.copyfileobj(source, out)
        self.logger.debug("Extracted %s", target)
