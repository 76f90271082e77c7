"""AppImage package handle.

Detects the AppImage type from its magic bytes and serves the payload.
Type 2 payloads are unpacked once with the embedded runtime
(``--appimage-extract``) into a private temporary directory, which is then
enumerated like any other directory payload. The temporary directory lives
as long as the handle; use the handle as a context manager or call
:meth:`AppImage.close` to release it early.
"""

from __future__ import annotations

import os
import subprocess
import tempfile
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from types import TracebackType
from typing import Self

from appimage_integration.constants import (
    APPIMAGE_EXTRACT_ARG,
    APPIMAGE_EXTRACT_ROOT,
    APPIMAGE_MAGIC_OFFSET,
    APPIMAGE_TYPE1_MAGIC,
    APPIMAGE_TYPE2_MAGIC,
    ELF_MAGIC,
    ISO9660_SIGNATURE,
    ISO9660_SIGNATURE_OFFSET,
)
from appimage_integration.exceptions import (
    EntryFormatError,
    ExtractionError,
    NotSupportedError,
)
from appimage_integration.logger import get_logger
from appimage_integration.payload.package import DirectoryPayload
from appimage_integration.payload.types import PayloadEntry

logger = get_logger(__name__)


class AppImageFormat(Enum):
    """AppImage container formats."""

    TYPE1 = 1  # ISO9660 payload
    TYPE2 = 2  # SquashFS payload
    INVALID = 0

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> AppImageFormat:
        """Inspect the magic bytes of ``path`` to guess its format.

        Args:
            path: File to inspect

        Returns:
            Detected format, ``INVALID`` when unrecognised

        Raises:
            OSError: If the file cannot be read

        """
        with open(path, "rb") as f:
            header = f.read(ISO9660_SIGNATURE_OFFSET + len(ISO9660_SIGNATURE))

        if not header.startswith(ELF_MAGIC):
            return cls.INVALID

        magic = header[
            APPIMAGE_MAGIC_OFFSET : APPIMAGE_MAGIC_OFFSET + len(APPIMAGE_TYPE2_MAGIC)
        ]
        if magic == APPIMAGE_TYPE1_MAGIC:
            return cls.TYPE1
        if magic == APPIMAGE_TYPE2_MAGIC:
            return cls.TYPE2

        signature = header[
            ISO9660_SIGNATURE_OFFSET : ISO9660_SIGNATURE_OFFSET
            + len(ISO9660_SIGNATURE)
        ]
        if signature == ISO9660_SIGNATURE:
            logger.warning(
                "%s seems to be a Type 1 AppImage without magic bytes", path
            )
            return cls.TYPE1

        return cls.INVALID

    @property
    def is_valid(self) -> bool:
        """Whether this is a known AppImage type."""
        return self is not AppImageFormat.INVALID


class AppImage:
    """Existing AppImage file with read-only access to its payload."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        """Open the AppImage at ``path``.

        Args:
            path: AppImage file path

        Raises:
            EntryFormatError: If the file is not a recognised AppImage
            OSError: If the file cannot be read

        """
        self._path = Path(path)
        self._format = AppImageFormat.from_file(self._path)
        if not self._format.is_valid:
            msg = "Unknown AppImage format"
            raise EntryFormatError(msg, target=str(self._path))
        self._extract_dir: tempfile.TemporaryDirectory[str] | None = None

    def get_path(self) -> Path:
        """Return the AppImage file path."""
        return self._path

    @property
    def format(self) -> AppImageFormat:
        """Return the detected container format."""
        return self._format

    def size(self) -> int:
        """Return the AppImage file size in bytes."""
        return self._path.stat().st_size

    def files(self) -> Iterator[PayloadEntry]:
        """Enumerate the payload entries.

        Raises:
            NotSupportedError: For type 1 payloads
            ExtractionError: If the payload cannot be unpacked

        """
        return DirectoryPayload(self._payload_root()).entries()

    def _payload_root(self) -> Path:
        if self._format is AppImageFormat.TYPE1:
            msg = "Reading type 1 (ISO9660) payloads is not supported"
            raise NotSupportedError(msg, target=str(self._path))

        if self._extract_dir is None:
            extract_dir = tempfile.TemporaryDirectory(
                prefix="appimage-integration-"
            )
            try:
                self._run_extraction(Path(extract_dir.name))
            except BaseException:
                extract_dir.cleanup()
                raise
            self._extract_dir = extract_dir

        return Path(self._extract_dir.name) / APPIMAGE_EXTRACT_ROOT

    def _run_extraction(self, target_dir: Path) -> None:
        """Unpack the payload into ``target_dir`` using the runtime.

        Raises:
            ExtractionError: If the runtime fails or cannot be executed

        """
        logger.debug("Unpacking %s into %s", self._path, target_dir)
        if not os.access(self._path, os.X_OK):
            msg = "AppImage is not executable"
            raise ExtractionError(msg, target=str(self._path))

        try:
            result = subprocess.run(  # noqa: S603
                [str(self._path.resolve()), APPIMAGE_EXTRACT_ARG],
                cwd=target_dir,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            msg = f"Failed to execute AppImage runtime: {e}"
            raise ExtractionError(msg, target=str(self._path)) from e

        if result.returncode != 0:
            stderr_text = result.stderr.decode("utf-8", errors="ignore").strip()
            msg = f"Runtime exited with code {result.returncode}"
            if stderr_text:
                msg += f": {stderr_text}"
            raise ExtractionError(msg, target=str(self._path))

        if not (target_dir / APPIMAGE_EXTRACT_ROOT).is_dir():
            msg = f"No {APPIMAGE_EXTRACT_ROOT} directory after extraction"
            raise ExtractionError(msg, target=str(self._path))

    def close(self) -> None:
        """Remove the unpacked payload, if any."""
        if self._extract_dir is not None:
            self._extract_dir.cleanup()
            self._extract_dir = None

    def __enter__(self) -> Self:
        """Return self for use in a with statement."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Release the unpacked payload."""
        self.close()

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"AppImage({str(self._path)!r}, format={self._format.name})"
