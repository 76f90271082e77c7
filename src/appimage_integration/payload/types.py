"""Payload entry types shared by packages and the resources extractor."""

from __future__ import annotations

import io
import stat
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO


class PayloadEntryType(Enum):
    """Kind of an entry inside a package payload."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    CHAR_DEVICE = "char"
    BLOCK_DEVICE = "block"
    FIFO = "fifo"
    SOCKET = "socket"
    UNKNOWN = "unknown"

    @classmethod
    def from_mode(cls, mode: int) -> PayloadEntryType:
        """Map an ``st_mode`` value to an entry type."""
        checks = (
            (stat.S_ISREG, cls.FILE),
            (stat.S_ISDIR, cls.DIRECTORY),
            (stat.S_ISLNK, cls.SYMLINK),
            (stat.S_ISCHR, cls.CHAR_DEVICE),
            (stat.S_ISBLK, cls.BLOCK_DEVICE),
            (stat.S_ISFIFO, cls.FIFO),
            (stat.S_ISSOCK, cls.SOCKET),
        )
        for check, entry_type in checks:
            if check(mode):
                return entry_type
        return cls.UNKNOWN


def _empty_stream() -> BinaryIO:
    return io.BytesIO(b"")


@dataclass(frozen=True)
class PayloadEntry:
    """One entry yielded by a package's payload enumeration.

    Attributes:
        path: Payload-relative POSIX path without leading slash
        type: Entry kind
        link_target: Raw link target for symbolic links, else None
        opener: Callable returning a binary stream of the entry contents.
            Links and directories have no contents of their own.

    """

    path: str
    type: PayloadEntryType
    link_target: str | None = None
    opener: Callable[[], BinaryIO] = field(
        default=_empty_stream, repr=False, compare=False
    )

    def open(self) -> BinaryIO:
        """Open the entry contents for streaming."""
        return self.opener()

    def read(self) -> bytes:
        """Read the entry contents to completion."""
        with self.open() as stream:
            return stream.read()
