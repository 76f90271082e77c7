"""Path hashing used to key deployed artifacts and thumbnails."""

import hashlib
import os
from pathlib import Path

from appimage_integration.exceptions import InvalidParameterError


def canonical_path(path: str | os.PathLike[str]) -> Path:
    """Return the canonical absolute form of ``path``.

    Symbolic links are resolved when the path exists; a missing path is
    still made absolute so removal works after the package was deleted.
    """
    return Path(path).expanduser().resolve(strict=False)


def hash_path(path: str | os.PathLike[str]) -> str:
    """Hash the canonical ``file://`` URI of ``path`` with MD5.

    This is the key mandated by the FreeDesktop Thumbnail Managing
    Standard, and it doubles as the package identifier binding a
    package to its deployed desktop entry, icons and mime packages.

    Args:
        path: Package path, relative or absolute

    Returns:
        32 character lowercase hex digest

    Raises:
        InvalidParameterError: If ``path`` is empty

    """
    if not os.fspath(path):
        msg = "Cannot hash an empty path"
        raise InvalidParameterError(msg)

    uri = canonical_path(path).as_uri()
    return hashlib.md5(uri.encode("utf-8"), usedforsecurity=False).hexdigest()
