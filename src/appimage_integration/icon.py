"""Icon decoding, resizing and saving.

Raster formats are handled with Pillow. SVG icons are recognised by their
content and passed through untouched: they can be deployed as-is but not
rasterized, so resizing one or saving it as PNG raises ``IconError``.
"""

from __future__ import annotations

import io
import os
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from appimage_integration.exceptions import IconError

SVG_FORMAT = "svg"
PNG_FORMAT = "png"

# How far into the data an <svg> root element is searched for
_SVG_SNIFF_BYTES = 4096


def _looks_like_svg(data: bytes) -> bool:
    head = data[:_SVG_SNIFF_BYTES].lstrip()
    if head.startswith(b"\xef\xbb\xbf"):
        head = head[3:].lstrip()
    if not head.startswith((b"<?xml", b"<svg", b"<!DOCTYPE svg", b"<!--")):
        return False
    return b"<svg" in head


class IconHandle:
    """Decoded icon image."""

    def __init__(
        self, data: bytes, icon_format: str, image: Image.Image | None = None
    ) -> None:
        """Wrap already decoded icon data; use :meth:`from_data` instead."""
        self._data = data
        self._format = icon_format
        self._image = image
        self._resized = False

    @classmethod
    def from_data(cls, data: bytes) -> IconHandle:
        """Decode icon bytes.

        Args:
            data: Raw icon file contents

        Returns:
            Decoded icon

        Raises:
            IconError: If the data is not a recognised image format

        """
        if not data:
            msg = "Empty icon data"
            raise IconError(msg)

        if _looks_like_svg(data):
            return cls(data, SVG_FORMAT)

        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
            msg = f"Unrecognized icon format: {e}"
            raise IconError(msg) from e

        return cls(data, (image.format or "").lower(), image)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> IconHandle:
        """Decode an icon file."""
        return cls.from_data(Path(path).read_bytes())

    def format(self) -> str:
        """Return the lowercase format name (``png``, ``svg``, ...)."""
        return self._format

    def size(self) -> int:
        """Return the edge length in pixels; 0 for vector icons."""
        if self._image is None:
            return 0
        return max(self._image.size)

    def set_size(self, size: int) -> None:
        """Resize the icon to ``size`` x ``size`` pixels.

        Raises:
            IconError: For vector icons or non-positive sizes

        """
        if self._image is None:
            msg = "Vector icons cannot be rasterized"
            raise IconError(msg)
        if size <= 0:
            msg = f"Invalid icon size: {size}"
            raise IconError(msg)

        image = self._image
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA")
        self._image = image.resize((size, size), Image.Resampling.LANCZOS)
        self._resized = True

    def save(
        self, path: str | os.PathLike[str], icon_format: str | None = None
    ) -> None:
        """Write the icon to ``path``.

        Unmodified icons saved in their own format are written byte for
        byte; anything else is re-encoded.

        Args:
            path: Target file
            icon_format: Output format, defaults to the icon's own format

        Raises:
            IconError: If the icon cannot be encoded in ``icon_format``
            OSError: If the target cannot be written

        """
        target = Path(path)
        target_format = (icon_format or self._format).lower()

        if self._image is None or (
            not self._resized and target_format == self._format
        ):
            if target_format != self._format:
                msg = f"Cannot convert {self._format} icon to {target_format}"
                raise IconError(msg)
            target.write_bytes(self._data)
            return

        if target_format == SVG_FORMAT:
            msg = "Raster icons cannot be saved as SVG"
            raise IconError(msg)

        buffer = io.BytesIO()
        try:
            self._image.save(buffer, format=target_format.upper())
        except (KeyError, ValueError, OSError) as e:
            msg = f"Cannot encode icon as {target_format}: {e}"
            raise IconError(msg) from e
        target.write_bytes(buffer.getvalue())
