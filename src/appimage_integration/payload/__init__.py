"""Package handles and payload resource extraction."""

from appimage_integration.payload.appimage import AppImage, AppImageFormat
from appimage_integration.payload.package import AppDir, DirectoryPayload, Package
from appimage_integration.payload.resources import ResourcesExtractor
from appimage_integration.payload.types import PayloadEntry, PayloadEntryType

__all__ = [
    "AppDir",
    "AppImage",
    "AppImageFormat",
    "DirectoryPayload",
    "Package",
    "PayloadEntry",
    "PayloadEntryType",
    "ResourcesExtractor",
]
