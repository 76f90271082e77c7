"""Top-level package for appimage-integration.

Registers AppImages in XDG desktop environments: desktop entries, icons
and thumbnails are deployed from the package payload and removed again
on unregistration.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("appimage-integration")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
