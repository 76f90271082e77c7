"""Desktop integration of packages."""

from appimage_integration.integration.integrator import (
    Integrator,
    load_desktop_entry,
)
from appimage_integration.integration.manager import IntegrationManager
from appimage_integration.integration.thumbnailer import Thumbnailer

__all__ = [
    "IntegrationManager",
    "Integrator",
    "Thumbnailer",
    "load_desktop_entry",
]
