"""Centralized constants module for appimage-integration.

This module serves as the single source of truth for all shared constants
across the appimage-integration codebase. Constants are organized by logical
categories and use typing.Final annotations to ensure immutability.

Usage:
    from appimage_integration.constants import VENDOR_PREFIX
"""

from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_FILE_NAME: Final[str] = "settings.conf"

# Application-specific subdirectory under $XDG_CONFIG_HOME
DEFAULT_CONFIG_SUBDIR: Final[str] = "appimage-integration"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_DIRECTORY: Final[str] = "directory"
SECTION_THUMBNAILS: Final[str] = "thumbnails"

KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_VENDOR_PREFIX: Final[str] = "vendor_prefix"
KEY_DATA_HOME: Final[str] = "data_home"
KEY_CACHE_HOME: Final[str] = "cache_home"
KEY_THUMBNAILS_ENABLED: Final[str] = "enabled"

# Environment variables defined by the XDG Base Directory specification
ENV_XDG_DATA_HOME: Final[str] = "XDG_DATA_HOME"
ENV_XDG_CACHE_HOME: Final[str] = "XDG_CACHE_HOME"
ENV_XDG_CONFIG_HOME: Final[str] = "XDG_CONFIG_HOME"

# =============================================================================
# Logging Constants
# =============================================================================

LOG_ROOT_NAME: Final[str] = "appimage_integration"
LOG_FILE_NAME: Final[str] = "appimage-integration.log"
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 10 * 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 5

LOG_CONSOLE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(funcName)s:%(lineno)d] - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# =============================================================================
# Desktop Entry Constants
# =============================================================================

# Namespace used for every deployed file (desktop entries, icons, mime)
VENDOR_PREFIX: Final[str] = "appimagekit"

DESKTOP_ENTRY_GROUP: Final[str] = "Desktop Entry"
DESKTOP_ACTION_GROUP_PREFIX: Final[str] = "Desktop Action "
DESKTOP_FILE_EXTENSION: Final[str] = ".desktop"

KEY_EXEC: Final[str] = "Exec"
KEY_TRY_EXEC: Final[str] = "TryExec"
KEY_ICON: Final[str] = "Icon"
KEY_NAME: Final[str] = "Name"
KEY_ACTIONS: Final[str] = "Actions"
KEY_NO_DISPLAY: Final[str] = "NoDisplay"
KEY_TERMINAL: Final[str] = "Terminal"

# Keys added by this project use the X-AppImage- prefix
KEY_APPIMAGE_INTEGRATE: Final[str] = "X-AppImage-Integrate"
KEY_APPIMAGE_VERSION: Final[str] = "X-AppImage-Version"
KEY_APPIMAGE_IDENTIFIER: Final[str] = "X-AppImage-Identifier"
KEY_APPIMAGE_OLD_ICON: Final[str] = "X-AppImage-Old-Icon"
KEY_APPIMAGE_OLD_NAME: Final[str] = "X-AppImage-Old-Name"

# =============================================================================
# Payload Layout Constants
# =============================================================================

PAYLOAD_DIR_ICON: Final[str] = ".DirIcon"
PAYLOAD_ICONS_DIR: Final[str] = "usr/share/icons"
PAYLOAD_SHARE_DIR: Final[str] = "usr/share/"
PAYLOAD_MIME_PACKAGES_DIR: Final[str] = "usr/share/mime/packages/"

# Maximum number of symbolic links followed while resolving one path
MAX_SYMLINK_HOPS: Final[int] = 32

# =============================================================================
# Deployment Layout Constants
# =============================================================================

APPLICATIONS_DIR_NAME: Final[str] = "applications"
ICONS_DIR_NAME: Final[str] = "icons"
MIME_DIR_NAME: Final[str] = "mime"
HICOLOR_THEME_DIR: Final[str] = "icons/hicolor"
SCALABLE_ICON_SIZE_DIR: Final[str] = "scalable"
DESKTOP_FILE_MODE: Final[int] = 0o755

# =============================================================================
# Thumbnail Constants
# =============================================================================

THUMBNAIL_FILE_EXTENSION: Final[str] = ".png"
NORMAL_THUMBNAILS_DIR: Final[str] = "thumbnails/normal"
LARGE_THUMBNAILS_DIR: Final[str] = "thumbnails/large"
NORMAL_THUMBNAIL_SIZE: Final[int] = 128
LARGE_THUMBNAIL_SIZE: Final[int] = 256

# =============================================================================
# AppImage Format Constants
# =============================================================================

ELF_MAGIC: Final[bytes] = b"\x7fELF"
APPIMAGE_MAGIC_OFFSET: Final[int] = 8
APPIMAGE_TYPE1_MAGIC: Final[bytes] = b"AI\x01"
APPIMAGE_TYPE2_MAGIC: Final[bytes] = b"AI\x02"
ISO9660_SIGNATURE_OFFSET: Final[int] = 32769
ISO9660_SIGNATURE: Final[bytes] = b"CD001"
APPIMAGE_EXTRACT_ARG: Final[str] = "--appimage-extract"
APPIMAGE_EXTRACT_ROOT: Final[str] = "squashfs-root"
