"""Shared helpers for appimage-integration."""

from appimage_integration.utils.hashing import canonical_path, hash_path
from appimage_integration.utils.sanitizer import sanitize_for_path

__all__ = ["canonical_path", "hash_path", "sanitize_for_path"]
