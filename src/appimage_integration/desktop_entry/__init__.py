"""Desktop entry model, value grammars and editor."""

from appimage_integration.desktop_entry.editor import DesktopEntryEditor
from appimage_integration.desktop_entry.entry import (
    DesktopEntry,
    parse_bool,
    split_key_path,
)
from appimage_integration.desktop_entry.values import ExecValue, StringsValue

__all__ = [
    "DesktopEntry",
    "DesktopEntryEditor",
    "ExecValue",
    "StringsValue",
    "parse_bool",
    "split_key_path",
]
