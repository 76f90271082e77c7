"""In-memory model of a FreeDesktop desktop entry file.

A desktop entry is a set of ``[Group]`` blocks holding ``key=value`` lines.
Keys are addressed with composite ``"Group/Key"`` paths, e.g.
``"Desktop Entry/Exec"`` or ``"Desktop Action new-window/Name[de]"``.

Values are stored raw apart from trimming surrounding whitespace. Escape
sequences such as ``\\s``, ``\\n`` and ``\\;`` are kept undecoded, so a
rewritten file carries them unchanged.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator

_COMMENT_PREFIX = "#"
_KEY_SEPARATOR = "="
_PATH_SEPARATOR = "/"

_TRUE_VALUES = frozenset({"true"})
_FALSE_VALUES = frozenset({"false"})


def split_key_path(key_path: str) -> tuple[str, str]:
    """Split ``"Group/Key"`` on the last separator.

    Group names may contain ``/`` but keys never do. A path without
    separator addresses the group only; the key is empty.
    """
    group, separator, key = key_path.rpartition(_PATH_SEPARATOR)
    if not separator:
        return key_path, ""
    return group, key


def parse_bool(value: str, default: bool) -> bool:
    """Interpret a desktop entry boolean.

    Args:
        value: Raw value such as ``"true"`` or ``"false"``
        default: Result for empty or unrecognised values

    Returns:
        Parsed boolean

    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


class DesktopEntry:
    """Group/key/value model of a desktop entry.

    Lookup is lenient: reading a missing group or key yields ``""``.
    Use :meth:`exists` to tell an absent key from an empty one.
    """

    def __init__(self) -> None:
        """Create an empty desktop entry."""
        self._groups: dict[str, dict[str, str]] = {}

    @classmethod
    def parse(cls, text: str) -> DesktopEntry:
        """Parse desktop entry text.

        Parsing never fails. Blank lines and ``#`` comments are skipped,
        lines without ``=`` are ignored, and ``key=value`` lines seen
        before any ``[Group]`` header are attached to the implicit group
        with an empty name.

        Args:
            text: Desktop entry file contents

        Returns:
            Parsed entry

        """
        entry = cls()
        current_group = ""

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line or line.startswith(_COMMENT_PREFIX):
                continue

            if line.startswith("[") and line.endswith("]"):
                current_group = line[1:-1]
                entry._groups.setdefault(current_group, {})
                continue

            key, separator, value = line.partition(_KEY_SEPARATOR)
            if not separator:
                continue
            group_keys = entry._groups.setdefault(current_group, {})
            group_keys[key.strip()] = value.strip()

        return entry

    def exists(self, key_path: str) -> bool:
        """Check whether ``key_path`` is defined."""
        group, key = split_key_path(key_path)
        return key in self._groups.get(group, {})

    def get(self, key_path: str) -> str:
        """Return the value at ``key_path`` or ``""`` when undefined."""
        group, key = split_key_path(key_path)
        return self._groups.get(group, {}).get(key, "")

    def set(self, key_path: str, value: str) -> None:
        """Set ``key_path`` to ``value``, creating the group on demand."""
        group, key = split_key_path(key_path)
        self._groups.setdefault(group, {})[key] = value

    def remove(self, key_path: str) -> None:
        """Remove ``key_path`` if defined; empty groups are kept."""
        group, key = split_key_path(key_path)
        self._groups.get(group, {}).pop(key, None)

    def groups(self) -> list[str]:
        """Return the group names in insertion order."""
        return list(self._groups)

    def paths(self) -> list[str]:
        """Return every composite ``"Group/Key"`` path currently defined."""
        return [
            f"{group}{_PATH_SEPARATOR}{key}"
            for group, keys in self._groups.items()
            for key in keys
        ]

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate ``(key_path, value)`` pairs."""
        for group, keys in self._groups.items():
            for key, value in keys.items():
                yield f"{group}{_PATH_SEPARATOR}{key}", value

    def copy(self) -> DesktopEntry:
        """Return an independent deep copy."""
        clone = DesktopEntry()
        clone._groups = copy.deepcopy(self._groups)
        return clone

    def to_text(self) -> str:
        """Serialize the entry.

        Each named group is emitted as a ``[Group]`` header followed by its
        ``key=value`` lines and a blank line. The implicit unnamed group is
        written first, without a header, so parsing the output reattaches
        its keys to the same group.
        """
        lines: list[str] = []

        for key, value in self._groups.get("", {}).items():
            lines.append(f"{key}{_KEY_SEPARATOR}{value}")
        if lines:
            lines.append("")

        for group, keys in self._groups.items():
            if not group:
                continue
            lines.append(f"[{group}]")
            lines.extend(
                f"{key}{_KEY_SEPARATOR}{value}" for key, value in keys.items()
            )
            lines.append("")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the serialized entry."""
        return self.to_text()

    def __eq__(self, other: object) -> bool:
        """Compare group/key/value contents, ignoring order."""
        if not isinstance(other, DesktopEntry):
            return NotImplemented
        return self._groups == other._groups

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"DesktopEntry(groups={self.groups()!r})"
