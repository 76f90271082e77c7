"""Structured desktop entry values.

- ExecValue: the command line grammar used by ``Exec`` keys
- StringsValue: the ``;`` separated list grammar used by ``Actions``,
  ``Categories``, ``MimeType`` and similar keys
"""

from __future__ import annotations

from collections.abc import Iterator

_QUOTE = '"'
_ESCAPE = "\\"
_LIST_SEPARATOR = ";"


class ExecValue:
    """Tokenized ``Exec`` command line.

    Whitespace separates tokens outside double quotes and a backslash
    escapes the following character. Token 0 is the executable.

    Example:
        >>> value = ExecValue.parse('test-app --arg1 "arg 2"')
        >>> value[2]
        'arg 2'
        >>> str(value)
        'test-app --arg1 "arg 2"'

    """

    def __init__(self, parts: list[str] | None = None) -> None:
        """Create a command value from already split tokens."""
        self._parts: list[str] = list(parts or [])

    @classmethod
    def parse(cls, value: str) -> ExecValue:
        """Split a raw ``Exec`` value into tokens."""
        parts: list[str] = []
        current: list[str] = []
        in_quotes = False
        escape = False
        # Distinguishes an empty quoted token ("") from no token at all
        has_token = False

        for char in value:
            if escape:
                current.append(char)
                escape = False
            elif char == _ESCAPE:
                escape = True
                has_token = True
            elif char == _QUOTE:
                in_quotes = not in_quotes
                has_token = True
            elif char.isspace() and not in_quotes:
                if has_token:
                    parts.append("".join(current))
                    current.clear()
                    has_token = False
            else:
                current.append(char)
                has_token = True

        if has_token:
            parts.append("".join(current))

        return cls(parts)

    @staticmethod
    def _quote(part: str) -> str:
        if part and not any(
            char.isspace() or char in (_QUOTE, _ESCAPE) for char in part
        ):
            return part
        escaped = part.replace(_ESCAPE, _ESCAPE * 2).replace(
            _QUOTE, _ESCAPE + _QUOTE
        )
        return f"{_QUOTE}{escaped}{_QUOTE}"

    def to_string(self) -> str:
        """Serialize tokens, quoting those that need it."""
        return " ".join(self._quote(part) for part in self._parts)

    def set_executable(self, executable: str) -> None:
        """Replace token 0, adding it when the command is empty."""
        if self._parts:
            self._parts[0] = executable
        else:
            self._parts.append(executable)

    @property
    def parts(self) -> list[str]:
        """Return a copy of the tokens."""
        return list(self._parts)

    def __getitem__(self, index: int) -> str:
        """Return token ``index``."""
        return self._parts[index]

    def __setitem__(self, index: int, value: str) -> None:
        """Replace token ``index``."""
        self._parts[index] = value

    def __len__(self) -> int:
        """Return the number of tokens."""
        return len(self._parts)

    def __iter__(self) -> Iterator[str]:
        """Iterate tokens."""
        return iter(self._parts)

    def __str__(self) -> str:
        """Return the serialized command line."""
        return self.to_string()

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"ExecValue({self._parts!r})"


class StringsValue:
    """``;`` separated list with surrounding whitespace and empties dropped."""

    def __init__(self, strings: list[str] | None = None) -> None:
        """Create a list value from already split strings."""
        self._strings: list[str] = list(strings or [])

    @classmethod
    def parse(cls, value: str) -> StringsValue:
        """Split a raw list value."""
        return cls(
            [
                segment.strip()
                for segment in value.split(_LIST_SEPARATOR)
                if segment.strip()
            ]
        )

    def to_string(self) -> str:
        """Serialize with the trailing separator desktop entries use."""
        if not self._strings:
            return ""
        return _LIST_SEPARATOR.join(self._strings) + _LIST_SEPARATOR

    def __iter__(self) -> Iterator[str]:
        """Iterate the strings."""
        return iter(self._strings)

    def __len__(self) -> int:
        """Return the number of strings."""
        return len(self._strings)

    def __contains__(self, item: object) -> bool:
        """Check membership."""
        return item in self._strings

    def __str__(self) -> str:
        """Return the serialized list."""
        return self.to_string()

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"StringsValue({self._strings!r})"
