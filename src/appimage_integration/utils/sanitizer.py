"""File-name sanitizing helpers."""

import re

# Characters kept verbatim in deployed file names
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_for_path(value: str) -> str:
    """Make a string safe for use as a single file-name component.

    Every character outside ``[A-Za-z0-9._-]`` is replaced by ``_`` so
    separators, whitespace and shell metacharacters never reach the
    filesystem. The result never starts with a dot, which would hide the
    deployed file.

    Args:
        value: Raw string such as a desktop entry ``Name`` or ``Icon``

    Returns:
        Sanitized string (may be empty when ``value`` is empty)

    Example:
        >>> sanitize_for_path("My App (1.0)")
        'My_App__1.0_'

    """
    sanitized = _UNSAFE_CHARS.sub("_", value)
    if sanitized.startswith("."):
        sanitized = "_" + sanitized[1:]
    return sanitized
