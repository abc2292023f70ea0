"""Helpers for dot-delimited metric paths."""

from collections.abc import Iterable

SEPARATOR = "."

# Pattern token matching any single segment
WILDCARD = "*"

_GLOB_CHARS = frozenset("*?[")


def name_to_path(name: str) -> tuple[str, ...]:
    """Split a dot-delimited name into its segments.

    Empty segments are kept so that callers can reject them.
    """
    return tuple(name.split(SEPARATOR))


def path_to_name(path: Iterable[str]) -> str:
    """Join segments back into a dot-delimited name."""
    return SEPARATOR.join(path)


def is_glob(segment: str) -> bool:
    """Return True if the segment contains shell-style glob characters."""
    return any(char in _GLOB_CHARS for char in segment)
