"""Tag utility helpers.

Where: src/tagnorm/features/metadata/usecases/dialects/_tag_utils.py
What: Provide pure helper routines for fallback chains and safe tag value access.
Why: Every dialect adapter resolves fields the same way; keep the rules in one place.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

__all__ = [
    "equals_ignore_case",
    "find_first_non_empty",
    "find_first_non_empty_value",
    "first_non_empty",
    "parse_tuple_numbers",
]

T = TypeVar("T")


def equals_ignore_case(left: str | None, right: str | None) -> bool:
    """Compare two strings case-insensitively; ``None`` equals only ``None``."""
    if left is None or right is None:
        return left is right
    return left.casefold() == right.casefold()


def first_non_empty(values: Iterable[str | None]) -> str | None:
    """Return the first non-empty string.

    Returns ``""`` when every present value is empty and ``None`` when no value
    is present at all.
    """
    seen_empty = False
    for value in values:
        if value is None:
            continue
        if value:
            return value
        seen_empty = True
    return "" if seen_empty else None


def find_first_non_empty(
    candidates: Iterable[T],
    text_of: Callable[[T], str | None],
) -> T | None:
    """Return the first candidate with non-empty text, else the first candidate."""
    first: T | None = None
    for candidate in candidates:
        if text_of(candidate):
            return candidate
        if first is None:
            first = candidate
    return first


def find_first_non_empty_value(
    lookup: Callable[[str], str | None],
    keys: Sequence[str],
) -> str | None:
    """Walk a fallback chain of keys and return the first non-empty value.

    ``lookup`` returns ``None`` for a missing key. When every present key is
    empty the first present (empty) value wins.
    """
    return first_non_empty(lookup(key) for key in keys)


def parse_tuple_numbers(data: Sequence[tuple[int, int]] | None) -> tuple[int, int] | None:
    """Return the first numeric pair of a tuple list, or ``None`` when empty."""
    if not data:
        return None
    first = data[0]
    number = first[0] if len(first) > 0 else 0
    total = first[1] if len(first) > 1 else 0
    return int(number), int(total)
