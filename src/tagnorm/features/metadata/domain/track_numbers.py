"""Track number and total handling.

Where: src/tagnorm/features/metadata/domain/track_numbers.py
What: Split, join and validate ``number/total`` pairs stored as text.
Why: Dialects disagree on whether the total lives in the same field.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

TRACK_NUMBER_SEPARATOR: Final[str] = "/"

__all__ = [
    "ParseResult",
    "TRACK_NUMBER_SEPARATOR",
    "TrackNumbers",
    "join_strings",
    "split_string",
]


class ParseResult(Enum):
    """Outcome of parsing track number text."""

    EMPTY = "empty"
    VALID = "valid"
    INVALID = "invalid"


def split_string(text: str | None) -> tuple[str, str]:
    """Split ``"3/12"`` into ``("3", "12")``; a missing total yields ``""``."""
    if not text:
        return "", ""
    number, _, total = text.partition(TRACK_NUMBER_SEPARATOR)
    return number.strip(), total.strip()


def join_strings(number: str | None, total: str | None) -> str:
    """Join number and total back into a single field value."""
    number = (number or "").strip()
    total = (total or "").strip()
    if not total:
        return number
    return f"{number}{TRACK_NUMBER_SEPARATOR}{total}"


def _parse_value(text: str | None) -> tuple[ParseResult, int | None]:
    trimmed = (text or "").strip()
    if not trimmed:
        return ParseResult.EMPTY, None
    try:
        value = int(trimmed)
    except ValueError:
        return ParseResult.INVALID, None
    if value < 1:
        return ParseResult.INVALID, None
    return ParseResult.VALID, value


@dataclass(frozen=True, slots=True)
class TrackNumbers:
    """Positive track number and total; ``None`` marks an undefined half."""

    actual: int | None = None
    total: int | None = None

    @classmethod
    def parse_from_strings(
        cls, number: str | None, total: str | None
    ) -> tuple[ParseResult, TrackNumbers]:
        """Parse separate number and total strings.

        Either half failing makes the whole result ``INVALID``; both halves
        empty make it ``EMPTY``.
        """
        actual_result, actual = _parse_value(number)
        total_result, total_value = _parse_value(total)
        if ParseResult.INVALID in (actual_result, total_result):
            return ParseResult.INVALID, cls()
        if actual_result is ParseResult.EMPTY and total_result is ParseResult.EMPTY:
            return ParseResult.EMPTY, cls()
        return ParseResult.VALID, cls(actual, total_value)

    @classmethod
    def parse_from_string(cls, text: str | None) -> tuple[ParseResult, TrackNumbers]:
        """Parse a combined ``number/total`` string."""
        number, total = split_string(text)
        return cls.parse_from_strings(number, total)

    def to_strings(self) -> tuple[str, str]:
        """Return number and total as text, undefined halves as ``""``."""
        return (
            str(self.actual) if self.actual is not None else "",
            str(self.total) if self.total is not None else "",
        )

    def to_pair(self) -> tuple[int, int]:
        """Return the integer pair used by MP4 ``trkn`` atoms (0 for undefined)."""
        return self.actual or 0, self.total or 0

    @classmethod
    def from_pair(cls, actual: int, total: int) -> TrackNumbers:
        return cls(actual if actual > 0 else None, total if total > 0 else None)
