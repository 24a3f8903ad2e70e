"""Tempo value helpers.

Where: src/tagnorm/features/metadata/domain/bpm.py
What: Parse, repair and format beats-per-minute values stored as tag text.
Why: Every dialect stores BPM as text with slightly different conventions.
"""

from __future__ import annotations

import math
from typing import Final

BPM_VALUE_MAX: Final[float] = 300.0

__all__ = [
    "BPM_VALUE_MAX",
    "format_bpm",
    "format_bpm_integer",
    "is_valid_bpm",
    "parse_bpm",
    "repair_bpm",
]


def is_valid_bpm(value: float | None) -> bool:
    """Return whether ``value`` is a usable tempo (finite and positive)."""
    return value is not None and math.isfinite(value) and value > 0.0


def parse_bpm(text: str | None) -> float | None:
    """Parse a BPM string.

    ``0`` and anything non-numeric yield ``None``. No upper bound is
    applied here so callers can still repair oversized values.
    """
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if is_valid_bpm(value) else None


def repair_bpm(value: float, bpm_max: float = BPM_VALUE_MAX) -> float:
    """Divide by ten until ``value`` no longer exceeds ``bpm_max``.

    Some taggers wrote decimals without a separator, so ``1452`` stands for
    ``145.2``.
    """
    if bpm_max <= 0.0 or not math.isfinite(value):
        return value
    while value > bpm_max:
        value /= 10.0
    return value


def format_bpm(value: float | None) -> str:
    """Render a BPM in its shortest decimal form, ``""`` when undefined."""
    if not is_valid_bpm(value):
        return ""
    assert value is not None
    if value.is_integer():
        return str(int(value))
    return format(value, "g")


def format_bpm_integer(value: float | None) -> str:
    """Render a BPM truncated to an integer, ``""`` when undefined."""
    if not is_valid_bpm(value):
        return ""
    assert value is not None
    return str(int(value))
