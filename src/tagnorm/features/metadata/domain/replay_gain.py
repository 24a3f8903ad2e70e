"""Replay gain text conversions.

Where: src/tagnorm/features/metadata/domain/replay_gain.py
What: Convert between linear gain ratios and the ``"<n> dB"`` strings found in tags.
Why: Dialects store replay gain as decibel text while the model keeps a ratio.
"""

from __future__ import annotations

import math
from typing import Final

RATIO_0DB: Final[float] = 1.0

__all__ = [
    "RATIO_0DB",
    "db_to_ratio",
    "format_peak",
    "format_ratio",
    "parse_peak",
    "parse_ratio",
    "ratio_to_db",
]


def ratio_to_db(ratio: float) -> float:
    return 20.0 * math.log10(ratio)


def db_to_ratio(db: float) -> float:
    return math.pow(10.0, db / 20.0)


def parse_ratio(text: str | None) -> float | None:
    """Parse a gain string such as ``"-6.5 dB"`` into a linear ratio.

    The ``dB`` suffix is optional and matched case-insensitively. Returns
    ``None`` for malformed input or a non-positive ratio.
    """
    if text is None:
        return None
    normalized = text.strip()
    if normalized[-2:].lower() == "db":
        normalized = normalized[:-2].strip()
    if normalized.startswith("+"):
        normalized = normalized[1:]
    try:
        db = float(normalized)
    except ValueError:
        return None
    if not math.isfinite(db):
        return None
    ratio = db_to_ratio(db)
    if not math.isfinite(ratio) or ratio <= 0.0:
        return None
    return ratio


def format_ratio(ratio: float | None) -> str:
    """Format a ratio as decibel text, ``""`` when undefined."""
    if ratio is None or not math.isfinite(ratio) or ratio <= 0.0:
        return ""
    # -0.0 renders as "0"
    db = ratio_to_db(ratio) or 0.0
    return f"{format(db, 'g')} dB"


def parse_peak(text: str | None) -> float | None:
    """Parse a linear peak amplitude. Negative values are rejected."""
    if text is None:
        return None
    try:
        peak = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(peak) or peak < 0.0:
        return None
    return peak


def format_peak(peak: float | None) -> str:
    if peak is None or not math.isfinite(peak) or peak < 0.0:
        return ""
    return format(peak, "g")
