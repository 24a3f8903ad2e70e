"""Shared base classes for tag dialect adapters.

Where: src/tagnorm/features/metadata/usecases/dialects/_base.py
What: Define the adapter contract plus the common-field reader/writer every dialect shares.
Why: Title, artist, album, genre and comment map one-to-one in all dialects; only the quirks differ.
"""

from __future__ import annotations

import abc
import logging
from enum import IntFlag
from typing import ClassVar, Generic, TypeVar

from tagnorm.shared.track_metadata import TrackMetadata

from ...domain.bpm import BPM_VALUE_MAX, parse_bpm, repair_bpm
from ...domain.dates import parse_calendar_year
from ...domain.diagnostics import DiagnosticEvent, Diagnostics
from ...domain.replay_gain import RATIO_0DB, parse_peak, parse_ratio
from ...domain.track_numbers import ParseResult, TrackNumbers

__all__ = [
    "BaseDialectAdapter",
    "WriteMask",
    "import_bpm",
    "import_replay_gain_peak",
    "import_replay_gain_ratio",
]

TagT = TypeVar("TagT")


class WriteMask(IntFlag):
    """Common fields a dialect writes through its own specialised path."""

    NONE = 0
    OMIT_COMMENT = 1
    OMIT_YEAR = 2
    OMIT_TRACK_NUMBER = 4


class BaseDialectAdapter(abc.ABC, Generic[TagT]):
    """Base class for converting one tag dialect to and from ``TrackMetadata``."""

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "",
        "artist": "",
        "album": "",
        "comment": "",
        "genre": "",
        "year": "",
        "track": "",
    }
    WRITE_MASK: ClassVar[WriteMask] = WriteMask.NONE

    _TEXT_FIELDS: ClassVar[tuple[str, ...]] = ("title", "artist", "album", "genre")

    bpm_max: float

    def __init__(self, *, bpm_max: float = BPM_VALUE_MAX) -> None:
        self.bpm_max = bpm_max

    @abc.abstractmethod
    def read_field(self, tag: TagT, key: str) -> str | None:
        """Return the text stored under ``key`` or ``None`` when absent."""
        raise NotImplementedError

    @abc.abstractmethod
    def write_field(self, tag: TagT, key: str, value: str) -> None:
        """Store ``value`` under ``key``; an empty value erases the field."""
        raise NotImplementedError

    @abc.abstractmethod
    def import_into(
        self,
        metadata: TrackMetadata,
        tag: TagT,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        """Merge the fields present in ``tag`` into ``metadata``."""
        raise NotImplementedError

    @abc.abstractmethod
    def export_from(
        self,
        tag: TagT,
        metadata: TrackMetadata,
        diagnostics: Diagnostics | None = None,
    ) -> bool:
        """Write ``metadata`` into ``tag``; ``False`` when the tag cannot be written."""
        raise NotImplementedError

    def import_common(self, metadata: TrackMetadata, tag: TagT) -> None:
        """Import the fields every dialect shares.

        Year and track number use the numeric fallback here; adapters
        overwrite them with their string-preserving values afterwards.
        """
        for attr in (*self._TEXT_FIELDS, "comment"):
            value = self.read_field(tag, self.TAG_MAPPING[attr])
            if value is not None:
                setattr(metadata, attr, value)

        year = parse_calendar_year(self.read_field(tag, self.TAG_MAPPING["year"]))
        if year is not None:
            metadata.year = str(year)

        result, numbers = TrackNumbers.parse_from_string(
            self.read_field(tag, self.TAG_MAPPING["track"])
        )
        if result is ParseResult.VALID and numbers.actual is not None:
            metadata.track_number = str(numbers.actual)

    def export_common(
        self,
        tag: TagT,
        metadata: TrackMetadata,
        mask: WriteMask | None = None,
    ) -> None:
        """Export the shared fields, skipping whatever ``mask`` omits."""
        mask = self.WRITE_MASK if mask is None else mask
        for attr in self._TEXT_FIELDS:
            self.write_field(tag, self.TAG_MAPPING[attr], getattr(metadata, attr) or "")

        if not mask & WriteMask.OMIT_COMMENT:
            self.write_field(tag, self.TAG_MAPPING["comment"], metadata.comment or "")

        if not mask & WriteMask.OMIT_YEAR:
            year = parse_calendar_year(metadata.year)
            if year is not None:
                self.write_field(tag, self.TAG_MAPPING["year"], str(year))

        if not mask & WriteMask.OMIT_TRACK_NUMBER:
            result, numbers = TrackNumbers.parse_from_string(metadata.track_number)
            if result is ParseResult.VALID and numbers.actual is not None:
                self.write_field(tag, self.TAG_MAPPING["track"], str(numbers.actual))


def _is_zero(text: str) -> bool:
    try:
        return float(text) == 0.0
    except ValueError:
        return False


def import_bpm(
    metadata: TrackMetadata,
    text: str | None,
    diagnostics: Diagnostics,
    *,
    repair_above: float | None = None,
) -> None:
    """Parse ``text`` into ``metadata.bpm``.

    With ``repair_above`` set, oversized values are divided by ten until
    they fit and a ``BPM_REPAIRED`` diagnostic records the change.
    """
    if text is None:
        return
    value = parse_bpm(text)
    if value is None:
        stripped = text.strip()
        if stripped and not _is_zero(stripped):
            _ = diagnostics.emit(
                DiagnosticEvent.BPM_INVALID,
                f"Ignoring invalid BPM value {stripped!r}",
                value=stripped,
            )
        return
    if repair_above is not None:
        repaired = repair_bpm(value, repair_above)
        if repaired != value:
            _ = diagnostics.emit(
                DiagnosticEvent.BPM_REPAIRED,
                f"Changing BPM from {value:g} to {repaired:g}",
                original=value,
                repaired=repaired,
            )
        value = repaired
    metadata.bpm = value


def import_replay_gain_ratio(
    metadata: TrackMetadata,
    text: str | None,
    diagnostics: Diagnostics,
) -> None:
    """Parse a track gain string; an exact 0 dB is treated as undefined."""
    if text is None:
        return
    ratio = parse_ratio(text)
    if ratio is None:
        if text.strip():
            _ = diagnostics.emit(
                DiagnosticEvent.REPLAY_GAIN_INVALID,
                f"Ignoring invalid replay gain {text.strip()!r}",
                value=text.strip(),
            )
        return
    if ratio == RATIO_0DB:
        # Some taggers write 0 dB for gains they never computed.
        _ = diagnostics.emit(
            DiagnosticEvent.REPLAY_GAIN_PLACEHOLDER_IGNORED,
            f"Ignoring possibly undefined gain {text.strip()!r}",
            level=logging.DEBUG,
            value=text.strip(),
        )
        metadata.replay_gain.ratio = None
        return
    metadata.replay_gain.ratio = ratio


def import_replay_gain_peak(
    metadata: TrackMetadata,
    text: str | None,
    diagnostics: Diagnostics,
) -> None:
    if text is None:
        return
    peak = parse_peak(text)
    if peak is None:
        if text.strip():
            _ = diagnostics.emit(
                DiagnosticEvent.REPLAY_GAIN_INVALID,
                f"Ignoring invalid replay gain peak {text.strip()!r}",
                value=text.strip(),
            )
        return
    metadata.replay_gain.peak = peak
