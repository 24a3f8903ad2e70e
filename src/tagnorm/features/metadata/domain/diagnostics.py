"""src/tagnorm/features/metadata/domain/diagnostics.py
Where: Metadata feature domain layer.
What: Structured diagnostic events emitted while converting tags.
Why: Callers decide how to surface repairs and discarded values; the core never owns a global logger.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class DiagnosticEvent(StrEnum):
    """Structured event identifiers for tag conversion diagnostics."""

    BPM_REPAIRED = "metadata.bpm.repaired"
    BPM_INVALID = "metadata.bpm.invalid"
    REPLAY_GAIN_PLACEHOLDER_IGNORED = "metadata.replay_gain.placeholder_ignored"
    REPLAY_GAIN_INVALID = "metadata.replay_gain.invalid"
    TRACK_NUMBERS_INVALID = "metadata.track_numbers.invalid"
    LEGACY_COMMENT_REMOVED = "metadata.id3v2.legacy_comment_removed"
    EXPORT_UNSUPPORTED = "metadata.export.unsupported"
    COVER_ART_DECODE_FAILED = "cover_art.decode_failed"
    COVER_ART_LEGACY_FIELD = "cover_art.legacy_field"
    BEAT_GRID_PARSE_FAILED = "beatgrid.parse_failed"


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """One recorded diagnostic."""

    event: DiagnosticEvent
    message: str
    level: int = logging.WARNING
    details: dict[str, Any] = field(default_factory=dict)


class Diagnostics:
    """Collects diagnostics and optionally forwards them to a logger.

    Forwarded records carry ``diagnostic_event`` and ``diagnostic_details``
    extras so rich handlers can style them.
    """

    records: list[Diagnostic]
    logger: logging.Logger | None

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.records = []
        self.logger = logger

    def emit(
        self,
        event: DiagnosticEvent,
        message: str,
        *,
        level: int = logging.WARNING,
        **details: Any,
    ) -> Diagnostic:
        """Record a diagnostic and forward it when a logger is attached."""
        diagnostic = Diagnostic(event=event, message=message, level=level, details=details)
        self.records.append(diagnostic)
        if self.logger is not None:
            self.logger.log(
                level,
                message,
                extra={"diagnostic_event": event.value, "diagnostic_details": details},
            )
        return diagnostic

    def events(self) -> list[DiagnosticEvent]:
        return [record.event for record in self.records]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    @staticmethod
    def ensure(diagnostics: Diagnostics | None) -> Diagnostics:
        """Return ``diagnostics`` or a throwaway sink when none was supplied."""
        return diagnostics if diagnostics is not None else Diagnostics()


__all__ = ["Diagnostic", "DiagnosticEvent", "Diagnostics"]
