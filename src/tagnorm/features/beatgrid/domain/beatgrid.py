"""Serato BeatGrid codec.

Where: src/tagnorm/features/beatgrid/domain/beatgrid.py
What: Parse and dump the ``Serato BeatGrid`` blob in its binary and base64 wire forms.
Why: DJ software stores tempo markers in tag fields; they must survive a read/write cycle bit-exactly.

Binary layout (big-endian)::

    u8 major (1) | u8 minor (0) | u32 marker count n
    (n - 1) x [f32 position secs | u32 beats till next marker]
    1 x       [f32 position secs | f32 bpm]
    u8 footer
"""

from __future__ import annotations

import base64
import binascii
import struct
from dataclasses import dataclass, field, replace
from typing import Final

from tagnorm.features.metadata.domain.diagnostics import DiagnosticEvent, Diagnostics
from tagnorm.features.metadata.domain.file_type import FileType

__all__ = [
    "BASE64_PREFIX",
    "BeatGrid",
    "NonTerminalMarker",
    "TerminalMarker",
]

_HEADER: Final = struct.Struct(">BBI")
_NON_TERMINAL_RECORD: Final = struct.Struct(">fI")
_TERMINAL_RECORD: Final = struct.Struct(">ff")
_FOOTER: Final = struct.Struct(">B")
_FLOAT32: Final = struct.Struct(">f")

_VERSION: Final[tuple[int, int]] = (0x01, 0x00)
_UINT32_MAX: Final[int] = 0xFFFFFFFF

BASE64_PREFIX: Final[bytes] = b"application/octet-stream\x00\x00Serato BeatGrid\x00"

_BINARY_FILE_TYPES: Final[frozenset[FileType]] = frozenset(
    {FileType.MP3, FileType.AIFF, FileType.WAV}
)
_BASE64_FILE_TYPES: Final[frozenset[FileType]] = frozenset(
    {FileType.MP4, FileType.FLAC, FileType.OGG, FileType.OPUS}
)


def _to_float32(value: float) -> float:
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


@dataclass(frozen=True, slots=True)
class NonTerminalMarker:
    """Marker followed by a fixed number of beats up to the next marker."""

    position_secs: float
    beats_till_next_marker: int

    def __post_init__(self) -> None:
        if not 0 <= self.beats_till_next_marker <= _UINT32_MAX:
            raise ValueError(
                f"beats_till_next_marker out of range: {self.beats_till_next_marker}"
            )
        object.__setattr__(self, "position_secs", _to_float32(self.position_secs))


@dataclass(frozen=True, slots=True)
class TerminalMarker:
    """Last marker of a grid; beats continue at ``bpm`` until the track ends."""

    position_secs: float
    bpm: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "position_secs", _to_float32(self.position_secs))
        object.__setattr__(self, "bpm", _to_float32(self.bpm))


@dataclass(frozen=True, slots=True)
class BeatGrid:
    """Ordered tempo markers as stored by Serato DJ.

    Values are immutable; use the ``with_*`` methods to derive modified
    copies. Equality ignores the footer byte.
    """

    non_terminal_markers: tuple[NonTerminalMarker, ...] = ()
    terminal_marker: TerminalMarker | None = None
    footer: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "non_terminal_markers", tuple(self.non_terminal_markers))
        if not 0 <= self.footer <= 0xFF:
            raise ValueError(f"footer out of range: {self.footer}")

    def is_empty(self) -> bool:
        return self.terminal_marker is None and not self.non_terminal_markers

    def with_non_terminal_markers(self, markers: tuple[NonTerminalMarker, ...]) -> BeatGrid:
        return replace(self, non_terminal_markers=tuple(markers))

    def with_terminal_marker(self, marker: TerminalMarker | None) -> BeatGrid:
        return replace(self, terminal_marker=marker)

    def with_footer(self, footer: int) -> BeatGrid:
        return replace(self, footer=footer)

    # ---- parsing ---------------------------------------------------------

    @classmethod
    def parse(
        cls,
        data: bytes,
        file_type: FileType,
        diagnostics: Diagnostics | None = None,
    ) -> BeatGrid | None:
        """Decode ``data`` in the wire form used for ``file_type``.

        Returns ``None`` when the payload is malformed or the file type
        has no beat grid storage. Never returns a partial grid.
        """
        sink = Diagnostics.ensure(diagnostics)
        if file_type in _BINARY_FILE_TYPES:
            grid, error = cls._parse_binary(bytes(data))
        elif file_type in _BASE64_FILE_TYPES:
            grid, error = cls._parse_base64(bytes(data))
        else:
            grid, error = None, f"no beat grid encoding for file type {file_type}"
        if grid is None:
            _ = sink.emit(
                DiagnosticEvent.BEAT_GRID_PARSE_FAILED,
                f"Failed to parse Serato BeatGrid: {error}",
                file_type=str(file_type),
                size=len(data),
            )
        return grid

    @classmethod
    def _parse_binary(cls, data: bytes) -> tuple[BeatGrid | None, str]:
        if not data:
            return cls(), ""
        if len(data) < _HEADER.size + _FOOTER.size:
            return None, f"truncated payload of {len(data)} bytes"

        major, minor, count = _HEADER.unpack_from(data, 0)
        if (major, minor) != _VERSION:
            return None, f"unknown version {major}.{minor}"

        expected = _HEADER.size + count * _NON_TERMINAL_RECORD.size + _FOOTER.size
        if len(data) != expected:
            return None, f"expected {expected} bytes for {count} markers, got {len(data)}"

        offset = _HEADER.size
        non_terminal: list[NonTerminalMarker] = []
        for _ in range(max(count - 1, 0)):
            position, beats = _NON_TERMINAL_RECORD.unpack_from(data, offset)
            non_terminal.append(NonTerminalMarker(position, beats))
            offset += _NON_TERMINAL_RECORD.size

        terminal: TerminalMarker | None = None
        if count > 0:
            position, bpm = _TERMINAL_RECORD.unpack_from(data, offset)
            terminal = TerminalMarker(position, bpm)
            offset += _TERMINAL_RECORD.size

        (footer,) = _FOOTER.unpack_from(data, offset)
        return cls(tuple(non_terminal), terminal, footer), ""

    @classmethod
    def _parse_base64(cls, data: bytes) -> tuple[BeatGrid | None, str]:
        text = b"".join(data.split())
        if not text:
            return cls(), ""
        # Serato drops the padding and sometimes one trailing character too
        if len(text) % 4 == 1:
            text += b"A"
        text += b"=" * (-len(text) % 4)
        try:
            decoded = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as exc:
            return None, f"invalid base64 ({exc})"
        if not decoded.startswith(BASE64_PREFIX):
            return None, "missing Serato BeatGrid prefix"
        return cls._parse_binary(decoded[len(BASE64_PREFIX) :])

    # ---- dumping ---------------------------------------------------------

    def dump(self, file_type: FileType) -> bytes:
        """Encode the grid in the wire form used for ``file_type``.

        Raises ``ValueError`` for file types without beat grid storage and
        for grids that have non-terminal markers but no terminal marker.
        """
        if file_type in _BINARY_FILE_TYPES:
            return self._dump_binary()
        if file_type in _BASE64_FILE_TYPES:
            return self._dump_base64()
        raise ValueError(f"No beat grid encoding for file type {file_type}")

    def _dump_binary(self) -> bytes:
        if self.terminal_marker is None:
            if self.non_terminal_markers:
                raise ValueError("Beat grid with non-terminal markers needs a terminal marker")
            return _HEADER.pack(*_VERSION, 0) + _FOOTER.pack(self.footer)

        chunks = [_HEADER.pack(*_VERSION, len(self.non_terminal_markers) + 1)]
        chunks.extend(
            _NON_TERMINAL_RECORD.pack(marker.position_secs, marker.beats_till_next_marker)
            for marker in self.non_terminal_markers
        )
        chunks.append(
            _TERMINAL_RECORD.pack(self.terminal_marker.position_secs, self.terminal_marker.bpm)
        )
        chunks.append(_FOOTER.pack(self.footer))
        return b"".join(chunks)

    def _dump_base64(self) -> bytes:
        return base64.b64encode(BASE64_PREFIX + self._dump_binary()).rstrip(b"=")

    # ---- derived view ----------------------------------------------------

    def get_beat_positions_millis(
        self,
        track_length_millis: float,
        timing_offset_millis: float = 0.0,
    ) -> list[float]:
        """Return absolute beat positions in milliseconds.

        Non-terminal markers contribute their beats evenly spaced up to the
        next marker; from the terminal marker on, beats repeat at its BPM
        until ``track_length_millis``. Every position is shifted by
        ``timing_offset_millis``.
        """
        terminal = self.terminal_marker
        if terminal is None or not terminal.bpm > 0:
            return []

        positions: list[float] = []
        markers = self.non_terminal_markers
        for index, marker in enumerate(markers):
            start_millis = marker.position_secs * 1000.0
            if index + 1 < len(markers):
                end_millis = markers[index + 1].position_secs * 1000.0
            else:
                end_millis = terminal.position_secs * 1000.0
            beats = marker.beats_till_next_marker
            if beats == 0:
                continue
            step_millis = (end_millis - start_millis) / beats
            positions.extend(
                start_millis + beat * step_millis + timing_offset_millis
                for beat in range(beats)
            )

        start_millis = terminal.position_secs * 1000.0
        step_millis = 60000.0 / terminal.bpm
        beat = 0
        while (position := start_millis + beat * step_millis) < track_length_millis:
            positions.append(position + timing_offset_millis)
            beat += 1
        return positions
