"""MP4 dialect adapter.

Where: src/tagnorm/features/metadata/usecases/dialects/mp4.py
What: Convert ``mutagen.mp4.MP4Tags`` atoms to and from ``TrackMetadata``.
Why: MP4 mixes native atoms (``trkn``, ``tmpo``) with iTunes-style freeform text atoms.
"""

from __future__ import annotations

from typing import ClassVar, Final, override

from mutagen.mp4 import MP4FreeForm, MP4Tags

from tagnorm.shared.track_metadata import TrackMetadata

from ...domain.bpm import format_bpm, is_valid_bpm
from ...domain.diagnostics import DiagnosticEvent, Diagnostics
from ...domain.replay_gain import format_peak, format_ratio
from ...domain.track_numbers import ParseResult, TrackNumbers, join_strings
from ._base import (
    BaseDialectAdapter,
    WriteMask,
    import_bpm,
    import_replay_gain_peak,
    import_replay_gain_ratio,
)
from ._tag_utils import (
    equals_ignore_case,
    find_first_non_empty_value,
    first_non_empty,
    parse_tuple_numbers,
)

__all__ = ["MP4Adapter", "freeform_key"]

FREEFORM_PREFIX: Final[str] = "----:"
ITUNES_MEAN: Final[str] = "com.apple.iTunes"
TRACK_ATOM: Final[str] = "trkn"
TEMPO_ATOM: Final[str] = "tmpo"


def freeform_key(name: str, mean: str = ITUNES_MEAN) -> str:
    """Build the mutagen key of a freeform atom, e.g. ``----:com.apple.iTunes:BPM``."""
    return f"{FREEFORM_PREFIX}{mean}:{name}"


BPM_ATOM: Final[str] = freeform_key("BPM")
REPLAYGAIN_TRACK_GAIN_ATOM: Final[str] = freeform_key("replaygain_track_gain")
REPLAYGAIN_TRACK_PEAK_ATOM: Final[str] = freeform_key("replaygain_track_peak")
KEY_ATOMS: Final[tuple[str, ...]] = (freeform_key("initialkey"), freeform_key("KEY"))


class MP4Adapter(BaseDialectAdapter[MP4Tags]):
    """Read and write canonical metadata through MP4 atoms."""

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "\xa9nam",
        "artist": "\xa9ART",
        "album": "\xa9alb",
        "comment": "\xa9cmt",
        "genre": "\xa9gen",
        "year": "\xa9day",
        "track": TRACK_ATOM,
    }
    WRITE_MASK: ClassVar[WriteMask] = WriteMask.OMIT_YEAR | WriteMask.OMIT_TRACK_NUMBER

    @staticmethod
    def _freeform_keys(tag: MP4Tags, key: str) -> list[str]:
        return [existing for existing in tag.keys() if equals_ignore_case(existing, key)]

    def _track_numbers(self, tag: MP4Tags) -> TrackNumbers | None:
        pair = parse_tuple_numbers(tag.get(TRACK_ATOM))
        if pair is None:
            return None
        return TrackNumbers.from_pair(*pair)

    @override
    def read_field(self, tag: MP4Tags, key: str) -> str | None:
        if key == TRACK_ATOM:
            numbers = self._track_numbers(tag)
            return None if numbers is None else join_strings(*numbers.to_strings())
        if key.startswith(FREEFORM_PREFIX):
            matches = self._freeform_keys(tag, key)
            if not matches:
                return None
            return first_non_empty(
                bytes(value).decode("utf-8", errors="replace") for value in tag[matches[0]]
            ) or ""
        values = tag.get(key)
        if values is None:
            return None
        return first_non_empty(str(value) for value in values) or ""

    @override
    def write_field(self, tag: MP4Tags, key: str, value: str) -> None:
        if key.startswith(FREEFORM_PREFIX):
            for existing in self._freeform_keys(tag, key):
                del tag[existing]
            if value:
                tag[key] = [MP4FreeForm(value.encode("utf-8"))]
            return
        if value:
            tag[key] = [value]
        elif key in tag:
            del tag[key]

    def update_field(self, tag: MP4Tags, key: str, value: str) -> None:
        """Rewrite ``key`` only when the atom already exists."""
        if self.read_field(tag, key) is not None:
            self.write_field(tag, key, value)

    @override
    def import_into(
        self,
        metadata: TrackMetadata,
        tag: MP4Tags,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        sink = Diagnostics.ensure(diagnostics)
        self.import_common(metadata, tag)

        for attr, key in (
            ("album_artist", "aART"),
            ("composer", "\xa9wrt"),
            ("grouping", "\xa9grp"),
            ("year", "\xa9day"),
        ):
            value = self.read_field(tag, key)
            if value is not None:
                setattr(metadata, attr, value)

        numbers = self._track_numbers(tag)
        if numbers is not None:
            metadata.track_number, metadata.track_total = numbers.to_strings()

        bpm = self.read_field(tag, BPM_ATOM)
        if bpm is not None:
            # The freeform atom keeps fractional digits and wins over tmpo
            import_bpm(metadata, bpm, sink)
        elif TEMPO_ATOM in tag:
            tempo = tag[TEMPO_ATOM]
            if tempo and is_valid_bpm(float(tempo[0])):
                metadata.bpm = float(tempo[0])

        import_replay_gain_ratio(metadata, self.read_field(tag, REPLAYGAIN_TRACK_GAIN_ATOM), sink)
        import_replay_gain_peak(metadata, self.read_field(tag, REPLAYGAIN_TRACK_PEAK_ATOM), sink)

        key = find_first_non_empty_value(lambda atom: self.read_field(tag, atom), KEY_ATOMS)
        if key is not None:
            metadata.key = key

    @override
    def export_from(
        self,
        tag: MP4Tags,
        metadata: TrackMetadata,
        diagnostics: Diagnostics | None = None,
    ) -> bool:
        sink = Diagnostics.ensure(diagnostics)
        self.export_common(tag, metadata)

        result, numbers = TrackNumbers.parse_from_strings(
            metadata.track_number, metadata.track_total
        )
        match result:
            case ParseResult.EMPTY:
                if TRACK_ATOM in tag:
                    del tag[TRACK_ATOM]
            case ParseResult.VALID:
                tag[TRACK_ATOM] = [numbers.to_pair()]
            case ParseResult.INVALID:
                _ = sink.emit(
                    DiagnosticEvent.TRACK_NUMBERS_INVALID,
                    "Invalid track numbers: "
                    + join_strings(metadata.track_number, metadata.track_total),
                    track_number=metadata.track_number,
                    track_total=metadata.track_total,
                )

        self.write_field(tag, "\xa9day", metadata.year or "")
        self.write_field(tag, "aART", metadata.album_artist or "")
        self.write_field(tag, "\xa9wrt", metadata.composer or "")
        self.write_field(tag, "\xa9grp", metadata.grouping or "")

        # Both tempo atoms are written: tmpo as an integer, the freeform one with fractions
        if is_valid_bpm(metadata.bpm):
            assert metadata.bpm is not None
            tag[TEMPO_ATOM] = [int(metadata.bpm)]
        elif TEMPO_ATOM in tag:
            del tag[TEMPO_ATOM]
        self.write_field(tag, BPM_ATOM, format_bpm(metadata.bpm))

        self.write_field(tag, REPLAYGAIN_TRACK_GAIN_ATOM, format_ratio(metadata.replay_gain.ratio))
        self.write_field(tag, REPLAYGAIN_TRACK_PEAK_ATOM, format_peak(metadata.replay_gain.peak))

        preferred_key, *alternative_keys = KEY_ATOMS
        self.write_field(tag, preferred_key, metadata.key or "")
        for atom in alternative_keys:
            self.update_field(tag, atom, metadata.key or "")
        return True
