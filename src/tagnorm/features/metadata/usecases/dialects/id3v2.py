"""ID3v2 dialect adapter.

Where: src/tagnorm/features/metadata/usecases/dialects/id3v2.py
What: Convert ``mutagen.id3.ID3`` frames to and from ``TrackMetadata``.
Why: ID3v2 carries the most quirks: version-gated dates and encodings, legacy comment frames and mangled BPM values.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar, override

from mutagen.id3 import COMM, ID3, TXXX, Encoding, Frame, Frames

from tagnorm.shared.track_metadata import TrackMetadata

from ...domain.bpm import format_bpm_integer
from ...domain.dates import format_calendar_year, format_date, parse_date
from ...domain.diagnostics import DiagnosticEvent, Diagnostics
from ...domain.replay_gain import format_peak, format_ratio
from ...domain.track_numbers import join_strings, split_string
from ._base import (
    BaseDialectAdapter,
    WriteMask,
    import_bpm,
    import_replay_gain_peak,
    import_replay_gain_ratio,
)
from ._tag_utils import equals_ignore_case, find_first_non_empty, first_non_empty

__all__ = ["ID3v2Adapter"]

_COMMENT_KEY = "COMM"
_LEGACY_COMMENT_DESCRIPTION = "COMMENT"
_REPLAYGAIN_TRACK_GAIN = "REPLAYGAIN_TRACK_GAIN"
_REPLAYGAIN_TRACK_PEAK = "REPLAYGAIN_TRACK_PEAK"
_TYER_LENGTH = 4  # yyyy
_TDAT_LENGTH = 4  # ddMM


def _frame_text(frame: Frame) -> str:
    return first_non_empty(str(text) for text in getattr(frame, "text", [])) or ""


def _combine_tyer_tdat(tyer: str, tdat: str) -> str | None:
    try:
        return format_date(date(int(tyer), int(tdat[2:4]), int(tdat[0:2])))
    except ValueError:
        return None


class ID3v2Adapter(BaseDialectAdapter[ID3]):
    """Read and write canonical metadata through ID3v2.3/2.4 frames."""

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "TIT2",
        "artist": "TPE1",
        "album": "TALB",
        "comment": _COMMENT_KEY,
        "genre": "TCON",
        "year": "TDRC",
        "track": "TRCK",
    }
    WRITE_MASK: ClassVar[WriteMask] = (
        WriteMask.OMIT_COMMENT | WriteMask.OMIT_YEAR | WriteMask.OMIT_TRACK_NUMBER
    )

    @staticmethod
    def major_version(tag: ID3) -> int:
        return tag.version[1]

    @staticmethod
    def string_encoding(tag: ID3, numeric: bool = False) -> Encoding:
        """Pick the text encoding for a new frame.

        ID3v2.4 stores everything as UTF-8. ID3v2.3 has no UTF-8, so free
        text goes to UTF-16 and numeric or URL fields stay Latin-1.
        """
        if ID3v2Adapter.major_version(tag) >= 4:
            return Encoding.UTF8
        return Encoding.LATIN1 if numeric else Encoding.UTF16

    @override
    def read_field(self, tag: ID3, key: str) -> str | None:
        if key == _COMMENT_KEY:
            return self._read_comment(tag)
        frames = tag.getall(key)
        if not frames:
            return None
        return first_non_empty(_frame_text(frame) for frame in frames) or ""

    @override
    def write_field(self, tag: ID3, key: str, value: str) -> None:
        self._write_text(tag, key, value)

    def _write_text(self, tag: ID3, frame_id: str, text: str, numeric: bool = False) -> None:
        tag.delall(frame_id)
        if text:
            frame_cls = Frames[frame_id]
            tag.add(frame_cls(encoding=self.string_encoding(tag, numeric), text=[text]))

    @staticmethod
    def _user_text_frames(tag: ID3, description: str) -> list[TXXX]:
        return [
            frame
            for frame in tag.getall("TXXX")
            if equals_ignore_case(frame.desc, description)
        ]

    def _read_user_text(self, tag: ID3, description: str) -> str | None:
        frame = find_first_non_empty(self._user_text_frames(tag, description), _frame_text)
        if frame is None:
            return None
        return _frame_text(frame)

    def _write_user_text(
        self, tag: ID3, description: str, text: str, numeric: bool = False
    ) -> int:
        removed = 0
        for frame in self._user_text_frames(tag, description):
            del tag[frame.HashKey]
            removed += 1
        if text:
            tag.add(
                TXXX(
                    encoding=self.string_encoding(tag, numeric),
                    desc=description,
                    text=[text],
                )
            )
        return removed

    @staticmethod
    def _find_comment_frame(tag: ID3) -> COMM | None:
        """First untitled comment frame, preferring one with text."""
        frames = [frame for frame in tag.getall("COMM") if equals_ignore_case(frame.desc, "")]
        return find_first_non_empty(frames, _frame_text)

    def _read_comment(self, tag: ID3) -> str | None:
        frame = self._find_comment_frame(tag)
        if frame is not None:
            return _frame_text(frame)
        # ffmpeg maps Vorbis DESCRIPTION fields into TXXX:comment frames
        return self._read_user_text(tag, _LEGACY_COMMENT_DESCRIPTION)

    def _write_comment(self, tag: ID3, text: str, diagnostics: Diagnostics) -> None:
        frame = self._find_comment_frame(tag)
        if frame is not None:
            if text:
                frame.encoding = self.string_encoding(tag)
                frame.text = [text]
            else:
                del tag[frame.HashKey]
        elif text:
            tag.add(COMM(encoding=self.string_encoding(tag), lang="eng", desc="", text=[text]))

        removed = self._write_user_text(tag, _LEGACY_COMMENT_DESCRIPTION, "")
        if removed:
            _ = diagnostics.emit(
                DiagnosticEvent.LEGACY_COMMENT_REMOVED,
                f"Removed {removed} non-standard ID3v2 TXXX comment frames",
                count=removed,
            )

    def _read_year(self, tag: ID3) -> str:
        if self.major_version(tag) >= 4:
            recording_time = (self.read_field(tag, "TDRC") or "").strip()
            if recording_time:
                return recording_time

        year = (self.read_field(tag, "TYER") or "").strip()
        if len(year) == _TYER_LENGTH:
            recording_date = (self.read_field(tag, "TDAT") or "").strip()
            if len(recording_date) == _TDAT_LENGTH:
                year = _combine_tyer_tdat(year, recording_date) or year
        if year:
            return year
        # mutagen upgrades TYER/TDAT into TDRC when loading v2.3 files
        return (self.read_field(tag, "TDRC") or "").strip()

    @override
    def import_into(
        self,
        metadata: TrackMetadata,
        tag: ID3,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        sink = Diagnostics.ensure(diagnostics)
        self.import_common(metadata, tag)

        album_artist = self.read_field(tag, "TPE2")
        if album_artist is not None:
            metadata.album_artist = album_artist

        if not metadata.album:
            original_album = self.read_field(tag, "TOAL")
            if original_album is not None:
                metadata.album = original_album

        composer = self.read_field(tag, "TCOM")
        if composer is not None:
            metadata.composer = composer

        grouping = self.read_field(tag, "TIT1")
        if grouping is not None:
            metadata.grouping = grouping

        year = self._read_year(tag)
        if year:
            metadata.year = year

        track = self.read_field(tag, "TRCK")
        if track is not None:
            metadata.track_number, metadata.track_total = split_string(track)

        import_bpm(metadata, self.read_field(tag, "TBPM"), sink, repair_above=self.bpm_max)

        key = self.read_field(tag, "TKEY")
        if key is not None:
            metadata.key = key

        # Only track gain; album gain has no canonical slot
        import_replay_gain_ratio(metadata, self._read_user_text(tag, _REPLAYGAIN_TRACK_GAIN), sink)
        import_replay_gain_peak(metadata, self._read_user_text(tag, _REPLAYGAIN_TRACK_PEAK), sink)

    @override
    def export_from(
        self,
        tag: ID3,
        metadata: TrackMetadata,
        diagnostics: Diagnostics | None = None,
    ) -> bool:
        sink = Diagnostics.ensure(diagnostics)
        major_version = self.major_version(tag)
        if major_version < 3:
            _ = sink.emit(
                DiagnosticEvent.EXPORT_UNSUPPORTED,
                f"Refusing to write ID3v2.{major_version} tag",
                version=major_version,
            )
            return False

        self.export_common(tag, metadata)
        self._write_comment(tag, metadata.comment or "", sink)

        self._write_text(tag, "TRCK", join_strings(metadata.track_number, metadata.track_total))

        year = metadata.year or ""
        if major_version >= 4 or tag.getall("TDRC"):
            self._write_text(tag, "TDRC", year)
        if major_version < 4:
            recording_date = parse_date(year)
            if recording_date is not None:
                self._write_text(tag, "TYER", f"{recording_date.year:04d}", numeric=True)
                self._write_text(
                    tag,
                    "TDAT",
                    f"{recording_date.day:02d}{recording_date.month:02d}",
                    numeric=True,
                )
            else:
                # TDAT is only valid beside a full date
                tag.delall("TDAT")
                self._write_text(tag, "TYER", format_calendar_year(year), numeric=True)

        self._write_text(tag, "TPE2", metadata.album_artist or "")
        self._write_text(tag, "TCOM", metadata.composer or "")
        self._write_text(tag, "TIT1", metadata.grouping or "")
        # TBPM is an integer by definition
        self._write_text(tag, "TBPM", format_bpm_integer(metadata.bpm), numeric=True)
        self._write_text(tag, "TKEY", metadata.key or "")

        _ = self._write_user_text(
            tag, _REPLAYGAIN_TRACK_GAIN, format_ratio(metadata.replay_gain.ratio), numeric=True
        )
        _ = self._write_user_text(
            tag, _REPLAYGAIN_TRACK_PEAK, format_peak(metadata.replay_gain.peak), numeric=True
        )
        return True
