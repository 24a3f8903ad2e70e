"""Vorbis Comment dialect adapter.

Where: src/tagnorm/features/metadata/usecases/dialects/vorbis_comment.py
What: Convert Vorbis comment fields (FLAC, Ogg, Opus) to and from ``TrackMetadata``.
Why: Vorbis field names are free-form, so several applications' spellings must be honoured.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar, Final, override

from mutagen._vorbis import VCommentDict

from tagnorm.shared.track_metadata import TrackMetadata

from ...domain.bpm import format_bpm
from ...domain.diagnostics import Diagnostics
from ...domain.replay_gain import format_peak, format_ratio
from ...domain.track_numbers import split_string
from ._base import (
    BaseDialectAdapter,
    WriteMask,
    import_bpm,
    import_replay_gain_peak,
    import_replay_gain_ratio,
)
from ._tag_utils import find_first_non_empty_value, first_non_empty

__all__ = ["VorbisCommentAdapter"]

# First entry is the recommended name, the rest are spellings seen in the wild.
COMMENT_FIELDS: Final[tuple[str, ...]] = ("DESCRIPTION", "COMMENT")
ALBUM_ARTIST_FIELDS: Final[tuple[str, ...]] = (
    "ALBUMARTIST",
    "ALBUM_ARTIST",
    "ALBUM ARTIST",
    "ENSEMBLE",
)
TRACK_TOTAL_FIELDS: Final[tuple[str, ...]] = ("TRACKTOTAL", "TOTALTRACKS")
BPM_FIELDS: Final[tuple[str, ...]] = ("TEMPO", "BPM")
KEY_FIELDS: Final[tuple[str, ...]] = ("INITIALKEY", "KEY")


class VorbisCommentAdapter(BaseDialectAdapter[VCommentDict]):
    """Read and write canonical metadata through Vorbis comment fields."""

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "TITLE",
        "artist": "ARTIST",
        "album": "ALBUM",
        "comment": COMMENT_FIELDS[0],
        "genre": "GENRE",
        "year": "DATE",
        "track": "TRACKNUMBER",
    }
    WRITE_MASK: ClassVar[WriteMask] = (
        WriteMask.OMIT_COMMENT | WriteMask.OMIT_YEAR | WriteMask.OMIT_TRACK_NUMBER
    )

    @override
    def read_field(self, tag: VCommentDict, key: str) -> str | None:
        try:
            values = tag[key]
        except KeyError:
            return None
        return first_non_empty(values)

    @override
    def write_field(self, tag: VCommentDict, key: str, value: str) -> None:
        if value:
            tag[key] = [value]
        elif key in tag:
            del tag[key]

    def read_chain(self, tag: VCommentDict, keys: Sequence[str]) -> str | None:
        return find_first_non_empty_value(lambda key: self.read_field(tag, key), keys)

    def write_chain(self, tag: VCommentDict, keys: Sequence[str], value: str) -> None:
        """Write the preferred field and refresh alternatives that already exist."""
        preferred, *alternatives = keys
        self.write_field(tag, preferred, value)
        for key in alternatives:
            if key in tag:
                self.write_field(tag, key, value)

    @override
    def import_into(
        self,
        metadata: TrackMetadata,
        tag: VCommentDict,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        sink = Diagnostics.ensure(diagnostics)
        self.import_common(metadata, tag)

        comment = self.read_chain(tag, COMMENT_FIELDS)
        if comment is not None:
            metadata.comment = comment

        album_artist = self.read_chain(tag, ALBUM_ARTIST_FIELDS)
        if album_artist is not None:
            metadata.album_artist = album_artist

        for attr, key in (("composer", "COMPOSER"), ("grouping", "GROUPING"), ("year", "DATE")):
            value = self.read_field(tag, key)
            if value is not None:
                setattr(metadata, attr, value)

        track = self.read_field(tag, "TRACKNUMBER")
        if track is not None:
            # Some applications store "<number>/<total>" in TRACKNUMBER
            metadata.track_number, metadata.track_total = split_string(track)
        track_total = self.read_chain(tag, TRACK_TOTAL_FIELDS)
        if track_total is not None:
            metadata.track_total = track_total

        import_bpm(metadata, self.read_chain(tag, BPM_FIELDS), sink)
        import_replay_gain_ratio(metadata, self.read_field(tag, "REPLAYGAIN_TRACK_GAIN"), sink)
        import_replay_gain_peak(metadata, self.read_field(tag, "REPLAYGAIN_TRACK_PEAK"), sink)

        key = self.read_chain(tag, KEY_FIELDS)
        if key is not None:
            metadata.key = key

    @override
    def export_from(
        self,
        tag: VCommentDict,
        metadata: TrackMetadata,
        diagnostics: Diagnostics | None = None,
    ) -> bool:
        self.export_common(tag, metadata)

        self.write_chain(tag, COMMENT_FIELDS, metadata.comment or "")
        self.write_field(tag, "DATE", metadata.year or "")
        self.write_field(tag, "COMPOSER", metadata.composer or "")
        self.write_field(tag, "GROUPING", metadata.grouping or "")
        self.write_field(tag, "TRACKNUMBER", metadata.track_number or "")
        self.write_field(tag, "REPLAYGAIN_TRACK_GAIN", format_ratio(metadata.replay_gain.ratio))
        self.write_field(tag, "REPLAYGAIN_TRACK_PEAK", format_peak(metadata.replay_gain.peak))

        self.write_chain(tag, TRACK_TOTAL_FIELDS, metadata.track_total or "")
        self.write_chain(tag, ALBUM_ARTIST_FIELDS, metadata.album_artist or "")
        self.write_chain(tag, BPM_FIELDS, format_bpm(metadata.bpm))
        self.write_chain(tag, KEY_FIELDS, metadata.key or "")
        return True
