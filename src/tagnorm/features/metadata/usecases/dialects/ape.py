"""APEv2 dialect adapter.

Where: src/tagnorm/features/metadata/usecases/dialects/ape.py
What: Convert ``mutagen.apev2.APEv2`` items to and from ``TrackMetadata``.
Why: WavPack files and some MP3 files carry APE items with their own key names.
"""

from __future__ import annotations

from typing import ClassVar, override

from mutagen.apev2 import TEXT, APEv2

from tagnorm.shared.track_metadata import TrackMetadata

from ...domain.bpm import format_bpm
from ...domain.diagnostics import Diagnostics
from ...domain.replay_gain import format_peak, format_ratio
from ...domain.track_numbers import join_strings, split_string
from ._base import (
    BaseDialectAdapter,
    WriteMask,
    import_bpm,
    import_replay_gain_peak,
    import_replay_gain_ratio,
)
from ._tag_utils import first_non_empty

__all__ = ["APEAdapter"]


class APEAdapter(BaseDialectAdapter[APEv2]):
    """Read and write canonical metadata through APEv2 items.

    APE has no slot for the musical key, so it is never written.
    """

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "Title",
        "artist": "Artist",
        "album": "Album",
        "comment": "Comment",
        "genre": "Genre",
        "year": "Year",
        "track": "Track",
    }
    WRITE_MASK: ClassVar[WriteMask] = WriteMask.OMIT_YEAR | WriteMask.OMIT_TRACK_NUMBER

    @override
    def read_field(self, tag: APEv2, key: str) -> str | None:
        value = tag.get(key)
        if value is None or value.kind != TEXT:
            return None
        return first_non_empty(value) or ""

    @override
    def write_field(self, tag: APEv2, key: str, value: str) -> None:
        if value:
            tag[key] = value
        elif key in tag:
            del tag[key]

    @override
    def import_into(
        self,
        metadata: TrackMetadata,
        tag: APEv2,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        sink = Diagnostics.ensure(diagnostics)
        self.import_common(metadata, tag)

        for attr, key in (
            ("album_artist", "Album Artist"),
            ("composer", "Composer"),
            ("grouping", "Grouping"),
            ("year", "Year"),
        ):
            value = self.read_field(tag, key)
            if value is not None:
                setattr(metadata, attr, value)

        track = self.read_field(tag, "Track")
        if track is not None:
            metadata.track_number, metadata.track_total = split_string(track)

        import_bpm(metadata, self.read_field(tag, "BPM"), sink)
        import_replay_gain_ratio(metadata, self.read_field(tag, "REPLAYGAIN_TRACK_GAIN"), sink)
        import_replay_gain_peak(metadata, self.read_field(tag, "REPLAYGAIN_TRACK_PEAK"), sink)

    @override
    def export_from(
        self,
        tag: APEv2,
        metadata: TrackMetadata,
        diagnostics: Diagnostics | None = None,
    ) -> bool:
        self.export_common(tag, metadata)

        self.write_field(tag, "Track", join_strings(metadata.track_number, metadata.track_total))
        self.write_field(tag, "Year", metadata.year or "")
        self.write_field(tag, "Album Artist", metadata.album_artist or "")
        self.write_field(tag, "Composer", metadata.composer or "")
        self.write_field(tag, "Grouping", metadata.grouping or "")
        self.write_field(tag, "BPM", format_bpm(metadata.bpm))
        self.write_field(tag, "REPLAYGAIN_TRACK_GAIN", format_ratio(metadata.replay_gain.ratio))
        self.write_field(tag, "REPLAYGAIN_TRACK_PEAK", format_peak(metadata.replay_gain.peak))
        return True
