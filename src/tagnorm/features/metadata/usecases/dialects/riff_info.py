"""RIFF INFO dialect adapter.

Where: src/tagnorm/features/metadata/usecases/dialects/riff_info.py
What: Convert ``RiffInfoTag`` fields to and from ``TrackMetadata``.
Why: WAV files often carry only INFO text chunks, which hold a small subset of the model.
"""

from __future__ import annotations

from typing import ClassVar, Final, override

from tagnorm.shared.track_metadata import TrackMetadata

from ...adapters.riff_info import RiffInfoTag
from ...domain.diagnostics import Diagnostics
from ._base import BaseDialectAdapter, WriteMask
from ._tag_utils import find_first_non_empty_value

__all__ = ["RiffInfoAdapter"]

TRACK_FIELDS: Final[tuple[str, ...]] = ("IPRT", "ITRK")


class RiffInfoAdapter(BaseDialectAdapter[RiffInfoTag]):
    """Read and write canonical metadata through RIFF INFO chunks.

    Album artist, composer, grouping, BPM, replay gain, key and track total
    have no INFO field and are dropped on export.
    """

    TAG_MAPPING: ClassVar[dict[str, str]] = {
        "title": "INAM",
        "artist": "IART",
        "album": "IPRD",
        "comment": "ICMT",
        "genre": "IGNR",
        "year": "ICRD",
        "track": TRACK_FIELDS[0],
    }
    WRITE_MASK: ClassVar[WriteMask] = WriteMask.OMIT_YEAR

    @override
    def read_field(self, tag: RiffInfoTag, key: str) -> str | None:
        if key == TRACK_FIELDS[0]:
            return find_first_non_empty_value(tag.get, TRACK_FIELDS)
        return tag.get(key)

    @override
    def write_field(self, tag: RiffInfoTag, key: str, value: str) -> None:
        if value:
            tag[key] = value
        elif key in tag:
            del tag[key]

    @override
    def import_into(
        self,
        metadata: TrackMetadata,
        tag: RiffInfoTag,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self.import_common(metadata, tag)
        year = self.read_field(tag, "ICRD")
        if year is not None:
            metadata.year = year

    @override
    def export_from(
        self,
        tag: RiffInfoTag,
        metadata: TrackMetadata,
        diagnostics: Diagnostics | None = None,
    ) -> bool:
        self.export_common(tag, metadata)
        self.write_field(tag, "ICRD", metadata.year or "")
        return True
