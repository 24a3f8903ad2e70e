"""src/tagnorm/features/beatgrid/usecases/tag_storage.py
Where: Beat grid feature usecases layer.
What: Locate the Serato BeatGrid blob in ID3v2, Vorbis comment and MP4 tags.
Why: Each dialect stores the same grid under a different field and wire form.
"""

from __future__ import annotations

from typing import Final

from mutagen._vorbis import VCommentDict
from mutagen.id3 import GEOB, ID3, Encoding
from mutagen.mp4 import MP4FreeForm, MP4Tags

from tagnorm.features.metadata.domain.diagnostics import Diagnostics
from tagnorm.features.metadata.domain.file_type import FileType
from tagnorm.features.metadata.usecases.dialects.mp4 import freeform_key

from ..domain.beatgrid import BeatGrid

__all__ = [
    "ID3V2_GEOB_DESCRIPTION",
    "MP4_BEATGRID_ATOM",
    "VORBIS_COMMENT_FIELD",
    "export_beat_grid_into_id3v2_tag",
    "export_beat_grid_into_mp4_tag",
    "export_beat_grid_into_vorbis_comment_tag",
    "import_beat_grid_from_id3v2_tag",
    "import_beat_grid_from_mp4_tag",
    "import_beat_grid_from_vorbis_comment_tag",
]

ID3V2_GEOB_DESCRIPTION: Final[str] = "Serato BeatGrid"
ID3V2_GEOB_MIME: Final[str] = "application/octet-stream"
VORBIS_COMMENT_FIELD: Final[str] = "SERATO_BEATGRID"
MP4_BEATGRID_ATOM: Final[str] = freeform_key("beatgrid", mean="com.serato.dj")


def _geob_frames(tag: ID3) -> list[GEOB]:
    return [frame for frame in tag.getall("GEOB") if frame.desc == ID3V2_GEOB_DESCRIPTION]


def import_beat_grid_from_id3v2_tag(
    tag: ID3,
    file_type: FileType = FileType.MP3,
    diagnostics: Diagnostics | None = None,
) -> BeatGrid | None:
    """Parse the ``GEOB:Serato BeatGrid`` frame; ``None`` when absent or malformed."""
    frames = _geob_frames(tag)
    if not frames:
        return None
    return BeatGrid.parse(bytes(frames[0].data), file_type, diagnostics)


def export_beat_grid_into_id3v2_tag(
    tag: ID3,
    beat_grid: BeatGrid,
    file_type: FileType = FileType.MP3,
) -> None:
    """Replace the grid frame; an empty grid removes it."""
    for frame in _geob_frames(tag):
        del tag[frame.HashKey]
    if beat_grid.is_empty():
        return
    tag.add(
        GEOB(
            encoding=Encoding.LATIN1,
            mime=ID3V2_GEOB_MIME,
            filename="",
            desc=ID3V2_GEOB_DESCRIPTION,
            data=beat_grid.dump(file_type),
        )
    )


def import_beat_grid_from_vorbis_comment_tag(
    tag: VCommentDict,
    file_type: FileType = FileType.FLAC,
    diagnostics: Diagnostics | None = None,
) -> BeatGrid | None:
    try:
        values = tag[VORBIS_COMMENT_FIELD]
    except KeyError:
        return None
    if not values:
        return None
    return BeatGrid.parse(values[0].encode("utf-8"), file_type, diagnostics)


def export_beat_grid_into_vorbis_comment_tag(
    tag: VCommentDict,
    beat_grid: BeatGrid,
    file_type: FileType = FileType.FLAC,
) -> None:
    if beat_grid.is_empty():
        if VORBIS_COMMENT_FIELD in tag:
            del tag[VORBIS_COMMENT_FIELD]
        return
    tag[VORBIS_COMMENT_FIELD] = [beat_grid.dump(file_type).decode("ascii")]


def import_beat_grid_from_mp4_tag(
    tag: MP4Tags,
    diagnostics: Diagnostics | None = None,
) -> BeatGrid | None:
    values = tag.get(MP4_BEATGRID_ATOM)
    if not values:
        return None
    return BeatGrid.parse(bytes(values[0]), FileType.MP4, diagnostics)


def export_beat_grid_into_mp4_tag(tag: MP4Tags, beat_grid: BeatGrid) -> None:
    if beat_grid.is_empty():
        if MP4_BEATGRID_ATOM in tag:
            del tag[MP4_BEATGRID_ATOM]
        return
    tag[MP4_BEATGRID_ATOM] = [MP4FreeForm(beat_grid.dump(FileType.MP4))]
