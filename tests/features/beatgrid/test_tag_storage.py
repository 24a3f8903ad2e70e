"""Tests for storing beat grids in tag fields."""

from __future__ import annotations

from mutagen._vorbis import VCommentDict
from mutagen.id3 import GEOB, ID3, Encoding
from mutagen.mp4 import MP4FreeForm, MP4Tags

from tagnorm.features.beatgrid import (
    MP4_BEATGRID_ATOM,
    VORBIS_COMMENT_FIELD,
    BeatGrid,
    export_beat_grid_into_id3v2_tag,
    export_beat_grid_into_mp4_tag,
    export_beat_grid_into_vorbis_comment_tag,
    import_beat_grid_from_id3v2_tag,
    import_beat_grid_from_mp4_tag,
    import_beat_grid_from_vorbis_comment_tag,
)
from tagnorm.features.metadata import DiagnosticEvent, Diagnostics, FileType


def test_id3v2_round_trip(beat_grid: BeatGrid) -> None:
    tag = ID3()
    export_beat_grid_into_id3v2_tag(tag, beat_grid)

    frame = tag["GEOB:Serato BeatGrid"]
    assert frame.mime == "application/octet-stream"
    assert bytes(frame.data) == beat_grid.dump(FileType.MP3)
    assert import_beat_grid_from_id3v2_tag(tag) == beat_grid


def test_id3v2_export_keeps_other_geob_frames(beat_grid: BeatGrid) -> None:
    tag = ID3()
    tag.add(
        GEOB(
            encoding=Encoding.LATIN1,
            mime="application/octet-stream",
            filename="",
            desc="Serato Markers_",
            data=b"\x01\x01",
        )
    )

    export_beat_grid_into_id3v2_tag(tag, beat_grid)
    export_beat_grid_into_id3v2_tag(tag, BeatGrid())

    assert [frame.desc for frame in tag.getall("GEOB")] == ["Serato Markers_"]


def test_id3v2_without_frame() -> None:
    assert import_beat_grid_from_id3v2_tag(ID3()) is None


def test_id3v2_malformed_frame() -> None:
    tag = ID3()
    tag.add(
        GEOB(
            encoding=Encoding.LATIN1,
            mime="application/octet-stream",
            filename="",
            desc="Serato BeatGrid",
            data=b"\x09\x09\x09",
        )
    )
    diagnostics = Diagnostics()

    assert import_beat_grid_from_id3v2_tag(tag, FileType.WAV, diagnostics) is None
    assert diagnostics.events() == [DiagnosticEvent.BEAT_GRID_PARSE_FAILED]


def test_vorbis_comment_round_trip(beat_grid: BeatGrid) -> None:
    tag = VCommentDict()
    export_beat_grid_into_vorbis_comment_tag(tag, beat_grid)

    [value] = tag[VORBIS_COMMENT_FIELD]
    assert value == beat_grid.dump(FileType.FLAC).decode("ascii")
    assert import_beat_grid_from_vorbis_comment_tag(tag, FileType.OGG) == beat_grid


def test_vorbis_comment_empty_grid_removes_field(beat_grid: BeatGrid) -> None:
    tag = VCommentDict()
    export_beat_grid_into_vorbis_comment_tag(tag, beat_grid)
    export_beat_grid_into_vorbis_comment_tag(tag, BeatGrid())

    assert VORBIS_COMMENT_FIELD not in tag
    assert import_beat_grid_from_vorbis_comment_tag(tag) is None


def test_mp4_round_trip(beat_grid: BeatGrid) -> None:
    tag = MP4Tags()
    export_beat_grid_into_mp4_tag(tag, beat_grid)

    assert MP4_BEATGRID_ATOM == "----:com.serato.dj:beatgrid"
    assert isinstance(tag[MP4_BEATGRID_ATOM][0], MP4FreeForm)
    assert import_beat_grid_from_mp4_tag(tag) == beat_grid


def test_mp4_empty_grid_removes_atom(beat_grid: BeatGrid) -> None:
    tag = MP4Tags()
    export_beat_grid_into_mp4_tag(tag, beat_grid)
    export_beat_grid_into_mp4_tag(tag, BeatGrid())

    assert MP4_BEATGRID_ATOM not in tag
    assert import_beat_grid_from_mp4_tag(tag) is None
