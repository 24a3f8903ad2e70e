"""Tests for reading and writing tags of files on disk."""

from __future__ import annotations

import wave
from io import BytesIO
from pathlib import Path

import pytest
from mutagen.id3 import APIC, GEOB, TIT2, Encoding, PictureType
from mutagen.wave import WAVE
from PIL import Image

from tagnorm.application.services import (
    TrackFileService,
    UnsupportedFileTypeError,
)
from tagnorm.config.settings import Settings
from tagnorm.features.beatgrid import BeatGrid, NonTerminalMarker, TerminalMarker
from tagnorm.features.metadata import DiagnosticEvent, FileType, TagDialect, TrackMetadata
from tagnorm.features.metadata.adapters.riff_info import RiffInfoTag


@pytest.fixture
def wav_file(tmp_path: Path) -> Path:
    """One second of mono 16-bit silence at 8 kHz."""
    path = tmp_path / "track.wav"
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(8000)
        wav.writeframes(b"\x00\x00" * 8000)
    return path


@pytest.fixture
def service() -> TrackFileService:
    return TrackFileService(Settings())


def _png() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), (0, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_detect_file_type(service: TrackFileService) -> None:
    assert service.detect_file_type(Path("a/b.FLAC")) is FileType.FLAC

    with pytest.raises(UnsupportedFileTypeError):
        _ = service.detect_file_type(Path("notes.txt"))


def test_read_missing_file(service: TrackFileService, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = service.read(tmp_path / "missing.wav")


def test_read_untagged_file(service: TrackFileService, wav_file: Path) -> None:
    report = service.read(wav_file)

    assert report.file_type is FileType.WAV
    assert report.dialect is None
    assert report.metadata.title is None
    assert report.metadata.duration == pytest.approx(1.0)
    assert report.metadata.channels == 1
    assert report.metadata.sample_rate == 8000
    assert report.metadata.bitrate == 128


def test_write_then_read(service: TrackFileService, wav_file: Path) -> None:
    metadata = TrackMetadata(
        title="Selected",
        artist="Ambient Works",
        year="1992-11-09",
        track_number="2",
        track_total="13",
        bpm=96.0,
        key="Dm",
    )

    assert service.write(wav_file, metadata)
    report = service.read(wav_file)

    assert report.dialect is TagDialect.ID3V2
    assert report.metadata.title == "Selected"
    assert report.metadata.artist == "Ambient Works"
    assert report.metadata.year == "1992-11-09"
    assert (report.metadata.track_number, report.metadata.track_total) == ("2", "13")
    assert report.metadata.bpm == pytest.approx(96.0)
    assert report.metadata.key == "Dm"
    assert WAVE(wav_file).tags.version == (2, 4, 0)


def test_write_id3v23(wav_file: Path) -> None:
    service = TrackFileService(Settings(id3v2_version=3))

    assert service.write(wav_file, TrackMetadata(title="Old school", year="2001-02-03"))

    tags = WAVE(wav_file).tags
    assert tags is not None
    assert tags.version == (2, 3, 0)
    assert service.read(wav_file).metadata.year == "2001-02-03"


def test_rewriting_v23_tag_as_v24_drops_v23_date_frames(
    service: TrackFileService, wav_file: Path
) -> None:
    metadata = TrackMetadata(title="Old school", year="2001-02-03")
    assert TrackFileService(Settings(id3v2_version=3)).write(wav_file, metadata)

    assert service.write(wav_file, metadata)

    tags = WAVE(wav_file, translate=False).tags
    assert tags is not None
    assert tags.version == (2, 4, 0)
    assert "TYER" not in tags
    assert "TDAT" not in tags
    assert str(tags["TDRC"].text[0]) == "2001-02-03"
    assert service.read(wav_file).metadata.year == "2001-02-03"


def test_write_and_read_beat_grid(service: TrackFileService, wav_file: Path) -> None:
    grid = BeatGrid(
        non_terminal_markers=(NonTerminalMarker(0.0, 2),),
        terminal_marker=TerminalMarker(0.5, 240.0),
    )

    assert service.write(wav_file, TrackMetadata(title="Grid"), beat_grid=grid)
    report = service.read(wav_file)

    assert report.beat_grid == grid
    assert report.beat_grid.get_beat_positions_millis(1000.0) == pytest.approx([0, 250, 500, 750])


def test_malformed_beat_grid_is_reported(service: TrackFileService, wav_file: Path) -> None:
    assert service.write(wav_file, TrackMetadata(title="x"))
    audio = WAVE(wav_file)
    assert audio.tags is not None
    audio.tags.add(
        GEOB(
            encoding=Encoding.LATIN1,
            mime="application/octet-stream",
            filename="",
            desc="Serato BeatGrid",
            data=b"\x07",
        )
    )
    audio.save()

    report = service.read(wav_file)

    assert report.beat_grid is None
    assert DiagnosticEvent.BEAT_GRID_PARSE_FAILED in report.diagnostics.events()


def test_riff_info_only_file(service: TrackFileService, wav_file: Path) -> None:
    with open(wav_file, "r+b") as fileobj:
        RiffInfoTag([("INAM", "Info title"), ("IART", "Info artist")]).save(fileobj)

    report = service.read(wav_file)

    assert report.dialect is TagDialect.RIFF_INFO
    assert report.metadata.title == "Info title"
    assert report.metadata.artist == "Info artist"


def test_write_updates_existing_riff_info(service: TrackFileService, wav_file: Path) -> None:
    with open(wav_file, "r+b") as fileobj:
        RiffInfoTag([("INAM", "Stale")]).save(fileobj)

    assert service.write(wav_file, TrackMetadata(title="Fresh", artist="Someone"))

    with open(wav_file, "rb") as fileobj:
        info = RiffInfoTag.load(fileobj)
    assert info is not None
    assert dict(info) == {"INAM": "Fresh", "IART": "Someone"}
    assert service.read(wav_file).dialect is TagDialect.ID3V2


def test_cover_art_is_read(wav_file: Path) -> None:
    audio = WAVE(wav_file)
    audio.add_tags()
    assert audio.tags is not None
    audio.tags.add(TIT2(encoding=Encoding.UTF8, text=["With cover"]))
    audio.tags.add(
        APIC(
            encoding=Encoding.UTF8,
            mime="image/png",
            type=PictureType.COVER_FRONT,
            desc="",
            data=_png(),
        )
    )
    audio.save()

    report = TrackFileService(Settings()).read(wav_file)
    assert report.cover_image is not None
    assert report.cover_image.size == (4, 4)

    assert TrackFileService(Settings(cover_art=False)).read(wav_file).cover_image is None
