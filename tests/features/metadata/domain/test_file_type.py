"""Tests for extension based container detection."""

from pathlib import Path

import pytest

from tagnorm.features.metadata.domain.file_type import FileType, get_file_type_from_file_name


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("track.mp3", FileType.MP3),
        ("track.M4A", FileType.MP4),
        ("track.flac", FileType.FLAC),
        ("track.oga", FileType.OGG),
        ("track.opus", FileType.OPUS),
        ("track.wav", FileType.WAV),
        ("track.wv", FileType.WV),
        ("track.aif", FileType.AIFF),
        ("track.aiff", FileType.AIFF),
        ("track.aifc", FileType.AIFF),
        ("track.txt", FileType.UNKNOWN),
        ("track", FileType.UNKNOWN),
    ],
)
def test_get_file_type_from_file_name(name: str, expected: FileType) -> None:
    assert get_file_type_from_file_name(name) is expected


def test_accepts_paths() -> None:
    assert get_file_type_from_file_name(Path("/music/a.mp3")) is FileType.MP3
