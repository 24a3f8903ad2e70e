"""Audio file type detection.

Where: src/tagnorm/features/metadata/domain/file_type.py
What: Map file name extensions onto the container families the tag dialects know.
Why: Beat grid encoding and dialect routing both depend on the container.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import PurePath
from typing import Final


class FileType(StrEnum):
    """Supported audio container families."""

    MP3 = "mp3"
    MP4 = "mp4"
    FLAC = "flac"
    OGG = "ogg"
    OPUS = "opus"
    WAV = "wav"
    WV = "wv"
    AIFF = "aiff"
    UNKNOWN = "unknown"


_EXTENSION_MAP: Final[dict[str, FileType]] = {
    "mp3": FileType.MP3,
    "m4a": FileType.MP4,
    "m4b": FileType.MP4,
    "mp4": FileType.MP4,
    "flac": FileType.FLAC,
    "ogg": FileType.OGG,
    "oga": FileType.OGG,
    "opus": FileType.OPUS,
    "wav": FileType.WAV,
    "wv": FileType.WV,
}


def get_file_type_from_file_name(file_name: str | PurePath) -> FileType:
    """Return the container family for ``file_name`` based on its extension."""
    suffix = PurePath(file_name).suffix.lower().lstrip(".")
    if suffix.startswith("aif"):
        return FileType.AIFF
    return _EXTENSION_MAP.get(suffix, FileType.UNKNOWN)


__all__ = ["FileType", "get_file_type_from_file_name"]
