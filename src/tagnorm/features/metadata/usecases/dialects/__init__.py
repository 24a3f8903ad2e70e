"""
Summary: Public surface for tag dialect adapters.
Why: Provide a stable import path for services and tests.
"""

from mutagen._vorbis import VCommentDict
from mutagen.apev2 import APEv2
from mutagen.id3 import ID3
from mutagen.mp4 import MP4Tags

from tagnorm.shared.track_metadata import TrackMetadata

from ...adapters.riff_info import RiffInfoTag
from ...domain.bpm import BPM_VALUE_MAX
from ...domain.diagnostics import Diagnostics
from ._base import BaseDialectAdapter, WriteMask
from .ape import APEAdapter
from .id3v2 import ID3v2Adapter
from .mp4 import MP4Adapter
from .registry import TagDialect, adapter_for, export_track_metadata, import_track_metadata
from .riff_info import RiffInfoAdapter
from .vorbis_comment import VorbisCommentAdapter


def import_track_metadata_from_id3v2_tag(
    metadata: TrackMetadata,
    tag: ID3,
    diagnostics: Diagnostics | None = None,
    *,
    bpm_max: float = BPM_VALUE_MAX,
) -> None:
    ID3v2Adapter(bpm_max=bpm_max).import_into(metadata, tag, diagnostics)


def export_track_metadata_into_id3v2_tag(
    tag: ID3, metadata: TrackMetadata, diagnostics: Diagnostics | None = None
) -> bool:
    return ID3v2Adapter().export_from(tag, metadata, diagnostics)


def import_track_metadata_from_ape_tag(
    metadata: TrackMetadata, tag: APEv2, diagnostics: Diagnostics | None = None
) -> None:
    APEAdapter().import_into(metadata, tag, diagnostics)


def export_track_metadata_into_ape_tag(
    tag: APEv2, metadata: TrackMetadata, diagnostics: Diagnostics | None = None
) -> bool:
    return APEAdapter().export_from(tag, metadata, diagnostics)


def import_track_metadata_from_vorbis_comment_tag(
    metadata: TrackMetadata, tag: VCommentDict, diagnostics: Diagnostics | None = None
) -> None:
    VorbisCommentAdapter().import_into(metadata, tag, diagnostics)


def export_track_metadata_into_vorbis_comment_tag(
    tag: VCommentDict, metadata: TrackMetadata, diagnostics: Diagnostics | None = None
) -> bool:
    return VorbisCommentAdapter().export_from(tag, metadata, diagnostics)


def import_track_metadata_from_mp4_tag(
    metadata: TrackMetadata, tag: MP4Tags, diagnostics: Diagnostics | None = None
) -> None:
    MP4Adapter().import_into(metadata, tag, diagnostics)


def export_track_metadata_into_mp4_tag(
    tag: MP4Tags, metadata: TrackMetadata, diagnostics: Diagnostics | None = None
) -> bool:
    return MP4Adapter().export_from(tag, metadata, diagnostics)


def import_track_metadata_from_riff_info_tag(
    metadata: TrackMetadata, tag: RiffInfoTag, diagnostics: Diagnostics | None = None
) -> None:
    RiffInfoAdapter().import_into(metadata, tag, diagnostics)


def export_track_metadata_into_riff_info_tag(
    tag: RiffInfoTag, metadata: TrackMetadata, diagnostics: Diagnostics | None = None
) -> bool:
    return RiffInfoAdapter().export_from(tag, metadata, diagnostics)


__all__ = [
    "APEAdapter",
    "BaseDialectAdapter",
    "ID3v2Adapter",
    "MP4Adapter",
    "RiffInfoAdapter",
    "TagDialect",
    "VorbisCommentAdapter",
    "WriteMask",
    "adapter_for",
    "export_track_metadata",
    "export_track_metadata_into_ape_tag",
    "export_track_metadata_into_id3v2_tag",
    "export_track_metadata_into_mp4_tag",
    "export_track_metadata_into_riff_info_tag",
    "export_track_metadata_into_vorbis_comment_tag",
    "import_track_metadata",
    "import_track_metadata_from_ape_tag",
    "import_track_metadata_from_id3v2_tag",
    "import_track_metadata_from_mp4_tag",
    "import_track_metadata_from_riff_info_tag",
    "import_track_metadata_from_vorbis_comment_tag",
]
