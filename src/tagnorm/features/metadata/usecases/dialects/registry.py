"""src/tagnorm/features/metadata/usecases/dialects/registry.py
Where: Metadata feature usecases layer.
What: Closed set of tag dialects and explicit dispatch onto their adapters.
Why: Callers holding a tag object of a known dialect get one entry point per direction.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from tagnorm.shared.track_metadata import TrackMetadata

from ...domain.bpm import BPM_VALUE_MAX
from ...domain.diagnostics import Diagnostics
from ..ports import DialectAdapter
from .ape import APEAdapter
from .id3v2 import ID3v2Adapter
from .mp4 import MP4Adapter
from .riff_info import RiffInfoAdapter
from .vorbis_comment import VorbisCommentAdapter


class TagDialect(StrEnum):
    """On-disk tag formats understood by the normalizer."""

    ID3V2 = "id3v2"
    APE = "ape"
    VORBIS_COMMENT = "vorbis_comment"
    MP4 = "mp4"
    RIFF_INFO = "riff_info"


def adapter_for(dialect: TagDialect, *, bpm_max: float = BPM_VALUE_MAX) -> DialectAdapter:
    """Return the adapter implementing ``dialect``."""
    match dialect:
        case TagDialect.ID3V2:
            return ID3v2Adapter(bpm_max=bpm_max)
        case TagDialect.APE:
            return APEAdapter(bpm_max=bpm_max)
        case TagDialect.VORBIS_COMMENT:
            return VorbisCommentAdapter(bpm_max=bpm_max)
        case TagDialect.MP4:
            return MP4Adapter(bpm_max=bpm_max)
        case TagDialect.RIFF_INFO:
            return RiffInfoAdapter(bpm_max=bpm_max)


def import_track_metadata(
    dialect: TagDialect,
    metadata: TrackMetadata,
    tag: Any,
    diagnostics: Diagnostics | None = None,
    *,
    bpm_max: float = BPM_VALUE_MAX,
) -> None:
    """Merge ``tag`` of the given dialect into ``metadata``."""
    adapter_for(dialect, bpm_max=bpm_max).import_into(metadata, tag, diagnostics)


def export_track_metadata(
    dialect: TagDialect,
    tag: Any,
    metadata: TrackMetadata,
    diagnostics: Diagnostics | None = None,
) -> bool:
    """Write ``metadata`` into ``tag`` of the given dialect."""
    return adapter_for(dialect).export_from(tag, metadata, diagnostics)


__all__ = ["TagDialect", "adapter_for", "export_track_metadata", "import_track_metadata"]
