# Where: tagnorm.features.beatgrid.__init__
# What: Expose the Serato BeatGrid codec and its per-dialect tag storage.
# Why: Beat grids are orthogonal to canonical metadata and travel on their own path.

from .domain import BASE64_PREFIX, BeatGrid, NonTerminalMarker, TerminalMarker
from .usecases import (
    ID3V2_GEOB_DESCRIPTION,
    MP4_BEATGRID_ATOM,
    VORBIS_COMMENT_FIELD,
    export_beat_grid_into_id3v2_tag,
    export_beat_grid_into_mp4_tag,
    export_beat_grid_into_vorbis_comment_tag,
    import_beat_grid_from_id3v2_tag,
    import_beat_grid_from_mp4_tag,
    import_beat_grid_from_vorbis_comment_tag,
)

__all__ = [
    "BASE64_PREFIX",
    "BeatGrid",
    "NonTerminalMarker",
    "TerminalMarker",
    "import_beat_grid_from_id3v2_tag",
    "export_beat_grid_into_id3v2_tag",
    "import_beat_grid_from_vorbis_comment_tag",
    "export_beat_grid_into_vorbis_comment_tag",
    "import_beat_grid_from_mp4_tag",
    "export_beat_grid_into_mp4_tag",
    "ID3V2_GEOB_DESCRIPTION",
    "VORBIS_COMMENT_FIELD",
    "MP4_BEATGRID_ATOM",
]
