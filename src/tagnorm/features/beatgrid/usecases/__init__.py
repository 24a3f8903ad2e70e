"""
Summary: Package exports for beat grid tag storage.
Why: Give the file service one import for every dialect's grid field.
"""

from .tag_storage import (
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
