# Where: tagnorm.features.metadata.__init__
# What: Expose dialect import/export functions, cover art helpers and shared dataclasses.
# Why: Provide a cohesive import surface for the file service, the CLI and integrations.

from tagnorm.shared.track_metadata import ReplayGain, TrackMetadata

from .domain import Diagnostic, DiagnosticEvent, Diagnostics, FileType, get_file_type_from_file_name
from .usecases.cover_art import (
    EmbeddedPicture,
    import_cover_image_from_ape_tag,
    import_cover_image_from_id3v2_tag,
    import_cover_image_from_mp4_tag,
    import_cover_image_from_vorbis_comment_picture_list,
    import_cover_image_from_vorbis_comment_tag,
    select_cover_image,
)
from .usecases.dialects import (
    TagDialect,
    export_track_metadata,
    export_track_metadata_into_ape_tag,
    export_track_metadata_into_id3v2_tag,
    export_track_metadata_into_mp4_tag,
    export_track_metadata_into_riff_info_tag,
    export_track_metadata_into_vorbis_comment_tag,
    import_track_metadata,
    import_track_metadata_from_ape_tag,
    import_track_metadata_from_id3v2_tag,
    import_track_metadata_from_mp4_tag,
    import_track_metadata_from_riff_info_tag,
    import_track_metadata_from_vorbis_comment_tag,
)
from .usecases.ports import DialectAdapter, ImageDecoderPort

__all__ = [
    "TrackMetadata",
    "ReplayGain",
    "Diagnostic",
    "DiagnosticEvent",
    "Diagnostics",
    "FileType",
    "get_file_type_from_file_name",
    "TagDialect",
    "DialectAdapter",
    "ImageDecoderPort",
    "import_track_metadata",
    "export_track_metadata",
    "import_track_metadata_from_id3v2_tag",
    "export_track_metadata_into_id3v2_tag",
    "import_track_metadata_from_ape_tag",
    "export_track_metadata_into_ape_tag",
    "import_track_metadata_from_vorbis_comment_tag",
    "export_track_metadata_into_vorbis_comment_tag",
    "import_track_metadata_from_mp4_tag",
    "export_track_metadata_into_mp4_tag",
    "import_track_metadata_from_riff_info_tag",
    "export_track_metadata_into_riff_info_tag",
    "EmbeddedPicture",
    "select_cover_image",
    "import_cover_image_from_id3v2_tag",
    "import_cover_image_from_ape_tag",
    "import_cover_image_from_vorbis_comment_picture_list",
    "import_cover_image_from_vorbis_comment_tag",
    "import_cover_image_from_mp4_tag",
]
