"""tests/features/metadata/test_package_exports.py
What: Validate metadata and beat grid packages expose expected helpers.
Why: Prevent regressions when reorganising dialect and storage modules.
"""

from importlib import import_module


def test_metadata_package_exports() -> None:
    """Metadata package should expose the per-dialect entry points."""

    metadata = import_module("tagnorm.features.metadata")

    expected_names = {
        "TrackMetadata",
        "ReplayGain",
        "TagDialect",
        "Diagnostics",
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
        "import_cover_image_from_id3v2_tag",
        "import_cover_image_from_ape_tag",
        "import_cover_image_from_vorbis_comment_picture_list",
        "import_cover_image_from_vorbis_comment_tag",
        "import_cover_image_from_mp4_tag",
    }

    for name in expected_names:
        assert hasattr(metadata, name), f"Missing export: {name}"


def test_beatgrid_package_exports() -> None:
    """Beat grid package should re-export the codec and tag storage."""

    beatgrid = import_module("tagnorm.features.beatgrid")

    expected_names = {
        "BeatGrid",
        "NonTerminalMarker",
        "TerminalMarker",
        "import_beat_grid_from_id3v2_tag",
        "export_beat_grid_into_id3v2_tag",
        "import_beat_grid_from_vorbis_comment_tag",
        "export_beat_grid_into_vorbis_comment_tag",
        "import_beat_grid_from_mp4_tag",
        "export_beat_grid_into_mp4_tag",
    }

    for name in expected_names:
        assert hasattr(beatgrid, name), f"Missing export: {name}"
