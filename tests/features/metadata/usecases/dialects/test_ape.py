"""Tests for the APEv2 dialect adapter."""

from __future__ import annotations

import pytest
from mutagen.apev2 import APEv2

from tagnorm.features.metadata import (
    DiagnosticEvent,
    Diagnostics,
    TrackMetadata,
    export_track_metadata_into_ape_tag,
    import_track_metadata_from_ape_tag,
)
from tagnorm.features.metadata.domain.replay_gain import ratio_to_db


def test_round_trip(full_metadata: TrackMetadata) -> None:
    tag = APEv2()
    assert export_track_metadata_into_ape_tag(tag, full_metadata)

    imported = TrackMetadata()
    import_track_metadata_from_ape_tag(imported, tag)

    assert imported.title == "Windowlicker"
    assert imported.artist == "Aphex Twin"
    assert imported.album == "Windowlicker EP"
    assert imported.album_artist == "Aphex Twin"
    assert imported.composer == "Richard D. James"
    assert imported.grouping == "Warp"
    assert imported.genre == "Electronic"
    assert imported.comment == "Original mix"
    assert imported.year == "1999-03-22"
    assert (imported.track_number, imported.track_total) == ("1", "3")
    assert imported.bpm == pytest.approx(127.5)
    assert imported.replay_gain.ratio is not None
    assert ratio_to_db(imported.replay_gain.ratio) == pytest.approx(-8.25)
    assert imported.replay_gain.peak == pytest.approx(0.977)


def test_key_is_not_stored(full_metadata: TrackMetadata) -> None:
    tag = APEv2()
    _ = export_track_metadata_into_ape_tag(tag, full_metadata)

    imported = TrackMetadata()
    import_track_metadata_from_ape_tag(imported, tag)

    assert "Key" not in tag
    assert imported.key is None


def test_track_is_written_as_number_slash_total(full_metadata: TrackMetadata) -> None:
    tag = APEv2()
    _ = export_track_metadata_into_ape_tag(tag, full_metadata)

    assert str(tag["Track"]) == "1/3"


def test_binary_items_are_ignored() -> None:
    tag = APEv2()
    tag["Title"] = b"\x00\x01binary"

    metadata = TrackMetadata(title="kept")
    import_track_metadata_from_ape_tag(metadata, tag)

    assert metadata.title == "kept"


def test_invalid_bpm_is_reported() -> None:
    tag = APEv2()
    tag["BPM"] = "fast"
    diagnostics = Diagnostics()

    metadata = TrackMetadata()
    import_track_metadata_from_ape_tag(metadata, tag, diagnostics)

    assert metadata.bpm is None
    assert diagnostics.events() == [DiagnosticEvent.BPM_INVALID]


def test_undefined_fields_erase_items() -> None:
    tag = APEv2()
    tag["Composer"] = "Someone"

    _ = export_track_metadata_into_ape_tag(tag, TrackMetadata())

    assert "Composer" not in tag
