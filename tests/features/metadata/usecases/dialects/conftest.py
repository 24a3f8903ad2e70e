"""Shared fixtures for dialect adapter tests."""

from __future__ import annotations

import pytest

from tagnorm.features.metadata.domain.replay_gain import db_to_ratio
from tagnorm.shared.track_metadata import ReplayGain, TrackMetadata


@pytest.fixture
def full_metadata() -> TrackMetadata:
    """Metadata with every dialect-independent field populated."""

    return TrackMetadata(
        title="Windowlicker",
        artist="Aphex Twin",
        album="Windowlicker EP",
        album_artist="Aphex Twin",
        composer="Richard D. James",
        grouping="Warp",
        genre="Electronic",
        comment="Original mix",
        year="1999-03-22",
        track_number="1",
        track_total="3",
        bpm=127.5,
        replay_gain=ReplayGain(ratio=db_to_ratio(-8.25), peak=0.977),
        key="Am",
    )
