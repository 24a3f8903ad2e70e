from __future__ import annotations

import pytest

from tagnorm.features.beatgrid import BeatGrid, NonTerminalMarker, TerminalMarker


@pytest.fixture
def beat_grid() -> BeatGrid:
    """Four beats at 120 BPM from 0.5 s, then 120 BPM from 2.5 s on."""
    return BeatGrid(
        non_terminal_markers=(NonTerminalMarker(0.5, 4),),
        terminal_marker=TerminalMarker(2.5, 120.0),
    )
