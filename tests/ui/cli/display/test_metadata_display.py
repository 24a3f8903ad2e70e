"""Tests for the Rich metadata display."""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path

from rich.console import Console

from tagnorm.application.services import TrackFileReport
from tagnorm.features.beatgrid import BeatGrid, NonTerminalMarker, TerminalMarker
from tagnorm.features.metadata import Diagnostics, DiagnosticEvent, FileType, TagDialect, TrackMetadata
from tagnorm.shared.track_metadata import ReplayGain
from tagnorm.ui.cli.display import MetadataDisplay


def _display() -> tuple[MetadataDisplay, StringIO]:
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=False, width=160)
    return MetadataDisplay(console=console), buffer


def test_show_report() -> None:
    display, buffer = _display()
    report = TrackFileReport(
        path=Path("/music/track.flac"),
        file_type=FileType.FLAC,
        metadata=TrackMetadata(
            title="Flim",
            artist="Aphex Twin",
            bpm=127.5,
            replay_gain=ReplayGain(peak=0.5),
            sample_rate=44100,
        ),
        dialect=TagDialect.VORBIS_COMMENT,
        beat_grid=BeatGrid(
            non_terminal_markers=(NonTerminalMarker(0.0, 4),),
            terminal_marker=TerminalMarker(2.0, 120.0),
        ),
    )

    display.show_report(report)

    output = buffer.getvalue()
    assert "track.flac [flac / vorbis_comment]" in output
    assert "Flim" in output
    assert "127.5" in output
    assert "44100 Hz" in output
    assert "2 markers @ 120.00 BPM" in output
    assert "Album artist" not in output


def test_show_report_without_tags() -> None:
    display, buffer = _display()

    display.show_report(TrackFileReport(Path("a.wav"), FileType.WAV, TrackMetadata()))

    assert "a.wav [wav / none]" in buffer.getvalue()


def test_show_report_title_is_not_wrapped_for_long_names() -> None:
    display, buffer = _display()
    name = "01 - A very long track title taken straight from the release.mp3"

    display.show_report(TrackFileReport(Path(name), FileType.MP3, TrackMetadata(title="x")))

    assert f"{name} [mp3 / none]" in buffer.getvalue()


def test_show_report_counts_only_present_markers() -> None:
    display, buffer = _display()
    grid = BeatGrid(non_terminal_markers=(NonTerminalMarker(0.0, 4), NonTerminalMarker(2.0, 4)))

    display.show_report(
        TrackFileReport(Path("a.mp3"), FileType.MP3, TrackMetadata(), beat_grid=grid)
    )

    output = buffer.getvalue()
    assert "2 markers" in output
    assert "3 markers" not in output


def test_show_beat_grid_with_limit() -> None:
    display, buffer = _display()
    grid = BeatGrid(terminal_marker=TerminalMarker(0.0, 120.0))

    display.show_beat_grid(grid, [0.0, 500.0, 1000.0], limit=2)

    output = buffer.getvalue()
    assert "Beats: 3" in output
    assert "0.0, 500.0" in output
    assert "1 more" in output


def test_show_diagnostics_hides_debug_by_default() -> None:
    display, buffer = _display()
    diagnostics = Diagnostics()
    _ = diagnostics.emit(DiagnosticEvent.BPM_REPAIRED, "Changing BPM")
    _ = diagnostics.emit(
        DiagnosticEvent.REPLAY_GAIN_PLACEHOLDER_IGNORED, "Ignoring gain", level=logging.DEBUG
    )

    display.show_diagnostics(diagnostics)
    output = buffer.getvalue()
    assert "metadata.bpm.repaired" in output
    assert "Ignoring gain" not in output

    display.show_diagnostics(diagnostics, include_debug=True)
    assert "Ignoring gain" in buffer.getvalue()


def test_show_diagnostics_prints_nothing_when_empty() -> None:
    display, buffer = _display()

    display.show_diagnostics(Diagnostics())

    assert buffer.getvalue() == ""
