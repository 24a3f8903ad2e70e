"""src/tagnorm/ui/cli/display/metadata.py
What: Render track reports, beat grids and diagnostics as Rich tables.
Why: Keep presentation out of the command classes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import final

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tagnorm.application.services.track_file_service import TrackFileReport
from tagnorm.features.beatgrid import BeatGrid
from tagnorm.features.metadata import Diagnostics, TrackMetadata
from tagnorm.features.metadata.domain.bpm import format_bpm
from tagnorm.features.metadata.domain.replay_gain import format_peak, format_ratio

_LEVEL_STYLES: dict[int, str] = {
    logging.DEBUG: "dim",
    logging.INFO: "blue",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
}


def _metadata_rows(metadata: TrackMetadata) -> list[tuple[str, str]]:
    rows = [
        ("Title", metadata.title),
        ("Artist", metadata.artist),
        ("Album", metadata.album),
        ("Album artist", metadata.album_artist),
        ("Composer", metadata.composer),
        ("Grouping", metadata.grouping),
        ("Genre", metadata.genre),
        ("Comment", metadata.comment),
        ("Year", metadata.year),
        ("Track", metadata.track_number),
        ("Track total", metadata.track_total),
        ("BPM", format_bpm(metadata.bpm)),
        ("Key", metadata.key),
        ("Replay gain", format_ratio(metadata.replay_gain.ratio)),
        ("Replay gain peak", format_peak(metadata.replay_gain.peak)),
    ]
    if metadata.duration is not None:
        rows.append(("Duration", f"{metadata.duration:.2f} s"))
    if metadata.sample_rate is not None:
        rows.append(("Sample rate", f"{metadata.sample_rate} Hz"))
    if metadata.channels is not None:
        rows.append(("Channels", str(metadata.channels)))
    if metadata.bitrate is not None:
        rows.append(("Bitrate", f"{metadata.bitrate} kbps"))
    return [(label, value) for label, value in rows if value]


@final
class MetadataDisplay:
    """Display handler for ``show``, ``normalize`` and ``beatgrid`` output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_report(self, report: TrackFileReport) -> None:
        dialect = report.dialect.value if report.dialect is not None else "none"
        title = f"{report.path.name} [{report.file_type.value} / {dialect}]"
        table = Table(
            title=escape(title),
            min_width=len(title),
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE_HEAD,
        )
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for label, value in _metadata_rows(report.metadata):
            table.add_row(label, escape(value))

        if report.cover_image is not None:
            width, height = report.cover_image.size
            table.add_row("Cover art", f"{report.cover_image.format or '?'} {width}x{height}")
        if report.beat_grid is not None:
            table.add_row("Beat grid", self._describe_beat_grid(report.beat_grid))
        self.console.print(table)

    @staticmethod
    def _describe_beat_grid(beat_grid: BeatGrid) -> str:
        if beat_grid.is_empty():
            return "empty"
        terminal = beat_grid.terminal_marker
        count = len(beat_grid.non_terminal_markers) + (terminal is not None)
        bpm = f" @ {terminal.bpm:.2f} BPM" if terminal is not None else ""
        return f"{count} markers{bpm}"

    def show_beat_grid(
        self,
        beat_grid: BeatGrid,
        positions: Sequence[float],
        limit: int | None = None,
    ) -> None:
        markers = Table(title="Beat grid markers", box=box.SIMPLE_HEAD, header_style="bold magenta")
        markers.add_column("#", justify="right")
        markers.add_column("Position (s)", justify="right")
        markers.add_column("Beats / BPM", justify="right")
        for index, marker in enumerate(beat_grid.non_terminal_markers, start=1):
            markers.add_row(
                str(index),
                f"{marker.position_secs:.3f}",
                f"{marker.beats_till_next_marker} beats",
            )
        if beat_grid.terminal_marker is not None:
            markers.add_row(
                str(len(beat_grid.non_terminal_markers) + 1),
                f"{beat_grid.terminal_marker.position_secs:.3f}",
                f"{beat_grid.terminal_marker.bpm:.2f} BPM",
            )
        self.console.print(markers)

        shown = positions if limit is None else positions[:limit]
        self.console.print(f"[bold]Beats:[/bold] {len(positions)}")
        if shown:
            self.console.print(", ".join(f"{position:.1f}" for position in shown))
        if len(shown) < len(positions):
            self.console.print(f"[dim]… {len(positions) - len(shown)} more[/dim]")

    def show_diagnostics(self, diagnostics: Diagnostics, *, include_debug: bool = False) -> None:
        records = [
            record
            for record in diagnostics
            if include_debug or record.level > logging.DEBUG
        ]
        if not records:
            return
        table = Table(title="Diagnostics", box=box.SIMPLE_HEAD, header_style="bold magenta")
        table.add_column("Event", style="bold")
        table.add_column("Message")
        for record in records:
            style = _LEVEL_STYLES.get(record.level, "")
            table.add_row(record.event.value, escape(record.message), style=style)
        self.console.print(table)
