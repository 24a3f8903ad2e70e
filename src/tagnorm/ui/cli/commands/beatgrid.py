"""src/tagnorm/ui/cli/commands/beatgrid.py
What: Implement the ``beatgrid`` subcommand.
Why: Inspect Serato beat grids without opening the DJ software.
"""

from __future__ import annotations

from typing import final

from tagnorm.application.services.track_file_service import TrackFileService
from tagnorm.platform.logging import logger
from tagnorm.ui.cli.args.options import BeatGridArgs
from tagnorm.ui.cli.commands._service import default_service
from tagnorm.ui.cli.display import MetadataDisplay


@final
class BeatGridCommand:
    """Decode a file's beat grid and list the derived beat positions."""

    def __init__(
        self,
        args: BeatGridArgs,
        *,
        service: TrackFileService | None = None,
        display: MetadataDisplay | None = None,
    ) -> None:
        self._args = args
        self._service = service or default_service()
        self._display = display or MetadataDisplay()

    def execute(self) -> bool:
        report = self._service.read(self._args.file_path)
        beat_grid = report.beat_grid
        if beat_grid is None:
            logger.warning("No Serato beat grid in %s", self._args.file_path)
            return False

        track_length_millis = (report.metadata.duration or 0.0) * 1000.0
        positions = beat_grid.get_beat_positions_millis(
            track_length_millis, self._args.offset_ms
        )
        if not self._args.quiet:
            self._display.show_beat_grid(beat_grid, positions, self._args.limit)
        return True
