"""src/tagnorm/ui/cli/commands/normalize.py
What: Implement the ``normalize`` subcommand.
Why: Re-export a file's tags so repaired values and cleaned frames are persisted.
"""

from __future__ import annotations

from typing import final

from tagnorm.application.services.track_file_service import TrackFileService
from tagnorm.platform.logging import logger
from tagnorm.ui.cli.args.options import NormalizeArgs
from tagnorm.ui.cli.commands._service import default_service
from tagnorm.ui.cli.display import MetadataDisplay


@final
class NormalizeCommand:
    """Round-trip one file through the canonical model."""

    def __init__(
        self,
        args: NormalizeArgs,
        *,
        service: TrackFileService | None = None,
        display: MetadataDisplay | None = None,
    ) -> None:
        self._args = args
        self._service = service or default_service()
        self._display = display or MetadataDisplay()

    def execute(self) -> bool:
        """Return ``False`` when the file's tag could not be written."""

        report = self._service.read(self._args.file_path)
        if not self._args.quiet:
            self._display.show_report(report)

        if self._args.dry_run:
            logger.info("Dry run: not saving %s", self._args.file_path)
            return True

        written = self._service.write(
            self._args.file_path,
            report.metadata,
            beat_grid=report.beat_grid,
            diagnostics=report.diagnostics,
        )
        if not self._args.quiet:
            self._display.show_diagnostics(report.diagnostics, include_debug=self._args.verbose)
        return written
