"""src/tagnorm/ui/cli/commands/show.py
What: Implement the ``show`` subcommand.
Why: Print the canonical view of a file's tags along with conversion diagnostics.
"""

from __future__ import annotations

from typing import final

from tagnorm.application.services.track_file_service import TrackFileService
from tagnorm.ui.cli.args.options import ShowArgs
from tagnorm.ui.cli.commands._service import default_service
from tagnorm.ui.cli.display import MetadataDisplay


@final
class ShowCommand:
    """Read one file and render its metadata."""

    def __init__(
        self,
        args: ShowArgs,
        *,
        service: TrackFileService | None = None,
        display: MetadataDisplay | None = None,
    ) -> None:
        self._args = args
        self._service = service or default_service()
        self._display = display or MetadataDisplay()

    def execute(self) -> bool:
        report = self._service.read(self._args.file_path)
        if not self._args.quiet:
            self._display.show_report(report)
            self._display.show_diagnostics(report.diagnostics, include_debug=self._args.verbose)
        return True
