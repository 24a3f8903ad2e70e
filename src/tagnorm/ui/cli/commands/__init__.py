"""Command execution package for CLI."""

from tagnorm.ui.cli.commands.beatgrid import BeatGridCommand
from tagnorm.ui.cli.commands.normalize import NormalizeCommand
from tagnorm.ui.cli.commands.show import ShowCommand

__all__ = ["BeatGridCommand", "NormalizeCommand", "ShowCommand"]
