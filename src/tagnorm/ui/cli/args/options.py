"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class ShowArgs:
    """Command line arguments for the ``show`` subcommand."""

    command: Literal["show"]
    file_path: Path
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class NormalizeArgs:
    """Command line arguments for the ``normalize`` subcommand."""

    command: Literal["normalize"]
    file_path: Path
    dry_run: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class BeatGridArgs:
    """Command line arguments for the ``beatgrid`` subcommand."""

    command: Literal["beatgrid"]
    file_path: Path
    offset_ms: float
    limit: int | None
    verbose: bool
    quiet: bool


CLIArgs = ShowArgs | NormalizeArgs | BeatGridArgs

__all__ = ["BeatGridArgs", "CLIArgs", "NormalizeArgs", "ShowArgs"]
