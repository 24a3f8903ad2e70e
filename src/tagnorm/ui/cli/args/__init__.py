"""Command line argument handling package."""

from tagnorm.ui.cli.args.options import BeatGridArgs, CLIArgs, NormalizeArgs, ShowArgs
from tagnorm.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "BeatGridArgs", "CLIArgs", "NormalizeArgs", "ShowArgs"]
