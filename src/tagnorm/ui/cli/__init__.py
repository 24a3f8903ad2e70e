"""Command line interface package."""

from tagnorm.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
