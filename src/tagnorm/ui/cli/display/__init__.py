"""Display management for CLI interface."""

from tagnorm.ui.cli.display.metadata import MetadataDisplay

__all__ = ["MetadataDisplay"]
