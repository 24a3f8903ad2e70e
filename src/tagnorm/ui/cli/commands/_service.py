"""Shared construction of the file service for CLI commands."""

from __future__ import annotations

from tagnorm.application.services.track_file_service import TrackFileService
from tagnorm.config.config import Config
from tagnorm.config.settings import Settings


def default_service() -> TrackFileService:
    """Build a ``TrackFileService`` from the loaded configuration."""

    return TrackFileService(Settings.from_config(Config.load()))
