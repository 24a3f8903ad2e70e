"""Service layer entry points."""

from tagnorm.application.services.track_file_service import (
    TrackFileReport,
    TrackFileService,
    UnsupportedFileTypeError,
)

__all__ = ["TrackFileReport", "TrackFileService", "UnsupportedFileTypeError"]
