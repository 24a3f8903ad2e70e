"""src/tagnorm/application/services/track_file_service.py
What: Open audio files with mutagen and route their tags through the dialect adapters.
Why: Give the CLI one place that knows which container carries which tag dialect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, final

from mutagen import FileType as MutagenFile
from mutagen._util import MutagenError
from mutagen.aiff import AIFF
from mutagen.apev2 import APENoHeaderError, APEv2
from mutagen.flac import FLAC
from mutagen.id3 import ID3
from mutagen.mp3 import MP3
from mutagen.mp4 import MP4
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis
from mutagen.wave import WAVE
from mutagen.wavpack import WavPack
from PIL.Image import Image

from tagnorm.config.settings import Settings
from tagnorm.features.beatgrid import (
    BeatGrid,
    export_beat_grid_into_id3v2_tag,
    export_beat_grid_into_mp4_tag,
    export_beat_grid_into_vorbis_comment_tag,
    import_beat_grid_from_id3v2_tag,
    import_beat_grid_from_mp4_tag,
    import_beat_grid_from_vorbis_comment_tag,
)
from tagnorm.features.metadata import (
    Diagnostics,
    FileType,
    TagDialect,
    TrackMetadata,
    export_track_metadata,
    get_file_type_from_file_name,
    import_cover_image_from_ape_tag,
    import_cover_image_from_id3v2_tag,
    import_cover_image_from_mp4_tag,
    import_cover_image_from_vorbis_comment_tag,
    import_track_metadata,
)
from tagnorm.features.metadata.adapters.riff_info import RiffInfoTag
from tagnorm.platform.logging import logger

__all__ = ["TrackFileReport", "TrackFileService", "UnsupportedFileTypeError"]

# Primary dialect first; later ones are read only when earlier ones are absent.
_DIALECT_ROUTES: Final[dict[FileType, tuple[TagDialect, ...]]] = {
    FileType.MP3: (TagDialect.ID3V2, TagDialect.APE),
    FileType.FLAC: (TagDialect.VORBIS_COMMENT,),
    FileType.OGG: (TagDialect.VORBIS_COMMENT,),
    FileType.OPUS: (TagDialect.VORBIS_COMMENT,),
    FileType.MP4: (TagDialect.MP4,),
    FileType.WV: (TagDialect.APE,),
    FileType.WAV: (TagDialect.ID3V2, TagDialect.RIFF_INFO),
    FileType.AIFF: (TagDialect.ID3V2,),
}

_FILE_CLASSES: Final[dict[FileType, type[MutagenFile]]] = {
    FileType.MP3: MP3,
    FileType.FLAC: FLAC,
    FileType.OGG: OggVorbis,
    FileType.OPUS: OggOpus,
    FileType.MP4: MP4,
    FileType.WV: WavPack,
    FileType.WAV: WAVE,
    FileType.AIFF: AIFF,
}


class UnsupportedFileTypeError(ValueError):
    """Raised for files whose extension maps to no known container."""


@dataclass(slots=True)
class TrackFileReport:
    """Everything read from one audio file."""

    path: Path
    file_type: FileType
    metadata: TrackMetadata
    dialect: TagDialect | None = None
    cover_image: Image | None = None
    beat_grid: BeatGrid | None = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@final
class TrackFileService:
    """Read and write canonical metadata for files on disk."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

    @staticmethod
    def detect_file_type(path: Path) -> FileType:
        file_type = get_file_type_from_file_name(path)
        if file_type is FileType.UNKNOWN:
            raise UnsupportedFileTypeError(f"Unsupported file type: {path}")
        return file_type

    def _open(self, path: Path, file_type: FileType) -> MutagenFile:
        file_class = _FILE_CLASSES[file_type]
        try:
            return file_class(path)
        except MutagenError as exc:
            logger.error("Failed to open %s as %s: %s", path, file_type.value, exc)
            if "No such file" in str(exc):
                raise FileNotFoundError(str(exc)) from exc
            raise

    @staticmethod
    def _load_tag(audio: MutagenFile, path: Path, file_type: FileType, dialect: TagDialect) -> Any:
        match dialect:
            case TagDialect.APE if file_type is FileType.MP3:
                try:
                    return APEv2(path)
                except APENoHeaderError:
                    return None
            case TagDialect.RIFF_INFO:
                with open(path, "rb") as fileobj:
                    return RiffInfoTag.load(fileobj)
            case _:
                return audio.tags

    def _read_cover_image(
        self, audio: MutagenFile, dialect: TagDialect, tag: Any, diagnostics: Diagnostics
    ) -> Image | None:
        match dialect:
            case TagDialect.ID3V2:
                return import_cover_image_from_id3v2_tag(tag, diagnostics=diagnostics)
            case TagDialect.APE:
                return import_cover_image_from_ape_tag(tag, diagnostics=diagnostics)
            case TagDialect.VORBIS_COMMENT:
                pictures = audio.pictures if isinstance(audio, FLAC) else ()
                return import_cover_image_from_vorbis_comment_tag(
                    tag, pictures, diagnostics=diagnostics
                )
            case TagDialect.MP4:
                return import_cover_image_from_mp4_tag(tag, diagnostics=diagnostics)
            case TagDialect.RIFF_INFO:
                return None

    @staticmethod
    def _read_beat_grid(
        file_type: FileType, dialect: TagDialect, tag: Any, diagnostics: Diagnostics
    ) -> BeatGrid | None:
        match dialect:
            case TagDialect.ID3V2:
                return import_beat_grid_from_id3v2_tag(tag, file_type, diagnostics)
            case TagDialect.VORBIS_COMMENT:
                return import_beat_grid_from_vorbis_comment_tag(tag, file_type, diagnostics)
            case TagDialect.MP4:
                return import_beat_grid_from_mp4_tag(tag, diagnostics)
            case _:
                return None

    @staticmethod
    def _import_audio_properties(metadata: TrackMetadata, audio: MutagenFile) -> None:
        info = audio.info
        length = getattr(info, "length", None)
        metadata.duration = float(length) if length else None
        metadata.channels = getattr(info, "channels", None) or None
        metadata.sample_rate = getattr(info, "sample_rate", None) or None
        bitrate = getattr(info, "bitrate", None)
        metadata.bitrate = bitrate // 1000 if bitrate else None

    def read(self, path: Path) -> TrackFileReport:
        """Import metadata, cover art and beat grid from ``path``."""
        path = Path(path)
        file_type = self.detect_file_type(path)
        audio = self._open(path, file_type)
        diagnostics = Diagnostics(logger)
        report = TrackFileReport(
            path=path,
            file_type=file_type,
            metadata=TrackMetadata(),
            diagnostics=diagnostics,
        )
        self._import_audio_properties(report.metadata, audio)

        for dialect in _DIALECT_ROUTES[file_type]:
            tag = self._load_tag(audio, path, file_type, dialect)
            if tag is None:
                logger.debug("No %s tag in %s", dialect.value, path)
                continue
            import_track_metadata(
                dialect, report.metadata, tag, diagnostics, bpm_max=self.settings.bpm_max
            )
            report.dialect = dialect
            if self.settings.cover_art:
                report.cover_image = self._read_cover_image(audio, dialect, tag, diagnostics)
            report.beat_grid = self._read_beat_grid(file_type, dialect, tag, diagnostics)
            break
        else:
            logger.info("No supported tags found in %s", path)

        return report

    def _export_beat_grid(
        self, file_type: FileType, dialect: TagDialect, tag: Any, beat_grid: BeatGrid
    ) -> None:
        match dialect:
            case TagDialect.ID3V2:
                export_beat_grid_into_id3v2_tag(tag, beat_grid, file_type)
            case TagDialect.VORBIS_COMMENT:
                export_beat_grid_into_vorbis_comment_tag(tag, beat_grid, file_type)
            case TagDialect.MP4:
                export_beat_grid_into_mp4_tag(tag, beat_grid)
            case _:
                logger.warning("Beat grids cannot be stored in %s tags", dialect.value)

    def write(
        self,
        path: Path,
        metadata: TrackMetadata,
        beat_grid: BeatGrid | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> bool:
        """Export ``metadata`` into the primary tag of ``path`` and save it.

        Secondary tags that already exist (APE on MP3, RIFF INFO on WAV)
        are updated too. Returns ``False`` when the primary tag refused the
        export; nothing is saved in that case.
        """
        path = Path(path)
        file_type = self.detect_file_type(path)
        audio = self._open(path, file_type)
        sink = diagnostics if diagnostics is not None else Diagnostics(logger)
        primary, *secondary = _DIALECT_ROUTES[file_type]

        if audio.tags is None:
            audio.add_tags()
        tag = audio.tags
        if isinstance(tag, ID3) and tag.version >= (2, 3, 0):
            # Export rules follow the version the tag is saved as, not the one it was read from
            tag.version = (2, self.settings.id3v2_version, 0)

        if not export_track_metadata(primary, tag, metadata, sink):
            logger.warning("Skipped saving %s: %s tag not writable", path, primary.value)
            return False
        if beat_grid is not None:
            self._export_beat_grid(file_type, primary, tag, beat_grid)

        try:
            if isinstance(tag, ID3):
                audio.save(v2_version=self.settings.id3v2_version)
            else:
                audio.save()
        except MutagenError as exc:
            logger.error("Failed to save %s: %s", path, exc)
            raise
        logger.info("Saved %s tag to %s", primary.value, path)

        for dialect in secondary:
            self._update_secondary(path, file_type, dialect, metadata, sink)
        return True

    def _update_secondary(
        self,
        path: Path,
        file_type: FileType,
        dialect: TagDialect,
        metadata: TrackMetadata,
        diagnostics: Diagnostics,
    ) -> None:
        match dialect:
            case TagDialect.APE if file_type is FileType.MP3:
                try:
                    ape = APEv2(path)
                except APENoHeaderError:
                    return
                if export_track_metadata(dialect, ape, metadata, diagnostics):
                    ape.save(path)
            case TagDialect.RIFF_INFO:
                with open(path, "r+b") as fileobj:
                    info = RiffInfoTag.load(fileobj)
                    if info is None:
                        return
                    if export_track_metadata(dialect, info, metadata, diagnostics):
                        _ = fileobj.seek(0)
                        info.save(fileobj)
            case _:
                return
        logger.debug("Updated secondary %s tag in %s", dialect.value, path)
