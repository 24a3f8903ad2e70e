# Where: tagnorm.shared.track_metadata
# What: Canonical TrackMetadata dataclass shared across features.
# Why: Centralize metadata representation so every tag dialect converges on it.

from dataclasses import dataclass, field


@dataclass
class ReplayGain:
    """Track replay gain as a linear ratio plus peak amplitude.

    ``None`` means undefined for either half.
    """

    ratio: float | None = None
    peak: float | None = None

    def has_ratio(self) -> bool:
        return self.ratio is not None

    def has_peak(self) -> bool:
        return self.peak is not None


@dataclass
class TrackMetadata:
    """Metadata for a music track.

    ``None`` marks an absent field, ``""`` a field that is present but empty.
    """

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    album_artist: str | None = None
    composer: str | None = None
    grouping: str | None = None
    genre: str | None = None
    comment: str | None = None
    year: str | None = None
    track_number: str | None = None
    track_total: str | None = None
    bpm: float | None = None
    replay_gain: ReplayGain = field(default_factory=ReplayGain)
    key: str | None = None

    # Informational audio properties, filled by the file service only.
    duration: float | None = None
    channels: int | None = None
    sample_rate: int | None = None
    bitrate: int | None = None


__all__ = ["ReplayGain", "TrackMetadata"]
