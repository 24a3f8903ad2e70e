"""Where: src/tagnorm/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Hand validated values to the service layer without file I/O.
Trade-offs: - Invalid values fall back to defaults instead of failing the run.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from tagnorm.config.config import BPM_MAX_DEFAULT, ID3V2_VERSION_DEFAULT, Config

SUPPORTED_ID3V2_VERSIONS: Final[tuple[int, ...]] = (3, 4)


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated knobs consumed by ``TrackFileService``."""

    bpm_max: float = BPM_MAX_DEFAULT
    id3v2_version: int = ID3V2_VERSION_DEFAULT
    cover_art: bool = True

    @classmethod
    def from_config(cls, config: Config) -> Settings:
        bpm_max = config.bpm_max
        if (
            isinstance(bpm_max, bool)
            or not isinstance(bpm_max, (int, float))
            or not math.isfinite(bpm_max)
            or bpm_max <= 0
        ):
            bpm_max = BPM_MAX_DEFAULT

        id3v2_version = config.id3v2_version
        if isinstance(id3v2_version, bool) or id3v2_version not in SUPPORTED_ID3V2_VERSIONS:
            id3v2_version = ID3V2_VERSION_DEFAULT

        return cls(
            bpm_max=float(bpm_max),
            id3v2_version=int(id3v2_version),
            cover_art=bool(config.cover_art),
        )


__all__ = ["SUPPORTED_ID3V2_VERSIONS", "Settings"]
