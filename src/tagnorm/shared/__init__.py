# Where: tagnorm.shared.__init__
# What: Provide a concise import surface for shared dataclasses.
# Why: Encourage consistent reuse of the canonical model across features.

"""Shared cross-cutting dataclasses exposed at the package level."""

from .track_metadata import ReplayGain, TrackMetadata

__all__ = ["ReplayGain", "TrackMetadata"]
