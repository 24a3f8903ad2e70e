"""
Summary: Serato BeatGrid value types and wire codec.
Why: Keep the byte layout independent of how tags store the blob.
"""

from .beatgrid import BASE64_PREFIX, BeatGrid, NonTerminalMarker, TerminalMarker

__all__ = ["BASE64_PREFIX", "BeatGrid", "NonTerminalMarker", "TerminalMarker"]
