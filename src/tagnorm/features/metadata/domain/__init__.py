"""
Summary: Pure domain helpers for canonical metadata values.
Why: Keep value normalisation independent of any tag dialect.
"""

from .bpm import BPM_VALUE_MAX, format_bpm, format_bpm_integer, parse_bpm, repair_bpm
from .diagnostics import Diagnostic, DiagnosticEvent, Diagnostics
from .file_type import FileType, get_file_type_from_file_name
from .replay_gain import format_peak, format_ratio, parse_peak, parse_ratio
from .track_numbers import ParseResult, TrackNumbers

__all__ = [
    "BPM_VALUE_MAX",
    "Diagnostic",
    "DiagnosticEvent",
    "Diagnostics",
    "FileType",
    "ParseResult",
    "TrackNumbers",
    "format_bpm",
    "format_bpm_integer",
    "format_peak",
    "format_ratio",
    "get_file_type_from_file_name",
    "parse_bpm",
    "parse_peak",
    "parse_ratio",
    "repair_bpm",
]
