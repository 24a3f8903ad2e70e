"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the application logger, setup helpers and the diagnostic rich handler.
Why: Provide a single canonical import path.
"""

from __future__ import annotations

from .config import DEFAULT_LOG_FILE, LOGGER_NAME, logger, setup_logger, teardown_logger
from .handlers import DiagnosticRichHandler

__all__ = [
    "DEFAULT_LOG_FILE",
    "DiagnosticRichHandler",
    "LOGGER_NAME",
    "logger",
    "setup_logger",
    "teardown_logger",
]
