"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Configure the ``tagnorm`` logger with a rich console and a rotating file.
Why: Library calls stay silent until the CLI (or an embedding app) opts in.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Final

from rich.console import Console

from tagnorm.config.paths import default_log_file

from .handlers import DiagnosticRichHandler

LOGGER_NAME: Final[str] = "tagnorm"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()

logger: Final[logging.Logger] = logging.getLogger(LOGGER_NAME)


def teardown_logger() -> None:
    """Close and detach every handler of the application logger."""

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    console: Console | None = None,
) -> logging.Logger:
    """Set up and configure the application logger."""

    logger.setLevel(logging.DEBUG)
    teardown_logger()

    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = DiagnosticRichHandler(
        console=console or Console(force_terminal=True, soft_wrap=True)
    )
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        resolved_log_file = Path(log_file).expanduser().resolve()
        os.makedirs(resolved_log_file.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "logger", "setup_logger", "teardown_logger"]
