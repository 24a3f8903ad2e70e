"""Rich console handler for tag conversion diagnostics.

Where: platform/logging/handlers.py
What: Render records that carry a ``diagnostic_event`` extra with an icon and colour.
Why: Repairs and dropped values should stand out from ordinary progress output.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class DiagnosticRichHandler(RichHandler):
    """Rich handler that styles structured diagnostics by event id."""

    _DIAGNOSTIC_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "metadata.bpm.repaired": ("🔧", "yellow"),
        "metadata.bpm.invalid": ("⚠️", "yellow"),
        "metadata.replay_gain.placeholder_ignored": ("ℹ️", "blue"),
        "metadata.replay_gain.invalid": ("⚠️", "yellow"),
        "metadata.track_numbers.invalid": ("⚠️", "yellow"),
        "metadata.id3v2.legacy_comment_removed": ("🧹", "magenta"),
        "metadata.export.unsupported": ("⛔", "red"),
        "cover_art.decode_failed": ("🖼️", "yellow"),
        "cover_art.legacy_field": ("🖼️", "blue"),
        "beatgrid.parse_failed": ("❌", "red"),
    }

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    @staticmethod
    def _format_details(details: Mapping[str, Any]) -> str:
        return ", ".join(f"{key}={value}" for key, value in details.items())

    def _render_diagnostic_message(
        self, record: logging.LogRecord, message: str
    ) -> Text | None:
        event = getattr(record, "diagnostic_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._DIAGNOSTIC_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        _ = text.append(message, style=Style(color=color))

        details = getattr(record, "diagnostic_details", None)
        if isinstance(details, Mapping) and details:
            _ = text.append(f" [{self._format_details(details)}]", style=Style(dim=True))
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        diagnostic_text = self._render_diagnostic_message(record, message)
        if diagnostic_text is not None:
            return diagnostic_text
        return super().render_message(record, message)


__all__ = ["DiagnosticRichHandler"]
