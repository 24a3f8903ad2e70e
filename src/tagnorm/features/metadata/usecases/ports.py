"""Summary: Ports defining metadata use case dependencies.
Why: Decouple use cases from concrete adapters so tests and swaps stay simple."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from PIL.Image import Image

from tagnorm.shared.track_metadata import TrackMetadata

from ..domain.diagnostics import Diagnostics


@runtime_checkable
class DialectAdapter(Protocol):
    """Capability shared by every tag dialect adapter."""

    def import_into(
        self,
        metadata: TrackMetadata,
        tag: Any,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        """Merge the fields present in ``tag`` into ``metadata``."""
        ...

    def export_from(
        self,
        tag: Any,
        metadata: TrackMetadata,
        diagnostics: Diagnostics | None = None,
    ) -> bool:
        """Write ``metadata`` into ``tag``."""
        ...


@runtime_checkable
class ImageDecoderPort(Protocol):
    """Port for turning embedded picture bytes into a decoded image."""

    def decode(self, data: bytes) -> Image | None:
        """Return the decoded image or ``None`` when ``data`` is not an image."""
        ...


__all__ = ["DialectAdapter", "ImageDecoderPort"]
