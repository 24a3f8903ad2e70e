"""
Summary: Pillow-backed implementation of the image decoder port.
Why: Cover art selection only needs to know whether picture bytes decode.
"""

from __future__ import annotations

from io import BytesIO
from typing import final

from PIL import Image, UnidentifiedImageError


@final
class PillowImageDecoder:
    """Decode embedded picture bytes with Pillow."""

    def decode(self, data: bytes) -> Image.Image | None:
        if not data:
            return None
        try:
            image = Image.open(BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError):
            return None
        return image


__all__ = ["PillowImageDecoder"]
