"""
Summary: Package marker for metadata adapters.
Why: Keep adapter exports together for easy discovery.
"""

from .image_decoder import PillowImageDecoder
from .riff_info import RiffInfoTag

__all__ = ["PillowImageDecoder", "RiffInfoTag"]
