"""
Per-pixel remaps over decoded RGBA buffers.

The core functions work on `PixelBuffer` only and never touch file formats;
`codec` bridges to Pillow for decoding uploads and encoding PNG output.
"""

from .contracts import (
    AdjustConfig,
    AdjustError,
    AdjustMode,
    AdjustResult,
    AmountOutOfRangeError,
    ImageDecodeError,
    NoInputImageError,
    PixelAdjustError,
    PixelBuffer,
)
from .module import adjust, adjust_brightness, adjust_contrast, grayscale, run_adjust_image

__all__ = [
    "AdjustConfig",
    "AdjustError",
    "AdjustMode",
    "AdjustResult",
    "AmountOutOfRangeError",
    "ImageDecodeError",
    "NoInputImageError",
    "PixelAdjustError",
    "PixelBuffer",
    "adjust",
    "adjust_brightness",
    "adjust_contrast",
    "grayscale",
    "run_adjust_image",
]
