from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

AMOUNT_MIN = -100
AMOUNT_MAX = 100
CHANNELS = 4  # R, G, B, A


class AdjustMode(str, Enum):
    BRIGHTNESS = "brightness"
    CONTRAST = "contrast"
    GRAYSCALE = "grayscale"  # amount is ignored


class PixelAdjustError(Exception):
    code = "PIXEL_ADJUST_ERROR"


class NoInputImageError(PixelAdjustError):
    code = "NO_INPUT_IMAGE"


class AmountOutOfRangeError(PixelAdjustError):
    code = "AMOUNT_OUT_OF_RANGE"


class ImageDecodeError(PixelAdjustError):
    code = "IMAGE_DECODE_FAILED"


@dataclass(frozen=True, slots=True)
class PixelBuffer:
    """
    Decoded image as a flat RGBA byte sequence, row-major.

    len(data) == width * height * 4. Being bytes, every channel value is
    within [0, 255] by construction.
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if isinstance(self.data, bytearray):
            object.__setattr__(self, "data", bytes(self.data))
        if not isinstance(self.data, bytes):
            raise TypeError("data must be bytes")
        if self.width < 0 or self.height < 0:
            raise ValueError("width and height must be >= 0")
        expected = self.width * self.height * CHANNELS
        if len(self.data) != expected:
            raise ValueError(
                f"RGBA buffer length mismatch: expected {expected} bytes for "
                f"{self.width}x{self.height}, got {len(self.data)}"
            )


@dataclass(frozen=True, slots=True)
class AdjustError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class AdjustConfig:
    image_file: Path
    mode: AdjustMode = AdjustMode.BRIGHTNESS
    amount: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.image_file, Path):
            raise TypeError("image_file must be a pathlib.Path")
        if not isinstance(self.mode, AdjustMode):
            raise TypeError("mode must be an AdjustMode")


@dataclass(frozen=True, slots=True)
class AdjustResult:
    ok: bool
    mode: AdjustMode
    amount: int
    width: int | None
    height: int | None
    png_bytes: bytes | None
    errors: list[AdjustError]

    def to_dict(self) -> dict[str, Any]:
        """
        JSON-friendly summary; the encoded image itself is omitted.
        """

        return {
            "ok": self.ok,
            "mode": self.mode.value,
            "amount": self.amount,
            "width": self.width,
            "height": self.height,
            "png_size_bytes": None if self.png_bytes is None else len(self.png_bytes),
            "errors": [
                {"code": e.code, "message": e.message, "detail": e.detail} for e in self.errors
            ],
        }
