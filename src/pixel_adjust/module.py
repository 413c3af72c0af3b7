from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .codec import decode_image, encode_png
from .contracts import (
    AMOUNT_MAX,
    AMOUNT_MIN,
    CHANNELS,
    AdjustConfig,
    AdjustError,
    AdjustMode,
    AdjustResult,
    AmountOutOfRangeError,
    NoInputImageError,
    PixelAdjustError,
    PixelBuffer,
)

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
_LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


def _pixels(buffer: PixelBuffer) -> np.ndarray:
    """
    (N, 4) uint8 read-only view over the buffer bytes.
    """

    return np.frombuffer(buffer.data, dtype=np.uint8).reshape(-1, CHANNELS)


def _store_rgb(buffer: PixelBuffer, rgb: np.ndarray) -> PixelBuffer:
    """
    Write float RGB values back as bytes, keeping alpha from `buffer`.

    Values are clamped to [0, 255] and rounded half-to-even, the way a
    clamped 8-bit array store behaves.
    """

    out = _pixels(buffer).copy()
    out[:, :3] = np.rint(np.clip(rgb, 0.0, 255.0)).astype(np.uint8)
    return PixelBuffer(width=buffer.width, height=buffer.height, data=out.tobytes())


def _check_input(buffer: PixelBuffer | None) -> PixelBuffer:
    if buffer is None:
        raise NoInputImageError("Please upload an image first")
    return buffer


def _check_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"amount must be an int, got {type(amount).__name__}")
    if amount < AMOUNT_MIN or amount > AMOUNT_MAX:
        raise AmountOutOfRangeError(
            f"amount must be within [{AMOUNT_MIN}, {AMOUNT_MAX}], got {amount}"
        )
    return amount


def adjust_brightness(buffer: PixelBuffer | None, amount: int) -> PixelBuffer:
    buffer = _check_input(buffer)
    amount = _check_amount(amount)
    if amount == 0:
        return buffer

    delta = (amount / 100) * 255
    rgb = _pixels(buffer)[:, :3].astype(np.float64) + delta
    return _store_rgb(buffer, rgb)


def adjust_contrast(buffer: PixelBuffer | None, amount: int) -> PixelBuffer:
    buffer = _check_input(buffer)
    amount = _check_amount(amount)
    if amount == 0:
        return buffer

    # -100 -> 0.0 (flat gray), 0 -> 1.0, +100 -> 2.0; pivot at middle gray
    factor = (100 + amount) / 100
    rgb = (_pixels(buffer)[:, :3].astype(np.float64) - 128.0) * factor + 128.0
    return _store_rgb(buffer, rgb)


def grayscale(buffer: PixelBuffer | None) -> PixelBuffer:
    buffer = _check_input(buffer)

    px = _pixels(buffer)
    # round half up, as Math.round does
    gray = np.floor(px[:, :3].astype(np.float64) @ _LUMA_WEIGHTS + 0.5)
    rgb = np.repeat(gray[:, None], 3, axis=1)
    return _store_rgb(buffer, rgb)


def adjust(buffer: PixelBuffer | None, mode: AdjustMode, amount: int = 0) -> PixelBuffer:
    """
    Apply a per-channel remap to an RGBA buffer and return the new buffer.

    Only R, G and B are touched; alpha is copied through bit-for-bit. An
    amount of 0 returns `buffer` itself. The input is never mutated.

    Raises:
        NoInputImageError: `buffer` is None.
        AmountOutOfRangeError: `amount` is outside [-100, 100].
    """

    if mode == AdjustMode.BRIGHTNESS:
        result = adjust_brightness(buffer, amount)
    elif mode == AdjustMode.CONTRAST:
        result = adjust_contrast(buffer, amount)
    elif mode == AdjustMode.GRAYSCALE:
        result = grayscale(buffer)
    else:
        raise ValueError(f"Unsupported adjust mode: {mode}")

    logger.debug(
        "[ADJUST] mode=%s amount=%s size=%dx%d identity=%s",
        mode.value,
        amount,
        result.width,
        result.height,
        result is buffer,
    )
    return result


def run_adjust_image(*, config: AdjustConfig) -> AdjustResult:
    """
    File-level entrypoint: read, decode, adjust, and re-encode as PNG.

    Expected input failures (missing or undecodable image, bad amount) are
    returned as `ok=False` results; nothing is written by this function.
    """

    def _failure(e: PixelAdjustError, detail: dict[str, Any]) -> AdjustResult:
        return AdjustResult(
            ok=False,
            mode=config.mode,
            amount=config.amount,
            width=None,
            height=None,
            png_bytes=None,
            errors=[AdjustError(code=e.code, message=str(e), detail=detail)],
        )

    image_file = config.image_file
    if not image_file.is_file():
        return _failure(
            NoInputImageError("Input image file not found"),
            {"image_file": str(image_file)},
        )

    try:
        buffer = decode_image(image_file.read_bytes())
        adjusted = adjust(buffer, config.mode, config.amount)
    except PixelAdjustError as e:
        return _failure(e, {"image_file": str(image_file)})

    logger.info(
        "[ADJUST] %s mode=%s amount=%d -> %dx%d",
        image_file.name,
        config.mode.value,
        config.amount,
        adjusted.width,
        adjusted.height,
    )
    return AdjustResult(
        ok=True,
        mode=config.mode,
        amount=config.amount,
        width=adjusted.width,
        height=adjusted.height,
        png_bytes=encode_png(adjusted),
        errors=[],
    )
