from __future__ import annotations

import re
from pathlib import Path

from .contracts import AdjustMode


def output_filename(*, mode: AdjustMode, amount: int, source_name: str | None) -> str:
    """
    Download name for an adjusted image, e.g. `brightness-+20-photo.png`.

    The source extension is dropped; the output is always PNG.
    """

    stem = re.sub(r"\.[^/.]+$", "", source_name) if source_name else "image"
    if mode == AdjustMode.GRAYSCALE:
        return f"grayscale-{stem}.png"
    suffix = f"+{amount}" if amount > 0 else str(amount)
    return f"{mode.value}-{suffix}-{stem}.png"


def write_png_artifact(*, png_bytes: bytes, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_bytes(png_bytes)
