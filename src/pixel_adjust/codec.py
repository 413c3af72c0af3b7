from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError

from .contracts import ImageDecodeError, PixelBuffer


def from_pil(image: Image.Image) -> PixelBuffer:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    width, height = image.size
    return PixelBuffer(width=width, height=height, data=image.tobytes())


def to_pil(buffer: PixelBuffer) -> Image.Image:
    return Image.frombytes("RGBA", (buffer.width, buffer.height), buffer.data)


def decode_image(data: bytes) -> PixelBuffer:
    """
    Decode any Pillow-readable image into an RGBA pixel buffer.

    Raises:
        ImageDecodeError: the bytes are not a recognizable image.
    """

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return from_pil(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageDecodeError(f"Input is not a decodable image: {exc}") from exc


def encode_png(buffer: PixelBuffer) -> bytes:
    out = io.BytesIO()
    to_pil(buffer).save(out, format="PNG")
    return out.getvalue()
