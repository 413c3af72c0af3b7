from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from PIL import Image


class PdfRasterizer(ABC):
    """
    Renders PDF pages to raster images.

    Rasterizers are stateless: every call receives the document bytes, so
    pages may be rendered in any order.
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def page_count(self, pdf_bytes: bytes) -> int:
        raise NotImplementedError

    @abstractmethod
    def render_page(self, pdf_bytes: bytes, page_num: int, scale: float) -> Image.Image:
        """
        Render one 1-indexed page at `scale` x 72 dpi.
        """

        raise NotImplementedError


class OcrWorker(ABC):
    """
    An OCR engine instance held for the lifetime of one document.

    Workers are not reentrant: `recognize` calls must be serialized. Use as
    a context manager so `close` runs on every exit path.
    """

    def backend_meta(self) -> dict[str, Any]:
        return {}

    @abstractmethod
    def open(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def recognize(self, image: Image.Image) -> str:
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """
        Release the worker. Must be safe to call more than once.
        """

        raise NotImplementedError

    def __enter__(self) -> "OcrWorker":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
