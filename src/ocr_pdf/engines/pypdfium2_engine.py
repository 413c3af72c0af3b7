from __future__ import annotations

from PIL import Image

from .base import PdfRasterizer


class Pypdfium2Rasterizer(PdfRasterizer):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore
        except ImportError:
            return None
        return getattr(pdfium, "__version__", None)

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise RuntimeError("Missing dependency: pypdfium2 is required for PDF rendering.") from e

    def page_count(self, pdf_bytes: bytes) -> int:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(pdf_bytes)
        try:
            return len(doc)
        finally:
            doc.close()

    def render_page(self, pdf_bytes: bytes, page_num: int, scale: float) -> Image.Image:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(pdf_bytes)
        try:
            page_count = len(doc)
            if page_num < 1 or page_num > page_count:
                raise ValueError(f"Page out of range: {page_num} (1..{page_count})")

            page = doc[page_num - 1]
            bitmap = page.render(scale=scale)
            # convert() copies, so the image outlives the bitmap buffer
            return bitmap.to_pil().convert("RGB")
        finally:
            doc.close()
