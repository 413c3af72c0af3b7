"""
Scanned-PDF text extraction.

Each page is rendered to an image (pypdfium2) and recognized (Tesseract),
strictly one page at a time, with a single OCR worker held for the whole
document. Page texts are joined with `--- Page N ---` markers. Any page
failure aborts the document and reports the page number.
"""

from .contracts import (
    OcrEngineName,
    OcrError,
    OcrPdfConfig,
    OcrPdfError,
    OcrPdfResult,
    PageText,
    RasterizerName,
    UnderlyingLibraryFailure,
)
from .module import extract_text, join_pages, run_ocr_pdf, run_ocr_pdf_bytes

__all__ = [
    "OcrEngineName",
    "OcrError",
    "OcrPdfConfig",
    "OcrPdfError",
    "OcrPdfResult",
    "PageText",
    "RasterizerName",
    "UnderlyingLibraryFailure",
    "extract_text",
    "join_pages",
    "run_ocr_pdf",
    "run_ocr_pdf_bytes",
]
