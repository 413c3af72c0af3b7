from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

PAGE_MARKER = "--- Page {page_num} ---"


class RasterizerName(str, Enum):
    PYPDFIUM2 = "pypdfium2"


class OcrEngineName(str, Enum):
    TESSERACT_CLI = "tesseract_cli"


class OcrPdfError(Exception):
    code = "OCR_PDF_ERROR"


class InputNotPdfError(OcrPdfError):
    code = "OCR_INPUT_NOT_PDF"


class BackendNotInstalledError(OcrPdfError):
    code = "OCR_BACKEND_NOT_INSTALLED"


class UnderlyingLibraryFailure(OcrPdfError):
    """
    A rasterizer or recognizer call failed; the whole document is aborted.

    `page_num` is 1-indexed, or None when the failure happened before any
    page was processed (e.g. reading the page count).
    """

    code = "OCR_BACKEND_FAILED"
    _STAGE_CODES = {
        "open": "OCR_WORKER_START_FAILED",
        "pagecount": "OCR_PAGECOUNT_FAILED",
        "render": "OCR_RENDER_FAILED",
        "recognize": "OCR_RECOGNIZE_FAILED",
        "close": "OCR_WORKER_CLOSE_FAILED",
    }

    def __init__(self, *, stage: str, page_num: int | None, cause: BaseException) -> None:
        self.stage = stage
        self.page_num = page_num
        self.cause = cause
        self.code = self._STAGE_CODES.get(stage, UnderlyingLibraryFailure.code)
        where = f" on page {page_num}" if page_num is not None else ""
        super().__init__(f"{stage} failed{where}: {type(cause).__name__}: {cause}")


@dataclass(frozen=True, slots=True)
class OcrError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class PageText:
    page_num: int  # 1-indexed
    text: str


@dataclass(frozen=True, slots=True)
class OcrPdfResult:
    """
    Machine-readable OCR outcome for one PDF.

    On failure `ok` is False and `pages`/`text` are empty: a document is
    either recognized completely or not at all.
    """

    ok: bool
    source_pdf: str | None
    page_count: int
    pages: list[PageText]
    text: str
    errors: list[OcrError]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class OcrPdfConfig:
    rasterizer: RasterizerName = RasterizerName.PYPDFIUM2
    engine: OcrEngineName = OcrEngineName.TESSERACT_CLI
    scale: float = 2.0  # render scale relative to 72 dpi
    language: str = "eng"
    psm: int | None = None  # Tesseract page segmentation mode; None => engine default
    timeout_s: float = 120.0  # per recognize call
    compute_source_sha256: bool = False

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("scale must be > 0")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        if not self.language.strip():
            raise ValueError("language must be a non-empty Tesseract language code")
