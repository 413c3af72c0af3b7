from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from .contracts import (
    PAGE_MARKER,
    InputNotPdfError,
    OcrEngineName,
    OcrError,
    OcrPdfConfig,
    OcrPdfError,
    OcrPdfResult,
    PageText,
    RasterizerName,
    UnderlyingLibraryFailure,
)
from .engines.base import OcrWorker, PdfRasterizer
from .engines.pypdfium2_engine import Pypdfium2Rasterizer
from .engines.tesseract_cli import TesseractCliWorker

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
T = TypeVar("T")

_PDF_MAGIC = b"%PDF-"


def _get_rasterizer(config: OcrPdfConfig) -> PdfRasterizer:
    if config.rasterizer == RasterizerName.PYPDFIUM2:
        return Pypdfium2Rasterizer()
    raise ValueError(f"Unsupported rasterizer: {config.rasterizer}")


def _get_worker(config: OcrPdfConfig) -> OcrWorker:
    if config.engine == OcrEngineName.TESSERACT_CLI:
        return TesseractCliWorker(language=config.language, psm=config.psm, timeout_s=config.timeout_s)
    raise ValueError(f"Unsupported OCR engine: {config.engine}")


def _guarded(stage: str, page_num: int | None, fn: Callable[..., T], *args: Any) -> T:
    try:
        return fn(*args)
    except OcrPdfError:
        raise
    except Exception as e:
        raise UnderlyingLibraryFailure(stage=stage, page_num=page_num, cause=e) from e


def check_pdf_bytes(pdf_bytes: bytes) -> None:
    if not pdf_bytes:
        raise InputNotPdfError("Input is empty")
    if pdf_bytes.lstrip()[: len(_PDF_MAGIC)] != _PDF_MAGIC:
        raise InputNotPdfError("Input does not look like a PDF (missing %PDF- header)")


def extract_text(
    pdf_bytes: bytes,
    *,
    rasterizer: PdfRasterizer,
    worker: OcrWorker,
    scale: float = 2.0,
    on_progress: Optional[ProgressCallback] = None,
) -> list[PageText]:
    """
    Rasterize and recognize every page of a PDF, in order.

    `worker` is opened once for the whole document and closed on every exit
    path. Page N+1 is not rendered until page N's recognition returns.

    Raises:
        InputNotPdfError: `pdf_bytes` is empty or lacks a PDF header.
        BackendNotInstalledError: the OCR engine is unavailable.
        UnderlyingLibraryFailure: any rasterizer or recognizer call failed;
            carries the stage and the 1-indexed page number.
    """

    check_pdf_bytes(pdf_bytes)

    _guarded("open", None, worker.open)
    try:
        total = _guarded("pagecount", None, rasterizer.page_count, pdf_bytes)
        logger.info("[OCR] %d page(s) at scale %.2f", total, scale)

        pages: list[PageText] = []
        for page_num in range(1, total + 1):
            if on_progress is not None:
                on_progress(page_num, total)
            image = _guarded("render", page_num, rasterizer.render_page, pdf_bytes, page_num, scale)
            text = _guarded("recognize", page_num, worker.recognize, image)
            logger.debug("[OCR][P%03d] %dx%d px -> %d chars", page_num, image.width, image.height, len(text))
            pages.append(PageText(page_num=page_num, text=text))
    except BaseException:
        _close_after_failure(worker)
        raise

    _guarded("close", None, worker.close)
    return pages


def _close_after_failure(worker: OcrWorker) -> None:
    # the page failure already propagating is the error reported
    try:
        worker.close()
    except Exception:
        logger.warning("[OCR] worker close failed after an aborted run", exc_info=True)


def join_pages(pages: list[PageText]) -> str:
    """
    Concatenate page texts, each preceded by a `--- Page N ---` marker line.
    """

    return "".join(
        "\n\n" + PAGE_MARKER.format(page_num=p.page_num) + "\n\n" + p.text for p in pages
    ).strip()


def _meta(config: OcrPdfConfig, rasterizer: PdfRasterizer, worker: OcrWorker) -> dict[str, Any]:
    return {
        **worker.backend_meta(),
        "rasterizer": rasterizer.backend_id(),
        "rasterizer_version": rasterizer.backend_version(),
        "engine": config.engine.value,
        "language": config.language,
        "psm": config.psm,
        "scale": config.scale,
        "timeout_s": config.timeout_s,
    }


def run_ocr_pdf_bytes(
    *,
    config: OcrPdfConfig,
    pdf_bytes: bytes,
    source_pdf: str | None = None,
    on_progress: Optional[ProgressCallback] = None,
) -> OcrPdfResult:
    """
    OCR a PDF held in memory and return an auditable result.

    Expected failures (not a PDF, engine missing, a page failing) are
    returned as `ok=False` with the failing page number in the error detail.
    """

    rasterizer = _get_rasterizer(config)
    worker = _get_worker(config)
    meta = _meta(config, rasterizer, worker)
    if config.compute_source_sha256:
        meta["source_sha256"] = hashlib.sha256(pdf_bytes).hexdigest()

    try:
        pages = extract_text(
            pdf_bytes,
            rasterizer=rasterizer,
            worker=worker,
            scale=config.scale,
            on_progress=on_progress,
        )
    except OcrPdfError as e:
        detail: dict[str, Any] = {"source_pdf": source_pdf}
        if isinstance(e, UnderlyingLibraryFailure):
            detail.update(stage=e.stage, page_num=e.page_num, cause=type(e.cause).__name__)
            logger.error("[OCR] aborted: %s", e)
        return OcrPdfResult(
            ok=False,
            source_pdf=source_pdf,
            page_count=0,
            pages=[],
            text="",
            errors=[OcrError(code=e.code, message=str(e), detail=detail)],
            meta=meta,
        )

    text = join_pages(pages)
    logger.info("[OCR] done: %d page(s), %d chars", len(pages), len(text))
    return OcrPdfResult(
        ok=True,
        source_pdf=source_pdf,
        page_count=len(pages),
        pages=pages,
        text=text,
        errors=[],
        meta=meta,
    )


def run_ocr_pdf(
    *,
    config: OcrPdfConfig,
    pdf_file: Path,
    on_progress: Optional[ProgressCallback] = None,
) -> OcrPdfResult:
    if not pdf_file.is_file():
        return OcrPdfResult(
            ok=False,
            source_pdf=str(pdf_file),
            page_count=0,
            pages=[],
            text="",
            errors=[
                OcrError(
                    code="OCR_INPUT_NOT_FOUND",
                    message="Input PDF file not found",
                    detail={"pdf_file": str(pdf_file)},
                )
            ],
            meta={},
        )

    return run_ocr_pdf_bytes(
        config=config,
        pdf_bytes=pdf_file.read_bytes(),
        source_pdf=str(pdf_file),
        on_progress=on_progress,
    )
