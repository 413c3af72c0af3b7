from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .artifacts import default_text_path, write_result_json, write_text_artifact
from .contracts import OcrPdfConfig
from .module import run_ocr_pdf


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="toolbox-ocr-pdf",
        description="Extract text from a scanned PDF: render each page, OCR it, join with page markers.",
    )
    p.add_argument("pdf", type=Path, help="Input PDF file.")
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output .txt file (default: next to the PDF).",
    )
    p.add_argument(
        "--json-out",
        type=Path,
        default=None,
        help="Also write the full result (pages, errors, meta) as JSON.",
    )
    p.add_argument(
        "--scale",
        type=float,
        default=2.0,
        help="Render scale relative to 72 dpi (default: 2.0).",
    )
    p.add_argument(
        "--language",
        default="eng",
        help="Tesseract language hint (default: eng).",
    )
    p.add_argument(
        "--psm",
        type=int,
        default=None,
        help="Tesseract page segmentation mode (optional).",
    )
    p.add_argument(
        "--timeout-s",
        type=float,
        default=120.0,
        help="Tesseract timeout per page in seconds.",
    )
    p.add_argument(
        "--compute-source-sha256",
        action="store_true",
        help="Include SHA-256 of the source PDF in meta for auditing.",
    )
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return p


def _print_progress(current: int, total: int) -> None:
    print(f"Processing page {current} of {total}...", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    config = OcrPdfConfig(
        scale=args.scale,
        language=args.language,
        psm=args.psm,
        timeout_s=args.timeout_s,
        compute_source_sha256=args.compute_source_sha256,
    )

    result = run_ocr_pdf(config=config, pdf_file=args.pdf, on_progress=_print_progress)
    if args.json_out is not None:
        write_result_json(result=result, out_file=args.json_out)

    if not result.ok:
        for e in result.errors:
            print(f"{e.code}: {e.message}", file=sys.stderr)
        return 2

    out_file = args.out if args.out is not None else default_text_path(args.pdf)
    write_text_artifact(text=result.text, out_file=out_file)
    print(f"pages={result.page_count} chars={len(result.text)} out={out_file}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
