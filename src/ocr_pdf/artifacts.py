from __future__ import annotations

import json
from pathlib import Path

from .contracts import OcrPdfResult


def default_text_path(pdf_file: Path) -> Path:
    return pdf_file.with_suffix(".txt")


def write_text_artifact(*, text: str, out_file: Path) -> Path:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(text, encoding="utf-8")
    return out_file


def write_result_json(*, result: OcrPdfResult, out_file: Path) -> Path:
    """
    Write the full result (pages, errors, meta) as stable, sorted JSON.
    """

    out_file.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(result.to_dict(), indent=2, sort_keys=True, ensure_ascii=False)
    out_file.write_text(payload + "\n", encoding="utf-8")
    return out_file
