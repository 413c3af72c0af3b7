from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .contracts import ALLOWED_INDENTS, Record

# Largest float range where every integer is exactly representable.
_MAX_SAFE_INTEGER = 2**53 - 1


def _json_number(value: Any) -> Any:
    # Integral floats are written as JSON integers (30, not 30.0).
    if isinstance(value, float) and value.is_integer() and abs(value) <= _MAX_SAFE_INTEGER:
        return int(value)
    return value


def serialize_records(records: list[Record], indent: int = 2) -> str:
    """
    JSON array of objects; indent 0 yields a compact single line.
    """

    if indent not in ALLOWED_INDENTS:
        raise ValueError(f"indent must be one of {ALLOWED_INDENTS}")

    payload = [{k: _json_number(v) for k, v in record.items()} for record in records]
    if indent == 0:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(payload, ensure_ascii=False, indent=indent)


def write_json_artifact(*, json_text: str, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(json_text + "\n", encoding="utf-8")
