from __future__ import annotations

import logging
import math
import re

from .artifacts import serialize_records
from .contracts import (
    CellValue,
    DelimitedTextError,
    DuplicateHeaderError,
    DuplicateHeaderPolicy,
    InsufficientRowsError,
    ParseConfig,
    ParseError,
    ParseResult,
    ParseStats,
    Record,
)

logger = logging.getLogger(__name__)

# Numeric literals accepted the way a JavaScript Number() cast accepts them.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_PREFIXED_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def _parse_number(value: str) -> float | None:
    if _DECIMAL_RE.fullmatch(value):
        number = float(value)
    elif _PREFIXED_RE.fullmatch(value):
        number = float(int(value, 0))
    else:
        return None
    return number if math.isfinite(number) else None


def sniff_cell(value: str) -> CellValue:
    """
    Infer a cell's type from its (already trimmed) text.

    Order is fixed: "true", "false", finite number, then string.
    """

    if value == "true":
        return True
    if value == "false":
        return False
    if value != "":
        number = _parse_number(value)
        if number is not None:
            return number
    return value


def _apply_header_policy(headers: list[str], policy: DuplicateHeaderPolicy) -> list[str]:
    if len(set(headers)) == len(headers) or policy == DuplicateHeaderPolicy.OVERWRITE:
        return headers

    if policy == DuplicateHeaderPolicy.REJECT:
        dupes = sorted({h for h in headers if headers.count(h) > 1})
        raise DuplicateHeaderError(f"Duplicate header names: {', '.join(repr(d) for d in dupes)}")

    # RENAME: later occurrences get _2, _3, ... skipping names already taken
    taken = set(headers)
    counts: dict[str, int] = {}
    renamed: list[str] = []
    for h in headers:
        n = counts.get(h, 0) + 1
        counts[h] = n
        if n == 1:
            renamed.append(h)
            continue
        candidate = f"{h}_{n}"
        while candidate in taken:
            n += 1
            candidate = f"{h}_{n}"
        counts[h] = n
        taken.add(candidate)
        renamed.append(candidate)
    return renamed


def parse(
    text: str,
    *,
    delimiter: str = "\t",
    duplicate_headers: DuplicateHeaderPolicy = DuplicateHeaderPolicy.OVERWRITE,
) -> list[Record]:
    """
    Parse delimited text (TSV by default) into typed records.

    The first line is the header. For every following line, cell `i` maps to
    header `i`; missing cells become "" and cells beyond the header count are
    dropped. Either every record is returned or an error is raised.

    Raises:
        InsufficientRowsError: fewer than a header line plus one data line.
        DuplicateHeaderError: repeated header names under the REJECT policy.
    """

    lines = text.strip().split("\n")
    if len(lines) < 2:
        raise InsufficientRowsError(
            "Input must contain a header row and at least one data row"
        )

    headers = [h.strip() for h in lines[0].split(delimiter)]
    headers = _apply_header_policy(headers, duplicate_headers)

    records: list[Record] = []
    for line in lines[1:]:
        values = line.split(delimiter)
        record: Record = {}
        for i, header in enumerate(headers):
            cell = values[i].strip() if i < len(values) else ""
            record[header] = sniff_cell(cell)
        records.append(record)

    return records


def run_tsv_to_json(*, config: ParseConfig) -> ParseResult:
    """
    File-level entrypoint: read, parse, and serialize to a JSON array.
    """

    source = str(config.input_file)

    if not config.input_file.is_file():
        return ParseResult(
            ok=False,
            source_file=source,
            records=[],
            json_text=None,
            stats=None,
            errors=[
                ParseError(
                    code="INPUT_NOT_FOUND",
                    message="Input file not found",
                    detail={"input_file": source},
                )
            ],
        )

    try:
        # utf-8-sig drops a leading BOM so it never lands in the first header
        text = config.input_file.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        return ParseResult(
            ok=False,
            source_file=source,
            records=[],
            json_text=None,
            stats=None,
            errors=[
                ParseError(
                    code="INPUT_NOT_UTF8",
                    message="Input file is not valid UTF-8",
                    detail={"input_file": source, "byte_offset": e.start},
                )
            ],
        )

    try:
        records = parse(
            text,
            delimiter=config.delimiter,
            duplicate_headers=config.duplicate_headers,
        )
    except DelimitedTextError as e:
        return ParseResult(
            ok=False,
            source_file=source,
            records=[],
            json_text=None,
            stats=None,
            errors=[ParseError(code=e.code, message=str(e), detail={"input_file": source})],
        )

    json_text = serialize_records(records, indent=config.indent)
    stats = ParseStats(
        rows=len(records),
        columns=len(records[0]) if records else 0,
        input_bytes=len(text.encode("utf-8")),
        output_bytes=len(json_text.encode("utf-8")),
    )
    logger.info(
        "[TSV] %s: %d rows x %d columns (%d -> %d bytes)",
        config.input_file.name,
        stats.rows,
        stats.columns,
        stats.input_bytes,
        stats.output_bytes,
    )
    return ParseResult(
        ok=True,
        source_file=source,
        records=records,
        json_text=json_text,
        stats=stats,
        errors=[],
    )
