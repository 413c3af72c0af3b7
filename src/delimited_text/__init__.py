"""
Delimited text (TSV) to typed JSON records.

Cells are type-sniffed independently: "true"/"false" become booleans,
finite numeric literals become floats, everything else stays a string.
"""

from .artifacts import serialize_records, write_json_artifact
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
from .module import parse, run_tsv_to_json, sniff_cell

__all__ = [
    "CellValue",
    "DelimitedTextError",
    "DuplicateHeaderError",
    "DuplicateHeaderPolicy",
    "InsufficientRowsError",
    "ParseConfig",
    "ParseError",
    "ParseResult",
    "ParseStats",
    "Record",
    "parse",
    "run_tsv_to_json",
    "serialize_records",
    "sniff_cell",
    "write_json_artifact",
]
