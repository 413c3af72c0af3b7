from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# A sniffed cell: bool for "true"/"false", float for numeric literals, else str.
CellValue = Union[str, float, bool]
Record = dict[str, CellValue]

ALLOWED_INDENTS = (0, 2, 4)


class DuplicateHeaderPolicy(str, Enum):
    """
    How repeated header names are handled.

    OVERWRITE keeps the historical behaviour: the later column wins, and the
    key stays where it first appeared.
    """

    OVERWRITE = "overwrite"
    REJECT = "reject"
    RENAME = "rename"


class DelimitedTextError(Exception):
    code = "DELIMITED_TEXT_ERROR"


class InsufficientRowsError(DelimitedTextError):
    code = "INSUFFICIENT_ROWS"


class DuplicateHeaderError(DelimitedTextError):
    code = "DUPLICATE_HEADERS"


@dataclass(frozen=True, slots=True)
class ParseError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ParseStats:
    rows: int
    columns: int
    input_bytes: int
    output_bytes: int


@dataclass(frozen=True, slots=True)
class ParseConfig:
    input_file: Path
    delimiter: str = "\t"
    indent: int = 2
    duplicate_headers: DuplicateHeaderPolicy = DuplicateHeaderPolicy.OVERWRITE

    def __post_init__(self) -> None:
        if not isinstance(self.input_file, Path):
            raise TypeError("input_file must be a pathlib.Path")
        if len(self.delimiter) != 1 or self.delimiter == "\n":
            raise ValueError("delimiter must be a single non-newline character")
        if self.indent not in ALLOWED_INDENTS:
            raise ValueError(f"indent must be one of {ALLOWED_INDENTS}")


@dataclass(frozen=True, slots=True)
class ParseResult:
    ok: bool
    source_file: str
    records: list[Record]
    json_text: str | None
    stats: ParseStats | None
    errors: list[ParseError]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
