"""
Unit conversion through a shared base unit.

Each `UnitTable` holds units that all express a factor relative to one
base unit (byte, meter, liter, ...). Converting multiplies into the base and
divides out of it; formatting for display is kept separate from the
arithmetic.
"""

from .contracts import (
    ConvertConfig,
    ConvertError,
    ConvertResult,
    InvalidUnitError,
    InvalidValueError,
    SameUnitError,
    SameUnitPolicy,
    Unit,
    UnitConvertError,
    UnitTable,
    UnknownTableError,
)
from .module import convert, format_quantity, run_unit_conversion
from .tables import get_table, list_tables

__all__ = [
    "ConvertConfig",
    "ConvertError",
    "ConvertResult",
    "InvalidUnitError",
    "InvalidValueError",
    "SameUnitError",
    "SameUnitPolicy",
    "Unit",
    "UnitConvertError",
    "UnitTable",
    "UnknownTableError",
    "convert",
    "format_quantity",
    "get_table",
    "list_tables",
    "run_unit_conversion",
]
