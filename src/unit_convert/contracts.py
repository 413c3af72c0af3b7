from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class SameUnitPolicy(str, Enum):
    """
    What to do when source and target unit are the same.

    REJECT treats it as a user error, like the converter forms do; IDENTITY
    treats it as the trivial conversion and returns the input unchanged.
    """

    REJECT = "reject"
    IDENTITY = "identity"


class UnitConvertError(Exception):
    code = "UNIT_CONVERT_ERROR"


class InvalidUnitError(UnitConvertError):
    code = "INVALID_UNIT"


class SameUnitError(UnitConvertError):
    code = "SAME_UNIT"


class InvalidValueError(UnitConvertError):
    code = "INVALID_VALUE"


class UnknownTableError(UnitConvertError):
    code = "UNKNOWN_TABLE"


@dataclass(frozen=True, slots=True)
class Unit:
    code: str
    name: str
    to_base: float  # how many base units one of this unit is

    def __post_init__(self) -> None:
        if not (math.isfinite(self.to_base) and self.to_base > 0):
            raise ValueError(f"to_base must be a positive finite number (unit {self.code!r})")


@dataclass(frozen=True, slots=True)
class UnitTable:
    """
    A family of units sharing one base unit.

    Every factor in the table is relative to `base_code`, so any two units
    convert through the base without a pairwise table.
    """

    name: str
    base_code: str
    units: tuple[Unit, ...]

    def __post_init__(self) -> None:
        codes = [u.code for u in self.units]
        if len(set(codes)) != len(codes):
            raise ValueError(f"duplicate unit codes in table {self.name!r}")
        if self.base_code not in codes:
            raise ValueError(f"base unit {self.base_code!r} missing from table {self.name!r}")

    def codes(self) -> list[str]:
        return [u.code for u in self.units]

    def get(self, code: str) -> Unit:
        for unit in self.units:
            if unit.code == code:
                return unit
        raise InvalidUnitError(f"Unknown unit {code!r} for table {self.name!r}")


@dataclass(frozen=True, slots=True)
class ConvertError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ConvertConfig:
    table: str
    from_code: str
    to_code: str
    value: float
    same_unit: SameUnitPolicy = SameUnitPolicy.REJECT

    def __post_init__(self) -> None:
        if not isinstance(self.same_unit, SameUnitPolicy):
            raise TypeError("same_unit must be a SameUnitPolicy")


@dataclass(frozen=True, slots=True)
class ConvertResult:
    ok: bool
    table: str
    from_code: str
    to_code: str
    input_value: float
    value: float | None
    display: str | None
    errors: list[ConvertError]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
