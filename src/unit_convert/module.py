from __future__ import annotations

import logging
import math
from decimal import Decimal

from .contracts import (
    ConvertConfig,
    ConvertError,
    ConvertResult,
    InvalidValueError,
    SameUnitError,
    SameUnitPolicy,
    UnitConvertError,
    UnitTable,
)
from .tables import get_table

logger = logging.getLogger(__name__)


def convert(
    from_code: str,
    to_code: str,
    value: float,
    *,
    table: UnitTable,
    same_unit: SameUnitPolicy = SameUnitPolicy.REJECT,
) -> float:
    """
    Convert `value` from one unit of `table` to another through the base unit.

    No rounding is applied; display rounding lives in `format_quantity`.
    """

    src = table.get(from_code)
    dst = table.get(to_code)

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidValueError(f"Value must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or value < 0:
        raise InvalidValueError(f"Value must be a finite number >= 0, got {value!r}")

    if src.code == dst.code:
        if same_unit == SameUnitPolicy.REJECT:
            raise SameUnitError("Source and target units must be different")
        return float(value)

    return value * src.to_base / dst.to_base


def _trim_fraction(s: str) -> str:
    if "." not in s:
        return s
    return s.rstrip("0").rstrip(".")


def format_quantity(value: float) -> str:
    """
    Magnitude-dependent display string.

    - below 1e-6: exponential, 6 fraction digits
    - below 1: fixed, 10 digits, trailing zeros trimmed
    - below 1000: fixed, 6 digits, trailing zeros trimmed
    - otherwise: thousands-grouped, up to 6 fraction digits
    """

    if value == 0:
        return "0"
    if value < 1e-6:
        mantissa, exp = f"{value:.6e}".split("e")
        return f"{mantissa}e{int(exp):+d}"
    if value < 1:
        return _trim_fraction(f"{value:.10f}")
    if value < 1000:
        return _trim_fraction(f"{value:.6f}")
    # Decimal(repr(...)) keeps the shortest round-trip digits for huge values.
    return _trim_fraction(format(Decimal(repr(float(value))), ",.6f"))


def run_unit_conversion(*, config: ConvertConfig) -> ConvertResult:
    """
    Form-level entrypoint: resolve the table, convert, format for display.

    Expected input errors are returned as `ok=False` results with stable
    error codes rather than raised.
    """

    try:
        table = get_table(config.table)
        value = convert(
            config.from_code,
            config.to_code,
            config.value,
            table=table,
            same_unit=config.same_unit,
        )
    except UnitConvertError as e:
        logger.debug("[CONVERT] %s -> %s rejected: %s", config.from_code, config.to_code, e)
        return ConvertResult(
            ok=False,
            table=config.table,
            from_code=config.from_code,
            to_code=config.to_code,
            input_value=config.value,
            value=None,
            display=None,
            errors=[
                ConvertError(
                    code=e.code,
                    message=str(e),
                    detail={"from": config.from_code, "to": config.to_code},
                )
            ],
        )

    display = f"{format_quantity(value)} {table.get(config.to_code).name}"
    logger.info(
        "[CONVERT] %s %s -> %s (%s)", config.value, config.from_code, config.to_code, display
    )
    return ConvertResult(
        ok=True,
        table=config.table,
        from_code=config.from_code,
        to_code=config.to_code,
        input_value=config.value,
        value=value,
        display=display,
        errors=[],
    )
