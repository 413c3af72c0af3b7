from __future__ import annotations

import argparse
import json
import logging

from .contracts import ConvertConfig, SameUnitPolicy, UnitConvertError
from .module import run_unit_conversion
from .tables import get_table, list_tables


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="toolbox-convert",
        description="Convert a value between two units of the same table.",
    )
    p.add_argument(
        "--table",
        required=True,
        choices=list_tables(),
        help="Unit table to convert within.",
    )
    p.add_argument("--list", action="store_true", help="List the unit codes of --table and exit.")
    p.add_argument("--from", dest="from_code", default=None, help="Source unit code.")
    p.add_argument("--to", dest="to_code", default=None, help="Target unit code.")
    p.add_argument("value", nargs="?", type=float, default=None, help="Value to convert (>= 0).")
    p.add_argument(
        "--same-unit",
        choices=[m.value for m in SameUnitPolicy],
        default=SameUnitPolicy.REJECT.value,
        help="Reject identical source/target units, or return the value unchanged.",
    )
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    if args.list:
        try:
            table = get_table(args.table)
        except UnitConvertError as e:
            parser.error(str(e))
        for unit in table.units:
            print(f"{unit.code}\t{unit.name}")
        return 0

    if args.from_code is None or args.to_code is None or args.value is None:
        parser.error("--from, --to and a value are required unless --list is given")

    config = ConvertConfig(
        table=args.table,
        from_code=args.from_code,
        to_code=args.to_code,
        value=args.value,
        same_unit=SameUnitPolicy(args.same_unit),
    )
    result = run_unit_conversion(config=config)
    print(json.dumps(result.to_dict(), ensure_ascii=False, sort_keys=True, indent=2))

    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
