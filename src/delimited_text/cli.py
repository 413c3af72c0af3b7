from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .artifacts import write_json_artifact
from .contracts import ALLOWED_INDENTS, DuplicateHeaderPolicy, ParseConfig
from .module import run_tsv_to_json


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="toolbox-tsv-to-json",
        description="Convert tab-separated text (header row first) to a JSON array of objects.",
    )
    p.add_argument("input", type=Path, help="Input TSV file (UTF-8).")
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output JSON file. Default: print to stdout.",
    )
    p.add_argument(
        "--indent",
        type=int,
        choices=ALLOWED_INDENTS,
        default=2,
        help="JSON indentation (0 = compact).",
    )
    p.add_argument(
        "--delimiter",
        default="\t",
        help="Cell delimiter (default: tab; a literal \\t is accepted).",
    )
    p.add_argument(
        "--duplicate-headers",
        choices=[m.value for m in DuplicateHeaderPolicy],
        default=DuplicateHeaderPolicy.OVERWRITE.value,
        help="How to handle repeated header names.",
    )
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    config = ParseConfig(
        input_file=args.input,
        delimiter="\t" if args.delimiter == "\\t" else args.delimiter,
        indent=args.indent,
        duplicate_headers=DuplicateHeaderPolicy(args.duplicate_headers),
    )
    result = run_tsv_to_json(config=config)

    if not result.ok:
        for e in result.errors:
            print(f"{e.code}: {e.message}", file=sys.stderr)
        return 2

    json_text = result.json_text or "[]"
    if args.out is None:
        print(json_text)
    else:
        write_json_artifact(json_text=json_text, out_file=args.out)
        stats = result.stats
        if stats is not None:
            print(
                f"rows={stats.rows} columns={stats.columns} "
                f"input_bytes={stats.input_bytes} output_bytes={stats.output_bytes}"
            )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
