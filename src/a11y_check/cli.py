from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .contracts import DEFAULT_USER_AGENT, CheckConfig
from .module import run_accessibility_check


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="toolbox-a11y",
        description="Fetch web pages and report static accessibility (WCAG) findings as JSON.",
    )
    p.add_argument("urls", nargs="+", help="One or more URLs (https:// is assumed when no scheme).")
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output JSON file. Default: print to stdout.",
    )
    p.add_argument(
        "--timeout-s",
        type=float,
        default=15.0,
        help="Per-request timeout in seconds.",
    )
    p.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header to send.")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    config = CheckConfig(urls=tuple(args.urls), timeout_s=args.timeout_s, user_agent=args.user_agent)
    result = run_accessibility_check(config=config)

    payload = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if args.out is None:
        print(payload)
    else:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(payload + "\n", encoding="utf-8")

    if not result.ok:
        for e in result.errors:
            print(f"{e.code}: {e.message}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
