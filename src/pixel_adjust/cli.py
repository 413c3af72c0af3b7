from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .artifacts import output_filename, write_png_artifact
from .contracts import AMOUNT_MAX, AMOUNT_MIN, AdjustConfig, AdjustMode
from .module import run_adjust_image


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="toolbox-adjust-image",
        description="Adjust brightness or contrast (or convert to grayscale) and write a PNG.",
    )
    p.add_argument("image", type=Path, help="Input image file (any Pillow-readable format).")
    p.add_argument(
        "--mode",
        choices=[m.value for m in AdjustMode],
        default=AdjustMode.BRIGHTNESS.value,
        help="Adjustment to apply.",
    )
    p.add_argument(
        "--amount",
        type=int,
        default=0,
        help=f"Adjustment amount in [{AMOUNT_MIN}, {AMOUNT_MAX}] (ignored for grayscale).",
    )
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output PNG path. Default: <mode>-<amount>-<name>.png next to the input.",
    )
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    mode = AdjustMode(args.mode)
    config = AdjustConfig(image_file=args.image, mode=mode, amount=args.amount)
    result = run_adjust_image(config=config)

    if result.ok and result.png_bytes is not None:
        out_file = args.out or args.image.with_name(
            output_filename(mode=mode, amount=args.amount, source_name=args.image.name)
        )
        write_png_artifact(png_bytes=result.png_bytes, out_file=out_file)

    print(json.dumps(result.to_dict(), ensure_ascii=False, sort_keys=True, indent=2))
    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
