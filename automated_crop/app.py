"""
Command-line entry point.

Usage:
    python -m automated_crop.app resolve 1920 1080 --aspect-ratio 16:9
    automated-crop crop photos/ -o cropped/ --width 800 --aspect-ratio 4:3
    automated-crop presets          (after pip install)

Constraint options override the values of ``--preset`` when both are given.
Exit status is 0 on success, 2 for invalid or infeasible input and 1 when
at least one image of a batch failed.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from automated_crop.config import (
    APP_NAME,
    JPEG_QUALITY_DEFAULT,
    JPEG_QUALITY_MAX,
    JPEG_QUALITY_MIN,
    OUTPUT_FORMAT_DEFAULT,
    OUTPUT_FORMATS,
    SIZE_KEYS,
)
from automated_crop.effect import compute_crop, summarize
from automated_crop.errors import CropError
from automated_crop.image_io import find_images
from automated_crop.presets import get_preset, load_presets, validate_effect_config
from automated_crop.strategies import STRATEGIES
from automated_crop.worker import run_batch

logger = logging.getLogger(__name__)


def _jpeg_quality(value: str) -> int:
    quality = int(value)
    if not JPEG_QUALITY_MIN <= quality <= JPEG_QUALITY_MAX:
        raise argparse.ArgumentTypeError(f"must be between {JPEG_QUALITY_MIN} and {JPEG_QUALITY_MAX}")
    return quality


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def _add_constraint_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("crop constraints")
    for key in SIZE_KEYS:
        group.add_argument(f"--{key.replace('_', '-')}", dest=key, type=int, metavar="PX")
    group.add_argument("--aspect-ratio", metavar="W:H", help="enforced ratio, e.g. 16:9 (default: image ratio)")
    group.add_argument("--auto-crop-area", type=float, metavar="FRACTION", help="shrink factor in (0, 1]")
    group.add_argument("--strategy", choices=sorted(STRATEGIES))
    group.add_argument("--preset", help="start from a named preset")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="Compute and apply automated crop boxes.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    resolve_cmd = sub.add_parser("resolve", help="print the crop box for an image size as JSON")
    resolve_cmd.add_argument("original_width", type=int)
    resolve_cmd.add_argument("original_height", type=int)
    _add_constraint_args(resolve_cmd)

    crop_cmd = sub.add_parser("crop", help="crop image files or folders")
    crop_cmd.add_argument("inputs", nargs="+", type=Path, metavar="INPUT")
    crop_cmd.add_argument("-o", "--output", type=Path, required=True, help="output folder")
    crop_cmd.add_argument("-r", "--recursive", action="store_true", help="scan folders recursively")
    crop_cmd.add_argument("--format", choices=OUTPUT_FORMATS, default=OUTPUT_FORMAT_DEFAULT)
    crop_cmd.add_argument("--jpeg-quality", type=_jpeg_quality, default=JPEG_QUALITY_DEFAULT)
    crop_cmd.add_argument("--workers", type=_positive_int, help="worker processes (default: CPU count - 1)")
    _add_constraint_args(crop_cmd)

    sub.add_parser("presets", help="list the configured presets")
    return parser


def build_config(args: argparse.Namespace) -> dict:
    """Effect configuration from ``--preset`` overlaid with explicit options.

    Raises KeyError for an unknown preset name.
    """
    config = get_preset(load_presets(), args.preset) if args.preset else {}
    for key in (*SIZE_KEYS, "aspect_ratio", "auto_crop_area", "strategy"):
        value = getattr(args, key)
        if value is not None:
            config[key] = value
    return config


def _error(message: str) -> int:
    print(f"{APP_NAME}: error: {message}", file=sys.stderr)
    return 2


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "presets":
        for preset in load_presets():
            print(f"{preset['name']}: {summarize(preset['config'])}")
        return 0

    try:
        config = build_config(args)
    except KeyError as exc:
        return _error(exc.args[0])

    errors = validate_effect_config(config)
    if errors:
        return _error("; ".join(errors))

    if args.command == "resolve":
        try:
            box = compute_crop((args.original_width, args.original_height), config, strict=True)
        except CropError as exc:
            return _error(str(exc))
        print(json.dumps(box.as_dict()))
        return 0

    paths = [p for root in args.inputs for p in find_images(root, args.recursive)]
    if not paths:
        return _error("no supported images found")

    logger.info("Cropping %d image(s) with %s", len(paths), summarize(config))
    export = {"format": args.format, "jpeg_quality": args.jpeg_quality}
    results = run_batch(paths, config, args.output, workers=args.workers, export=export)
    failed = [r for r in results if not r["success"]]
    logger.info("Done: %d cropped, %d failed. Output: %s", len(results) - len(failed), len(failed), args.output)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
