"""
Batch crop worker for parallel image processing.

``process_worker`` is imported in child processes spawned by
``concurrent.futures.ProcessPoolExecutor``; its arguments and results are
plain dicts so they pickle cleanly.  Every image is resolved independently,
so no state is shared between workers.
"""

import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

from automated_crop.config import JPEG_QUALITY_DEFAULT, OUTPUT_FORMAT_DEFAULT, PNG_COMPRESS_LEVEL
from automated_crop.effect import crop
from automated_crop.image_io import open_image, unique_path

logger = logging.getLogger(__name__)


def process_worker(args: dict) -> dict:
    """Worker function for parallel image processing. Runs in a separate process.

    ``args`` holds ``index``, ``path``, ``output_root``, the effect
    ``config`` dict and optional ``export`` settings.  The result dict
    carries ``success`` and either the crop ``box`` ``(x, y, w, h)`` and
    output ``out_path`` or an ``error`` string.
    """
    idx = args["index"]
    img_path = Path(args["path"])
    output_root = Path(args["output_root"])
    config = args.get("config") or {}
    export = args.get("export", {})

    # Export settings with defaults
    fmt = export.get("format", OUTPUT_FORMAT_DEFAULT)
    compress = export.get("compress_level", PNG_COMPRESS_LEVEL)
    jpeg_quality = export.get("jpeg_quality", JPEG_QUALITY_DEFAULT)
    jpeg_optimize = export.get("jpeg_optimize", True)

    try:
        with open_image(img_path) as img:
            cropped, box = crop(img, config)

        output_root.mkdir(parents=True, exist_ok=True)
        if fmt == "JPEG":
            out_path = unique_path(output_root / f"{img_path.stem}.jpg")
            cropped.convert("RGB").save(
                str(out_path), "JPEG",
                quality=jpeg_quality,
                optimize=jpeg_optimize,
            )
        else:
            out_path = unique_path(output_root / f"{img_path.stem}.png")
            if cropped.mode == "CMYK":
                cropped = cropped.convert("RGB")
            cropped.save(str(out_path), "PNG", compress_level=compress)

        return {
            "index": idx,
            "success": True,
            "name": img_path.name,
            "box": box.as_tuple(),
            "out_path": str(out_path),
        }
    except Exception as e:
        return {"index": idx, "success": False, "name": img_path.name, "error": str(e)}


def run_batch(
    paths: list[Path],
    config: dict,
    output_root: Path,
    workers: int | None = None,
    export: dict | None = None,
) -> list[dict]:
    """
    Crop every image in *paths* into *output_root* in parallel.

    Returns the worker result dicts in the same order as *paths*.
    """
    if workers is None:
        workers = max(1, (os.cpu_count() or 4) - 1)
    args_list = [
        {
            "index": i,
            "path": str(p),
            "output_root": str(output_root),
            "config": config,
            "export": export or {},
        }
        for i, p in enumerate(paths)
    ]
    if not args_list:
        return []
    results: list[dict | None] = [None] * len(args_list)

    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(process_worker, args): args["index"] for args in args_list}

        for future in as_completed(futures):
            result = future.result()
            results[result["index"]] = result
            if result["success"]:
                logger.info("Cropped %s → %s", result["name"], result["out_path"])
            else:
                logger.error("Failed to crop %s: %s", result["name"], result["error"])

    return results
