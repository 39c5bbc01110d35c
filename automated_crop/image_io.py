"""
Image I/O utilities.

Provides helpers to open images (including PSD), read dimensions without
full loading, discover image files and generate unique output paths.
Safe to import in worker processes.
"""

from itertools import chain, count
from pathlib import Path

from PIL import Image
from psd_tools import PSDImage

from automated_crop.config import IMAGE_EXTENSIONS

# Allow very large images (Pillow's default limit is ~178MP)
Image.MAX_IMAGE_PIXELS = None


def open_image(path: Path) -> Image.Image:
    """Open an image file, using psd-tools for PSD, Pillow for the rest."""
    if path.suffix.lower() == ".psd":
        psd = PSDImage.open(str(path))
        return psd.composite()
    return Image.open(path)


def get_image_size(path: Path) -> tuple[int, int]:
    """Get image dimensions without fully loading/compositing."""
    if path.suffix.lower() == ".psd":
        psd = PSDImage.open(str(path))
        return psd.width, psd.height
    with Image.open(path) as img:
        return img.size


def find_images(root: Path, recursive: bool = False) -> list[Path]:
    """Return supported image files under *root*, sorted by path.

    A *root* that is itself a file is returned as a one-element list
    when its extension is supported.
    """
    if root.is_file():
        return [root] if root.suffix.lower() in IMAGE_EXTENSIONS else []
    pattern = "**/*" if recursive else "*"
    return sorted(
        p for p in root.glob(pattern)
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )


def unique_path(out_path: Path) -> Path:
    """Return *out_path*, or the first free ``<stem>-NN<suffix>`` sibling when it is taken."""
    numbered = (out_path.with_name(f"{out_path.stem}-{n:02d}{out_path.suffix}") for n in count(1))
    return next(p for p in chain([out_path], numbered) if not p.exists())
