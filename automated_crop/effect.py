"""
Automated crop image effect.

Glue between an effect configuration dict (see ``config.DEFAULT_EFFECT_CONFIG``)
and Pillow: resolve the crop box for an image's size, then crop the pixels
with ``Image.crop``.  ``transform_dimensions`` reports the output size
without touching pixels, and ``summarize`` renders a configuration for
display.
"""

import logging

from PIL import Image

from automated_crop.config import DEFAULT_EFFECT_CONFIG, UNCONSTRAINED
from automated_crop.errors import CropError
from automated_crop.models import CropBox, CropConstraints, OriginalImage
from automated_crop.resolver import resolve

logger = logging.getLogger(__name__)


def effect_config(config: dict | None = None) -> dict:
    """Return *config* merged over the default effect configuration."""
    merged = dict(DEFAULT_EFFECT_CONFIG)
    if config:
        merged.update(config)
    return merged


def compute_crop(size: tuple[int, int], config: dict | None = None, strict: bool = False) -> CropBox:
    """Resolve the crop box for an image of *size* (``(width, height)``).

    With *strict*, a malformed aspect ratio raises ``InvalidAspectRatio``
    instead of falling back to the image ratio.
    """
    config = effect_config(config)
    image = OriginalImage(*size)
    constraints = CropConstraints.from_config(config, strict=strict)
    return resolve(image, constraints, config["strategy"])


def transform_dimensions(size: tuple[int, int], config: dict | None = None) -> tuple[int, int]:
    """Return the ``(width, height)`` the effect produces for an image of *size*."""
    box = compute_crop(size, config)
    return box.width, box.height


def crop(image: Image.Image, config: dict | None = None) -> tuple[Image.Image, CropBox]:
    """
    Crop *image* according to *config*.

    Returns the cropped copy and the box it was cut from.  Resolution
    failures are logged with the image's size and mode, then re-raised.
    """
    try:
        box = compute_crop(image.size, config)
    except CropError as exc:
        logger.error(
            "Automated crop failed on %s image (%dx%d): %s",
            image.mode, image.width, image.height, exc,
        )
        raise
    logger.debug("Cropping %dx%d image at %s", image.width, image.height, box)
    return image.crop(box.to_pillow_box()), box


def apply_effect(image: Image.Image, config: dict | None = None) -> Image.Image:
    """Crop *image* according to *config* and return the cropped copy."""
    cropped, _ = crop(image, config)
    return cropped


def _is_set(value) -> bool:
    return value not in (None, "")


def summarize(config: dict | None = None) -> str:
    """One-line human-readable summary of an effect configuration."""
    config = effect_config(config)
    parts = []

    w, h = config["width"], config["height"]
    if _is_set(w) or _is_set(h):
        parts.append(f"{w if _is_set(w) else 'auto'}×{h if _is_set(h) else 'auto'}")

    for prefix in ("min", "max"):
        pw, ph = config[f"{prefix}_width"], config[f"{prefix}_height"]
        if _is_set(pw) or _is_set(ph):
            parts.append(f"{prefix} {pw if _is_set(pw) else '-'}×{ph if _is_set(ph) else '-'}")

    ratio = config["aspect_ratio"]
    parts.append("original ratio" if ratio in (None, "", UNCONSTRAINED) else f"ratio {ratio}")

    area = config["auto_crop_area"]
    if _is_set(area) and float(area) != 1:
        parts.append(f"area {float(area):.0%}")

    parts.append(f"strategy {config['strategy']}")
    return ", ".join(parts)
