"""
Crop-geometry utilities shared by every crop strategy.

These are the size-independent steps of crop resolution: resolving the
effective min/max bounds, clamping, the auto-crop-area shrink, fitting the
largest box of a ratio into a bounding size, and centering.  All rounding
goes through ``round_half_away`` so results are reproducible (Python's
built-in ``round`` rounds half to even).
"""

import math
from typing import NamedTuple

from automated_crop.errors import InfeasibleConstraints
from automated_crop.models import CropBox, CropConstraints, OriginalImage


class Bounds(NamedTuple):
    """Effective size limits for one resolution call."""
    min_width: int
    min_height: int
    max_width: int
    max_height: int


# =============================================================================
# Rounding / clamping
# =============================================================================
def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero. 2.5 → 3, -2.5 → -3"""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def clamp(value, lower, upper):
    """Clamp *value* into ``[lower, upper]``; *lower* wins if they cross."""
    return max(lower, min(value, upper))


# =============================================================================
# Crop math utilities
# =============================================================================
def effective_bounds(image: OriginalImage, constraints: CropConstraints) -> Bounds:
    """
    Resolve min/max limits against the image.

    Missing maxima default to the image dimensions, and explicit maxima
    larger than the image are capped to it so the box always fits.
    Missing minima default to 0.  Raises ``InfeasibleConstraints`` when a
    minimum exceeds its maximum.
    """
    max_w = image.width if constraints.max_width is None else min(constraints.max_width, image.width)
    max_h = image.height if constraints.max_height is None else min(constraints.max_height, image.height)
    min_w = constraints.min_width or 0
    min_h = constraints.min_height or 0

    if min_w > max_w:
        raise InfeasibleConstraints(
            f"min_width {min_w} exceeds the maximum width {max_w} for a {image.width}x{image.height} image"
        )
    if min_h > max_h:
        raise InfeasibleConstraints(
            f"min_height {min_h} exceeds the maximum height {max_h} for a {image.width}x{image.height} image"
        )
    return Bounds(min_w, min_h, max_w, max_h)


def fit_ratio(max_w: int, max_h: int, delta: float) -> tuple[int, int]:
    """Largest ``(w, h)`` with ``h ≈ w * delta`` that fits inside *max_w* × *max_h*."""
    # Try full width
    crop_w = max_w
    crop_h = round_half_away(crop_w * delta)
    if crop_h <= max_h:
        return crop_w, crop_h
    # Full height
    crop_h = max_h
    crop_w = round_half_away(crop_h / delta)
    return min(crop_w, max_w), crop_h


def shrink(width: int, height: int, bounds: Bounds, auto_crop_area: float) -> tuple[int, int]:
    """Apply the auto-crop-area factor without going below the minima."""
    w = max(bounds.min_width, width * auto_crop_area)
    h = max(bounds.min_height, height * auto_crop_area)
    return round_half_away(w), round_half_away(h)


def center_crop(img_w: int, img_h: int, crop_w: int, crop_h: int) -> CropBox:
    """Return a centered crop rectangle, kept inside the image."""
    x = clamp((img_w - crop_w) // 2, 0, img_w - crop_w)
    y = clamp((img_h - crop_h) // 2, 0, img_h - crop_h)
    return CropBox(x, y, crop_w, crop_h)
