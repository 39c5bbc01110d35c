"""
Crop strategies: interchangeable policies for sizing the crop box.

Every strategy runs the same single-pass pipeline (see ``CropStrategy.resolve``)
and differs only in how it derives the base width/height from the request
before clamping.  Strategies are selected by id from ``STRATEGIES``:

* ``native`` (default): explicit sizes drive the box; with no sizes the
  image width is used and the height follows the aspect ratio, corrected
  down to the max bounds.  Width wins when both sizes are given and a ratio
  is enforced.
* ``height_first``: same as ``native`` but height wins when both sizes are
  given and a ratio is enforced.
* ``automated_crop_default``: ignores explicit sizes and takes the largest
  box of the aspect ratio that fits inside the max bounds.
"""

import logging
from abc import ABC, abstractmethod

from automated_crop.config import DEFAULT_STRATEGY
from automated_crop.errors import InfeasibleConstraints, UnknownStrategy
from automated_crop.geometry import Bounds, center_crop, clamp, effective_bounds, fit_ratio, round_half_away, shrink
from automated_crop.models import CropBox, CropConstraints, OriginalImage
from automated_crop.ratios import AspectRatio, is_valid_aspect_ratio, parse_aspect_ratio

logger = logging.getLogger(__name__)


# =============================================================================
# Base class
# =============================================================================
class CropStrategy(ABC):
    """A policy for turning an image and constraints into a crop box."""

    strategy_id: str = ""
    label: str = ""

    def resolve(self, image: OriginalImage, constraints: CropConstraints) -> CropBox:
        """
        Resolve the crop box for *image*.

        Steps: effective bounds, effective aspect ratio, base size
        (strategy specific), clamp to bounds, auto-crop-area shrink, center.
        Raises ``InfeasibleConstraints`` if the bounds conflict or a
        dimension collapses to zero.
        """
        bounds = effective_bounds(image, constraints)
        ratio = parse_aspect_ratio(constraints.aspect_ratio, image.width, image.height)

        base_w, base_h = self.base_size(image, constraints, bounds, ratio)

        width = clamp(base_w, bounds.min_width, bounds.max_width)
        height = clamp(base_h, bounds.min_height, bounds.max_height)
        width, height = shrink(width, height, bounds, constraints.auto_crop_area)

        if width <= 0 or height <= 0:
            raise InfeasibleConstraints(
                f"Crop box collapsed to {width}x{height} on a {image.width}x{image.height} image"
            )

        box = center_crop(image.width, image.height, width, height)
        logger.debug(
            "%s: %dx%d, ratio %s, base %sx%s → %s",
            self.strategy_id, image.width, image.height, ratio, base_w, base_h, box,
        )
        return box

    @abstractmethod
    def base_size(
        self,
        image: OriginalImage,
        constraints: CropConstraints,
        bounds: Bounds,
        ratio: AspectRatio,
    ) -> tuple[int, int]:
        """Return the unclamped ``(width, height)`` for this request."""


# =============================================================================
# Strategies
# =============================================================================
class NativeCrop(CropStrategy):
    """Size from explicit width/height, falling back to the image width."""

    strategy_id = "native"
    label = "Automated crop (native)"

    def base_size(self, image, constraints, bounds, ratio):
        if not constraints.has_sizes:
            return self._from_image(image, bounds, ratio)

        # Without an enforced ratio, hard sizes are taken as given
        if constraints.has_hard_sizes and not is_valid_aspect_ratio(constraints.aspect_ratio):
            return constraints.width, constraints.height

        return self._from_sizes(constraints, ratio)

    def _from_image(self, image: OriginalImage, bounds: Bounds, ratio: AspectRatio) -> tuple[int, int]:
        delta = ratio.delta
        width = image.width
        height = round_half_away(width * delta)
        # Too tall: derive width from the height limit instead
        if height > bounds.max_height:
            height = bounds.max_height
            width = round_half_away(height / delta)
        if width > bounds.max_width:
            width = bounds.max_width
            height = round_half_away(width * delta)
        return width, height

    def _from_sizes(self, constraints: CropConstraints, ratio: AspectRatio) -> tuple[int, int]:
        if constraints.width is not None:
            return constraints.width, round_half_away(constraints.width * ratio.delta)
        return round_half_away(constraints.height / ratio.delta), constraints.height


class HeightFirstCrop(NativeCrop):
    """Like ``NativeCrop`` but the explicit height is authoritative."""

    strategy_id = "height_first"
    label = "Automated crop (height first)"

    def _from_sizes(self, constraints, ratio):
        if constraints.height is not None:
            return round_half_away(constraints.height / ratio.delta), constraints.height
        return constraints.width, round_half_away(constraints.width * ratio.delta)


class MaximalCrop(CropStrategy):
    """Largest box of the aspect ratio that fits inside the max bounds."""

    strategy_id = "automated_crop_default"
    label = "Automated crop (maximal)"

    def base_size(self, image, constraints, bounds, ratio):
        return fit_ratio(bounds.max_width, bounds.max_height, ratio.delta)


# =============================================================================
# Registry
# =============================================================================
STRATEGIES: dict[str, type[CropStrategy]] = {
    cls.strategy_id: cls for cls in (NativeCrop, HeightFirstCrop, MaximalCrop)
}


def get_strategy(strategy=None) -> CropStrategy:
    """
    Return a strategy instance.

    *strategy* may be an id from ``STRATEGIES``, an existing ``CropStrategy``
    instance (returned as-is), or None for ``DEFAULT_STRATEGY``.  Raises
    ``UnknownStrategy`` for unregistered ids.
    """
    if isinstance(strategy, CropStrategy):
        return strategy
    strategy_id = DEFAULT_STRATEGY if strategy is None else strategy
    try:
        cls = STRATEGIES[strategy_id]
    except KeyError:
        raise UnknownStrategy(strategy_id, STRATEGIES) from None
    return cls()
