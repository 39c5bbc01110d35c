"""
Public entry points for crop-box resolution.

``resolve`` works on model objects; ``resolve_crop_box`` takes plain
numbers and is what integrations call.  Both are pure: no state is kept
between calls, so they are safe to call from any number of threads or
worker processes.
"""

from automated_crop.config import AUTO_CROP_AREA_DEFAULT, UNCONSTRAINED
from automated_crop.models import CropBox, CropConstraints, OriginalImage
from automated_crop.strategies import get_strategy


def resolve(image: OriginalImage, constraints: CropConstraints | None = None, strategy=None) -> CropBox:
    """Resolve the crop box for *image* with the given (or default) strategy."""
    if constraints is None:
        constraints = CropConstraints()
    return get_strategy(strategy).resolve(image, constraints)


def resolve_crop_box(
    original_width: int,
    original_height: int,
    width: int | None = None,
    height: int | None = None,
    min_width: int | None = None,
    min_height: int | None = None,
    max_width: int | None = None,
    max_height: int | None = None,
    aspect_ratio: str = UNCONSTRAINED,
    auto_crop_area: float = AUTO_CROP_AREA_DEFAULT,
    strategy=None,
) -> CropBox:
    """
    Compute a crop box for an image of *original_width* × *original_height*.

    Parameters
    ----------
    width, height : int, optional
        Requested crop size.  With an enforced aspect ratio the width wins
        when both are given (``native`` strategy).
    min_width, min_height : int, optional
        Lower bounds, default 0.
    max_width, max_height : int, optional
        Upper bounds, default (and capped) to the image size.
    aspect_ratio : str
        ``"W:H"`` or ``"NaN"``.  Anything malformed means "use the image ratio".
    auto_crop_area : float
        Fraction in ``(0, 1]`` applied to the resolved size.
    strategy : str or CropStrategy, optional
        Strategy id from ``strategies.STRATEGIES``; default ``native``.

    Raises
    ------
    InvalidImageDimensions
        If either original dimension is not positive.
    InfeasibleConstraints
        If the bounds cannot produce a non-empty box.
    """
    image = OriginalImage(original_width, original_height)
    constraints = CropConstraints(
        width=width,
        height=height,
        min_width=min_width,
        min_height=min_height,
        max_width=max_width,
        max_height=max_height,
        aspect_ratio=aspect_ratio,
        auto_crop_area=auto_crop_area,
    )
    return resolve(image, constraints, strategy)
