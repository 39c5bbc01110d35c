"""
Data models for crop resolution.

OriginalImage, CropConstraints and CropBox are request-scoped value objects:
built at the start of one resolution call and never mutated.  Optional size
fields use ``None`` for "not specified", which is distinct from an explicit
``0``.  ``CropConstraints.from_config`` maps an effect configuration dict
(as stored in presets or given on the command line) onto constraints.
"""

from dataclasses import asdict, dataclass

from automated_crop.config import AUTO_CROP_AREA_DEFAULT, SIZE_KEYS, UNCONSTRAINED
from automated_crop.errors import InvalidAspectRatio, InvalidImageDimensions
from automated_crop.ratios import is_valid_aspect_ratio


# =============================================================================
# Data classes
# =============================================================================
@dataclass(frozen=True)
class OriginalImage:
    """Dimensions of the image being cropped."""
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidImageDimensions(self.width, self.height)


@dataclass(frozen=True)
class CropConstraints:
    """User-supplied sizing request.  ``None`` means "not specified"."""
    width: int | None = None
    height: int | None = None
    min_width: int | None = None
    min_height: int | None = None
    max_width: int | None = None
    max_height: int | None = None
    aspect_ratio: str = UNCONSTRAINED
    auto_crop_area: float = AUTO_CROP_AREA_DEFAULT

    def __post_init__(self):
        for name in ("width", "height", "max_width", "max_height"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        for name in ("min_width", "min_height"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        if not 0 < self.auto_crop_area <= 1:
            raise ValueError(f"auto_crop_area must be in (0, 1], got {self.auto_crop_area!r}")

    @property
    def has_sizes(self) -> bool:
        """True if width OR height is specified."""
        return self.width is not None or self.height is not None

    @property
    def has_hard_sizes(self) -> bool:
        """True if width AND height are specified."""
        return self.width is not None and self.height is not None

    @classmethod
    def from_config(cls, config: dict, strict: bool = False) -> "CropConstraints":
        """
        Build constraints from an effect configuration mapping.

        Size values may be ints or numeric strings; ``None`` and empty
        strings mean "not specified".  Keys that are not constraint fields
        (e.g. ``strategy``) are ignored.  With *strict*, a malformed aspect
        ratio raises ``InvalidAspectRatio`` instead of being treated as
        unconstrained by the parser.
        """
        kwargs = {}
        for key in SIZE_KEYS:
            kwargs[key] = _optional_int(config.get(key), key)

        aspect_ratio = config.get("aspect_ratio")
        if aspect_ratio is None or (isinstance(aspect_ratio, str) and not aspect_ratio.strip()):
            aspect_ratio = UNCONSTRAINED
        aspect_ratio = str(aspect_ratio).strip()
        if strict and aspect_ratio != UNCONSTRAINED and not is_valid_aspect_ratio(aspect_ratio):
            raise InvalidAspectRatio(aspect_ratio)
        kwargs["aspect_ratio"] = aspect_ratio

        area = config.get("auto_crop_area")
        kwargs["auto_crop_area"] = AUTO_CROP_AREA_DEFAULT if area in (None, "") else float(area)

        return cls(**kwargs)


@dataclass(frozen=True)
class CropBox:
    """Crop rectangle in image coordinates."""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return ``(x, y, width, height)``."""
        return self.x, self.y, self.width, self.height

    def as_dict(self) -> dict:
        return asdict(self)

    def to_pillow_box(self) -> tuple[int, int, int, int]:
        """Return the ``(left, top, right, bottom)`` box expected by ``Image.crop``."""
        return self.x, self.y, self.x + self.width, self.y + self.height


# =============================================================================
# Helpers
# =============================================================================
def _optional_int(value, name: str) -> int | None:
    """Coerce a config value to int, mapping None/"" to None."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
