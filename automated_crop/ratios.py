"""
Aspect-ratio helpers: GCD reduction, formatting and lenient parsing.

An aspect ratio is written ``W:H`` with both terms between 1 and 999
(e.g. ``"16:9"``).  The sentinel ``config.UNCONSTRAINED`` (``"NaN"``) and
any string that does not match that format mean "no enforced ratio": the
parser then derives the ratio from the original image by dividing both
dimensions by their greatest common divisor.  Parsing never fails.

An enforced ratio is returned verbatim, *not* reduced, so ``"32:18"`` stays
``32:18``.  ``aspect_key()`` gives the reduced form when a canonical key is
needed.
"""

import logging
from math import gcd
from typing import NamedTuple

from automated_crop.config import (
    ASPECT_RATIO_FORMAT,
    ASPECT_RATIO_MAX,
    ASPECT_RATIO_MIN,
    UNCONSTRAINED,
)

logger = logging.getLogger(__name__)


class AspectRatio(NamedTuple):
    """Effective aspect ratio as an integer ``width:height`` pair."""
    width: int
    height: int

    @property
    def delta(self) -> float:
        """Height units produced per width unit."""
        return self.height / self.width

    def __str__(self):
        return f"{self.width}:{self.height}"


# =============================================================================
# Aspect-ratio helpers
# =============================================================================
def normalize_ratio(w: int, h: int) -> tuple[int, int]:
    """Reduce ratio to simplest form via GCD. (21, 9) → (7, 3)"""
    g = gcd(w, h)
    return w // g, h // g


def aspect_key(w: int, h: int) -> str:
    """Normalized string key for a ratio. (1920, 1080) → '16:9'"""
    nw, nh = normalize_ratio(w, h)
    return f"{nw}:{nh}"


def _match(raw) -> tuple[int, int] | None:
    """Return the two terms of a well-formed ``W:H`` string, or None."""
    if not isinstance(raw, str):
        return None
    m = ASPECT_RATIO_FORMAT.match(raw)
    if m is None:
        return None
    w, h = int(m.group(1)), int(m.group(2))
    if not (ASPECT_RATIO_MIN <= w <= ASPECT_RATIO_MAX and ASPECT_RATIO_MIN <= h <= ASPECT_RATIO_MAX):
        return None
    return w, h


def is_valid_aspect_ratio(raw) -> bool:
    """True if *raw* is a well-formed enforced ratio such as ``"16:9"``."""
    return _match(raw) is not None


def parse_aspect_ratio(raw, fallback_width: int, fallback_height: int) -> AspectRatio:
    """
    Resolve the effective aspect ratio.

    Returns the two terms of *raw* verbatim when it is a valid ``W:H``
    string.  Otherwise (sentinel, ``None``, empty or malformed) returns the
    GCD-reduced ratio of *fallback_width* × *fallback_height*.  Malformed
    strings are logged as a warning but never raise.
    """
    terms = _match(raw)
    if terms is not None:
        return AspectRatio(*terms)

    if raw not in (None, "", UNCONSTRAINED):
        logger.warning("Invalid aspect ratio %r — using the original image ratio", raw)

    g = gcd(fallback_width, fallback_height)
    ratio = AspectRatio(round(fallback_width / g), round(fallback_height / g))
    logger.debug("Derived aspect ratio %s from %dx%d", ratio, fallback_width, fallback_height)
    return ratio
