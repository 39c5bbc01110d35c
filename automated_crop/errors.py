"""
Exceptions raised while resolving a crop box.

Every error derives from ``CropError`` (itself a ``ValueError``) so callers
that only care about "this request cannot be cropped" can catch one type.
"""


class CropError(ValueError):
    """Base class for crop resolution failures."""


class InvalidImageDimensions(CropError):
    """The original image has a zero or negative width or height."""

    def __init__(self, width, height):
        super().__init__(f"Invalid image dimensions: {width}x{height}")
        self.width = width
        self.height = height


class InfeasibleConstraints(CropError):
    """The size bounds cannot produce a non-empty crop box for this image."""


class InvalidAspectRatio(CropError):
    """An aspect ratio string does not match ``W:H`` (strict validation only)."""

    def __init__(self, raw):
        super().__init__(f"Invalid aspect ratio {raw!r}: expected W:H with 1 <= W, H <= 999")
        self.raw = raw


class UnknownStrategy(CropError, KeyError):
    """No crop strategy is registered under the requested id."""

    def __init__(self, strategy_id, known):
        super().__init__(f"Unknown crop strategy {strategy_id!r} (known: {', '.join(sorted(known))})")
        self.strategy_id = strategy_id

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]
