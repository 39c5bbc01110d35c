"""
Application constants and configuration.

DEFAULT_EFFECT_CONFIG describes an unconstrained crop effect; named presets
are loaded from presets.json via the presets module, falling back to
DEFAULT_PRESETS.  All other constants control aspect-ratio parsing, strategy
selection and export behaviour.

The ``config_dir()`` helper returns the platform-appropriate config
directory used by the presets module.
"""

import os
import re
import sys
from pathlib import Path

# =============================================================================
# APP IDENTITY & CONFIG DIRECTORY
# =============================================================================
APP_NAME = "automated-crop"


def config_dir() -> Path:
    """Return the platform-appropriate config directory, creating it if needed."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    directory = base / APP_NAME
    directory.mkdir(parents=True, exist_ok=True)
    return directory


# =============================================================================
# ASPECT RATIO
# =============================================================================
# Sentinel meaning "keep the original image's aspect ratio"
UNCONSTRAINED = "NaN"

# Two ASCII integers of one to three digits separated by a colon, e.g. "16:9".
# No surrounding whitespace.
ASPECT_RATIO_FORMAT = re.compile(r"^([0-9]{1,3}):([0-9]{1,3})\Z")
ASPECT_RATIO_MIN = 1
ASPECT_RATIO_MAX = 999

# Fraction of the resolved box kept after sizing (1 = no shrink)
AUTO_CROP_AREA_DEFAULT = 1.0

# =============================================================================
# STRATEGIES & EFFECT CONFIGURATION
# =============================================================================
DEFAULT_STRATEGY = "native"

DEFAULT_EFFECT_CONFIG = {
    "width": None,
    "height": None,
    "min_width": None,
    "min_height": None,
    "max_width": None,
    "max_height": None,
    "aspect_ratio": UNCONSTRAINED,
    "auto_crop_area": AUTO_CROP_AREA_DEFAULT,
    "strategy": DEFAULT_STRATEGY,
}

EFFECT_CONFIG_KEYS = frozenset(DEFAULT_EFFECT_CONFIG)
SIZE_KEYS = ("width", "height", "min_width", "min_height", "max_width", "max_height")

# =============================================================================
# DEFAULT PRESETS — Built-in fallback when presets.json is missing or corrupt
# =============================================================================
DEFAULT_PRESETS = [
    {
        "name": "original",
        "config": {"aspect_ratio": UNCONSTRAINED},
    },
    {
        "name": "widescreen",
        "config": {"aspect_ratio": "16:9"},
    },
    {
        "name": "square",
        "config": {"aspect_ratio": "1:1"},
    },
    {
        "name": "thumbnail",
        "config": {"width": 320, "aspect_ratio": "4:3", "min_width": 100, "min_height": 75},
    },
]

# =============================================================================
# EXPORT
# =============================================================================
# PNG compression level (0-9, 9 = maximum compression)
PNG_COMPRESS_LEVEL = 9

# JPEG export defaults
JPEG_QUALITY_DEFAULT = 95
JPEG_QUALITY_MIN = 1
JPEG_QUALITY_MAX = 100

# Output format options
OUTPUT_FORMATS = ["PNG", "JPEG"]
OUTPUT_FORMAT_DEFAULT = "PNG"

# Supported image extensions
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".tiff", ".tif", ".webp", ".psd"}
