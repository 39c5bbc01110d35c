"""
Presets persistence: load, save, and validate named effect configurations.

Runtime presets are stored in a JSON file in the user's config directory
(provided by ``config.config_dir()``).  On first launch (or if the file
is missing, corrupt or invalid), the file is created from DEFAULT_PRESETS.

The on-disk format uses a versioned envelope::

    {"version": 1, "presets": [ ... ]}

Each preset is ``{"name": str, "config": {...}}`` where ``config`` holds any
subset of ``config.EFFECT_CONFIG_KEYS``; missing keys take their defaults
from ``config.DEFAULT_EFFECT_CONFIG`` when the preset is applied.
"""

import json
import logging
from copy import deepcopy
from pathlib import Path

from automated_crop.config import DEFAULT_PRESETS, EFFECT_CONFIG_KEYS, SIZE_KEYS, UNCONSTRAINED, config_dir
from automated_crop.ratios import is_valid_aspect_ratio
from automated_crop.strategies import STRATEGIES

logger = logging.getLogger(__name__)

_PRESETS_FILENAME = "presets.json"
_FORMAT_VERSION = 1

_PRESET_REQUIRED_KEYS = {"name", "config"}
_MIN_KEYS = ("min_width", "min_height")


# =============================================================================
# Config directory helpers
# =============================================================================
def _presets_path() -> Path:
    """Return the full path to presets.json."""
    return config_dir() / _PRESETS_FILENAME


# =============================================================================
# Validation
# =============================================================================
def _is_set(value) -> bool:
    return value not in (None, "")


def validate_effect_config(config: object) -> list[str]:
    """
    Validate one effect configuration dict.

    Size values must be integers (``None`` or ``""`` mean "not specified"):
    width/height/max_* positive, min_* non-negative, and each min no larger
    than the matching max.  Returns a list of error strings (empty means
    valid).
    """
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["config must be a dict"]

    unknown = config.keys() - EFFECT_CONFIG_KEYS
    if unknown:
        errors.append(f"unknown keys: {', '.join(sorted(map(str, unknown)))}")

    sizes: dict[str, int] = {}
    for key in SIZE_KEYS:
        val = config.get(key)
        if not _is_set(val):
            continue
        if isinstance(val, bool) or not isinstance(val, int):
            errors.append(f"{key} must be an integer, got {val!r}")
            continue
        lower = 0 if key in _MIN_KEYS else 1
        if val < lower:
            kind = "a non-negative" if lower == 0 else "a positive"
            errors.append(f"{key} must be {kind} integer, got {val!r}")
            continue
        sizes[key] = val

    # Check min/max pairs
    for dim in ("width", "height"):
        lo, hi = sizes.get(f"min_{dim}"), sizes.get(f"max_{dim}")
        if lo is not None and hi is not None and lo > hi:
            errors.append(f"min_{dim} ({lo}) exceeds max_{dim} ({hi})")

    ratio = config.get("aspect_ratio")
    if _is_set(ratio) and ratio != UNCONSTRAINED and not is_valid_aspect_ratio(ratio):
        errors.append(f"aspect_ratio must be 'W:H' with 1 <= W, H <= 999 or {UNCONSTRAINED!r}, got {ratio!r}")

    area = config.get("auto_crop_area")
    if _is_set(area):
        if isinstance(area, bool) or not isinstance(area, (int, float)) or not 0 < area <= 1:
            errors.append(f"auto_crop_area must be a number in (0, 1], got {area!r}")

    strategy = config.get("strategy")
    if strategy is not None and strategy not in STRATEGIES:
        errors.append(f"strategy must be one of {', '.join(sorted(STRATEGIES))}, got {strategy!r}")

    return errors


def validate_presets(data: object) -> list[str]:
    """
    Validate a presets data structure.

    Returns a list of error strings (empty means valid).
    """
    errors: list[str] = []

    if not isinstance(data, list):
        errors.append("Presets data must be a list")
        return errors

    names_seen: set[str] = set()

    for i, preset in enumerate(data):
        prefix = f"Preset #{i + 1}"

        if not isinstance(preset, dict):
            errors.append(f"{prefix}: must be a dict")
            continue

        # Check required keys
        missing = _PRESET_REQUIRED_KEYS - preset.keys()
        if missing:
            errors.append(f"{prefix}: missing keys: {', '.join(sorted(missing))}")
            continue

        name = preset.get("name", "")
        if not isinstance(name, str) or not name.strip():
            errors.append(f"{prefix}: name must be a non-empty string")
        elif name.strip() in names_seen:
            errors.append(f"{prefix}: duplicate name '{name.strip()}'")
        else:
            names_seen.add(name.strip())

        for err in validate_effect_config(preset.get("config")):
            errors.append(f"{prefix} ('{name}'): {err}")

    return errors


# =============================================================================
# Lookup
# =============================================================================
def get_preset(presets: list[dict], name: str) -> dict:
    """
    Return the ``config`` dict of the preset called *name*.

    Raises KeyError if no preset has that name.
    """
    for preset in presets:
        if preset["name"] == name:
            return dict(preset["config"])
    raise KeyError(f"No preset named {name!r} (available: {', '.join(p['name'] for p in presets)})")


# =============================================================================
# Load / Save
# =============================================================================
def _compact(preset: dict) -> dict:
    """Strip the name and drop unset config values from one preset."""
    return {
        "name": preset["name"].strip(),
        "config": {k: v for k, v in preset["config"].items() if _is_set(v)},
    }


def _read_envelope(path: Path) -> list[dict] | None:
    """Return the presets stored at *path*, or None if the file is unusable."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to read %s (%s), restoring defaults", path.name, exc)
        return None

    if not isinstance(raw, dict) or raw.get("version") != _FORMAT_VERSION:
        logger.warning("%s is not a version %d presets file, restoring defaults", path.name, _FORMAT_VERSION)
        return None

    presets = raw.get("presets")
    errors = validate_presets(presets)
    if errors:
        logger.warning("%s validation failed, restoring defaults:\n  %s", path.name, "\n  ".join(errors))
        return None
    return presets


def _write_envelope(path: Path, presets: list[dict]) -> None:
    envelope = {"version": _FORMAT_VERSION, "presets": presets}
    path.write_text(json.dumps(envelope, indent=2, ensure_ascii=False), encoding="utf-8")


def load_presets() -> list[dict]:
    """
    Load presets from presets.json.

    A missing, unreadable or invalid file is replaced by DEFAULT_PRESETS,
    which are then returned.  Loaded presets are compacted: names are
    stripped and blank config values dropped, so ``get_preset`` results
    overlay cleanly onto ``DEFAULT_EFFECT_CONFIG``.
    """
    path = _presets_path()

    if path.exists():
        presets = _read_envelope(path)
    else:
        logger.info("Creating %s with default presets", path)
        presets = None

    if presets is None:
        presets = deepcopy(DEFAULT_PRESETS)
        try:
            _write_envelope(path, presets)
        except OSError as exc:
            logger.error("Could not write default presets to %s: %s", path, exc)
    else:
        logger.debug("Loaded %d preset(s) from %s", len(presets), path)

    return [_compact(p) for p in presets]


def save_presets(presets: list[dict]) -> None:
    """
    Validate, compact and write presets to presets.json.

    Raises ValueError if validation fails.
    Raises OSError if the file cannot be written.
    """
    errors = validate_presets(presets)
    if errors:
        raise ValueError("Invalid presets data:\n  " + "\n  ".join(errors))

    path = _presets_path()
    _write_envelope(path, [_compact(p) for p in presets])
    logger.info("Saved %d preset(s) to %s", len(presets), path)
