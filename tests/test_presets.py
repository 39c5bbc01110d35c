import json
import logging

import pytest

from automated_crop.config import DEFAULT_PRESETS
from automated_crop.presets import get_preset, load_presets, save_presets, validate_effect_config, validate_presets


class TestValidateEffectConfig:
    def test_empty_is_valid(self):
        assert validate_effect_config({}) == []

    def test_defaults_are_valid(self):
        for preset in DEFAULT_PRESETS:
            assert validate_effect_config(preset["config"]) == []

    def test_blank_values_are_valid(self):
        assert validate_effect_config({"width": None, "height": "", "aspect_ratio": ""}) == []

    def test_not_a_dict(self):
        assert validate_effect_config([1, 2]) == ["config must be a dict"]

    @pytest.mark.parametrize("config,fragment", [
        ({"colour": "red"}, "unknown keys: colour"),
        ({"width": "wide"}, "width must be an integer"),
        ({"width": True}, "width must be an integer"),
        ({"width": 0}, "width must be a positive integer"),
        ({"min_height": -1}, "min_height must be a non-negative integer"),
        ({"min_width": 500, "max_width": 100}, "min_width (500) exceeds max_width (100)"),
        ({"aspect_ratio": "16-9"}, "aspect_ratio must be 'W:H'"),
        ({"auto_crop_area": 0}, "auto_crop_area must be a number in (0, 1]"),
        ({"auto_crop_area": "half"}, "auto_crop_area must be a number in (0, 1]"),
        ({"strategy": "smart"}, "strategy must be one of"),
    ])
    def test_errors(self, config, fragment):
        errors = validate_effect_config(config)
        assert len(errors) == 1
        assert fragment in errors[0]


class TestValidatePresets:
    def test_defaults_valid(self):
        assert validate_presets(DEFAULT_PRESETS) == []

    def test_not_a_list(self):
        assert validate_presets({"name": "x"}) == ["Presets data must be a list"]

    def test_missing_keys(self):
        errors = validate_presets([{"name": "x"}])
        assert errors == ["Preset #1: missing keys: config"]

    def test_duplicate_names(self):
        errors = validate_presets([{"name": "a", "config": {}}, {"name": "a", "config": {}}])
        assert errors == ["Preset #2: duplicate name 'a'"]

    def test_bad_config_is_prefixed(self):
        errors = validate_presets([{"name": "a", "config": {"width": -3}}])
        assert errors[0].startswith("Preset #1 ('a'): width")


def test_get_preset():
    config = get_preset(DEFAULT_PRESETS, "widescreen")
    assert config == {"aspect_ratio": "16:9"}
    # Returned dict is a copy
    config["width"] = 10
    assert "width" not in get_preset(DEFAULT_PRESETS, "widescreen")


def test_get_preset_unknown():
    with pytest.raises(KeyError, match="cinema"):
        get_preset(DEFAULT_PRESETS, "cinema")


class TestLoadSave:
    def test_missing_file_writes_defaults(self, config_home):
        assert load_presets() == DEFAULT_PRESETS
        envelope = json.loads((config_home / "presets.json").read_text(encoding="utf-8"))
        assert envelope == {"version": 1, "presets": DEFAULT_PRESETS}

    def test_save_and_load(self, config_home):
        presets = [{"name": "banner", "config": {"width": 1200, "aspect_ratio": "4:1"}}]
        save_presets(presets)
        assert load_presets() == presets

    def test_save_invalid_raises(self, config_home):
        with pytest.raises(ValueError, match="Invalid presets data"):
            save_presets([{"name": "", "config": {}}])
        assert not (config_home / "presets.json").exists()

    def test_corrupt_file_restores_defaults(self, config_home, caplog):
        (config_home / "presets.json").write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="automated_crop.presets"):
            assert load_presets() == DEFAULT_PRESETS
        assert "restoring defaults" in caplog.text

    def test_wrong_version_restores_defaults(self, config_home):
        (config_home / "presets.json").write_text(json.dumps({"version": 99, "presets": []}), encoding="utf-8")
        assert load_presets() == DEFAULT_PRESETS

    def test_invalid_content_restores_defaults(self, config_home, caplog):
        envelope = {"version": 1, "presets": [{"name": "x", "config": {"min_width": 9, "max_width": 1}}]}
        (config_home / "presets.json").write_text(json.dumps(envelope), encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="automated_crop.presets"):
            assert load_presets() == DEFAULT_PRESETS
        assert "validation failed" in caplog.text

    def test_load_compacts_presets(self, config_home):
        envelope = {"version": 1, "presets": [
            {"name": " banner ", "config": {"width": 1200, "height": "", "max_width": None, "aspect_ratio": "4:1"}},
        ]}
        (config_home / "presets.json").write_text(json.dumps(envelope), encoding="utf-8")
        presets = load_presets()
        assert presets == [{"name": "banner", "config": {"width": 1200, "aspect_ratio": "4:1"}}]
        assert get_preset(presets, "banner") == {"width": 1200, "aspect_ratio": "4:1"}

    def test_save_writes_compact_presets(self, config_home):
        save_presets([{"name": "square ", "config": {"aspect_ratio": "1:1", "width": None}}])
        envelope = json.loads((config_home / "presets.json").read_text(encoding="utf-8"))
        assert envelope["presets"] == [{"name": "square", "config": {"aspect_ratio": "1:1"}}]

    def test_envelope_without_presets_restores_defaults(self, config_home, caplog):
        (config_home / "presets.json").write_text(json.dumps({"version": 1}), encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="automated_crop.presets"):
            assert load_presets() == DEFAULT_PRESETS
        assert "Presets data must be a list" in caplog.text
