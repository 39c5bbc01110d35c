import dataclasses

import pytest

from automated_crop.errors import InvalidAspectRatio, InvalidImageDimensions
from automated_crop.models import CropBox, CropConstraints, OriginalImage


def test_original_image_rejects_empty():
    with pytest.raises(InvalidImageDimensions, match="0x10"):
        OriginalImage(0, 10)


def test_value_objects_are_frozen():
    constraints = CropConstraints(width=10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        constraints.width = 20


class TestCropConstraints:
    def test_defaults(self):
        c = CropConstraints()
        assert c.width is None and c.min_width is None and c.max_width is None
        assert c.aspect_ratio == "NaN"
        assert c.auto_crop_area == 1.0

    def test_has_sizes(self):
        assert not CropConstraints().has_sizes
        assert CropConstraints(height=5).has_sizes
        assert not CropConstraints(height=5).has_hard_sizes
        assert CropConstraints(width=5, height=5).has_hard_sizes

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"height": -1},
        {"max_width": 0},
        {"min_height": -1},
        {"auto_crop_area": 0},
        {"auto_crop_area": 1.01},
    ])
    def test_rejects_out_of_range(self, kwargs):
        with pytest.raises(ValueError):
            CropConstraints(**kwargs)

    def test_explicit_zero_minimum_kept(self):
        assert CropConstraints(min_width=0).min_width == 0


class TestFromConfig:
    def test_blank_values_are_unspecified(self):
        c = CropConstraints.from_config({"width": "400", "height": "", "min_width": None, "aspect_ratio": ""})
        assert c.width == 400
        assert c.height is None
        assert c.min_width is None
        assert c.aspect_ratio == "NaN"

    def test_zero_is_not_unspecified(self):
        assert CropConstraints.from_config({"min_width": 0}).min_width == 0

    def test_ignores_non_constraint_keys(self):
        c = CropConstraints.from_config({"strategy": "native", "width": 10})
        assert c.width == 10

    def test_auto_crop_area_string(self):
        assert CropConstraints.from_config({"auto_crop_area": "0.5"}).auto_crop_area == 0.5

    def test_lenient_aspect_ratio(self):
        assert CropConstraints.from_config({"aspect_ratio": "16-9"}).aspect_ratio == "16-9"

    def test_strict_aspect_ratio(self):
        with pytest.raises(InvalidAspectRatio, match="16-9"):
            CropConstraints.from_config({"aspect_ratio": "16-9"}, strict=True)

    def test_strict_accepts_sentinel(self):
        assert CropConstraints.from_config({"aspect_ratio": "NaN"}, strict=True).aspect_ratio == "NaN"

    @pytest.mark.parametrize("value", ["abc", True, [1]])
    def test_bad_integer(self, value):
        with pytest.raises(ValueError, match="width"):
            CropConstraints.from_config({"width": value})


def test_crop_box_conversions():
    box = CropBox(10, 20, 300, 200)
    assert box.as_tuple() == (10, 20, 300, 200)
    assert box.as_dict() == {"x": 10, "y": 20, "width": 300, "height": 200}
    assert box.to_pillow_box() == (10, 20, 310, 220)
