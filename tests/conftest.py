import pytest
from PIL import Image


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point preset persistence at a temporary directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    monkeypatch.setattr("automated_crop.presets.config_dir", lambda: directory)
    return directory


@pytest.fixture
def image_dir(tmp_path):
    """A folder with two PNGs, a JPEG in a subfolder and a non-image file."""
    root = tmp_path / "images"
    (root / "sub").mkdir(parents=True)
    Image.new("RGB", (2000, 1000), "red").save(root / "wide.png")
    Image.new("RGB", (600, 800), "blue").save(root / "tall.png")
    Image.new("RGB", (640, 480), "green").save(root / "sub" / "photo.jpg")
    (root / "notes.txt").write_text("not an image", encoding="utf-8")
    return root
