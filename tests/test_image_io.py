from PIL import Image

from automated_crop.image_io import find_images, get_image_size, open_image, unique_path


def test_get_image_size(image_dir):
    assert get_image_size(image_dir / "wide.png") == (2000, 1000)
    assert get_image_size(image_dir / "sub" / "photo.jpg") == (640, 480)


def test_open_image(image_dir):
    img = open_image(image_dir / "tall.png")
    assert isinstance(img, Image.Image)
    assert img.size == (600, 800)


def test_find_images_flat(image_dir):
    assert [p.name for p in find_images(image_dir)] == ["tall.png", "wide.png"]


def test_find_images_recursive(image_dir):
    names = [p.relative_to(image_dir).as_posix() for p in find_images(image_dir, recursive=True)]
    assert names == ["sub/photo.jpg", "tall.png", "wide.png"]


def test_find_images_single_file(image_dir):
    assert find_images(image_dir / "wide.png") == [image_dir / "wide.png"]
    assert find_images(image_dir / "notes.txt") == []


def test_unique_path(tmp_path):
    target = tmp_path / "out.png"
    assert unique_path(target) == target
    target.write_bytes(b"")
    assert unique_path(target) == tmp_path / "out-01.png"
    (tmp_path / "out-01.png").write_bytes(b"")
    assert unique_path(target) == tmp_path / "out-02.png"
