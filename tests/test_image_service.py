from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from sizefit.services.image_service import ImageService


def test_load_image_reads_metadata(tmp_path: Path):
    p = tmp_path / "in.png"
    Image.new("RGBA", (30, 20), (1, 2, 3, 4)).save(p)

    data = ImageService().load_image(p)

    assert data.path == p
    assert (data.width, data.height) == (30, 20)
    assert data.mode == "RGBA"
    assert data.size_bytes == p.stat().st_size


def test_palette_image_is_converted(tmp_path: Path):
    p = tmp_path / "pal.gif"
    Image.new("P", (8, 8), 3).save(p)
    assert ImageService().load_image(str(p)).mode in ("RGB", "RGBA")


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ImageService().load_image(tmp_path / "nope.png")


def test_directory_is_not_a_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ImageService().load_image(tmp_path)


def test_not_an_image(tmp_path: Path):
    p = tmp_path / "text.png"
    p.write_text("definitely not a png")
    with pytest.raises(ValueError):
        ImageService().load_image(p)


def test_save_bytes_returns_size_on_disk(tmp_path: Path):
    out = tmp_path / "out.bin"
    assert ImageService().save_bytes(out, b"abcdef") == 6
    assert out.read_bytes() == b"abcdef"


def test_save_bytes_missing_directory(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ImageService().save_bytes(tmp_path / "missing" / "out.jpg", b"x")


def test_output_path_that_is_a_directory(tmp_path: Path):
    with pytest.raises(IsADirectoryError):
        ImageService().require_output_dir(tmp_path)


def test_16bit_grayscale_keeps_tonal_range(tmp_path: Path):
    gradient = np.linspace(0, 65535, 64 * 64).astype(np.uint16).reshape(64, 64)
    p = tmp_path / "deep.png"
    Image.fromarray(gradient).save(p)

    data = ImageService().load_image(p)
    pixels = np.asarray(data.pil_image)

    assert data.mode == "L"
    assert pixels.min() == 0
    assert pixels.max() == 255
    assert len(np.unique(pixels)) > 200
    assert (pixels == 255).mean() < 0.05


def test_32bit_grayscale_with_8bit_values_is_kept(tmp_path: Path):
    p = tmp_path / "int.tif"
    Image.new("I", (4, 4), 200).save(p)

    data = ImageService().load_image(p)

    assert data.mode == "L"
    assert data.pil_image.getpixel((0, 0)) == 200
