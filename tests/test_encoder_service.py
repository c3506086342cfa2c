import io
from decimal import Decimal

import numpy as np
import pytest
from PIL import Image

from sizefit.services import encoder_service
from sizefit.services.encoder_service import EncoderService


def test_resize_floors_dimensions():
    img = Image.new("RGB", (25, 13), (10, 20, 30))
    out = EncoderService().resize(img, Decimal("0.5"))
    assert out.size == (12, 6)
    assert img.size == (25, 13)


def test_resize_keeps_at_least_one_pixel():
    img = Image.new("RGB", (5, 5))
    assert EncoderService().resize(img, Decimal("0.1")).size == (1, 1)


def test_resize_rejects_degenerate_raster():
    with pytest.raises(ValueError):
        EncoderService().resize(Image.new("RGB", (0, 5)), Decimal("0.5"))


def test_jpeg_quality_affects_size(noise_image):
    encoder = EncoderService()
    assert len(encoder.encode_jpeg(noise_image, 10)) < len(encoder.encode_jpeg(noise_image, 90))


def test_jpeg_flattens_alpha_on_white():
    transparent = Image.new("RGBA", (16, 16), (0, 0, 0, 0))
    data = EncoderService().encode_jpeg(transparent, 90)

    decoded = Image.open(io.BytesIO(data))
    assert decoded.format == "JPEG"
    assert decoded.mode == "RGB"
    assert all(channel >= 250 for channel in decoded.getpixel((8, 8)))


def test_png_keeps_alpha():
    img = Image.new("RGBA", (8, 8), (255, 0, 0, 128))
    decoded = Image.open(io.BytesIO(EncoderService().encode_png(img)))
    assert decoded.mode == "RGBA"
    assert decoded.getpixel((0, 0)) == (255, 0, 0, 128)


def test_webp_is_lossless(noise_image):
    data = EncoderService().encode_webp(noise_image)
    decoded = Image.open(io.BytesIO(data)).convert("RGB")
    assert data[:4] == b"RIFF" and data[8:12] == b"WEBP"
    assert decoded.tobytes() == noise_image.tobytes()


def test_webp_accepts_grayscale():
    data = EncoderService().encode_webp(Image.new("L", (8, 8), 77))
    assert data[8:12] == b"WEBP"


def test_optimize_png_never_grows(noise_image, solid_image):
    encoder = EncoderService()
    for img in (noise_image, solid_image):
        buf = io.BytesIO()
        img.save(buf, format="PNG", compress_level=0)
        raw = buf.getvalue()
        optimized = encoder.optimize_png(raw)
        assert len(optimized) <= len(raw)
        assert Image.open(io.BytesIO(optimized)).convert("RGB").tobytes() == img.tobytes()


def test_optimize_png_falls_back_to_input(monkeypatch, solid_image):
    monkeypatch.setattr(encoder_service.oxipng, "optimize_from_memory", lambda data, **kwargs: data + b"\0\0")
    encoder = EncoderService()
    raw = encoder.encode_png(solid_image)
    assert encoder.optimize_png(raw) == raw


@pytest.mark.parametrize("method", ["encode_png", "encode_webp"])
def test_encoders_reject_degenerate_raster(method):
    with pytest.raises(ValueError):
        getattr(EncoderService(), method)(Image.new("RGB", (4, 0)))


@pytest.mark.parametrize("mode", ["F", "CMYK", "YCbCr", "PA", "I", "1", "P"])
def test_png_accepts_any_raster_mode(mode):
    img = Image.new("RGB", (16, 16), (40, 120, 200)).convert(mode)
    data = EncoderService().encode_png(img)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    assert Image.open(io.BytesIO(data)).size == (16, 16)


def test_deep_grayscale_is_shifted_not_clipped():
    deep = Image.fromarray(np.full((8, 8), 0x8000, dtype=np.uint16))
    for data in (EncoderService().encode_png(Image.new("I", (8, 8), 0x8000)), EncoderService().encode_webp(deep)):
        decoded = Image.open(io.BytesIO(data)).convert("L")
        assert decoded.getpixel((0, 0)) == 128
