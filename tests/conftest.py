from __future__ import annotations

from typing import List, Tuple

import numpy as np
import pytest
from PIL import Image

from sizefit.services.encoder_service import EncoderService


class FakeEncoder(EncoderService):
    """Real resize, fake codecs: output length is a simple function of the input.

    JPEG: quality * width bytes. PNG/WebP: width * height bytes (PNG is then
    "optimized" by dropping one byte).
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[Tuple[str, Tuple[int, int], object]] = []

    def encode_jpeg(self, image: Image.Image, quality: int) -> bytes:
        self.calls.append(("jpeg", image.size, quality))
        return b"j" * (quality * image.width)

    def encode_png(self, image: Image.Image) -> bytes:
        self.calls.append(("png", image.size, None))
        return b"p" * (image.width * image.height)

    def optimize_png(self, data: bytes) -> bytes:
        self.calls.append(("oxipng", None, len(data)))
        return data[:-1]

    def encode_webp(self, image: Image.Image) -> bytes:
        self.calls.append(("webp", image.size, None))
        return b"w" * (image.width * image.height)


@pytest.fixture
def fake_encoder() -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture
def solid_image() -> Image.Image:
    return Image.new("RGB", (10, 10), (200, 30, 30))


@pytest.fixture
def noise_image() -> Image.Image:
    rng = np.random.default_rng(1234)
    arr = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
    return Image.fromarray(arr)


@pytest.fixture
def gray_100() -> Image.Image:
    return Image.new("RGB", (100, 100), (128, 128, 128))
