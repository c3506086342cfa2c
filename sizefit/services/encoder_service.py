"""Кодеры JPEG/PNG/WebP, масштабирование и пост-оптимизация PNG.

Принципы:
- SRP: только превращение растра в байты; решений о параметрах здесь нет.
- Чистые функции: входной растр не мутируется, каждый вызов возвращает новый объект.
"""
from __future__ import annotations

import io
import logging
from decimal import Decimal

import numpy as np
import oxipng
from PIL import Image

from sizefit.models.compression_model import Codec
from sizefit.models.settings import CompressionSettings, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

_HIGH_DEPTH_GRAY = ("I", "I;16", "I;16L", "I;16B", "I;16N")
_PNG_MODES = ("1", "L", "LA", "P", "RGB", "RGBA", "I;16")


def to_8bit_gray(image: Image.Image) -> Image.Image:
    """Сводит 16/32-битные градации серого к режиму L.

    Значения старше 8 бит сдвигаются на 8 разрядов вправо (а не обрезаются
    до 255, как делает `convert`). Растр `I` с данными в пределах 0..255
    переносится без изменений.
    """
    samples = np.asarray(image).astype(np.int64)
    if samples.size and samples.max() > 255:
        samples = np.clip(samples, 0, 65535) >> 8
    return Image.fromarray(np.clip(samples, 0, 255).astype(np.uint8))


class EncoderService:
    def __init__(self, settings: CompressionSettings = DEFAULT_SETTINGS) -> None:
        self._settings = settings

    # ---------- Масштабирование ----------
    def resize(self, image: Image.Image, scale: Decimal) -> Image.Image:
        """Масштабирует обе стороны на один множитель (Lanczos).

        Размеры усечены вниз до целых пикселей, но не меньше 1 px.

        Raises:
            ValueError: если растр вырожден (нулевая ширина или высота).
        """
        self._require_pixels(image)
        w, h = image.size
        new_w = max(1, int(Decimal(w) * scale))
        new_h = max(1, int(Decimal(h) * scale))
        if (new_w, new_h) == (w, h):
            return image.copy()
        return image.resize((new_w, new_h), self._settings.resample)

    # ---------- Кодеры ----------
    def encode_jpeg(self, image: Image.Image, quality: int) -> bytes:
        """JPEG с заданным качеством; альфа-канал «сплющивается» на фон."""
        self._require_pixels(image)
        return self._save(self._to_jpeg_mode(image), Codec.JPEG, quality=quality, optimize=True)

    def encode_png(self, image: Image.Image) -> bytes:
        """PNG без потерь, параметр качества отсутствует."""
        self._require_pixels(image)
        return self._save(self._to_png_mode(image), Codec.PNG, compress_level=self._settings.png_compress_level)

    def encode_webp(self, image: Image.Image) -> bytes:
        """WebP без потерь: качество в этом кодеке не регулируется."""
        self._require_pixels(image)
        if image.mode in _HIGH_DEPTH_GRAY:
            image = to_8bit_gray(image)
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert(self._rgb_or_rgba(image))
        return self._save(image, Codec.WEBP, lossless=True)

    # ---------- Пост-оптимизация ----------
    def optimize_png(self, data: bytes) -> bytes:
        """Прогоняет PNG через oxipng. Результат никогда не длиннее входа."""
        optimized = oxipng.optimize_from_memory(data, level=self._settings.oxipng_level)
        if len(optimized) > len(data):
            return data
        logger.debug("oxipng: %d -> %d bytes", len(data), len(optimized))
        return optimized

    # ---------- Вспомогательные функции ----------
    def _save(self, image: Image.Image, codec: Codec, **params) -> bytes:
        buf = io.BytesIO()
        image.save(buf, format=codec.pil_format, **params)
        return buf.getvalue()

    def _require_pixels(self, image: Image.Image) -> None:
        w, h = image.size
        if w == 0 or h == 0:
            raise ValueError(f"Вырожденный растр {w}x{h}: нечего кодировать")

    def _rgb_or_rgba(self, image: Image.Image) -> str:
        return "RGBA" if "A" in image.getbands() else "RGB"

    def _to_png_mode(self, image: Image.Image) -> Image.Image:
        if image.mode in _PNG_MODES:
            return image
        if image.mode in _HIGH_DEPTH_GRAY:
            return to_8bit_gray(image)
        return image.convert(self._rgb_or_rgba(image))

    def _to_jpeg_mode(self, image: Image.Image) -> Image.Image:
        if image.mode in _HIGH_DEPTH_GRAY:
            image = to_8bit_gray(image)
        if image.mode in ("RGB", "L"):
            return image
        if "A" in image.getbands():
            rgba = image.convert("RGBA")
            background = Image.new("RGB", rgba.size, self._settings.jpeg_background)
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        return image.convert("RGB")
