"""Настройки поиска параметров сжатия.

Чистые данные без логики: все константы шага и порогов собраны в одном месте,
чтобы политики и кодеры не держали «магических чисел».
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from PIL import Image


@dataclass(frozen=True)
class CompressionSettings:
    """Параметры жадного обхода «качество → масштаб».

    Fields:
        initial_quality: Стартовое качество JPEG.
        quality_step: Шаг уменьшения качества JPEG.
        quality_floor: Минимальное качество JPEG.
        initial_scale: Стартовый масштаб (1.0 = без изменения размера).
        scale_step: Шаг уменьшения масштаба, десятичный.
        scale_floor: Минимальный масштаб.
        png_compress_level: zlib-уровень Pillow для PNG (0-9).
        oxipng_level: Пресет oxipng (0-6); 2 — сбалансированный.
        jpeg_background: Фон для «сплющивания» альфа-канала перед JPEG.
        resample: Фильтр ресэмплинга Pillow.
    """
    initial_quality: int = 90
    quality_step: int = 10
    quality_floor: int = 10
    initial_scale: Decimal = Decimal("1.0")
    scale_step: Decimal = Decimal("0.1")
    scale_floor: Decimal = Decimal("0.1")
    png_compress_level: int = 9
    oxipng_level: int = 2
    jpeg_background: Tuple[int, int, int] = (255, 255, 255)
    resample: Image.Resampling = Image.Resampling.LANCZOS


DEFAULT_SETTINGS = CompressionSettings()
