from __future__ import annotations

import io
import math

import numpy as np
from PIL import Image


def _to_rgb_np(image: Image.Image) -> np.ndarray:
    """
    Возвращает numpy-массив float32 формы (H, W, 3) в диапазоне [0, 255].
    """
    rgb = image if image.mode == "RGB" else image.convert("RGB")
    return np.asarray(rgb, dtype=np.float32)


def psnr(reference: Image.Image, candidate: Image.Image) -> float:
    """
    PSNR (дБ) результата относительно оригинала.
    Уменьшенный кандидат растягивается обратно до размера оригинала (Lanczos),
    поэтому метрика учитывает и потерю разрешения. Совпадающие изображения дают 100.0.
    """
    if candidate.size != reference.size:
        candidate = candidate.resize(reference.size, Image.Resampling.LANCZOS)
    a = _to_rgb_np(reference)
    b = _to_rgb_np(candidate)
    if a.size == 0:
        return 100.0
    mse = float(np.mean((a - b) ** 2))
    if mse <= 1e-10:
        return 100.0
    return 10.0 * math.log10((255.0 ** 2) / mse)


def decode(data: bytes) -> Image.Image:
    """Декодирует закодированный результат обратно в растр (для метрик и превью)."""
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        return img.copy()
