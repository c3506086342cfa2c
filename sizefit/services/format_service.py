"""Выбор кодека по явному запросу или по расширению выходного файла."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from sizefit.models.compression_model import Codec

FORMAT_CHOICES = ("auto", "jpeg", "png", "webp")

_BY_NAME = {
    "jpeg": Codec.JPEG,
    "jpg": Codec.JPEG,
    "png": Codec.PNG,
    "webp": Codec.WEBP,
}


def select_codec(requested: Optional[str], output_path: str | Path | None = None) -> Codec:
    """Возвращает кодек: явный запрос важнее расширения, по умолчанию JPEG.

    Raises:
        ValueError: если явно запрошен неизвестный формат.
    """
    if requested is not None and requested.strip().lower() not in ("", "auto"):
        name = requested.strip().lower()
        if name not in _BY_NAME:
            raise ValueError(f"Неизвестный формат: {requested!r}")
        return _BY_NAME[name]

    if output_path is None:
        return Codec.JPEG
    ext = Path(output_path).suffix.lower().lstrip(".")
    return _BY_NAME.get(ext, Codec.JPEG)
