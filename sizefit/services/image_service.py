"""Загрузка изображений с диска и запись результата.

Принципы:
- SRP: класс отвечает только за файловый ввод-вывод и извлечение свойств.
- LSP/ISP: возвращает `ImageData` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from sizefit.models.image_model import ImageData
from sizefit.services.encoder_service import to_8bit_gray

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Режим исходника сохраняется (палитровые изображения переводятся в RGB/RGBA),
        приведение под конкретный кодек делает `EncoderService`.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image`, размерами, режимом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ValueError: если файл не распознан как изображение или повреждён.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as opened:
                opened.load()
                pil_image = self._normalize_mode(opened)
        except UnidentifiedImageError as exc:
            raise ValueError(f"Файл не является изображением: {path}") from exc
        except OSError as exc:
            # truncated / corrupt data
            raise ValueError(f"Не удалось декодировать изображение {path}: {exc}") from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.debug("Loaded %s: %dx%d %s, %s bytes", path, width, height, pil_image.mode, size_bytes)
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            size_bytes=size_bytes,
        )

    def save_bytes(self, file_path: str | Path, data: bytes) -> int:
        """Записывает байты результата и возвращает размер файла на диске.

        Raises:
            FileNotFoundError: если каталог назначения не существует.
            OSError: если файл нельзя записать.
        """
        path = self.require_output_dir(file_path)
        path.write_bytes(data)
        written = path.stat().st_size
        logger.debug("Wrote %d bytes to %s", written, path)
        return written

    def require_output_dir(self, file_path: str | Path) -> Path:
        """Проверяет, что файл результата можно создать, до запуска сжатия."""
        path = Path(file_path)
        if not path.parent.is_dir():
            raise FileNotFoundError(f"Каталог не найден: {path.parent}")
        if path.is_dir():
            raise IsADirectoryError(f"Путь результата указывает на каталог: {path}")
        return path

    def _normalize_mode(self, image: Image.Image) -> Image.Image:
        """Палитру и экзотические режимы приводим к RGB/RGBA, остальное копируем как есть.

        16- и 32-битные градации серого масштабируются в L, а не обрезаются.
        """
        if image.mode in ("RGB", "RGBA", "L", "LA"):
            return image.copy()
        if image.mode.startswith("I"):
            return to_8bit_gray(image)
        has_alpha = "A" in image.getbands() or "transparency" in image.info
        return image.convert("RGBA" if has_alpha else "RGB")
