"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики кодирования).
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; поиск параметров и кодеки живут в сервисах.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from tkinter import TclError, filedialog, messagebox
from typing import Optional

import customtkinter as ctk
from PIL import Image

from sizefit.models.compression_model import SearchOutcome
from sizefit.models.image_model import ImageData
from sizefit.services.format_service import select_codec
from sizefit.services.image_service import ImageService
from sizefit.services.metrics import decode, psnr
from sizefit.services.search_service import SearchService
from sizefit.services.size_parser import format_size, parse_size
from sizefit.ui.preview import PreviewPane
from sizefit.ui.sidebar import Sidebar
from sizefit.ui.status_bar import StatusBar

logger = logging.getLogger(__name__)

_OPEN_FILETYPES = (
    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
    ("All files", "*.*"),
)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Загрузка изображений через `ImageService`.
    - Запуск поиска через `SearchService` и запись результата.
    - Синхронизация зума и режимов сравнения.
    """
    preview: PreviewPane
    sidebar: Sidebar
    status: StatusBar
    window: ctk.CTk

    _image_service: ImageService = ImageService()
    _search_service: SearchService = SearchService()
    _current_image: Optional[ImageData] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_compress = self._handle_compress
        self.preview.on_zoom_change = self.status.show_zoom

        self.status.on_zoom = self._handle_zoom_change
        self.status.on_fit = self._handle_zoom_fit
        self.status.on_mode = self.preview.set_mode
        self.status.on_wipe = self.preview.set_wipe

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(title="Выберите изображение", filetypes=_OPEN_FILETYPES)
        except TclError:
            logger.warning("open dialog is unavailable")
            return
        if not file_path:
            return

        try:
            image_data = self._image_service.load_image(file_path)
        except (ValueError, OSError) as exc:
            self._show_error("Не удалось открыть изображение", exc)
            return
        self._current_image = image_data

        self.preview.show_source(image_data.pil_image)
        self.sidebar.set_image_info(image_data)
        self.status.show_zoom(self.preview.zoom)
        self.status.set_status(f"Открыто: {image_data.path.name}")

    def _handle_compress(self) -> None:
        if self._current_image is None:
            return
        try:
            budget = parse_size(self.sidebar.get_budget_text())
        except ValueError as exc:
            self._show_error("Некорректный размер", exc)
            return

        output_path = self._ask_output_path(self.sidebar.get_format())
        if not output_path:
            return

        try:
            codec = select_codec(self.sidebar.get_format(), output_path)
            outcome = self._search_service.search(self._current_image.pil_image, budget, codec)
            self._image_service.save_bytes(output_path, outcome.artifact.data)
            result_image = decode(outcome.artifact.data)
        except (ValueError, OSError) as exc:
            self._show_error("Сжатие не удалось", exc)
            return

        self._show_outcome(outcome, result_image, Path(output_path))

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.preview.zoom = zoom_percent

    def _handle_zoom_fit(self) -> None:
        self.preview.zoom_to_fit()
        self.status.show_zoom(self.preview.zoom)

    # ---- Helpers ----
    def _ask_output_path(self, requested_format: str) -> str:
        source = self._current_image.path
        ext = select_codec(requested_format, source).extension
        try:
            return filedialog.asksaveasfilename(
                title="Сохранить результат",
                initialfile=f"{source.stem}_fit{ext}",
                filetypes=(("JPEG", "*.jpg *.jpeg"), ("PNG", "*.png"), ("WebP", "*.webp"), ("All files", "*.*")),
            )
        except TclError:
            logger.warning("save dialog is unavailable")
            return ""

    def _show_outcome(self, outcome: SearchOutcome, result_image: Image.Image, output_path: Path) -> None:
        quality_db = psnr(self._current_image.pil_image, result_image)
        self.sidebar.set_result(outcome, quality_db)
        self.preview.show_result(result_image)

        size_text = format_size(outcome.artifact.size)
        if outcome.met_budget:
            self.status.set_status(f"Сохранено {output_path.name}: {size_text}")
            return
        logger.warning("budget of %d bytes not met for %s (%d bytes)", outcome.budget, output_path, outcome.artifact.size)
        self.status.set_status(f"Сохранено {output_path.name}: {size_text}, бюджет не достигнут")
        messagebox.showwarning(
            "Бюджет не достигнут",
            f"Не удалось уложиться в {format_size(outcome.budget)}; сохранён лучший результат ({size_text}).",
            parent=self.window,
        )

    def _show_error(self, title: str, exc: Exception) -> None:
        logger.error("%s: %s", title, exc)
        self.status.set_status(title)
        messagebox.showerror(title, str(exc), parent=self.window)
