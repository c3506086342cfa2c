"""Боковая панель: открытие файла, информация, целевой размер и итог сжатия.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from sizefit.models.compression_model import SearchOutcome
from sizefit.models.image_model import ImageData
from sizefit.services.size_parser import format_size

# label in the menu -> value understood by select_codec
_FORMAT_OPTIONS = {"Авто (по расширению)": "auto", "JPEG": "jpeg", "PNG": "png", "WebP": "webp"}


class Sidebar(ctk.CTkFrame):
    """Панель с блоками: файл, информация, цель, результат."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_compress: Optional[Callable[[], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        self._title = ctk.CTkLabel(self, text="Файл", font=bold)
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")
        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=bold)
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._mode_val = ctk.StringVar(value="—")
        for row, var in enumerate((self._path_val, self._size_val, self._dims_val, self._mode_val), start=3):
            label = ctk.CTkLabel(self, textvariable=var, wraplength=250, anchor="w", justify="left")
            label.grid(row=row, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Target section
        self._target_title = ctk.CTkLabel(self, text="Цель", font=bold)
        self._target_title.grid(row=10, column=0, padx=8, pady=(12, 4), sticky="w")

        self._budget_label = ctk.CTkLabel(self, text="Максимальный размер (500KB, 1MB, 2MiB):")
        self._budget_label.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="w")
        self._budget_val = ctk.StringVar(value="500KB")
        self._budget_entry = ctk.CTkEntry(self, textvariable=self._budget_val)
        self._budget_entry.grid(row=12, column=0, padx=8, pady=(0, 6), sticky="ew")
        self._budget_entry.bind("<Return>", lambda _event: self._emit_compress())

        self._format_label = ctk.CTkLabel(self, text="Формат:")
        self._format_label.grid(row=13, column=0, padx=8, pady=(0, 2), sticky="w")
        self._format_menu = ctk.CTkOptionMenu(self, values=list(_FORMAT_OPTIONS))
        self._format_menu.set("Авто (по расширению)")
        self._format_menu.grid(row=14, column=0, padx=8, pady=(0, 8), sticky="ew")

        self._compress_btn = ctk.CTkButton(self, text="Сжать и сохранить…", command=self._emit_compress)
        self._compress_btn.grid(row=15, column=0, padx=8, pady=(0, 12), sticky="ew")
        self._compress_btn.configure(state="disabled")

        # Result section
        self._result_title = ctk.CTkLabel(self, text="Результат", font=bold)
        self._result_title.grid(row=20, column=0, padx=8, pady=(8, 4), sticky="w")

        self._result_size_val = ctk.StringVar(value="—")
        self._result_verdict_val = ctk.StringVar(value="—")
        self._result_knobs_val = ctk.StringVar(value="—")
        self._result_psnr_val = ctk.StringVar(value="—")
        result_vars = (self._result_size_val, self._result_verdict_val, self._result_knobs_val, self._result_psnr_val)
        for row, var in enumerate(result_vars, start=21):
            label = ctk.CTkLabel(self, textvariable=var, wraplength=250, anchor="w", justify="left")
            label.grid(row=row, column=0, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_image_info(self, data: ImageData) -> None:
        self._path_val.set(f"Путь: {data.path}")
        self._size_val.set(f"Размер файла: {format_size(data.size_bytes)}")
        self._dims_val.set(f"Размеры: {data.width} × {data.height} px")
        self._mode_val.set(f"Режим: {data.mode}")
        self._compress_btn.configure(state="normal")
        self.clear_result()

    def set_result(self, outcome: SearchOutcome, quality_db: float) -> None:
        artifact = outcome.artifact
        self._result_size_val.set(f"Итог: {format_size(artifact.size)} из {format_size(outcome.budget)}")
        verdict = "в пределах бюджета" if outcome.met_budget else "бюджет не достигнут"
        self._result_verdict_val.set(f"{outcome.codec.label}: {verdict}, попыток {len(outcome.attempts)}")
        self._result_knobs_val.set(f"{artifact.knobs.describe()} → {artifact.width} × {artifact.height} px")
        self._result_psnr_val.set(f"PSNR: {quality_db:.2f} дБ")

    def clear_result(self) -> None:
        for var in (self._result_size_val, self._result_verdict_val, self._result_knobs_val, self._result_psnr_val):
            var.set("—")

    def get_budget_text(self) -> str:
        return self._budget_val.get().strip()

    def get_format(self) -> str:
        """Возвращает 'auto' | 'jpeg' | 'png' | 'webp'."""
        return _FORMAT_OPTIONS.get(self._format_menu.get(), "auto")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_compress(self) -> None:
        if self.on_compress:
            self.on_compress()
