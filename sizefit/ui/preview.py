"""Превью «до/после»: исходный растр рядом со сжатым результатом.

Принципы:
- SRP: только отрисовка; о кодеках и бюджете виджет не знает.
- Результат, уменьшенный поиском, растягивается до размера оригинала
  ближайшим соседом, чтобы потеря разрешения была видна глазами.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

MIN_ZOOM, MAX_ZOOM = 10, 400
COMPARE_MODES = ("Результат", "Оригинал", "Шторка", "2-up")


def wipe_pieces(before: Image.Image, after: Image.Image, fraction: float) -> list[tuple[Image.Image, int]]:
    """Левая часть оригинала и правая часть результата со смещениями по x.

    Пустые полосы (шторка у края) пропускаются.
    """
    w, h = before.size
    cut = round(w * fraction)
    pieces = []
    if cut > 0:
        pieces.append((before.crop((0, 0, cut, h)), 0))
    if cut < w:
        pieces.append((after.crop((cut, 0, w, h)), cut))
    return pieces


class PreviewPane(ctk.CTkFrame):
    def __init__(self, master: tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        bg = "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
        self._canvas = tk.Canvas(self, bg=bg, highlightthickness=0)
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._source: Optional[Image.Image] = None
        self._result: Optional[Image.Image] = None
        self._zoom: int = 100
        self._mode: str = COMPARE_MODES[0]
        self._wipe: float = 0.5
        # Tk drops images that lose their last Python reference
        self._photos: list[ImageTk.PhotoImage] = []

        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", lambda _e: self._redraw())
        self._canvas.bind("<MouseWheel>", lambda e: self._wheel(e.delta > 0))
        self._canvas.bind("<Button-4>", lambda _e: self._wheel(True))
        self._canvas.bind("<Button-5>", lambda _e: self._wheel(False))

    # ---- Public API ----
    def show_source(self, image: Image.Image) -> None:
        self._source = image
        self._result = None
        self.zoom_to_fit()

    def show_result(self, image: Optional[Image.Image]) -> None:
        if image is not None and self._source is not None and image.size != self._source.size:
            image = image.resize(self._source.size, Image.Resampling.NEAREST)
        self._result = image
        self._redraw()

    def zoom_to_fit(self) -> None:
        self._zoom = self._fit_zoom()
        self._redraw()

    @property
    def zoom(self) -> int:
        return self._zoom

    @zoom.setter
    def zoom(self, percent: int) -> None:
        self._zoom = max(MIN_ZOOM, min(MAX_ZOOM, int(percent)))
        self._redraw()

    def set_mode(self, mode: str) -> None:
        self._mode = mode if mode in COMPARE_MODES else COMPARE_MODES[0]
        self._redraw()

    def set_wipe(self, percent: int) -> None:
        self._wipe = max(0, min(100, percent)) / 100
        if self._mode == "Шторка":
            self._redraw()

    # ---- Drawing ----
    def _fit_zoom(self) -> int:
        if self._source is None or 0 in self._source.size:
            return 100
        cw = max(1, self._canvas.winfo_width())
        ch = max(1, self._canvas.winfo_height())
        sw, sh = self._source.size
        return max(MIN_ZOOM, min(MAX_ZOOM, int(100 * min(cw / sw, ch / sh))))

    def _scaled(self, image: Image.Image) -> Image.Image:
        w, h = image.size
        size = (max(1, w * self._zoom // 100), max(1, h * self._zoom // 100))
        return image.resize(size, Image.Resampling.LANCZOS)

    def _place(self, image: Image.Image, x: int, y: int) -> None:
        photo = ImageTk.PhotoImage(image)
        self._photos.append(photo)
        self._canvas.create_image(x, y, image=photo, anchor="nw")

    def _redraw(self) -> None:
        self._canvas.delete("all")
        self._photos.clear()
        if self._source is None:
            return

        before = self._scaled(self._source)
        after = self._scaled(self._result) if self._result is not None else None
        mode = self._mode if after is not None else "Оригинал"

        w, h = before.size
        gap = 16
        total_w = 2 * w + gap if mode == "2-up" else w
        x = max(0, (self._canvas.winfo_width() - total_w) // 2)
        y = max(0, (self._canvas.winfo_height() - h) // 2)

        if mode == "Шторка":
            for piece, dx in wipe_pieces(before, after, self._wipe):
                self._place(piece, x + dx, y)
        elif mode == "2-up":
            self._place(before, x, y)
            self._place(after, x + w + gap, y)
        elif mode == "Результат":
            self._place(after, x, y)
        else:
            self._place(before, x, y)

    def _wheel(self, zoom_in: bool) -> None:
        if self._source is None:
            return
        step = 1.1 if zoom_in else 1 / 1.1
        self.zoom = round(self._zoom * step)
        if self.on_zoom_change:
            self.on_zoom_change(self._zoom)
