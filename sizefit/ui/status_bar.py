from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from sizefit.ui.preview import COMPARE_MODES, MAX_ZOOM, MIN_ZOOM


class StatusBar(ctk.CTkFrame):
    """Нижняя панель: масштаб, режим сравнения, положение шторки и статус."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=56, **kwargs)

        self.on_zoom: Optional[Callable[[int], None]] = None
        self.on_fit: Optional[Callable[[], None]] = None
        self.on_mode: Optional[Callable[[str], None]] = None
        self.on_wipe: Optional[Callable[[int], None]] = None

        self.columnconfigure(1, weight=1)

        ctk.CTkLabel(self, text="Масштаб").grid(row=0, column=0, padx=(10, 6), pady=8)
        self._zoom_text = ctk.StringVar(value="100%")
        self._zoom = ctk.CTkSlider(
            self, from_=MIN_ZOOM, to=MAX_ZOOM, number_of_steps=MAX_ZOOM - MIN_ZOOM, command=self._zoom_moved
        )
        self._zoom.set(100)
        self._zoom.grid(row=0, column=1, padx=6, pady=8, sticky="ew")
        ctk.CTkLabel(self, textvariable=self._zoom_text, width=48).grid(row=0, column=2, padx=6, pady=8)
        ctk.CTkButton(self, text="Fit", width=48, command=lambda: self.on_fit and self.on_fit()).grid(
            row=0, column=3, padx=6, pady=8
        )

        self._modes = ctk.CTkSegmentedButton(self, values=list(COMPARE_MODES), command=self._mode_changed)
        self._modes.set(COMPARE_MODES[0])
        self._modes.grid(row=0, column=4, padx=6, pady=8)

        # enabled only in the wipe mode
        self._wipe = ctk.CTkSlider(self, from_=0, to=100, number_of_steps=100, width=120, command=self._wipe_moved)
        self._wipe.set(50)
        self._wipe.configure(state="disabled")
        self._wipe.grid(row=0, column=5, padx=6, pady=8)

        self._status = ctk.StringVar(value="Откройте изображение")
        ctk.CTkLabel(self, textvariable=self._status, anchor="e").grid(row=0, column=6, padx=(12, 10), pady=8)

    def show_zoom(self, percent: int) -> None:
        self._zoom.set(percent)
        self._zoom_text.set(f"{percent}%")

    def set_status(self, text: str) -> None:
        self._status.set(text)

    def _zoom_moved(self, value: float) -> None:
        percent = int(round(value))
        self._zoom_text.set(f"{percent}%")
        if self.on_zoom:
            self.on_zoom(percent)

    def _mode_changed(self, mode: str) -> None:
        self._wipe.configure(state="normal" if mode == "Шторка" else "disabled")
        if self.on_mode:
            self.on_mode(mode)

    def _wipe_moved(self, value: float) -> None:
        if self.on_wipe:
            self.on_wipe(int(round(value)))
