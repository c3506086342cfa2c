import customtkinter as ctk

from sizefit.controllers.app_controller import AppController
from sizefit.ui.preview import PreviewPane
from sizefit.ui.sidebar import Sidebar
from sizefit.ui.status_bar import StatusBar


class SizeFitApp(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("SizeFit")
        self.minsize(900, 600)

        # root layout: left preview, right sidebar, status bar below
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._preview = PreviewPane(self)
        self._preview.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._status = StatusBar(self)
        self._status.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(preview=self._preview, sidebar=self._sidebar, status=self._status, window=self)
        self._controller.bind_events()
