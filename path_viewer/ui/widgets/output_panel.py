"""OutputPanel widget.

Read-only scrolled text acting as the "Path Viewer" output channel
(``OutputSink``).
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from tkinter.scrolledtext import ScrolledText
from typing import Callable, Optional


class OutputPanel(ttk.Frame):
    """Append-only "Path Viewer" output channel.

    Implements the core ``OutputSink`` interface. ``show`` scrolls to the
    last line and calls *on_show* so the host can bring the panel to front
    (e.g. un-collapse a paned window).
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        title: str = "Output",
        on_show: Optional[Callable[[], None]] = None,
        height: int = 6,
    ) -> None:
        super().__init__(master)
        self._on_show = on_show

        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        ttk.Label(self, text=title).grid(row=0, column=0, sticky="w", padx=4, pady=2)
        self._text = ScrolledText(self, wrap="word", height=height, state="disabled")
        self._text.grid(row=1, column=0, sticky="nsew")

    def append_line(self, line: str) -> None:
        self._text.configure(state="normal")
        self._text.insert("end", f"{line}\n")
        self._text.configure(state="disabled")

    def show(self) -> None:
        self._text.see("end")
        if self._on_show is not None:
            self._on_show()

    def get_lines(self) -> list[str]:
        return self._text.get("1.0", "end-1c").splitlines()

    def clear(self) -> None:
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.configure(state="disabled")
