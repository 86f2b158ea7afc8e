"""Reusable dialog utilities for the Path Viewer UI."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox
from typing import Optional

logger = logging.getLogger(__name__)

__all__ = ["MessageBoxNotifier"]


class MessageBoxNotifier:
    """``Notifier`` implementation based on :mod:`tkinter.messagebox`.

    Parameters
    ----------
    parent
        Window the message boxes are centred on.
    title
        Title of every message box.
    """

    def __init__(self, parent: Optional[tk.Misc] = None, title: str = "Path Viewer") -> None:
        self._parent = parent
        self._title = title

    def show_error(self, message: str) -> None:
        logger.debug("Error shown to user: %s", message)
        messagebox.showerror(self._title, message, parent=self._parent)

    def show_info(self, message: str) -> None:
        messagebox.showinfo(self._title, message, parent=self._parent)
