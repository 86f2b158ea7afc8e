# -*- coding: utf-8 -*-
"""Tk-based GUI front-end for Path Viewer.

Main application object wiring the two path trees, the source editor and the
output panel to the core providers. Exposes :class:`PathViewerApp`, which is
instantiated by ``run.py``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import tkinter as tk
from tkinter import filedialog, ttk

import sv_ttk

from path_viewer.config import ConfigManager
from path_viewer.core.models import DecorationStyle
from path_viewer.core.providers import LocationProvider, PathProvider
from path_viewer.core.services.report_service import ReportService
from path_viewer.ui.controllers.viewer_controller import (
    COMMAND_DETAILS_NEXT,
    COMMAND_DETAILS_PREVIOUS,
    COMMAND_OPEN_REPORT,
    COMMAND_PATHS_NEXT,
    COMMAND_PATHS_PREVIOUS,
    ViewerController,
)
from path_viewer.ui.dialogs import MessageBoxNotifier
from path_viewer.ui.widgets.indexed_tree import IndexedTreeWidget
from path_viewer.ui.widgets.output_panel import OutputPanel
from path_viewer.ui.widgets.source_editor import SourceEditor
from path_viewer.version import get_app_version

logger = logging.getLogger(__name__)

__all__ = ["PathViewerApp", "apply_theme", "decoration_style_from_config"]

_MENU_LABELS = {
    COMMAND_OPEN_REPORT: "Load Paths from Report",
    COMMAND_PATHS_PREVIOUS: "Previous Path",
    COMMAND_PATHS_NEXT: "Next Path",
    COMMAND_DETAILS_PREVIOUS: "Previous Location",
    COMMAND_DETAILS_NEXT: "Next Location",
}

_THEMES = ("light", "dark")


def apply_theme(root: tk.Tk, theme: Optional[str] = "light") -> bool:
    """Apply the sv-ttk *theme* to *root*; unknown names keep the current look."""
    if theme not in _THEMES:
        logger.warning("Unknown theme %r, expected one of %s", theme, ", ".join(_THEMES))
        return False
    sv_ttk.set_theme(theme, root=root)
    logger.debug("Applied %s theme", theme)
    return True


def decoration_style_from_config(cfg: dict) -> DecorationStyle:
    """Build the highlight style from the ``decoration`` settings."""
    defaults = DecorationStyle()
    return DecorationStyle(
        background=str(cfg.get("background", defaults.background)),
        border_width=int(cfg.get("border_width", defaults.border_width)),
        annotation_color=str(cfg.get("annotation_color", defaults.annotation_color)),
        annotation_margin=int(cfg.get("annotation_margin", defaults.annotation_margin)),
    )


class PathViewerApp:
    """Main window: path trees on the left, source and output on the right."""

    def __init__(self, root: tk.Tk, config: Optional[ConfigManager] = None) -> None:
        self.root = root
        self.config = config or ConfigManager()
        self.root.title(f"Path Viewer {get_app_version()}")

        # --- Layout --------------------------------------------------------
        self._paned = ttk.Panedwindow(root, orient="horizontal")
        self._paned.pack(fill="both", expand=True)

        left = ttk.Panedwindow(self._paned, orient="vertical")
        right = ttk.Panedwindow(self._paned, orient="vertical")
        self._paned.add(left, weight=1)
        self._paned.add(right, weight=3)
        self._right = right

        self.editor = SourceEditor(right, on_document_changed=self._on_document_changed)
        self.output_panel = OutputPanel(right, title="Path Viewer", on_show=self._show_output)
        right.add(self.editor, weight=4)
        right.add(self.output_panel, weight=1)

        # --- Providers and views ------------------------------------------
        self.path_provider = PathProvider()
        self.location_provider = LocationProvider(
            self.editor,
            decoration_style_from_config(self.config.get_decoration_config()),
        )
        self.notifier = MessageBoxNotifier(root)

        self.paths_view = IndexedTreeWidget(
            left, self.path_provider, title="All Paths",
            on_selection_changed=lambda sel: self.controller.handle_path_selection(sel),
        )
        self.details_view = IndexedTreeWidget(
            left, self.location_provider, title="Path Details",
            on_selection_changed=lambda sel: self.controller.handle_location_selection(sel),
        )
        left.add(self.paths_view, weight=1)
        left.add(self.details_view, weight=1)

        report_cfg = self.config.get_report_config()
        self.controller = ViewerController(
            self.path_provider,
            self.location_provider,
            documents=self.editor,
            notifier=self.notifier,
            report_service=ReportService(report_cfg.get("file_name"), report_cfg.get("excluded_kinds")),
            output=self.output_panel,
            focus_paths_view=self.paths_view.focus_view_when_idle,
        )

        self._build_menu()
        self._bind_shortcuts()
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    # ------------------------------------------------------------------
    # Menu / shortcuts
    # ------------------------------------------------------------------

    def _build_menu(self) -> None:
        menubar = tk.Menu(self.root)

        file_menu = tk.Menu(menubar, tearoff=False)
        file_menu.add_command(label="Open…", command=self.prompt_open_file)
        file_menu.add_command(label=_MENU_LABELS[COMMAND_OPEN_REPORT],
                              command=lambda: self.controller.execute_command(COMMAND_OPEN_REPORT))
        file_menu.add_separator()
        file_menu.add_command(label="Quit", command=self.on_close)
        menubar.add_cascade(label="File", menu=file_menu)

        nav_menu = tk.Menu(menubar, tearoff=False)
        for name in (COMMAND_PATHS_PREVIOUS, COMMAND_PATHS_NEXT,
                     COMMAND_DETAILS_PREVIOUS, COMMAND_DETAILS_NEXT):
            nav_menu.add_command(label=_MENU_LABELS[name],
                                 command=lambda n=name: self.controller.execute_command(n))
        menubar.add_cascade(label="Navigate", menu=nav_menu)

        self.root.config(menu=menubar)

    def _bind_shortcuts(self) -> None:
        commands = self.controller.commands()
        for name, sequence in self.config.get_keybindings().items():
            if name not in commands or not sequence:
                logger.warning("Ignoring keybinding %r for unknown command %s", sequence, name)
                continue
            try:
                self.root.bind_all(sequence, lambda _e, n=name: self._on_shortcut(n), add=True)
            except tk.TclError as exc:
                logger.warning("Invalid key sequence %r for %s: %s", sequence, name, exc)

    def _on_shortcut(self, name: str) -> str:
        self.controller.execute_command(name)
        return "break"

    # ------------------------------------------------------------------
    # File handling
    # ------------------------------------------------------------------

    def prompt_open_file(self) -> None:
        file_name = filedialog.askopenfilename(
            parent=self.root,
            title="Open file",
            filetypes=[("JSON reports", "*.json"), ("All files", "*.*")],
        )
        if file_name:
            self.open_file(file_name)

    def open_file(self, file_name: str, load_report: bool = False) -> bool:
        """Show *file_name* in the editor; optionally ingest it as a report."""
        path = str(Path(file_name).resolve())
        try:
            self.editor.show_document(path)
        except OSError as exc:
            logger.error("Could not open %s: %s", path, exc)
            self.notifier.show_error(f"Could not open {path}: {exc.strerror or exc}")
            return False
        if load_report:
            return self.controller.open_report()
        return True

    def _on_document_changed(self, file_name: str) -> None:
        self.root.title(f"Path Viewer {get_app_version()} - {Path(file_name).name}")

    def _show_output(self) -> None:
        # Make sure a collapsed output pane gets some room again.
        try:
            total = self._right.winfo_height()
            if total > 1 and self._right.sashpos(0) >= total - 10:
                self._right.sashpos(0, int(total * 0.8))
        except tk.TclError:
            pass

    def on_close(self) -> None:
        self.location_provider.clear_highlight()
        self.root.destroy()
