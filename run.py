# -*- coding: utf-8 -*-

"""
Main entry point for launching Path Viewer.

Usage: ``python run.py [FILE]``. A FILE argument is opened in the editor;
when it is the report file it is loaded right away.
"""

import logging
import sys
import tkinter as tk
from pathlib import Path

from path_viewer.config import ConfigManager
from path_viewer.logging_config import setup_logging
from path_viewer.ui.app import PathViewerApp, apply_theme


def main(argv=None):
    """
    Configure logging, main window, and launch application.
    """
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()

    root = tk.Tk()
    window_width, window_height = 1200, 760
    screen_width = root.winfo_screenwidth()
    screen_height = root.winfo_screenheight()
    pos_x = (screen_width // 2) - (window_width // 2)
    pos_y = (screen_height // 2) - (window_height // 2)
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    # sv-ttk theme from the ui settings
    apply_theme(root, ConfigManager().get_ui_config().get("theme", "light"))

    app = PathViewerApp(root)
    if argv:
        file_name = argv[0]
        is_report = Path(file_name).name == app.controller.report_service.report_file_name
        root.after_idle(lambda: app.open_file(file_name, load_report=is_report))

    root.mainloop()
    logging.info("===== Application terminated =====")


if __name__ == '__main__':
    main()
