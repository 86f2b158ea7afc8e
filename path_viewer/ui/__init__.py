"""Path Viewer UI package.

Tkinter front-end: the main window, widgets implementing the core's host
interfaces, and the controller wiring commands and selection events.
Submodules are imported explicitly so that the controller can be used
without creating any Tk widget.
"""
