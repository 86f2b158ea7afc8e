"""Reusable Tk widgets implementing the core host interfaces."""

from .indexed_tree import IndexedTreeWidget  # noqa: F401
from .output_panel import OutputPanel  # noqa: F401
from .source_editor import SourceEditor  # noqa: F401

__all__ = ["IndexedTreeWidget", "OutputPanel", "SourceEditor"]
