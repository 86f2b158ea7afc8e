# -*- coding: utf-8 -*-
"""SourceEditor widget.

A read-only source view that shows one file at a time and renders location
highlights. It is the Tk implementation of the core's ``EditorService``,
``DocumentHandle``, ``DecorationHandle`` and ``ActiveDocumentSource``
interfaces:

- show_document(file) -> TextDocument
- create_decoration(style) -> TextDecoration
- get_active_document() -> ActiveDocument | None

A decoration is a pair of Text tags: one framing the range with a solid
border, one carrying the trailing annotation, which is inserted after the
last line of the range and removed again when the decoration is cleared.
"""

from __future__ import annotations

import itertools
import logging
import tkinter as tk
from pathlib import Path
from tkinter import ttk
from typing import Callable, Optional, Sequence

from path_viewer.core.models import ActiveDocument, DecorationStyle, TextRange

logger = logging.getLogger(__name__)

__all__ = ["SourceEditor", "TextDocument", "TextDecoration"]

_tag_ids = itertools.count(1)


def _tk_index(line: int, character: int) -> str:
    """Convert a zero-based position to a Text index (lines are 1-based there)."""
    return f"{line + 1}.{character}"


class TextDecoration:
    """Decoration handle backed by two Text tags."""

    def __init__(self, text: tk.Text, style: DecorationStyle) -> None:
        self._text = text
        self.style = style
        number = next(_tag_ids)
        self.tag = f"decoration-{number}"
        self.annotation_tag = f"decoration-{number}-after"
        self.disposed = False

        text.tag_configure(
            self.tag,
            background=style.background,
            relief="solid",
            borderwidth=style.border_width,
        )
        text.tag_configure(self.annotation_tag, foreground=style.annotation_color)

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self._text.tag_delete(self.tag, self.annotation_tag)


class TextDocument:
    """Handle to the file shown in a :class:`SourceEditor`.

    Calls made after the editor switched to another file are ignored; the
    old file's text, and any decoration in it, is already gone.
    """

    def __init__(self, editor: "SourceEditor", file: str) -> None:
        self.editor = editor
        self.file = file

    @property
    def is_visible(self) -> bool:
        return self.editor.current_file == self.file

    def set_decorations(self, decoration: TextDecoration, ranges: Sequence[TextRange]) -> None:
        if not self.is_visible:
            return
        self.editor._remove_decoration(decoration)
        for text_range in ranges:
            self.editor._apply_decoration(decoration, text_range)

    def reveal_range(self, text_range: TextRange, *, center: bool = True) -> None:
        if not self.is_visible:
            return
        self.editor._reveal(text_range, center)


class SourceEditor(ttk.Frame):
    """Read-only, single-document source view with highlight support."""

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_document_changed: Optional[Callable[[str], None]] = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, **kwargs)
        self.on_document_changed = on_document_changed
        self.current_file: Optional[str] = None
        self._document_text: str = ""

        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        self._title_var = tk.StringVar(value="No file open")
        ttk.Label(self, textvariable=self._title_var).grid(row=0, column=0, columnspan=2, sticky="w", padx=4, pady=2)

        self._text = tk.Text(self, wrap="none", undo=False, font=("TkFixedFont", 10))
        vsb = ttk.Scrollbar(self, orient="vertical", command=self._text.yview)
        hsb = ttk.Scrollbar(self, orient="horizontal", command=self._text.xview)
        self._text.configure(yscrollcommand=vsb.set, xscrollcommand=hsb.set, state="disabled")

        self._text.grid(row=1, column=0, sticky="nsew")
        vsb.grid(row=1, column=1, sticky="ns")
        hsb.grid(row=2, column=0, sticky="ew")

    # ------------------------------------------------------------------
    # EditorService / ActiveDocumentSource
    # ------------------------------------------------------------------

    def show_document(self, file: str) -> TextDocument:
        """Display *file*, reading it unless it is already shown.

        Raises
        ------
        OSError
            If the file cannot be read; the current document stays shown.
        """
        if file != self.current_file:
            content = Path(file).read_text(encoding="utf-8", errors="replace")
            self._set_content(file, content)
        return TextDocument(self, file)

    def create_decoration(self, style: DecorationStyle) -> TextDecoration:
        return TextDecoration(self._text, style)

    def get_active_document(self) -> Optional[ActiveDocument]:
        if self.current_file is None:
            return None
        return ActiveDocument(self.current_file, self._document_text)

    # Public API

    def get_displayed_text(self) -> str:
        """Widget text including any inserted annotations."""
        return self._text.get("1.0", "end-1c")

    def tag_ranges(self, tag: str) -> list[str]:
        return [str(i) for i in self._text.tag_ranges(tag)]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _set_content(self, file: str, content: str) -> None:
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.insert("1.0", content)
        self._text.configure(state="disabled")
        self._text.yview_moveto(0)
        self.current_file = file
        self._document_text = content
        self._title_var.set(file)
        logger.debug("Showing %s", file)
        if self.on_document_changed is not None:
            self.on_document_changed(file)

    def _apply_decoration(self, decoration: TextDecoration, text_range: TextRange) -> None:
        start = _tk_index(text_range.start.line, text_range.start.character)
        end = _tk_index(text_range.end.line, text_range.end.character)
        self._text.tag_add(decoration.tag, start, end)

        annotation = decoration.style.annotation_text
        if annotation:
            margin = " " * max(0, decoration.style.annotation_margin)
            line_end = f"{text_range.end.line + 1}.end"
            self._text.configure(state="normal")
            self._text.insert(line_end, f"{margin}{annotation}", (decoration.annotation_tag,))
            self._text.configure(state="disabled")

    def _remove_decoration(self, decoration: TextDecoration) -> None:
        if decoration.disposed:
            return
        self._text.tag_remove(decoration.tag, "1.0", "end")
        ranges = self._text.tag_ranges(decoration.annotation_tag)
        if not ranges:
            return
        self._text.configure(state="normal")
        # Delete back to front so earlier indices stay valid.
        pairs = list(zip(ranges[0::2], ranges[1::2]))
        for start, end in reversed(pairs):
            self._text.delete(start, end)
        self._text.configure(state="disabled")

    def _reveal(self, text_range: TextRange, center: bool) -> None:
        start = _tk_index(text_range.start.line, text_range.start.character)
        if center:
            self._text.update_idletasks()
            total_lines = max(1, int(self._text.index("end-1c").split(".")[0]))
            first, last = self._text.yview()
            visible = last - first
            target = (text_range.start.line / total_lines) - visible / 2
            self._text.yview_moveto(max(0.0, target))
        self._text.see(start)
