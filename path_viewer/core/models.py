"""Shared data structures used across the Path Viewer core.

This module exposes the tree node model (:class:`PathItem` and
:class:`LocationItem`) and the small value objects the highlight protocol
passes to the editor. It is intentionally free of UI / I/O code so that the
contained objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

__all__ = [
    "Position",
    "TextRange",
    "LocationItem",
    "PathItem",
    "DecorationStyle",
    "ActiveDocument",
]


@dataclass(frozen=True)
class Position:
    """Zero-based line/character position inside a document."""

    line: int
    character: int


@dataclass(frozen=True)
class TextRange:
    """Zero-based span between two positions."""

    start: Position
    end: Position


@dataclass(frozen=True)
class LocationItem:
    """One source span of a path.

    Attributes
    ----------
    index
        0-based position inside the owning path, assigned at ingestion.
    kind
        Report ``type`` of the step (``deref``, ``call``...).
    file
        Absolute path of the source file.
    begin_line, begin_column, end_line, end_column
        1-based coordinates, copied verbatim from the report.
    content
        Source excerpt, display only.
    """

    index: int
    kind: str
    file: str
    begin_line: int
    begin_column: int
    end_line: int
    end_column: int
    content: str = ""

    @property
    def label(self) -> str:
        return f"{self.index} {self.kind}: {self.content}"

    @property
    def annotation(self) -> str:
        """Text shown after the highlighted range."""
        return f"{self.index} {self.kind}"

    def to_range(self) -> TextRange:
        """Return the zero-based range covered by this location.

        Coordinates below 1 are clamped to the start of the line/document.
        """
        return TextRange(
            Position(max(0, self.begin_line - 1), max(0, self.begin_column - 1)),
            Position(max(0, self.end_line - 1), max(0, self.end_column - 1)),
        )


@dataclass(frozen=True)
class PathItem:
    """One finding: a labelled, ordered sequence of locations."""

    label: str
    kind: str
    locations: Tuple[LocationItem, ...] = field(default_factory=tuple)
    source_index: Optional[int] = None


@dataclass(frozen=True)
class DecorationStyle:
    """Visual attributes of a highlight: a border plus trailing annotation."""

    background: str = "#ffe0e0"
    border_width: int = 1
    annotation_color: str = "#ff8080"
    annotation_margin: int = 6
    annotation_text: str = ""

    def with_annotation(self, text: str) -> "DecorationStyle":
        return replace(self, annotation_text=text)


@dataclass(frozen=True)
class ActiveDocument:
    """The document currently shown in the editor."""

    file_name: str
    text: str
