"""Host interface definitions.

The core never talks to a UI toolkit directly. These protocols form the
contract between the providers/controller and whatever renders trees,
documents and messages (the Tk front-end, or fakes in tests).
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from path_viewer.core.models import ActiveDocument, DecorationStyle, TextRange


@runtime_checkable
class TreeViewHandle(Protocol):
    """A rendered tree bound to a provider."""

    def reveal(self, element: Any, *, select: bool = True, focus: bool = True) -> None:
        """Scroll *element* into view, optionally selecting and focusing it.

        Selecting is expected to raise the view's own selection-changed
        notification, exactly as a user click would.
        """
        ...


@runtime_checkable
class DecorationHandle(Protocol):
    """A decoration resource created by the editor."""

    def dispose(self) -> None:
        """Release the resource. Safe to call once the decoration is cleared."""
        ...


@runtime_checkable
class DocumentHandle(Protocol):
    """A document shown in the editor."""

    def set_decorations(self, decoration: DecorationHandle, ranges: Sequence[TextRange]) -> None:
        """Apply *decoration* to *ranges*; an empty sequence removes it."""
        ...

    def reveal_range(self, text_range: TextRange, *, center: bool = True) -> None:
        ...


@runtime_checkable
class EditorService(Protocol):
    """Opens documents and creates decorations."""

    def show_document(self, file: str) -> DocumentHandle:
        """Make *file* the visible document and return a handle to it.

        Raises
        ------
        OSError
            If the file cannot be read.
        """
        ...

    def create_decoration(self, style: DecorationStyle) -> DecorationHandle:
        ...


@runtime_checkable
class ActiveDocumentSource(Protocol):
    def get_active_document(self) -> Optional[ActiveDocument]:
        ...


@runtime_checkable
class Notifier(Protocol):
    """User-facing messages."""

    def show_error(self, message: str) -> None:
        ...

    def show_info(self, message: str) -> None:
        ...


@runtime_checkable
class OutputSink(Protocol):
    """An append-only output channel the user can bring to front."""

    def append_line(self, line: str) -> None:
        ...

    def show(self) -> None:
        ...
