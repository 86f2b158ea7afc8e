"""Flat tree providers with a command-driven selection cursor.

:class:`IndexedTreeProvider` owns the nodes shown by one tree view and a
``current_index`` used by the previous/next commands. The cursor is separate
from the view's own selection: moving it asks the bound view to reveal and
select the element, and the view reports the resulting selection change back
through its own callback.

Design principles
-----------------
- No UI imports; the view is reached only through :class:`TreeViewHandle`.
- Navigation never raises. A missing view or empty data is logged and the
  call becomes a no-op, so commands are safe before any report is loaded.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from path_viewer.core.interfaces import (
    DecorationHandle,
    DocumentHandle,
    EditorService,
    TreeViewHandle,
)
from path_viewer.core.models import DecorationStyle, LocationItem, PathItem

logger = logging.getLogger(__name__)

__all__ = ["IndexedTreeProvider", "PathProvider", "LocationProvider"]

T = TypeVar("T")


class IndexedTreeProvider(Generic[T]):
    """Ordered, one-level-deep node list plus a saturating cursor.

    Parameters
    ----------
    name : str
        Used in log messages to tell the two views apart.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.data: List[T] = []
        self.current_index: int = 0
        self._view: Optional[TreeViewHandle] = None
        self._change_listeners: List[Callable[[], None]] = []

    # ------------------------------------------------------------ wiring

    def set_view(self, view: TreeViewHandle) -> None:
        """Bind the view that renders this provider (done once, after creation)."""
        self._view = view

    def add_change_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback fired whenever ``data`` is replaced."""
        self._change_listeners.append(listener)

    def refresh(self) -> None:
        for listener in list(self._change_listeners):
            listener()

    # ------------------------------------------------------------- data

    def load(self, items: Sequence[T]) -> None:
        """Replace ``data`` and notify listeners. The cursor is left alone."""
        self.data = list(items)
        logger.debug("%s: loaded %d items", self.name, len(self.data))
        self.refresh()

    def get_children(self, element: Optional[T] = None) -> List[T]:
        if element is not None:
            return []
        return self.data

    def get_parent(self, element: T) -> None:
        return None

    def get_tree_item(self, element: T) -> T:
        return element

    @property
    def current_item(self) -> Optional[T]:
        if not self.data:
            return None
        return self.data[self.current_index]

    # ------------------------------------------------------- navigation

    def reset_index(self) -> None:
        self.current_index = 0
        self._reveal_current()

    def select_previous_item(self) -> None:
        if not self.data:
            logger.info("%s: no data to show", self.name)
            return
        self.current_index = max(0, self.current_index - 1)
        self._reveal_current()

    def select_next_item(self) -> None:
        if not self.data:
            logger.info("%s: no data to show", self.name)
            return
        self.current_index = min(len(self.data) - 1, self.current_index + 1)
        self._reveal_current()

    def _reveal_current(self) -> None:
        if self._view is None:
            logger.warning("%s: no view bound, cannot reveal item %d", self.name, self.current_index)
            return
        if not self.data:
            logger.info("%s: no data to show", self.name)
            return
        logger.debug("%s: revealing item %d", self.name, self.current_index)
        self._view.reveal(self.data[self.current_index], select=True, focus=True)


class PathProvider(IndexedTreeProvider[PathItem]):
    """Provider for the all-paths view."""

    def __init__(self, name: str = "all-paths") -> None:
        super().__init__(name)

    def load_paths(self, paths: Sequence[PathItem]) -> None:
        """Load a new report's paths.

        The cursor is not reset here; the open-report command calls
        :meth:`reset_index` once the view has the new data.
        """
        self.load(paths)


class LocationProvider(IndexedTreeProvider[LocationItem]):
    """Provider for the path-details view; also owns the source highlight.

    At most one decoration is live for the whole provider, whatever the
    file: it is cleared and disposed before the next one is created.
    """

    def __init__(
        self,
        editor: EditorService,
        style: Optional[DecorationStyle] = None,
        name: str = "path-details",
    ) -> None:
        super().__init__(name)
        self.editor = editor
        self.style = style or DecorationStyle()
        self._current_decoration: Optional[DecorationHandle] = None
        self._decorated_document: Optional[DocumentHandle] = None

    @property
    def current_decoration(self) -> Optional[DecorationHandle]:
        return self._current_decoration

    def load_locations(self, locations: Sequence[LocationItem]) -> None:
        self.load(locations)
        self.reset_index()

    def highlight_location(self, location: LocationItem) -> None:
        """Open the location's file and frame the location's range.

        Raises
        ------
        OSError
            If the file cannot be opened; the previous highlight is kept.
        TypeError
            If a coordinate of the location is not a number; nothing changes.
        """
        text_range = location.to_range()
        document = self.editor.show_document(location.file)

        self.clear_highlight()

        decoration = self.editor.create_decoration(self.style.with_annotation(location.annotation))
        self._current_decoration = decoration
        self._decorated_document = document

        document.set_decorations(decoration, [text_range])
        document.reveal_range(text_range, center=True)
        logger.debug("Highlighted %s at %s:%d", location.annotation, location.file, location.begin_line)

    def clear_highlight(self) -> None:
        """Remove and dispose the live decoration, if any."""
        decoration = self._current_decoration
        document = self._decorated_document
        self._current_decoration = None
        self._decorated_document = None
        if decoration is None:
            return
        if document is not None:
            document.set_decorations(decoration, [])
        decoration.dispose()
