"""IndexedTreeWidget.

A flat ``ttk.Treeview`` bound to an :class:`IndexedTreeProvider`. It is the
provider's ``TreeViewHandle``: it re-renders on data changes, reveals the
element under the provider's cursor and reports selection changes.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Dict, List, Optional

from path_viewer.core.providers import IndexedTreeProvider


class IndexedTreeWidget(ttk.Frame):
    """Tkinter widget that renders an :class:`IndexedTreeProvider` as a flat Treeview.

    The widget is the provider's view: it re-renders whenever the provider
    fires its change notification and implements ``reveal`` for the
    provider's cursor. It does not perform business logic.

    Callbacks:
        - on_selection_changed: Invoked when selection changes (via <<TreeviewSelect>>),
          whether the user clicked or the provider revealed an element. Receives the
          list of selected elements in display order.

    Notes
    -----
    - Internally maps Treeview item IDs to provider elements by position.
    - Single selection only; the cursor and the click selection are meant to
      point at the same row.
    """

    def __init__(
        self,
        master: "tk.Widget",
        provider: IndexedTreeProvider,
        *,
        title: str = "",
        on_selection_changed: Optional[Callable[[List[Any]], None]] = None,
        height: int = 10,
    ) -> None:
        super().__init__(master)
        self._provider = provider
        self._on_selection_changed = on_selection_changed

        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        self._title_label = ttk.Label(self, text=title.upper(), font=("", 9, "bold"))
        self._title_label.grid(row=0, column=0, columnspan=2, sticky="w", padx=4, pady=(4, 2))

        self._tree = ttk.Treeview(self, show="tree", selectmode="browse", height=height)
        self._vsb = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        self._tree.configure(yscrollcommand=self._vsb.set)

        self._tree.grid(row=1, column=0, sticky="nsew")
        self._vsb.grid(row=1, column=1, sticky="ns")

        # tree item id -> element, and element position -> item id
        self._id_to_element: Dict[str, Any] = {}
        self._item_ids: List[str] = []

        self._tree.bind("<<TreeviewSelect>>", self._on_select_event, add="+")

        provider.add_change_listener(self.populate)
        provider.set_view(self)

    # Public API

    def populate(self) -> None:
        """Rebuild the rows from ``provider.get_children()``."""
        self.clear()
        for element in self._provider.get_children():
            item = self._provider.get_tree_item(element)
            text = " ".join(str(getattr(item, "label", item)).split()) or "Untitled"
            item_id = self._tree.insert("", "end", text=text)
            self._id_to_element[item_id] = element
            self._item_ids.append(item_id)

    def clear(self) -> None:
        children = self._tree.get_children("")
        if children:
            self._tree.delete(*children)
        self._id_to_element.clear()
        self._item_ids.clear()

    def reveal(self, element: Any, *, select: bool = True, focus: bool = True) -> None:
        """Scroll to *element* and optionally select and focus it.

        Selecting raises <<TreeviewSelect>>, so :attr:`on_selection_changed`
        fires just as it does for a click.
        """
        item_id = self._find_item(element)
        if item_id is None:
            return
        self._tree.see(item_id)
        if select:
            self._tree.selection_set(item_id)
        if focus:
            self._tree.focus(item_id)
            self._tree.focus_set()

    def focus_view(self) -> None:
        """Give keyboard focus to the tree."""
        self._tree.focus_set()

    def focus_view_when_idle(self) -> str:
        """Give the tree keyboard focus once pending events are handled.

        Selecting an element queues <<TreeviewSelect>>, whose handlers may
        reveal (and focus) elements of another view. Deferring to idle time
        lets this request win. Returns the ``after`` id.
        """
        return self.after_idle(self.focus_view)

    def get_selected_items(self) -> List[Any]:
        return [self._id_to_element[i] for i in self._tree.selection() if i in self._id_to_element]

    def get_item_ids(self) -> List[str]:
        return list(self._item_ids)

    def get_item_text(self, item_id: str) -> str:
        return str(self._tree.item(item_id, "text"))

    # Internals

    def _find_item(self, element: Any) -> Optional[str]:
        # Elements are frozen dataclasses, so equal locations in different
        # paths compare equal; position is the identity inside one view.
        for item_id in self._item_ids:
            if self._id_to_element[item_id] is element:
                return item_id
        try:
            index = self._provider.get_children().index(element)
        except ValueError:
            return None
        return self._item_ids[index] if index < len(self._item_ids) else None

    def _on_select_event(self, _event: tk.Event) -> None:
        if self._on_selection_changed is None:
            return
        self._on_selection_changed(self.get_selected_items())
