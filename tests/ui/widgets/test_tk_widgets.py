import tkinter as tk

import pytest
import sv_ttk

from path_viewer.core.models import DecorationStyle, LocationItem, PathItem
from path_viewer.core.providers import LocationProvider, PathProvider
from path_viewer.ui.app import apply_theme
from path_viewer.ui.widgets.indexed_tree import IndexedTreeWidget
from path_viewer.ui.widgets.output_panel import OutputPanel
from path_viewer.ui.widgets.source_editor import SourceEditor


def _can_create_tk_root() -> bool:
    try:
        r = tk.Tk()
        r.destroy()
        return True
    except tk.TclError:
        return False


pytestmark = [
    pytest.mark.ui,
    pytest.mark.skipif(
        not _can_create_tk_root(),
        reason="Tkinter root cannot be created in this environment (likely headless CI without display).",
    ),
]


@pytest.fixture
def tk_root():
    root = tk.Tk()
    # Avoid showing a window during tests
    root.withdraw()
    yield root
    try:
        root.update_idletasks()
    except tk.TclError:
        pass
    root.destroy()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "a.js"
    path.write_text("let x = null;\nfoo();\nx.f = 1;\nbar();\n", encoding="utf-8")
    return str(path)


def _path(label, n=2):
    locs = tuple(LocationItem(i, "step", "/a.js", i + 1, 1, i + 1, 2) for i in range(n))
    return PathItem(label, "npe", locs)


# ---------------------------
# IndexedTreeWidget
# ---------------------------

def test_tree_renders_provider_data_on_load(tk_root):
    provider = PathProvider()
    widget = IndexedTreeWidget(tk_root, provider, title="All Paths")
    widget.pack()

    provider.load_paths([_path("npe (0)"), _path("leak")])

    ids = widget.get_item_ids()
    assert [widget.get_item_text(i) for i in ids] == ["npe (0)", "leak"]


def test_reveal_selects_and_reports_selection(tk_root):
    selections = []
    provider = PathProvider()
    widget = IndexedTreeWidget(tk_root, provider, on_selection_changed=selections.append)
    widget.pack()
    paths = [_path("a"), _path("b"), _path("c")]
    provider.load_paths(paths)

    provider.reset_index()
    provider.select_next_item()
    tk_root.update()
    assert widget.get_selected_items() == [paths[1]]

    # The virtual event is queued by Tk; fire it explicitly for headless runs.
    widget._tree.event_generate("<<TreeviewSelect>>")
    tk_root.update()
    assert selections[-1] == [paths[1]]


def test_reveal_selects_the_given_duplicate(tk_root):
    provider = PathProvider()
    widget = IndexedTreeWidget(tk_root, provider)
    provider.load_paths([_path("npe"), _path("npe")])

    widget.reveal(provider.data[1])
    assert widget._tree.selection() == (widget.get_item_ids()[1],)


def test_focus_request_waits_for_pending_selection_events(tk_root):
    order = []
    provider = PathProvider()
    widget = IndexedTreeWidget(tk_root, provider)
    widget.pack()
    tk_root.update()
    widget.focus_view = lambda: order.append("focus")
    widget._tree.bind("<<PathsLoaded>>", lambda _e: order.append("select"), add=True)

    widget.focus_view_when_idle()
    widget._tree.event_generate("<<PathsLoaded>>", when="tail")
    assert order == []

    tk_root.update()
    assert order == ["select", "focus"]


# ---------------------------
# SourceEditor
# ---------------------------

def test_show_document_and_active_document(tk_root, source_file):
    editor = SourceEditor(tk_root)
    assert editor.get_active_document() is None

    editor.show_document(source_file)

    active = editor.get_active_document()
    assert active.file_name == source_file
    assert active.text.startswith("let x = null;")


def test_show_missing_document_raises_and_keeps_current(tk_root, source_file, tmp_path):
    editor = SourceEditor(tk_root)
    editor.show_document(source_file)
    with pytest.raises(OSError):
        editor.show_document(str(tmp_path / "missing.js"))
    assert editor.current_file == source_file


def test_highlight_tags_range_and_inserts_annotation(tk_root, source_file):
    editor = SourceEditor(tk_root)
    provider = LocationProvider(editor, DecorationStyle(annotation_margin=1))
    location = LocationItem(2, "deref", source_file, 3, 1, 3, 4)

    provider.highlight_location(location)

    decoration = provider.current_decoration
    assert editor.tag_ranges(decoration.tag) == ["3.0", "3.3"]
    assert editor.get_displayed_text().splitlines()[2] == "x.f = 1; 2 deref"
    assert editor.get_active_document().text.splitlines()[2] == "x.f = 1;"


def test_second_highlight_removes_first(tk_root, source_file):
    editor = SourceEditor(tk_root)
    provider = LocationProvider(editor, DecorationStyle(annotation_margin=1))
    provider.highlight_location(LocationItem(0, "source", source_file, 1, 5, 1, 6))
    first = provider.current_decoration

    provider.highlight_location(LocationItem(1, "call", source_file, 2, 1, 2, 4))

    assert first.disposed is True
    lines = editor.get_displayed_text().splitlines()
    assert lines[0] == "let x = null;"
    assert lines[1] == "foo(); 1 call"
    assert editor.tag_ranges(provider.current_decoration.tag) == ["2.0", "2.3"]


def test_highlight_in_other_file_replaces_document(tk_root, source_file, tmp_path):
    other = tmp_path / "b.js"
    other.write_text("one\ntwo\n", encoding="utf-8")
    editor = SourceEditor(tk_root)
    provider = LocationProvider(editor)
    provider.highlight_location(LocationItem(0, "a", source_file, 1, 1, 1, 2))

    provider.highlight_location(LocationItem(1, "b", str(other), 2, 1, 2, 3))

    assert editor.current_file == str(other)
    assert editor.get_displayed_text().splitlines()[0] == "one"
    assert editor.tag_ranges(provider.current_decoration.tag) == ["2.0", "2.2"]


# ---------------------------
# OutputPanel
# ---------------------------

def test_output_panel_appends_and_shows(tk_root):
    shown = []
    panel = OutputPanel(tk_root, on_show=lambda: shown.append(True))
    panel.append_line("Loading path from: /work/output.json")
    panel.show()

    assert panel.get_lines() == ["Loading path from: /work/output.json"]
    assert shown == [True]


# ---------------------------
# Theme
# ---------------------------

def test_apply_theme_sets_sv_ttk_theme(tk_root):
    assert apply_theme(tk_root, "dark") is True
    assert sv_ttk.get_theme(root=tk_root) == "dark"

    assert apply_theme(tk_root, "solarized") is False
    assert sv_ttk.get_theme(root=tk_root) == "dark"
