"""Test configuration and fixtures for Path Viewer tests.

This module provides shared fixtures and fakes of the host interfaces
(tree views, editor, notifier, output channel) so that providers and the
controller can be exercised without a display.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from path_viewer.config import ConfigManager
from path_viewer.core.models import ActiveDocument, DecorationStyle, TextRange

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user config at a temp dir and reset the ConfigManager singleton."""
    config_dir = tmp_path / "user_config"
    monkeypatch.setenv("PATH_VIEWER_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


# ---------------------------
# Report data
# ---------------------------

def make_location(kind="deref", content="x.f", file="/src/a.js", begin=(3, 1), end=(3, 5)):
    return {
        "type": kind,
        "content": content,
        "file": file,
        "beginLine": begin[0],
        "beginColumn": begin[1],
        "endLine": end[0],
        "endColumn": end[1],
    }


@pytest.fixture
def sample_report() -> dict:
    return {
        "results": [
            {"type": "npe", "sourceIndex": 0, "locations": [
                make_location("source", "x = null", begin=(1, 1), end=(1, 9)),
                make_location("deref", "x.f", begin=(3, 1), end=(3, 4)),
            ]},
            {"type": "npe-good-source", "locations": []},
            {"type": "npe", "sourceIndex": 2, "locations": [
                make_location("deref", "y.g", file="/src/b.js", begin=(7, 5), end=(7, 8)),
            ]},
            {"type": "leak", "locations": []},
        ]
    }


@pytest.fixture
def sample_report_text(sample_report) -> str:
    return json.dumps(sample_report)


# ---------------------------
# Fakes of the host interfaces
# ---------------------------

class FakeTreeView:
    def __init__(self):
        self.reveals: List[Tuple[Any, bool, bool]] = []

    def reveal(self, element, *, select=True, focus=True):
        self.reveals.append((element, select, focus))

    @property
    def last_revealed(self):
        return self.reveals[-1][0] if self.reveals else None


class FakeDecoration:
    def __init__(self, style: DecorationStyle):
        self.style = style
        self.disposed = False

    def dispose(self):
        self.disposed = True


class FakeDocument:
    def __init__(self, file: str):
        self.file = file
        self.decorations: dict = {}
        self.revealed: List[Tuple[TextRange, bool]] = []

    def set_decorations(self, decoration, ranges: Sequence[TextRange]):
        if ranges:
            self.decorations[id(decoration)] = (decoration, list(ranges))
        else:
            self.decorations.pop(id(decoration), None)

    def reveal_range(self, text_range, *, center=True):
        self.revealed.append((text_range, center))


class FakeEditor:
    """EditorService + ActiveDocumentSource fake tracking every decoration."""

    def __init__(self, missing_files: Sequence[str] = ()):
        self.documents: dict = {}
        self.created: List[FakeDecoration] = []
        self.shown: List[str] = []
        self.missing_files = set(missing_files)
        self.active: Optional[ActiveDocument] = None

    def show_document(self, file):
        if file in self.missing_files:
            raise FileNotFoundError(2, "No such file or directory", file)
        self.shown.append(file)
        return self.documents.setdefault(file, FakeDocument(file))

    def create_decoration(self, style):
        decoration = FakeDecoration(style)
        self.created.append(decoration)
        return decoration

    def get_active_document(self):
        return self.active

    def visible_decorations(self):
        return [d for doc in self.documents.values() for d, _ in doc.decorations.values()]

    def live_decorations(self):
        return [d for d in self.created if not d.disposed]


class FakeNotifier:
    def __init__(self):
        self.errors: List[str] = []
        self.infos: List[str] = []

    def show_error(self, message):
        self.errors.append(message)

    def show_info(self, message):
        self.infos.append(message)


class FakeOutput:
    def __init__(self):
        self.lines: List[str] = []
        self.shown = 0

    def append_line(self, line):
        self.lines.append(line)

    def show(self):
        self.shown += 1


@pytest.fixture
def fake_editor():
    return FakeEditor()


@pytest.fixture
def fake_notifier():
    return FakeNotifier()


@pytest.fixture
def fake_output():
    return FakeOutput()
