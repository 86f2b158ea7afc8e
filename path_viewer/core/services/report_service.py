"""Report ingestion: JSON text to :class:`PathItem` lists.

The report is the ``output.json`` file written by the analyser::

    {"results": [{"type": "npe", "sourceIndex": 3,
                  "locations": [{"type": "deref", "content": "x.f",
                                 "file": "/src/a.js",
                                 "beginLine": 3, "beginColumn": 1,
                                 "endLine": 3, "endColumn": 5}]}]}

Entries whose ``type`` is a known non-finding are dropped; the others keep
their relative order. Any error aborts the whole ingestion so callers never
see a partial result.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from path_viewer.config import ConfigManager
from path_viewer.core.exceptions import (
    ReportParseError,
    ReportPreconditionError,
    ReportShapeError,
)
from path_viewer.core.models import ActiveDocument, LocationItem, PathItem

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_REPORT_FILE_NAME",
    "DEFAULT_EXCLUDED_KINDS",
    "parse_report",
    "build_paths",
    "ReportService",
]

DEFAULT_REPORT_FILE_NAME = "output.json"
DEFAULT_EXCLUDED_KINDS = ("npe-good-source",)

MSG_OPEN_REPORT = "Please open a file named {name}"
MSG_INVALID_JSON = "Invalid JSON file"
MSG_EXPECTED_RESULTS = "Invalid JSON format: Expected results array"

_LOCATION_FIELDS = ("file", "beginLine", "beginColumn", "endLine", "endColumn")
_COORDINATE_FIELDS = _LOCATION_FIELDS[1:]


def parse_report(
    text: str,
    excluded_kinds: Iterable[str] = DEFAULT_EXCLUDED_KINDS,
    file_name: Optional[str] = None,
) -> List[PathItem]:
    """Parse report text into paths.

    Raises
    ------
    ReportParseError
        If *text* is not JSON.
    ReportShapeError
        If there is no top-level ``results`` array or an entry is malformed.
    """
    try:
        document = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ReportParseError(MSG_INVALID_JSON, file_name, cause=exc) from exc

    if not isinstance(document, dict) or not isinstance(document.get("results"), list):
        raise ReportShapeError(MSG_EXPECTED_RESULTS, file_name)

    return build_paths(document["results"], excluded_kinds, file_name)


def build_paths(
    results: Sequence[Any],
    excluded_kinds: Iterable[str] = DEFAULT_EXCLUDED_KINDS,
    file_name: Optional[str] = None,
) -> List[PathItem]:
    """Project decoded ``results`` entries into paths."""
    excluded = set(excluded_kinds)
    paths: List[PathItem] = []
    skipped = 0
    for entry_index, entry in enumerate(results):
        if not isinstance(entry, dict):
            raise ReportShapeError(
                f"Invalid JSON format: result {entry_index} is not an object",
                file_name, entry_index=entry_index,
            )
        kind = str(entry.get("type", ""))
        if kind in excluded:
            skipped += 1
            continue
        paths.append(_build_path(entry, kind, entry_index, file_name))

    logger.debug("Built %d paths, skipped %d known non-findings", len(paths), skipped)
    return paths


def _build_path(entry: Mapping[str, Any], kind: str, entry_index: int,
                file_name: Optional[str]) -> PathItem:
    raw_locations = entry.get("locations")
    if not isinstance(raw_locations, list):
        raise ReportShapeError(
            f"Invalid JSON format: result {entry_index} has no locations array",
            file_name, entry_index=entry_index,
        )

    locations = tuple(
        _build_location(raw, index, entry_index, file_name)
        for index, raw in enumerate(raw_locations)
    )
    source_index = entry.get("sourceIndex")
    return PathItem(
        label=_path_label(kind, source_index, len(locations)),
        kind=kind,
        locations=locations,
        source_index=source_index,
    )


def _build_location(raw: Any, index: int, entry_index: int,
                    file_name: Optional[str]) -> LocationItem:
    if not isinstance(raw, dict):
        raise ReportShapeError(
            f"Invalid JSON format: location {index} of result {entry_index} is not an object",
            file_name, entry_index=entry_index,
        )
    missing = [name for name in _LOCATION_FIELDS if name not in raw]
    if missing:
        raise ReportShapeError(
            f"Invalid JSON format: location {index} of result {entry_index} "
            f"is missing {', '.join(missing)}",
            file_name, entry_index=entry_index,
        )
    for name in _COORDINATE_FIELDS:
        value = raw[name]
        # bool is an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise ReportShapeError(
                f"Invalid JSON format: {name} of location {index} in result {entry_index} "
                f"must be an integer, got {value!r}",
                file_name, entry_index=entry_index,
            )
    return LocationItem(
        index=index,
        kind=str(raw.get("type", "")),
        file=raw["file"],
        begin_line=raw["beginLine"],
        begin_column=raw["beginColumn"],
        end_line=raw["endLine"],
        end_column=raw["endColumn"],
        content=str(raw.get("content", "")),
    )


def _path_label(kind: str, source_index: Optional[int], count: int) -> str:
    label = kind if source_index is None else f"{kind} ({source_index})"
    noun = "location" if count == 1 else "locations"
    return f"{label} [{count} {noun}]"


class ReportService:
    """Validates the active document and ingests it.

    Parameters
    ----------
    report_file_name : str, optional
        Base name a document must have to be ingested. Defaults to the
        ``report.file_name`` setting.
    excluded_kinds : Iterable[str] or str, optional
        Result kinds to drop. Defaults to the ``report.excluded_kinds`` setting.
        A plain string is taken as a single kind.
    """

    def __init__(
        self,
        report_file_name: Optional[str] = None,
        excluded_kinds: Optional[Iterable[str]] = None,
    ) -> None:
        if report_file_name is None or excluded_kinds is None:
            cfg = ConfigManager().get_report_config()
            if report_file_name is None:
                report_file_name = cfg.get("file_name") or DEFAULT_REPORT_FILE_NAME
            if excluded_kinds is None:
                excluded_kinds = cfg.get("excluded_kinds", DEFAULT_EXCLUDED_KINDS)
        self.report_file_name: str = report_file_name
        if isinstance(excluded_kinds, str):
            # A single kind written as a scalar in the config file.
            excluded_kinds = (excluded_kinds,)
        self.excluded_kinds = tuple(excluded_kinds or ())

    def check_document(self, document: Optional[ActiveDocument]) -> ActiveDocument:
        """Return *document* if it is the report file, else raise."""
        message = MSG_OPEN_REPORT.format(name=self.report_file_name)
        if document is None:
            raise ReportPreconditionError(message)
        if Path(document.file_name).name != self.report_file_name:
            raise ReportPreconditionError(message, document.file_name)
        return document

    def load_document(self, document: Optional[ActiveDocument]) -> List[PathItem]:
        document = self.check_document(document)
        paths = parse_report(document.text, self.excluded_kinds, document.file_name)
        logger.info("Loaded %d paths from %s", len(paths), document.file_name)
        return paths

