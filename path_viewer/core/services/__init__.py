"""High-level services used by the controller."""

from __future__ import annotations

from .report_service import ReportService, parse_report  # noqa: F401

__all__: list[str] = [
    "ReportService",
    "parse_report",
]
