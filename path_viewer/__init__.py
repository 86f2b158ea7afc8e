"""Top-level package for Path Viewer.

The ``core`` subpackage hosts the GUI-agnostic implementation (node model,
providers, report ingestion). Front-ends should only depend on the public
API exposed here rather than importing internal modules directly.
"""

from .core.models import LocationItem, PathItem  # re-export for convenience
from .core.providers import LocationProvider, PathProvider
from .core.services.report_service import parse_report

__all__: list[str] = [
    "PathItem",
    "LocationItem",
    "PathProvider",
    "LocationProvider",
    "parse_report",
]
