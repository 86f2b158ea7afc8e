"""ViewerController.

Glue between the host and the core: maps the five command names to provider
operations, runs the open-report flow and turns view selection changes into
location loads and highlights. Failures of a single user action are logged
and shown through the notifier instead of propagating to the event loop.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence

from path_viewer.core.exceptions import ReportError
from path_viewer.core.interfaces import ActiveDocumentSource, Notifier, OutputSink
from path_viewer.core.models import LocationItem, PathItem
from path_viewer.core.providers import LocationProvider, PathProvider
from path_viewer.core.services.report_service import ReportService

logger = logging.getLogger(__name__)

__all__ = [
    "ViewerController",
    "COMMAND_OPEN_REPORT",
    "COMMAND_PATHS_PREVIOUS",
    "COMMAND_PATHS_NEXT",
    "COMMAND_DETAILS_PREVIOUS",
    "COMMAND_DETAILS_NEXT",
]

COMMAND_OPEN_REPORT = "path-viewer.openReport"
COMMAND_PATHS_PREVIOUS = "all-paths.previous"
COMMAND_PATHS_NEXT = "all-paths.next"
COMMAND_DETAILS_PREVIOUS = "path-details.previous"
COMMAND_DETAILS_NEXT = "path-details.next"


class ViewerController:
    """Connects view selection events and commands to the providers.

    Parameters
    ----------
    path_provider : PathProvider
        Provider behind the all-paths view.
    location_provider : LocationProvider
        Provider behind the path-details view; owns the highlight.
    documents : ActiveDocumentSource
        Where the open-report command reads the report text from.
    notifier : Notifier
        User-facing error/info messages.
    report_service : ReportService, optional
        Ingestion service; built from configuration when omitted.
    output : OutputSink, optional
        Output channel receiving the "Loading path from" lines.
    focus_paths_view : Callable[[], object], optional
        Called after a report is loaded to move focus to the all-paths view.
        The Tk host defers it until queued selection events are handled.

    Notes
    -----
    - No Tkinter code lives here; all UI work goes through the interfaces.
    - Errors from a single user action are reported and swallowed so that
      nothing raises into the UI event loop.
    """

    def __init__(
        self,
        path_provider: PathProvider,
        location_provider: LocationProvider,
        documents: ActiveDocumentSource,
        notifier: Notifier,
        report_service: Optional[ReportService] = None,
        output: Optional[OutputSink] = None,
        focus_paths_view: Optional[Callable[[], object]] = None,
    ) -> None:
        self.path_provider = path_provider
        self.location_provider = location_provider
        self.documents = documents
        self.notifier = notifier
        self.report_service = report_service or ReportService()
        self.output = output
        self.focus_paths_view = focus_paths_view

    # ---------------------------------------------------------------------------------
    # Commands
    # ---------------------------------------------------------------------------------

    def commands(self) -> Dict[str, Callable[[], object]]:
        """Return the command name -> handler mapping exposed to the host."""
        return {
            COMMAND_OPEN_REPORT: self.open_report,
            COMMAND_PATHS_PREVIOUS: self.path_provider.select_previous_item,
            COMMAND_PATHS_NEXT: self.path_provider.select_next_item,
            COMMAND_DETAILS_PREVIOUS: self.location_provider.select_previous_item,
            COMMAND_DETAILS_NEXT: self.location_provider.select_next_item,
        }

    def execute_command(self, name: str) -> bool:
        """Run the command called *name*; return False if there is none."""
        handler = self.commands().get(name)
        if handler is None:
            logger.warning("Unknown command: %s", name)
            return False
        logger.debug("Executing command %s", name)
        handler()
        return True

    def open_report(self) -> bool:
        """Ingest the active document and show its paths.

        Returns
        -------
        bool
            True if the paths were loaded. On failure the user is notified
            and the previously loaded paths are kept.
        """
        document = self.documents.get_active_document()
        try:
            document = self.report_service.check_document(document)
            if self.output is not None:
                self.output.append_line(f"Loading path from: {document.file_name}")
                self.output.show()
            paths = self.report_service.load_document(document)
        except ReportError as exc:
            logger.warning("Report not loaded: %s", exc)
            self.notifier.show_error(str(exc))
            return False

        self.path_provider.load_paths(paths)
        self.path_provider.reset_index()
        if self.focus_paths_view is not None:
            self.focus_paths_view()
        self.notifier.show_info("Paths loaded successfully")
        return True

    # ---------------------------------------------------------------------------------
    # Selection events
    # ---------------------------------------------------------------------------------

    def handle_path_selection(self, selection: Sequence[PathItem]) -> None:
        if not selection:
            return
        self.location_provider.load_locations(selection[0].locations)

    def handle_location_selection(self, selection: Sequence[LocationItem]) -> None:
        if not selection:
            return
        location = selection[0]
        try:
            self.location_provider.highlight_location(location)
        except OSError as exc:
            logger.error("Could not open %s: %s", location.file, exc)
            self.notifier.show_error(f"Could not open {location.file}: {exc.strerror or exc}")
        except TypeError as exc:
            logger.error("Invalid range for location %s in %s: %s", location.index, location.file, exc)
            self.notifier.show_error(f"Invalid location range in {location.file}")
