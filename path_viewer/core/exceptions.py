"""Report ingestion exception classes.

Every error raised while turning a document into paths derives from
:class:`ReportError`; the message is the text shown to the user. None of
them leave partially loaded state behind.
"""

from __future__ import annotations

from typing import Optional


class ReportError(Exception):
    """Base exception for all report ingestion errors."""

    def __init__(self, message: str, file_name: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.file_name = file_name
        self.cause = cause


class ReportPreconditionError(ReportError):
    """Raised when there is no active document or it is not the report file."""


class ReportParseError(ReportError):
    """Raised when the document text is not valid JSON."""


class ReportShapeError(ReportError):
    """Raised when valid JSON does not have the expected report structure.

    ``entry_index`` points at the offending ``results`` entry when the
    problem is local to one entry.
    """

    def __init__(self, message: str, file_name: Optional[str] = None,
                 entry_index: Optional[int] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, file_name, cause)
        self.entry_index = entry_index
