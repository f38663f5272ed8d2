from __future__ import annotations

from typing import Literal

ErrorKind = Literal["source_unavailable", "parse_failure", "no_usable_rows"]


class DashboardError(ValueError):
    """Terminal pipeline failure carrying a machine-readable ``kind`` label."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def describe(self) -> str:
        return f"Error [{self.kind}]: {self.message}"


class SourceUnavailableError(DashboardError):
    """The dataset could not be obtained (missing or unreadable file)."""

    kind: ErrorKind = "source_unavailable"


class ParseFailureError(DashboardError):
    """The dataset was obtained but could not be tokenized as CSV."""

    kind: ErrorKind = "parse_failure"


class NoUsableRowsError(DashboardError):
    """The dataset parsed, but no row carried a usable health signal."""

    kind: ErrorKind = "no_usable_rows"
