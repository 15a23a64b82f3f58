"""
Exceptions raised while loading and aggregating sales data.

Only the load-time errors are fatal to a run. Sale sources that fail are
logged and skipped by the engine unless strict mode is enabled.
"""

from pathlib import Path
from typing import Optional


class SalesDataError(Exception):
    """Base class for every sales data error."""


class NotFoundError(SalesDataError):
    """A required seller or product source does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Source not found: {self.path}")


class FormatError(SalesDataError):
    """A numeric field could not be parsed."""

    def __init__(
        self,
        message: str,
        source: Optional[Path] = None,
        line_number: Optional[int] = None,
    ) -> None:
        self.source = source
        self.line_number = line_number
        if source is not None and line_number is not None:
            message = f"{source}:{line_number}: {message}"
        elif source is not None:
            message = f"{source}: {message}"
        super().__init__(message)


class CrossReferenceError(SalesDataError):
    """A sale source references an unknown seller or product (strict mode only)."""


class SourceReadError(SalesDataError):
    """A required source exists but cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot read {self.path}: {reason}")
