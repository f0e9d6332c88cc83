"""Custom exceptions for input loading."""

from pathlib import Path
from typing import Optional


class InputLoadError(Exception):
    """An input file could not be read.

    Raised for missing or unreadable files and for files that are not valid
    UTF-8. Malformed lines inside a readable file are not errors; the parsers
    skip them.
    """

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        """Initialize with the offending path.

        Args:
            message: Human-readable error message
            path: Path of the input file that failed
        """
        super().__init__(message)
        self.path = path
