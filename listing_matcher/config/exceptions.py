"""Errors raised while loading or applying matcher configuration."""

from pathlib import Path
from typing import Iterable, Optional


class ConfigurationError(Exception):
    """
    Configuration that cannot be loaded, or that would produce a bad run.

    Attributes:
        message: One-line description of the problem
        errors: Individual field problems, numbered when printed
        suggestions: Hints printed after the errors
        source: Config file the problem was found in, when there is one
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Iterable[str]] = None,
        suggestions: Optional[Iterable[str]] = None,
        source: Optional[Path] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        self.source = source
        super().__init__(message)

    def __str__(self) -> str:
        headline = self.message if self.source is None else f"{self.source}: {self.message}"
        lines = [headline]
        lines.extend(f"  {number}. {error}" for number, error in enumerate(self.errors, 1))
        lines.extend(f"  hint: {suggestion}" for suggestion in self.suggestions)
        return "\n".join(lines)
