"""Rendering and writing of match results."""

from .formatters import FORMATTERS, format_jsonl, format_text
from .writer import select_results, write_results

__all__ = [
    "FORMATTERS",
    "format_text",
    "format_jsonl",
    "select_results",
    "write_results",
]
