"""Input loading: JSON-lines records, word lists, and file access."""

from .exceptions import InputLoadError
from .parsers import parse_json_lines, parse_word_list
from .service import (
    LoadedInputs,
    load_inputs,
    load_listings,
    load_products,
    load_stop_words,
    read_text,
    resolve_path,
)

__all__ = [
    "InputLoadError",
    "LoadedInputs",
    "parse_json_lines",
    "parse_word_list",
    "load_inputs",
    "load_listings",
    "load_products",
    "load_stop_words",
    "read_text",
    "resolve_path",
]
