"""Test helper utilities for listing matcher tests."""

from .records import make_listing, make_product, write_json_lines, write_sample_inputs

__all__ = ["make_listing", "make_product", "write_json_lines", "write_sample_inputs"]
