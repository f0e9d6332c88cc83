"""Listing matcher: assign free-text product listings to catalog products."""

__version__ = "1.0.0"
