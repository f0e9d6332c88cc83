"""Domain records shared by the loaders, the matcher, and the output layer."""

from .models import Listing, Product

__all__ = [
    "Listing",
    "Product",
]
