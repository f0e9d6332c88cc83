"""Core domain records for listings and catalog products.

This module defines the two record types the matcher works on:
- Listing: a free-text offer for sale (title, manufacturer, price)
- Product: a canonical catalog entry (product name, manufacturer, family, model)

Both records compare and hash by object identity. Two listings with the same
text are still two distinct listings, and each can be claimed by one product.
Field values are kept exactly as decoded, so a field may hold a non-string
JSON value; the keyword extractor skips those.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True, eq=False)
class Listing:
    """A single listing decoded from the listings file.

    Attributes:
        title: Free-text listing title
        manufacturer: Free-text manufacturer field
        currency: Currency code of the price (optional)
        price: Price as found in the input (optional)
        record: The original decoded mapping, emitted unchanged in results
    """

    title: Any = None
    manufacturer: Any = None
    currency: Any = None
    price: Any = None
    record: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Listing":
        """Build a Listing that keeps a reference to its source mapping."""
        return cls(
            title=record.get("title"),
            manufacturer=record.get("manufacturer"),
            currency=record.get("currency"),
            price=record.get("price"),
            record=record,
        )

    def to_record(self) -> Mapping[str, Any]:
        """Return the original mapping, or one rebuilt from the fields."""
        if self.record:
            return self.record
        return _present_fields(
            title=self.title,
            manufacturer=self.manufacturer,
            currency=self.currency,
            price=self.price,
        )


@dataclass(frozen=True, eq=False)
class Product:
    """A canonical product decoded from the products file.

    Attributes:
        product_name: Unique product name used as the result key
        manufacturer: Manufacturer name
        family: Product family (optional)
        model: Model designation (optional)
        announced_date: Announcement date string (optional)
        record: The original decoded mapping
    """

    product_name: Any = None
    manufacturer: Any = None
    family: Any = None
    model: Any = None
    announced_date: Any = None
    record: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Product":
        """Build a Product that keeps a reference to its source mapping."""
        return cls(
            product_name=record.get("product_name"),
            manufacturer=record.get("manufacturer"),
            family=record.get("family"),
            model=record.get("model"),
            announced_date=record.get("announced-date"),
            record=record,
        )

    def to_record(self) -> Mapping[str, Any]:
        """Return the original mapping, or one rebuilt from the fields."""
        if self.record:
            return self.record
        return _present_fields(
            product_name=self.product_name,
            manufacturer=self.manufacturer,
            family=self.family,
            model=self.model,
            **{"announced-date": self.announced_date},
        )


def _present_fields(**values: Any) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
