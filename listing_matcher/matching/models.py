"""Data models for the matching engine.

This module defines the per-product keyword profile used to rank products,
the per-product match result, and the run summary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from listing_matcher.domain.models import Listing, Product


class EmptyKeywordPolicy(str, Enum):
    """How a product with no manufacturer or no title keywords is matched.

    MATCH_ALL treats an empty keyword set as "no constraint" for that stage.
    MATCH_NONE gives such a product an empty result.
    """

    MATCH_ALL = "match_all"
    MATCH_NONE = "match_none"


@dataclass(frozen=True)
class ProductKeywords:
    """Keywords extracted from a product, used for ranking and lookup.

    Attributes:
        product: The source product
        mfg_keywords: Keywords from the manufacturer field
        title_keywords: Keywords from manufacturer, family and model
    """

    product: Product
    mfg_keywords: FrozenSet[str]
    title_keywords: FrozenSet[str]

    @property
    def product_name(self) -> Any:
        return self.product.product_name

    @property
    def specificity(self) -> int:
        """Number of distinct title keywords; higher is matched first."""
        return len(self.title_keywords)

    @property
    def has_empty_keywords(self) -> bool:
        return not self.mfg_keywords or not self.title_keywords


@dataclass
class ProductMatch:
    """Listings claimed by one product.

    Attributes:
        product_name: Name of the product
        listings: Claimed listings in discovery order
        product: The product itself, when known
    """

    product_name: Any
    listings: List[Listing] = field(default_factory=list)
    product: Optional[Product] = None

    @property
    def listing_count(self) -> int:
        return len(self.listings)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form: product name plus the original listing records."""
        return {
            "product_name": self.product_name,
            "listings": [listing.to_record() for listing in self.listings],
        }


@dataclass
class MatchSummary:
    """Counts describing one matcher run.

    Attributes:
        product_count: Products considered
        listing_count: Listings indexed
        matched_product_count: Products that claimed at least one listing
        claimed_listing_count: Listings claimed by some product
    """

    product_count: int = 0
    listing_count: int = 0
    matched_product_count: int = 0
    claimed_listing_count: int = 0

    @property
    def unclaimed_listing_count(self) -> int:
        return self.listing_count - self.claimed_listing_count

    def as_log_fields(self) -> Dict[str, int]:
        """Flatten the summary into logging extras."""
        return {
            "product_count": self.product_count,
            "listing_count": self.listing_count,
            "matched_product_count": self.matched_product_count,
            "claimed_listing_count": self.claimed_listing_count,
            "unclaimed_listing_count": self.unclaimed_listing_count,
        }
