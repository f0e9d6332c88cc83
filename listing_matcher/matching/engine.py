"""Listing-to-product matching engine.

This module implements the matching algorithm that:
1. Indexes every listing by manufacturer keywords and by title keywords
2. Ranks products by specificity (number of title keywords), most specific first
3. Narrows each product's candidates by manufacturer, then by title
4. Claims the matched listings so no later product can match them again
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from listing_matcher.domain.models import Listing, Product
from listing_matcher.logging import get_logger

from .domain import ComplementSet
from .index import InvertedIndex
from .keywords import KeywordExtractor
from .models import EmptyKeywordPolicy, MatchSummary, ProductKeywords, ProductMatch

logger = get_logger(__name__, component="matching")


class ListingMatcher:
    """Assigns listings to products by keyword overlap.

    Responsibilities:
    - Extract keywords from listings and products
    - Build the manufacturer and title inverted indexes
    - Resolve products most-specific-first
    - Enforce that each listing is claimed by at most one product
    """

    def __init__(
        self,
        stop_words: Iterable[str] = (),
        empty_keyword_policy: Union[EmptyKeywordPolicy, str] = EmptyKeywordPolicy.MATCH_ALL,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ListingMatcher.

        Args:
            stop_words: Words ignored during keyword extraction
            empty_keyword_policy: Handling of products with an empty keyword set
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.extractor = KeywordExtractor(stop_words)
        self.empty_keyword_policy = EmptyKeywordPolicy(empty_keyword_policy)
        self.logger = logger_instance or logger

    def build_indexes(self, listings: Iterable[Listing]) -> Tuple[InvertedIndex, InvertedIndex]:
        """Build the manufacturer and title indexes over all listings.

        Title keywords come from both the title and the manufacturer field,
        since titles often repeat the manufacturer name.

        Returns:
            Tuple of (manufacturer index, title index)
        """
        mfg_index = InvertedIndex()
        title_index = InvertedIndex()
        for listing in listings:
            mfg_index.add(listing, self.extractor.extract_keywords(listing.manufacturer))
            title_index.add(
                listing,
                self.extractor.extract_keywords(listing.title, listing.manufacturer),
            )
        return mfg_index, title_index

    def product_keywords(self, product: Product) -> ProductKeywords:
        """Extract the manufacturer and title keywords of a product."""
        return ProductKeywords(
            product=product,
            mfg_keywords=frozenset(self.extractor.extract_keywords(product.manufacturer)),
            title_keywords=frozenset(
                self.extractor.extract_keywords(product.manufacturer, product.family, product.model)
            ),
        )

    def rank_products(self, products: Iterable[Product]) -> List[ProductKeywords]:
        """Order products most-specific-first; ties keep their input order."""
        profiles = [self.product_keywords(product) for product in products]
        return sorted(profiles, key=lambda profile: profile.specificity, reverse=True)

    def match(self, listings: Iterable[Listing], products: Iterable[Product]) -> List[ProductMatch]:
        """Match listings to products.

        Algorithm:
        1. Build manufacturer and title indexes over all listings
        2. Rank products by title keyword count, descending
        3. For each product, query the manufacturer index restricted to the
           listings still available, then the title index restricted to that result
        4. Exclude the product's listings from the available domain

        Args:
            listings: Listings to assign
            products: Catalog products

        Returns:
            One ProductMatch per product, in specificity order
        """
        listings = list(listings)
        mfg_index, title_index = self.build_indexes(listings)

        self.logger.debug(
            "Listing indexes built",
            extra={
                "event": "matching.index.built",
                "listing_count": len(listings),
                "mfg_keyword_count": len(mfg_index),
                "title_keyword_count": len(title_index),
            },
        )

        available = ComplementSet()
        results: List[ProductMatch] = []

        for profile in self.rank_products(products):
            claimed = self._match_product(profile, listings, mfg_index, title_index, available)
            for listing in claimed:
                available.exclude(listing)

            if claimed:
                self.logger.debug(
                    f"Product matched: {profile.product_name}",
                    extra={
                        "event": "matching.product.matched",
                        "product_name": profile.product_name,
                        "specificity": profile.specificity,
                        "claimed_count": len(claimed),
                    },
                )

            results.append(
                ProductMatch(
                    product_name=profile.product_name,
                    listings=claimed,
                    product=profile.product,
                )
            )

        summary = summarize(results, listings)
        self.logger.info(
            f"Matched {summary.claimed_listing_count} of {summary.listing_count} listings "
            f"to {summary.matched_product_count} products",
            extra={"event": "matching.completed", **summary.as_log_fields()},
        )

        return results

    def _match_product(
        self,
        profile: ProductKeywords,
        listings: Sequence[Listing],
        mfg_index: InvertedIndex,
        title_index: InvertedIndex,
        available: ComplementSet,
    ) -> List[Listing]:
        if profile.has_empty_keywords:
            if self.empty_keyword_policy is EmptyKeywordPolicy.MATCH_NONE:
                return []
            self.logger.debug(
                f"Product has empty keywords: {profile.product_name}",
                extra={
                    "event": "matching.product.empty_keywords",
                    "product_name": profile.product_name,
                    "mfg_keyword_count": len(profile.mfg_keywords),
                    "title_keyword_count": len(profile.title_keywords),
                },
            )

        if profile.mfg_keywords:
            mfg_matches = mfg_index.find_all(profile.mfg_keywords, available)
        else:
            # No manufacturer constraint: every listing still available
            mfg_matches = [listing for listing in listings if available.contains(listing)]

        return title_index.find_all(profile.title_keywords, dict.fromkeys(mfg_matches))


def summarize(results: Sequence[ProductMatch], listings: Sequence[Listing]) -> MatchSummary:
    """Compute run counts from match results."""
    return MatchSummary(
        product_count=len(results),
        listing_count=len(listings),
        matched_product_count=sum(1 for result in results if result.listings),
        claimed_listing_count=sum(result.listing_count for result in results),
    )


def match_listings_with_products(
    listings: Iterable[Listing],
    products: Iterable[Product],
    stop_words: Iterable[str] = (),
    empty_keyword_policy: Union[EmptyKeywordPolicy, str] = EmptyKeywordPolicy.MATCH_ALL,
) -> List[ProductMatch]:
    """Match listings to products with a one-off ListingMatcher.

    Args:
        listings: Listings to assign
        products: Catalog products
        stop_words: Words ignored during keyword extraction
        empty_keyword_policy: Handling of products with an empty keyword set

    Returns:
        One ProductMatch per product, most specific product first
    """
    matcher = ListingMatcher(stop_words, empty_keyword_policy=empty_keyword_policy)
    return matcher.match(listings, products)
