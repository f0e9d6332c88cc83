"""Keyword matching engine for assigning listings to catalog products.

This module provides:
- KeywordExtractor: Normalized keyword sets from free text
- InvertedIndex: Keyword postings with domain-restricted intersection
- ComplementSet: Unbounded "all but the claimed" listing domain
- ListingMatcher: Specificity-ordered greedy assignment of listings to products
- ProductMatch / MatchSummary: Per-product results and run counts
"""

from .domain import UNBOUNDED, ComplementSet, UnboundedIterationError, size_of
from .engine import ListingMatcher, match_listings_with_products, summarize
from .index import InvertedIndex, intersect
from .keywords import KeywordExtractor
from .models import EmptyKeywordPolicy, MatchSummary, ProductKeywords, ProductMatch

__all__ = [
    "ListingMatcher",
    "match_listings_with_products",
    "summarize",
    "KeywordExtractor",
    "InvertedIndex",
    "intersect",
    "ComplementSet",
    "UnboundedIterationError",
    "UNBOUNDED",
    "size_of",
    "EmptyKeywordPolicy",
    "MatchSummary",
    "ProductKeywords",
    "ProductMatch",
]
