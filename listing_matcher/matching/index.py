"""Inverted keyword index with domain-restricted intersection queries.

Posting sets are insertion-ordered (dict keys), so query results follow the
order items were added whenever a posting set is the smallest operand. That
keeps results reproducible across processes, independent of object hashes.
"""

from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Sequence

from .domain import UNBOUNDED, SizedDomain, UnboundedIterationError, size_of

_EMPTY_POSTINGS: Mapping[Any, None] = MappingProxyType({})


def intersect(sets: Sequence[SizedDomain]) -> List[Any]:
    """Intersect several sets, iterating only the smallest one.

    Operands are sorted ascending by size (unbounded sets last, ties keep
    their given order). Each element of the smallest operand is kept only if
    every other operand, checked smallest first, contains it.

    Args:
        sets: Operands supporting ``in``; at least one must be finite

    Returns:
        Elements of the intersection, in the iteration order of the smallest operand

    Raises:
        ValueError: If no operands are given
        UnboundedIterationError: If every operand is unbounded
    """
    if not sets:
        raise ValueError("intersect() requires at least one set")

    ordered = sorted(sets, key=size_of)
    smallest, others = ordered[0], ordered[1:]
    if size_of(smallest) == UNBOUNDED:
        raise UnboundedIterationError("intersect() needs at least one finite set to iterate")

    return [item for item in smallest if all(item in other for other in others)]


class InvertedIndex:
    """Maps each keyword to the set of items whose keywords include it.

    Built once with add(), then queried read-only with find_all().
    """

    def __init__(self):
        self._postings: Dict[str, Dict[Hashable, None]] = {}

    def add(self, item: Hashable, keywords: Iterable[str]) -> None:
        """Insert an item into the posting set of every keyword.

        Adding the same item again for the same keyword has no effect.
        """
        for keyword in keywords:
            self._postings.setdefault(keyword, {})[item] = None

    def find_all(self, keywords: Iterable[str], domain: SizedDomain) -> List[Any]:
        """Find items of the domain indexed under every keyword.

        A keyword missing from the index has an empty posting set, so the
        result is empty. With no keywords the result is the whole domain,
        which must then be finite.

        Args:
            keywords: Required keywords
            domain: Items eligible for the result (a finite collection or a ComplementSet)

        Returns:
            Items present in the domain and in each keyword's posting set
        """
        operands: List[SizedDomain] = [domain]
        # Sorted so tie-breaking between equal-size postings is reproducible
        for keyword in sorted(set(keywords)):
            operands.append(self._postings.get(keyword, _EMPTY_POSTINGS))
        return intersect(operands)

    def postings(self, keyword: str) -> Mapping[Hashable, None]:
        """Read-only view of a keyword's posting set (empty if unknown)."""
        postings = self._postings.get(keyword)
        if postings is None:
            return _EMPTY_POSTINGS
        return MappingProxyType(postings)

    def keywords(self) -> List[str]:
        """All indexed keywords, in first-seen order."""
        return list(self._postings)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._postings

    def __len__(self) -> int:
        return len(self._postings)
