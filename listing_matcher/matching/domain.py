"""Exclusion-based domain set for the listings still available to match.

A ComplementSet stands for "every item except the excluded ones". It starts
out excluding nothing, so it can represent all listings without enumerating
them, and it only ever shrinks. It is a membership oracle: it reports an
unbounded size so intersection code never picks it as the set to iterate.
"""

import math
from typing import Any, Collection, Hashable, Iterable, Iterator, Optional, Union

UNBOUNDED = math.inf


class UnboundedIterationError(TypeError):
    """Raised when code tries to enumerate an unbounded set.

    Indicates a programming error: an unbounded domain must always be
    intersected together with at least one finite set.
    """

    pass


class ComplementSet:
    """Membership view over all items except an exclusion set.

    Example:
        >>> available = ComplementSet()
        >>> available.contains("listing-1")
        True
        >>> available.exclude("listing-1").contains("listing-1")
        False
    """

    def __init__(self, excluded: Optional[Iterable[Hashable]] = None):
        """Initialize ComplementSet.

        Args:
            excluded: Items excluded from the start (defaults to none)
        """
        self._excluded = set(excluded) if excluded is not None else set()

    @property
    def size(self) -> float:
        """Always UNBOUNDED: larger than any concrete set."""
        return UNBOUNDED

    @property
    def excluded_count(self) -> int:
        """Number of items excluded so far."""
        return len(self._excluded)

    def contains(self, item: Hashable) -> bool:
        """Return True if the item has not been excluded."""
        return item not in self._excluded

    def __contains__(self, item: Hashable) -> bool:
        return self.contains(item)

    def exclude(self, item: Hashable) -> "ComplementSet":
        """Remove an item from the set. There is no way to add it back."""
        self._excluded.add(item)
        return self

    delete = exclude

    def __iter__(self) -> Iterator[Any]:
        raise UnboundedIterationError(
            "ComplementSet cannot be enumerated; intersect it with a finite set instead"
        )

    def __repr__(self) -> str:
        return f"ComplementSet(excluded_count={self.excluded_count})"


SizedDomain = Union[Collection[Any], ComplementSet]


def size_of(items: SizedDomain) -> Union[int, float]:
    """Return the size of a concrete collection, or UNBOUNDED for a ComplementSet."""
    if isinstance(items, ComplementSet):
        return items.size
    return len(items)
