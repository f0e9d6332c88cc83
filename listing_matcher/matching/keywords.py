"""Keyword extraction for listing and product text.

Text is trimmed and lowercased, then split into maximal runs of letters,
digits, '.', ',' and '-'. Stop words are dropped and the tokens of every input
text are merged into one set.
"""

import re
from typing import Any, FrozenSet, Iterable, List, Set

TOKEN_PATTERN = re.compile(r"[a-z0-9.,-]+")


class KeywordExtractor:
    """Turns free text into normalized, de-duplicated keyword sets.

    The stop-word set is fixed at construction, so extraction is a pure
    function of the input texts.
    """

    def __init__(self, stop_words: Iterable[str] = ()):
        """Initialize KeywordExtractor.

        Args:
            stop_words: Words to drop from every extracted set. Entries are
                stripped and lowercased; non-string or blank entries are ignored.
        """
        self._stop_words: FrozenSet[str] = frozenset(
            word.strip().lower()
            for word in stop_words
            if isinstance(word, str) and word.strip()
        )

    @property
    def stop_words(self) -> FrozenSet[str]:
        """The normalized stop words this extractor filters out."""
        return self._stop_words

    def extract_keywords(self, *texts: Any) -> Set[str]:
        """Extract the union of keywords from all given texts.

        Values that are not non-empty strings (None, numbers, lists) are
        skipped silently, as are texts that contain no token characters.

        Args:
            *texts: Free-text values, typically record fields

        Returns:
            Set of keywords with stop words removed

        Example:
            >>> KeywordExtractor(["and"]).extract_keywords("Sony and Co.")
            {'sony', 'co.'}
        """
        keywords: Set[str] = set()
        for text in texts:
            if not isinstance(text, str) or not text:
                continue
            keywords.update(self._tokenize(text))
        return keywords

    def _tokenize(self, text: str) -> List[str]:
        tokens = TOKEN_PATTERN.findall(text.strip().lower())
        return [token for token in tokens if token not in self._stop_words]
