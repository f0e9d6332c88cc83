"""Line-oriented parsers for the JSON-lines and word-list input formats."""

import json
from typing import Any, Dict, List

from listing_matcher.logging import get_logger

logger = get_logger(__name__, component="loaders")


def parse_json_lines(text: str, source: str = "<text>") -> List[Dict[str, Any]]:
    """Decode one JSON object per line.

    Blank lines, lines that are not valid JSON, and JSON values that are not
    objects are skipped.

    Args:
        text: Whole file contents
        source: Name of the input, used in the debug log only

    Returns:
        Decoded objects in file order

    Example:
        >>> parse_json_lines('{"title": "Sony"}\\nnot json\\n')
        [{'title': 'Sony'}]
    """
    records: List[Dict[str, Any]] = []
    skipped = 0

    for line in text.split("\n"):
        if not line.strip():
            continue
        try:
            value = json.loads(line)
        except ValueError:
            skipped += 1
            continue
        if not isinstance(value, dict):
            skipped += 1
            continue
        records.append(value)

    if skipped:
        logger.debug(
            f"Skipped {skipped} malformed lines in {source}",
            extra={
                "event": "loaders.lines.skipped",
                "source": source,
                "skipped_count": skipped,
            },
        )

    return records


def parse_word_list(text: str) -> List[str]:
    """Parse a word list: one word per line, '#' comments and blank lines ignored.

    Example:
        >>> parse_word_list("# stop words\\nand\\n\\nthe\\n")
        ['and', 'the']
    """
    words = []
    for line in text.split("\n"):
        word = line.strip()
        if not word or word.startswith("#"):
            continue
        words.append(word)
    return words
