"""The single output step: render results and write them to a file or stream."""

import sys
from pathlib import Path
from typing import IO, List, Optional, Sequence

from listing_matcher.config.models import OutputConfig
from listing_matcher.logging import get_logger
from listing_matcher.matching.models import ProductMatch

from .formatters import FORMATTERS

logger = get_logger(__name__, component="output")


def select_results(results: Sequence[ProductMatch], include_unmatched: bool) -> List[ProductMatch]:
    """Drop products without listings unless include_unmatched is set."""
    if include_unmatched:
        return list(results)
    return [result for result in results if result.listings]


def write_results(
    results: Sequence[ProductMatch],
    output: OutputConfig,
    stream: Optional[IO[str]] = None,
    base_dir: Optional[Path] = None,
) -> int:
    """Render results in the configured format and write them out.

    Writes to output.path when set (relative paths resolve against base_dir),
    otherwise to stream, defaulting to stdout.

    Args:
        results: Match results in specificity order
        output: Output settings
        stream: Destination when no output path is configured
        base_dir: Directory a relative output path is resolved against

    Returns:
        Number of products written

    Raises:
        ValueError: If the output format is unknown
        OSError: If the output file cannot be written
    """
    format_name = str(getattr(output.format, "value", output.format))
    formatter = FORMATTERS.get(format_name)
    if formatter is None:
        raise ValueError(f"Unknown output format: {output.format}")

    selected = select_results(results, output.include_unmatched)
    rendered = formatter(selected)

    if output.path is not None:
        path = Path(output.path)
        if not path.is_absolute() and base_dir is not None:
            path = Path(base_dir) / path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rendered, encoding="utf-8")
        destination = str(path)
    else:
        target = stream if stream is not None else sys.stdout
        target.write(rendered)
        target.flush()
        destination = "stream"

    logger.info(
        f"Wrote {len(selected)} products to {destination}",
        extra={
            "event": "output.results.written",
            "product_count": len(selected),
            "output_format": format_name,
            "destination": destination,
        },
    )

    return len(selected)
