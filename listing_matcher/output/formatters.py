"""Rendering of match results as text or JSON lines.

The text format is a Jinja2 template in the listing_matcher.output.templates
package directory; JSON lines are built directly from ProductMatch.to_dict().
"""

import json
from typing import Callable, Dict, Iterable

from jinja2 import Environment, PackageLoader, StrictUndefined

from listing_matcher.matching.models import ProductMatch

LISTING_PREFIX = " => "
TEXT_TEMPLATE = "results.txt.j2"

# Plain text output: no HTML escaping; block tags swallow their own newline
_templates = Environment(
    loader=PackageLoader("listing_matcher.output", "templates"),
    autoescape=False,
    undefined=StrictUndefined,
    trim_blocks=True,
)


def format_text(results: Iterable[ProductMatch]) -> str:
    """Render results for reading in a terminal.

    Each product name is followed by one indented line per listing title:

        Sony_Cyber-shot_DSC-W310
         => Sony DSC-W310 12.1MP Digital Camera
    """
    template = _templates.get_template(TEXT_TEMPLATE)
    return template.render(results=list(results), prefix=LISTING_PREFIX)


def format_jsonl(results: Iterable[ProductMatch]) -> str:
    """Render one JSON object per product: {"product_name": ..., "listings": [...]}.

    Listings are emitted as their original input records.
    """
    return "".join(
        json.dumps(result.to_dict(), ensure_ascii=False) + "\n" for result in results
    )


FORMATTERS: Dict[str, Callable[[Iterable[ProductMatch]], str]] = {
    "text": format_text,
    "jsonl": format_jsonl,
}
