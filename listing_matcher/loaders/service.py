"""Loading of listings, products and stop words from disk.

The three inputs are independent, so load_inputs() can read them on a small
thread pool. Everything after loading runs on the calling thread.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

from listing_matcher.config.models import InputsConfig
from listing_matcher.domain.models import Listing, Product
from listing_matcher.logging import get_logger

from .exceptions import InputLoadError
from .parsers import parse_json_lines, parse_word_list

logger = get_logger(__name__, component="loaders")

T = TypeVar("T")


@dataclass
class LoadedInputs:
    """The decoded contents of the three input files.

    Attributes:
        listings: Listings in file order
        products: Products in file order
        stop_words: Stop words in file order
        duration_seconds: Wall time spent loading
    """

    listings: List[Listing] = field(default_factory=list)
    products: List[Product] = field(default_factory=list)
    stop_words: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0


def resolve_path(path: Path, base_dir: Optional[Path] = None) -> Path:
    """Resolve a relative path against base_dir; absolute paths are returned unchanged."""
    path = Path(path).expanduser()
    if path.is_absolute() or base_dir is None:
        return path
    return Path(base_dir) / path


def read_text(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        InputLoadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise InputLoadError(f"Input file not found: {path}", path=path) from e
    except UnicodeDecodeError as e:
        raise InputLoadError(f"Input file is not valid UTF-8: {path}", path=path) from e
    except OSError as e:
        raise InputLoadError(f"Failed to read input file {path}: {e}", path=path) from e


def load_listings(path: Path) -> List[Listing]:
    """Load listings from a JSON-lines file."""
    records = parse_json_lines(read_text(path), source=str(path))
    return [Listing.from_record(record) for record in records]


def load_products(path: Path) -> List[Product]:
    """Load products from a JSON-lines file."""
    records = parse_json_lines(read_text(path), source=str(path))
    return [Product.from_record(record) for record in records]


def load_stop_words(path: Path) -> List[str]:
    """Load stop words from a word-list file."""
    return parse_word_list(read_text(path))


def load_inputs(inputs: InputsConfig, base_dir: Optional[Path] = None) -> LoadedInputs:
    """Load all three inputs described by the configuration.

    Args:
        inputs: Input file locations
        base_dir: Directory relative paths are resolved against

    Returns:
        LoadedInputs with listings, products and stop words

    Raises:
        InputLoadError: If any input file cannot be read
    """
    start = time.perf_counter()
    paths = {
        "listings": resolve_path(inputs.listings, base_dir),
        "products": resolve_path(inputs.products, base_dir),
        "stop_words": resolve_path(inputs.stop_words, base_dir),
    }
    loaders: Dict[str, Callable[[Path], list]] = {
        "listings": load_listings,
        "products": load_products,
        "stop_words": load_stop_words,
    }

    if inputs.concurrent_load:
        with ThreadPoolExecutor(max_workers=len(loaders), thread_name_prefix="loader") as pool:
            futures = {name: pool.submit(loaders[name], paths[name]) for name in loaders}
            # result() re-raises InputLoadError from the worker thread
            loaded = {name: future.result() for name, future in futures.items()}
    else:
        loaded = {name: loaders[name](paths[name]) for name in loaders}

    result = LoadedInputs(
        listings=loaded["listings"],
        products=loaded["products"],
        stop_words=loaded["stop_words"],
        duration_seconds=time.perf_counter() - start,
    )

    logger.info(
        f"Loaded {len(result.listings)} listings, {len(result.products)} products, "
        f"{len(result.stop_words)} stop words",
        extra={
            "event": "loaders.inputs.loaded",
            "listing_count": len(result.listings),
            "product_count": len(result.products),
            "stop_word_count": len(result.stop_words),
            "concurrent": inputs.concurrent_load,
            "duration_ms": int(result.duration_seconds * 1000),
        },
    )

    return result
