"""Per-run fields attached to every log record.

ContextualFilter copies the fields set by log_context() onto each record, so
everything logged during a pipeline run carries its run_id.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator

_fields: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently in scope."""
    return dict(_fields.get())


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Add fields to every log record emitted inside the block.

    Nested blocks merge their fields over the outer ones; the outer fields
    are restored on exit, including when the block raises.

        >>> with log_context(run_id="abc123"):
        ...     logger.info("Loading inputs")  # record carries run_id
    """
    token = _fields.set({**_fields.get(), **fields})
    try:
        yield
    finally:
        _fields.reset(token)
