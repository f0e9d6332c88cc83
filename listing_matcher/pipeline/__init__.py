"""Pipeline orchestration for loading, matching and writing results."""

from .models import PipelineRunResult
from .runner import MatchPipeline

__all__ = [
    "MatchPipeline",
    "PipelineRunResult",
]
