"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from listing_matcher.matching.models import MatchSummary, ProductMatch


@dataclass
class PipelineRunResult:
    """
    Results of one load -> match -> write run.

    Attributes:
        run_id: Identifier attached to every log record of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        total_duration_seconds: Total time for the entire run
        load_duration_seconds: Time spent reading the input files
        match_duration_seconds: Time spent in the matching engine
        stop_word_count: Stop words loaded
        summary: Matcher counts (products, listings, claims)
        products_written: Products rendered by the output step
        output_path: File written, or None when results went to a stream
        results: Per-product match results in specificity order
    """

    run_started_at: datetime
    run_finished_at: datetime
    run_id: str = ""
    total_duration_seconds: float = 0.0
    load_duration_seconds: float = 0.0
    match_duration_seconds: float = 0.0
    stop_word_count: int = 0
    summary: MatchSummary = field(default_factory=MatchSummary)
    products_written: int = 0
    output_path: Optional[Path] = None
    results: List[ProductMatch] = field(default_factory=list)

    def __post_init__(self):
        """Compute duration if not set."""
        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def listing_count(self) -> int:
        return self.summary.listing_count

    @property
    def product_count(self) -> int:
        return self.summary.product_count

    @property
    def claimed_listing_count(self) -> int:
        return self.summary.claimed_listing_count

    @property
    def matched_product_count(self) -> int:
        return self.summary.matched_product_count
