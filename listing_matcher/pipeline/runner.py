"""Pipeline orchestration: load inputs, match, write results."""

import time
from pathlib import Path
from typing import IO, Callable, Optional
from uuid import uuid4

from listing_matcher.config.environment import EnvironmentConfig
from listing_matcher.config.exceptions import ConfigurationError
from listing_matcher.config.models import AppConfig, InputsConfig
from listing_matcher.loaders.service import LoadedInputs, load_inputs, resolve_path
from listing_matcher.logging import get_logger
from listing_matcher.logging.context import log_context
from listing_matcher.matching.engine import ListingMatcher, summarize
from listing_matcher.output.writer import write_results
from listing_matcher.utils.timestamps import format_timestamp_for_log, utc_now

from .models import PipelineRunResult

logger = get_logger(__name__, component="pipeline")

InputLoader = Callable[[InputsConfig, Optional[Path]], LoadedInputs]

INPUT_NAMES = ("listings", "products", "stop_words")


class MatchPipeline:
    """
    Orchestrates a single matching run.

    The pipeline reads the listings, products and stop words, runs the
    matching engine, and hands the results to the output step.
    """

    def __init__(
        self,
        app_config: AppConfig,
        env_config: Optional[EnvironmentConfig] = None,
        stream: Optional[IO[str]] = None,
        input_loader: InputLoader = load_inputs,
    ):
        """
        Initialize the match pipeline.

        Args:
            app_config: Application configuration
            env_config: Environment configuration (data_dir overrides the base directory)
            stream: Destination for results when no output path is configured
            input_loader: Callable loading the three inputs
        """
        self.app_config = app_config
        self.env_config = env_config or EnvironmentConfig()
        self.stream = stream
        self.input_loader = input_loader

    @property
    def base_dir(self) -> Optional[Path]:
        """Directory relative paths resolve against: MATCHER_DATA_DIR, else the config file's directory."""
        return self.env_config.data_dir or self.app_config.base_dir

    def check_output_target(self) -> None:
        """
        Refuse an output file that resolves to one of the input files.

        Both sides are resolved against base_dir and made canonical, so
        "data/listings.txt" given on the command line and the same file named
        relative to the config directory compare equal.

        Raises:
            ConfigurationError: If output.path names an input file
        """
        if self.app_config.output.path is None:
            return

        target = resolve_path(self.app_config.output.path, self.base_dir).resolve()
        for name in INPUT_NAMES:
            input_path = resolve_path(getattr(self.app_config.inputs, name), self.base_dir).resolve()
            if target == input_path:
                raise ConfigurationError(
                    f"Output file would overwrite the {name} input: {target}",
                    suggestions=["Write results to a different file with --output or output.path"],
                )

    def run_once(self) -> PipelineRunResult:
        """
        Execute one complete matching run.

        This method:
        1. Checks that the output file is not one of the inputs
        2. Loads the three inputs
        3. Matches listings to products
        4. Writes the results
        5. Returns timings and counts

        Returns:
            PipelineRunResult with counts, timings and the match results

        Raises:
            ConfigurationError: If the output file is one of the input files
            InputLoadError: If an input file cannot be read
            OSError: If the output file cannot be written
        """
        run_started_at = utc_now()
        run_id = uuid4().hex

        self.check_output_target()

        with log_context(run_id=run_id):
            return self._run(run_id, run_started_at)

    def _run(self, run_id: str, run_started_at) -> PipelineRunResult:
        logger.info(
            "Pipeline run started",
            extra={
                "event": "pipeline.run.started",
                "run_started_at": format_timestamp_for_log(run_started_at),
                "base_dir": str(self.base_dir) if self.base_dir else None,
            },
        )

        inputs = self.input_loader(self.app_config.inputs, self.base_dir)

        match_start = time.perf_counter()
        matcher = ListingMatcher(
            inputs.stop_words,
            empty_keyword_policy=self.app_config.matching.empty_keywords,
        )
        results = matcher.match(inputs.listings, inputs.products)
        match_duration = time.perf_counter() - match_start

        products_written = write_results(
            results,
            self.app_config.output,
            stream=self.stream,
            base_dir=self.base_dir,
        )

        output_path = None
        if self.app_config.output.path is not None:
            output_path = resolve_path(self.app_config.output.path, self.base_dir)

        result = PipelineRunResult(
            run_started_at=run_started_at,
            run_finished_at=utc_now(),
            run_id=run_id,
            load_duration_seconds=inputs.duration_seconds,
            match_duration_seconds=match_duration,
            stop_word_count=len(inputs.stop_words),
            summary=summarize(results, inputs.listings),
            products_written=products_written,
            output_path=output_path,
            results=results,
        )

        logger.info(
            "Pipeline run completed",
            extra={
                "event": "pipeline.run.completed",
                "duration_ms": int(result.total_duration_seconds * 1000),
                "load_ms": int(result.load_duration_seconds * 1000),
                "match_ms": int(result.match_duration_seconds * 1000),
                "products_written": result.products_written,
                **result.summary.as_log_fields(),
            },
        )

        return result
