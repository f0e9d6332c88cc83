"""Command-line entry point for the listing matcher."""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from pydantic import ValidationError

from listing_matcher.config.environment import EnvironmentConfig
from listing_matcher.config.exceptions import ConfigurationError
from listing_matcher.config.loader import load_config, validate_config_file
from listing_matcher.config.models import AppConfig
from listing_matcher.loaders.exceptions import InputLoadError
from listing_matcher.logging import get_logger
from listing_matcher.logging.config import configure_logging
from listing_matcher.pipeline import MatchPipeline

logger = get_logger(__name__, component="cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listing-matcher",
        description="Match free-text product listings to catalog products by keyword overlap",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml, if present)",
    )
    parser.add_argument("--listings", type=Path, help="JSON-lines listings file")
    parser.add_argument("--products", type=Path, help="JSON-lines products file")
    parser.add_argument("--stop-words", type=Path, help="Stop word list file")
    parser.add_argument("--output", type=Path, help="Write results to this file instead of stdout")
    parser.add_argument(
        "--format",
        choices=["text", "jsonl"],
        default=None,
        help="Result format (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate the configuration file and exit",
    )
    return parser


def apply_cli_overrides(app_config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    Return a new AppConfig with command-line options applied.

    Paths given on the command line are relative to the working directory,
    not to the config file, so they are made absolute here.

    Raises:
        ConfigurationError: If the overridden configuration is invalid
    """
    data = app_config.model_dump()

    for option in ("listings", "products", "stop_words"):
        value = getattr(args, option, None)
        if value is not None:
            data["inputs"][option] = Path(value).absolute()

    if args.output is not None:
        data["output"]["path"] = Path(args.output).absolute()
    if args.format is not None:
        data["output"]["format"] = args.format

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid command-line options",
            errors=[error["msg"] for error in e.errors()],
            suggestions=["Check the paths passed to --listings, --products, --stop-words and --output"],
        ) from e


def load_runtime_config(args: argparse.Namespace) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and apply overrides.

    Precedence is CLI > environment > config file > defaults. Without an
    explicit --config, a missing config file means built-in defaults.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(args.config, allow_missing=args.config is None)
    app_config = apply_cli_overrides(app_config, args)

    if args.log_level:
        env_config.log_level = args.log_level
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    return app_config, env_config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the listing matcher.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)
    load_dotenv()

    if args.check_config:
        return 0 if validate_config_file(args.config) else 1

    try:
        app_config, env_config = load_runtime_config(args)

        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        logger.info(
            "Listing matcher starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "output_format": app_config.output.format,
            },
        )

        pipeline = MatchPipeline(app_config=app_config, env_config=env_config)
        result = pipeline.run_once()

        logger.info(
            f"Matching completed: {result.claimed_listing_count} of {result.listing_count} "
            f"listings matched to {result.matched_product_count} of {result.product_count} products",
            extra={
                "event": "service.completed",
                "duration_seconds": round(result.total_duration_seconds, 3),
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e.message}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except InputLoadError as e:
        print(f"Input Error: {e}", file=sys.stderr)
        logger.error(
            f"Input error: {e}",
            extra={
                "event": "inputs.error",
                "error_type": "InputLoadError",
                "path": str(e.path) if e.path else None,
            },
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during matching",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
