"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from listing_matcher.matching.models import EmptyKeywordPolicy


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class OutputFormat(str, Enum):
    """Match result output formats."""

    TEXT = "text"
    JSONL = "jsonl"


def _non_blank_path(value):
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("Path cannot be empty or whitespace-only")
    return value


class InputsConfig(BaseModel):
    """Locations of the three input files."""

    listings: Path = Field(Path("data/listings.txt"), description="JSON-lines listings file")
    products: Path = Field(Path("data/products.txt"), description="JSON-lines products file")
    stop_words: Path = Field(
        Path("data/stop_words.txt"), description="Word list of keywords to ignore"
    )
    concurrent_load: bool = Field(True, description="Read the three files concurrently")

    @field_validator("listings", "products", "stop_words", mode="before")
    @classmethod
    def strip_paths(cls, v):
        """Strip whitespace from path strings and reject blanks."""
        return _non_blank_path(v)


class MatchingConfig(BaseModel):
    """Matching engine settings."""

    empty_keywords: EmptyKeywordPolicy = Field(
        EmptyKeywordPolicy.MATCH_ALL,
        description="Products with no manufacturer/title keywords: match_all or match_none",
    )

    model_config = {"use_enum_values": True}


class OutputConfig(BaseModel):
    """Result rendering settings."""

    format: OutputFormat = Field(OutputFormat.TEXT, description="Output format (text or jsonl)")
    path: Optional[Path] = Field(None, description="Output file (stdout when unset)")
    include_unmatched: bool = Field(
        True, description="Also render products that matched no listings"
    )

    @field_validator("path", mode="before")
    @classmethod
    def blank_path_is_stdout(cls, v):
        """Treat an empty path string as 'write to stdout'."""
        if isinstance(v, str) and not v.strip():
            return None
        return _non_blank_path(v)

    model_config = {"use_enum_values": True}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the listing matcher."""

    inputs: InputsConfig = Field(default_factory=InputsConfig, description="Input files")
    matching: MatchingConfig = Field(
        default_factory=MatchingConfig, description="Matching engine settings"
    )
    output: OutputConfig = Field(default_factory=OutputConfig, description="Result output")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    # Computed by the loader: directory relative input paths are resolved against
    base_dir: Optional[Path] = None

    @model_validator(mode="after")
    def validate_output_target(self):
        """Refuse to write results over one of the input files."""
        if self.output.path is None:
            return self

        inputs = {
            "listings": self.inputs.listings,
            "products": self.inputs.products,
            "stop_words": self.inputs.stop_words,
        }
        for name, input_path in inputs.items():
            if Path(self.output.path) == Path(input_path):
                raise ValueError(
                    f"output.path would overwrite the {name} input file: {input_path}"
                )
        return self
