"""Configuration management for the listing matcher."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    InputsConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MatchingConfig,
    OutputConfig,
    OutputFormat,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "InputsConfig",
    "MatchingConfig",
    "OutputConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    "OutputFormat",
    # Exceptions
    "ConfigurationError",
]
