"""Configuration loader for the listing matcher."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_CANDIDATES = (
    Path("config.yaml"),
    Path("config") / "config.yaml",
)


def load_config(
    config_path: Optional[Path] = None, allow_missing: bool = False
) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from a YAML file and environment variables.

    Config file lookup:
    1. Use config_path if given (it must exist)
    2. Try config.yaml in the current directory
    3. Try ./config/config.yaml
    4. Fall back to built-in defaults if allow_missing, otherwise fail

    Args:
        config_path: Optional path to configuration file
        allow_missing: Use defaults when no config file is found

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with validated configuration

    Raises:
        ConfigurationError: If configuration is invalid or file not found
    """
    config_file = _find_config_file(config_path, allow_missing=allow_missing)

    if config_file is None:
        app_config = AppConfig(base_dir=Path.cwd())
    else:
        config_dict = _read_yaml(config_file)
        app_config = _validate_config_dict(config_dict, source=config_file)
        app_config.base_dir = config_file.resolve().parent

    try:
        env_config = load_environment_config()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load environment configuration: {e}",
            suggestions=["Check the values in your .env file"],
        ) from e

    return app_config, env_config


def _read_yaml(config_file: Path) -> dict:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            "Configuration file not found",
            suggestions=["Copy config.example.yaml to config.yaml"],
            source=config_file,
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=["Ensure proper indentation (use spaces, not tabs)"],
            source=config_file,
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e.strerror}",
            suggestions=["Check file permissions"],
            source=config_file,
        ) from e

    if config_dict is None:
        # An empty file means "all defaults"
        return {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            suggestions=["Review config.example.yaml for the expected layout"],
            source=config_file,
        )

    return config_dict


def _validate_config_dict(config_dict: dict, source: Optional[Path] = None) -> AppConfig:
    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"]) or "config"
            error_type = error["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ["string_type", "bool_type", "bool_parsing", "path_type"]:
                errors.append(
                    f"Invalid type for '{field_path}': {error['msg']}, got {error.get('input')!r}"
                )
            elif error_type == "extra_forbidden":
                errors.append(f"Unknown field: {field_path}")
            elif "enum" in error_type:
                errors.append(f"Invalid value for '{field_path}': {error['msg']}")
            else:
                errors.append(f"{field_path}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
            source=source,
        ) from e


def _find_config_file(
    config_path: Optional[Path] = None, allow_missing: bool = False
) -> Optional[Path]:
    """
    Find the configuration file using the fallback logic.

    Returns:
        Path to configuration file, or None when allow_missing and nothing was found

    Raises:
        ConfigurationError: If an explicit path does not exist, or nothing is found
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Check the path and try again",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate

    if allow_missing:
        return None

    raise ConfigurationError(
        "Configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in DEFAULT_CONFIG_CANDIDATES],
        suggestions=[
            "Copy config.example.yaml to config.yaml",
            "Use --config flag to specify a custom location",
        ],
    )


def validate_config_file(config_path: Optional[Path] = None) -> bool:
    """
    Validate a configuration file without loading environment variables.

    Without config_path the same lookup as load_config() applies: config.yaml,
    then config/config.yaml.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        config_file = _find_config_file(config_path)
        _validate_config_dict(_read_yaml(config_file), source=config_file)
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False

    print(f"✓ Configuration file {config_file} is valid")
    return True
