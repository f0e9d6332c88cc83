"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    inputs = config_dict.get("inputs", {})
    if isinstance(inputs, dict):
        paths = [inputs.get(key) for key in ("listings", "products", "stop_words")]
        paths = [str(path).strip() for path in paths if isinstance(path, str)]
        if len(paths) != len(set(paths)):
            duplicates = sorted({path for path in paths if paths.count(path) > 1})
            warning_messages.append(
                f"The same file is used for more than one input: {', '.join(duplicates)}"
            )

    output = config_dict.get("output", {})
    if isinstance(output, dict):
        if output.get("format") == "jsonl" and output.get("include_unmatched") is False:
            warning_messages.append(
                "output.include_unmatched is false: products without listings "
                "will be missing from the jsonl results"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
