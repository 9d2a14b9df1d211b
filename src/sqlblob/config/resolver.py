"""
Configuration resolution and environment variable substitution.
"""

import os
import re
from typing import Any


def resolve_config(config_data: dict[str, Any], env: str = "dev") -> dict[str, Any]:
    """
    Resolve configuration with environment variable substitution.

    Substitutes ${VAR_NAME} and {env} placeholders in string values.

    Args:
        config_data: Configuration dictionary
        env: Current environment name

    Returns:
        Resolved configuration
    """
    return _resolve_value(config_data, env)


def _resolve_value(value: Any, env: str) -> Any:
    """Recursively resolve values in configuration."""
    if isinstance(value, dict):
        return {k: _resolve_value(v, env) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_value(item, env) for item in value]
    elif isinstance(value, str):
        # Unset variables are left as-is
        result = re.sub(r"\${([^}]+)}", lambda m: os.getenv(m.group(1), m.group(0)), value)
        result = result.replace("{env}", env)
        return _coerce_scalar(result) if result != value else result
    else:
        return value


def _coerce_scalar(value: str) -> Any:
    """Turn substituted integers back into ints (e.g. max_capacity: ${LIMIT})."""
    if re.fullmatch(r"[+-]?\d+", value.strip()):
        return int(value)
    return value
