"""
Configuration file loading.

Load and parse config.yaml files, with an optional config.{env}.yaml overlay.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from sqlblob.config.resolver import resolve_config
from sqlblob.exceptions import ConfigurationError

CONFIG_FILENAME = "config.yaml"


class Config:
    """sqlblob configuration container with dict-like access."""

    def __init__(self, data: dict[str, Any]):
        self.data = data
        # Convenience properties for common config sections
        section = data if isinstance(data, dict) else {}
        self.codec = section.get("codec") or {}
        self.logging = section.get("logging") or {}

    @property
    def max_capacity(self) -> int | None:
        """Allocation ceiling for transcoding buffers, in bytes."""
        return self.get("codec.max_capacity")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split(".")
        value = self.data
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def __getitem__(self, key: str) -> Any:
        """Dict-like access: config['key'] or config['nested']['key']."""
        if isinstance(key, str) and "." in key:
            return self.get(key)
        if key in self.data:
            value = self.data[key]
            # Return nested dicts as Config objects for chaining
            if isinstance(value, dict):
                return Config(value)
            return value
        raise KeyError(f"Config key '{key}' not found")

    def __contains__(self, key: str) -> bool:
        if isinstance(key, str) and "." in key:
            keys = key.split(".")
            value = self.data
            for k in keys:
                if not isinstance(value, dict) or k not in value:
                    return False
                value = value[k]
            return True
        return key in self.data

    def __iter__(self) -> "Iterator[str]":
        return iter(self.data)

    def keys(self):
        return self.data.keys()

    def values(self):
        return self.data.values()

    def items(self):
        return self.data.items()

    def validate(self) -> None:
        """Validate configuration structure and content."""
        errors = []

        if not isinstance(self.data, dict):
            errors.append(f"Configuration must be a dictionary/mapping, got {type(self.data).__name__}")
            raise ConfigurationError("\n".join(errors))

        codec = self.data.get("codec")
        if codec is not None and not isinstance(codec, dict):
            errors.append(f"Configuration 'codec' must be a dictionary, got {type(codec).__name__}")
        elif codec:
            max_capacity = codec.get("max_capacity")
            if max_capacity is not None and (
                isinstance(max_capacity, bool) or not isinstance(max_capacity, int) or max_capacity <= 0
            ):
                errors.append(f"Configuration 'codec.max_capacity' must be a positive integer, got {max_capacity!r}")

        logging_section = self.data.get("logging")
        if logging_section is not None and not isinstance(logging_section, dict):
            errors.append(f"Configuration 'logging' must be a dictionary, got {type(logging_section).__name__}")

        if errors:
            raise ConfigurationError("\n".join(errors), details={"errors": errors})


def load_config(project_path: Path | None = None, env: str | None = None) -> Config:
    """
    Load sqlblob configuration.

    Loads config.yaml and config.{env}.yaml, then substitutes environment
    variables and validates the result.

    Args:
        project_path: Directory holding config.yaml (default: current directory)
        env: Environment name (dev, staging, prod)

    Returns:
        Config instance with merged configuration
    """
    if project_path is None:
        project_path = Path.cwd()

    base_config_path = project_path / CONFIG_FILENAME
    if not base_config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {base_config_path}\n"
            f"  Suggestion: Create a {CONFIG_FILENAME} file in your project root",
            details={"path": str(base_config_path)},
        )

    if not base_config_path.is_file():
        raise ConfigurationError(
            f"Configuration path is not a file: {base_config_path}", details={"path": str(base_config_path)}
        )

    config_data = _read_yaml(base_config_path)

    if env:
        env_config_path = project_path / f"config.{env}.yaml"
        if env_config_path.exists():
            _merge_dict(config_data, _read_yaml(env_config_path))

    env_name = env or "dev"
    config = Config(resolve_config(config_data, env_name))
    config.validate()
    return config


def _read_yaml(path: Path) -> dict[str, Any]:
    """Parse a YAML file, turning parser errors into ConfigurationError."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            raise ConfigurationError(
                f"Error parsing {path.name} at line {mark.line + 1}, column {mark.column + 1}:\n"
                f"  {e}\n"
                f"  File: {path}\n"
                f"  Suggestion: Check YAML syntax, ensure proper indentation and quotes",
                details={"path": str(path)},
            ) from e
        raise ConfigurationError(f"Error parsing {path.name}: {e}\n  File: {path}", details={"path": str(path)}) from e
    except PermissionError as e:
        raise ConfigurationError(
            f"Permission denied reading {path.name}: {path}\n  Error: {e}", details={"path": str(path)}
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a dictionary/mapping, got {type(data).__name__}\n  File: {path}",
            details={"path": str(path)},
        )
    return data


def _merge_dict(base: dict, override: dict):
    """Recursively merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value
