"""
Configuration management.

Configuration file parsing, environment resolution and the global config.
"""

from sqlblob.config.loader import Config, load_config
from sqlblob.config.resolver import resolve_config

__all__ = [
    "load_config",
    "Config",
    "resolve_config",
]
