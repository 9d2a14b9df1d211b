"""
Global configuration singleton.

Provides a global config instance that can be accessed from anywhere in the library.
"""

import threading
from collections.abc import Iterator
from typing import Any

from sqlblob.config.loader import Config


class GlobalConfig:
    """Global configuration singleton manager."""

    _instance: Config | None = None
    _lock = threading.Lock()

    @classmethod
    def set_config(cls, config: Config):
        """Set the global config instance."""
        with cls._lock:
            cls._instance = config

    @classmethod
    def get_config(cls) -> Config | None:
        """Get the global config instance."""
        return cls._instance

    @classmethod
    def reset_config(cls):
        """Reset the global config instance (for testing)."""
        with cls._lock:
            cls._instance = None


def get_config() -> Config | None:
    """
    Get the global Config instance.

    Returns:
        Config instance if set, None otherwise
    """
    return GlobalConfig.get_config()


def set_config(config: Config) -> None:
    """Install ``config`` as the global Config instance."""
    GlobalConfig.set_config(config)


class ConfigProxy:
    """
    Proxy object that provides dict-like access to global config.

    Usage:
        from sqlblob import config
        limit = config.get("codec.max_capacity")
    """

    def __getitem__(self, key: str):
        cfg = get_config()
        if cfg is None:
            raise RuntimeError("Config not initialized. Call sqlblob.config.singleton.set_config() first.")
        return cfg[key]

    def __contains__(self, key: str) -> bool:
        cfg = get_config()
        if cfg is None:
            return False
        return key in cfg

    def get(self, key: str, default: Any = None):
        """Get config value with dot notation: config.get('codec.max_capacity')."""
        cfg = get_config()
        if cfg is None:
            return default
        return cfg.get(key, default)

    def __iter__(self) -> Iterator[str]:
        cfg = get_config()
        if cfg is None:
            return iter([])
        return iter(cfg)


config = ConfigProxy()
