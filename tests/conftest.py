"""
Shared fixtures for sqlblob tests.
"""

import pytest

from sqlblob.config.singleton import GlobalConfig
from sqlblob.utils.logging import reset_logging


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Each test starts without a global config or installed log handlers."""
    GlobalConfig.reset_config()
    reset_logging()
    yield
    GlobalConfig.reset_config()
    reset_logging()
