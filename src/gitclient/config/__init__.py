"""Config module exports."""

from gitclient.config.loader import GitClientSettings, load_config
from gitclient.config.models import (
    GitClientConfig,
    GitConfig,
    LoggingConfig,
    LogOutputConfig,
    MatrixConfig,
)

__all__ = [
    "load_config",
    "GitClientConfig",
    "GitClientSettings",
    "GitConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "MatrixConfig",
]
