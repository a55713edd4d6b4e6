"""Core module exports."""

from gitclient.core.errors import ConfigError, ErrorCode, GitClientError
from gitclient.core.logging import (
    LOGGING_STARTED,
    LogCapture,
    configure_logging,
    get_logger,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "GitClientError",
    # Logging
    "LOGGING_STARTED",
    "LogCapture",
    "configure_logging",
    "get_logger",
]
