"""Structured logging with multi-output support and injectable capture sinks.

Supports:
- Separate console vs file log levels
- JSON or console rendering per output
- In-memory capture of a single client's log lines (LogCapture)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from types import TracebackType

    from gitclient.config.models import LoggingConfig

LOGGING_STARTED = "*** Logging started ***"

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Configure structlog. Pass config for multi-output, or use simple params.

    Args:
        config: Logging configuration with outputs
        json_format: Use JSON format for simple setup
        level: Default log level
    """
    from gitclient.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    default_level = _LEVEL_MAP.get(config.level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Don't cache - allows reconfiguration and respects level changes
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(default_level)

    for output in config.outputs:
        output_level = _LEVEL_MAP.get((output.level or config.level).upper(), default_level)
        is_console = output.destination in ("stderr", "stdout")

        if output.format == "json":
            formatter = structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=shared_processors,
            )
        else:
            formatter = structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(
                    colors=is_console and sys.stderr.isatty(),
                    pad_event_to=0,
                    pad_level=False,
                ),
                foreign_pre_chain=shared_processors,
            )

        handler = _create_handler(output.destination)
        handler.setLevel(output_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def _create_handler(destination: str) -> logging.Handler:
    """Create handler for stderr, stdout, or file path."""
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]


# =============================================================================
# Capture
# =============================================================================


class _RecordingLogger:
    """Terminal structlog logger that appends rendered lines to a list."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.closed = False

    def msg(self, message: str) -> None:
        if not self.closed:
            self.messages.append(message)

    log = debug = info = warn = warning = error = err = critical = fatal = exception = msg


class LogCapture:
    """In-memory log sink for one client.

    Pass ``capture.logger`` to the client instead of relying on a global
    logger name; everything the client logs through it is recorded here
    and nowhere else. The ``*** Logging started ***`` sentinel is recorded
    as soon as the capture exists.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name or f"gitclient-capture-{uuid4().hex[:8]}"
        self._sink = _RecordingLogger()
        self.logger: structlog.stdlib.BoundLogger = structlog.wrap_logger(
            self._sink,
            processors=[
                structlog.processors.add_log_level,
                structlog.dev.ConsoleRenderer(
                    colors=False,
                    pad_event_to=0,
                    pad_level=False,
                    exception_formatter=structlog.dev.plain_traceback,
                ),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
            context_class=dict,
            cache_logger_on_first_use=False,
        ).bind(logger=self.name)
        self.logger.info(LOGGING_STARTED)

    @property
    def messages(self) -> list[str]:
        return list(self._sink.messages)

    @property
    def closed(self) -> bool:
        return self._sink.closed

    def contains_message_substring(self, text: str) -> bool:
        return any(text in message for message in self._sink.messages)

    def joined(self, separator: str = ";") -> str:
        """All recorded lines in one string, for assertion messages."""
        return separator.join(self._sink.messages)

    def close(self) -> None:
        """Stop recording and release buffered lines. Safe to call twice."""
        self._sink.closed = True
        self._sink.messages.clear()

    def __enter__(self) -> LogCapture:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
