"""structlog setup for archscan.

Events are built by structlog and handed to stdlib ``logging``, which fans
them out to one handler per configured output. Terminal outputs go quiet
while a progress bar is drawn; file outputs record everything at their level.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from archscan.config.models import LoggingConfig, LogOutputConfig

_TERMINALS = {"stderr": lambda: sys.stderr, "stdout": lambda: sys.stdout}

# First file output of the active configuration, shown after fatal errors
_log_file: Path | None = None

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
]


def get_log_file_path() -> Path | None:
    return _log_file


class LiveDisplayFilter(logging.Filter):
    """Drop records while a rich live display owns the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from archscan.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _level_number(name: str | None, fallback: int) -> int:
    if name is None:
        return fallback
    return logging.getLevelNamesMapping().get(name.upper(), fallback)


def _output_handler(output: LogOutputConfig, level: int) -> logging.Handler:
    stream = _TERMINALS.get(output.destination)
    handler: logging.Handler
    if stream is not None:
        handler = logging.StreamHandler(stream())
        handler.addFilter(LiveDisplayFilter())
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer()
            if output.format == "json"
            else structlog.dev.ConsoleRenderer(
                colors=stream().isatty(), pad_event_to=0, pad_level=False
            )
        )
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        renderer = (
            structlog.processors.JSONRenderer()
            if output.format == "json"
            else structlog.dev.ConsoleRenderer(colors=False, pad_event_to=0, pad_level=False)
        )

    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)
    )
    return handler


def configure_logging(*, config: LoggingConfig | None = None, level: str = "INFO") -> None:
    """Install handlers for every output in ``config``.

    Without a config a single console output on stderr is used at ``level``.
    Calling again replaces the previous handlers.
    """
    global _log_file
    from archscan.config.models import LoggingConfig

    if config is None:
        config = LoggingConfig(level=level)  # type: ignore[arg-type]

    root_level = _level_number(config.level, logging.INFO)
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    _log_file = next(
        (Path(o.destination) for o in config.outputs if o.destination not in _TERMINALS),
        None,
    )
    for output in config.outputs:
        root.addHandler(_output_handler(output, _level_number(output.level, root_level)))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    return logger.bind(logger=name) if name else logger  # type: ignore[no-any-return]


def log_error(logger: Any, event: str, error: Exception, **context: Any) -> None:
    """Log ``error`` at error level, spreading its ``to_dict()`` payload when it has one."""
    payload = getattr(error, "to_dict", None)
    if callable(payload):
        logger.error(event, **payload(), **context)
    else:
        logger.error(event, error=str(error), error_type=type(error).__name__, **context)
