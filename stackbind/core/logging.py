"""Structured logging setup for stackbind.

Events are logged through structlog with snake_case event names and keyword
context. Rendering goes through the standard library so a single
``RichHandler`` (console) or plain stream handler (JSON) owns the output.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from .log_categories import DEFAULT


if TYPE_CHECKING:
    from stackbind.config.logging import LoggingSettings


CUSTOM_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "critical": "bold white on red",
        "debug": "dim white",
    }
)

_NOISY_LOGGERS = ("httpx", "httpcore")


def _add_default_category(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("category", DEFAULT)
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _add_default_category,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "INFO",
    console_width: int | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        json_logs: Render events as JSON lines instead of rich console output
        log_level_name: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_width: Optional console width override for rich output
    """
    level = getattr(logging, log_level_name.upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler: logging.Handler
    renderers: list[structlog.types.Processor]
    if json_logs:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
        handler = logging.StreamHandler(sys.stderr)
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]
        handler = RichHandler(
            console=Console(theme=CUSTOM_THEME, width=console_width, stderr=True),
            show_time=False,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *renderers,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog logger bound to ``name``
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def setup_logging_from_settings(settings: "LoggingSettings") -> None:
    """Configure logging from ``LoggingSettings``.

    The ``auto`` format renders JSON when stderr is not a terminal.
    """
    json_logs = settings.json_logs or (
        settings.format == "auto" and not sys.stderr.isatty()
    )
    setup_logging(
        json_logs=json_logs,
        log_level_name=settings.level,
        console_width=settings.console_width,
    )
