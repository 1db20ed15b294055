"""Structured Logging for the Validation Engine

The engine only emits events; applications decide where they go by calling
configure_logging() once at startup. Engine loggers sit on top of stdlib
loggers under the "valence" namespace, which carries a NullHandler: without
configuration nothing is printed, and the host's logging setup decides.

- Colored, human-readable dev output
- JSON structured output for production
- Context propagation through contextvars
"""
import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from valence.core.config import get_settings

ROOT_LOGGER_NAME = "valence"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def _add_service_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that adds service metadata."""
    event_dict.setdefault("service", "valence")
    event_dict.setdefault("version", "0.1.0")
    return event_dict


def _drop_color_message_key(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Drop internal structlog key that's added for colored console output."""
    event_dict.pop("_color_message", None)
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors used in both dev and prod configurations."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_service_info,
        _drop_color_message_key,
    ]


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure the logging system.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to settings.
        json_logs: If True, output JSON format. Defaults to settings.
    """
    settings = get_settings()
    level = level or settings.LOG_LEVEL
    json_logs = settings.LOG_JSON if json_logs is None else json_logs
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = get_shared_processors()

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    # Formatter for stdlib logger (handles logs from third-party libs)
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        Structlog logger bound to the stdlib logger of the same name
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def bind_context(**kwargs) -> None:
    """Bind key-value pairs to the current logging context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


class LoggerRegistry:
    """Registry of pre-configured loggers for the engine's domains."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        """Get or create a logger for the given domain."""
        if name not in cls._loggers:
            cls._loggers[name] = get_logger(f"{ROOT_LOGGER_NAME}.{name}")
        return cls._loggers[name]

    @classmethod
    def clear(cls) -> None:
        """Drop cached loggers so the next lookup binds to the current configuration."""
        cls._loggers.clear()


def engine_logger() -> structlog.stdlib.BoundLogger:
    """Logger for validation engine events."""
    return LoggerRegistry.get("engine")


def reporting_logger() -> structlog.stdlib.BoundLogger:
    """Logger for report generation events."""
    return LoggerRegistry.get("reporting")


def locale_logger() -> structlog.stdlib.BoundLogger:
    """Logger for translation table events."""
    return LoggerRegistry.get("locale")
