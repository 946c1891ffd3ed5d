"""
structlog on top of stdlib logging.

Application code logs events with keyword fields; Django and other libraries
keep using stdlib loggers. Both go through one ProcessorFormatter, so every
line has the same shape: JSON in deployed environments, coloured key/value
pairs locally.

Usage:
    from apps.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("token_created", lifetime_seconds=3600)

Fields bound per request by RequestContextMiddleware:
    - trace_id
    - http.method
    - http.path
    - network.client.ip
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

REDACTED = "[REDACTED]"

# Substrings of field names whose values are masked
SENSITIVE_KEY_MARKERS = ("token", "password", "secret", "authorization")

# Libraries that are too chatty below WARNING
QUIET_LOGGERS = ("django.db.backends", "django.utils.autoreload")


def _redact_sensitive_values(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask top-level fields that look like credentials. The event name is kept."""
    for key in list(event_dict):
        if key == "event":
            continue
        if any(marker in key.lower() for marker in SENSITIVE_KEY_MARKERS):
            event_dict[key] = REDACTED
    return event_dict


def _add_trace_id(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Accept request_id from callers but always emit it as trace_id."""
    if "request_id" in event_dict:
        event_dict["trace_id"] = str(event_dict.pop("request_id"))
    return event_dict


def _shared_processors() -> list[Processor]:
    """Processors applied to structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_trace_id,
        _redact_sensitive_values,
    ]


def configure_logging(json_format: bool = True, log_level: str = "INFO") -> None:
    """
    Install the structlog configuration and a single stdout handler on the root logger.

    Safe to call more than once; the last call wins.

    Args:
        json_format: Render JSON lines with structured tracebacks. Otherwise
            use the console renderer.
        log_level: Root level name. Unknown names fall back to INFO.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    shared = _shared_processors()
    renderer: Processor
    if json_format:
        shared.append(structlog.processors.dict_tracebacks)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)


def bind_contextvars(**kwargs: Any) -> None:
    """
    Attach fields to every log line emitted from the current context.

    Dotted names need the ``**{...}`` form:
        bind_contextvars(trace_id="abc", **{"http.path": "/api/v1/health"})
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """Drop all context-bound fields. Called when a request finishes."""
    structlog.contextvars.clear_contextvars()
