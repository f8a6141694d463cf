"""Structured logging configuration with structlog.

Log lines go to stderr so the scores printed on stdout stay machine readable.
Level and format default to ``HANDCALC_LOG_LEVEL`` / ``HANDCALC_LOG_FORMAT``
(see ``handcalc.config``). Until ``setup_logging`` runs, library
callers get WARNING and above on stderr only.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from handcalc.config import settings

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

_VALID_LOG_FORMATS = {"json", "console"}
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _serialize_enums(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Replace Enum instances with their .value for readable log output."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
        elif isinstance(value, list):
            event_dict[key] = [v.value if isinstance(v, Enum) else v for v in value]
    return event_dict


def _resolve_json_mode(log_format: str) -> bool:
    value = log_format.lower()
    if value not in _VALID_LOG_FORMATS:
        msg = f"Invalid log format {value!r}. Must be 'json' or 'console'."
        raise ValueError(msg)
    return value == "json"


def _resolve_log_level(log_level: str) -> int:
    value = log_level.upper()
    if value not in _VALID_LOG_LEVELS:
        msg = f"Invalid log level {value!r}. Must be one of {', '.join(sorted(_VALID_LOG_LEVELS))}."
        raise ValueError(msg)
    return getattr(logging, value)


def _build_stdlib_formatter(*, json_mode: bool, colors: bool = False) -> logging.Formatter:
    if json_mode:
        return structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        )
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
    )


def setup_logging(level: str | None = None, json_mode: bool | None = None) -> None:
    """Configure structlog over the stdlib root logger, writing to stderr."""
    if json_mode is None:
        json_mode = _resolve_json_mode(settings.log_format)
    log_level = _resolve_log_level(level or settings.log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _serialize_enums,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_stdlib_formatter(json_mode=json_mode, colors=sys.stderr.isatty()))
    root_logger.addHandler(handler)


def configure_defaults() -> None:
    """Quiet library default: WARNING and above to stderr, no stdlib handlers."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            _serialize_enums,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(*args: Any, **initial_values: Any) -> Any:
    return structlog.get_logger(*args, **initial_values)


if not structlog.is_configured():
    configure_defaults()
