#!/usr/bin/env python3
"""
Service logger setup

Configures stdlib logging once per process for a microservice:
    - console and optional file handlers
    - plain text or structured (one JSON object per line) output
    - log context enrichment: properties pushed with log_context() are
      attached to every record emitted inside that context

USAGE:
    from core.logger import setup_service_logger, log_context

    logger = setup_service_logger("log_generator_service")
    with log_context(request_id="ab12cd34"):
        logger.info("Request accepted")
"""

import json
import logging
import socket
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Sequence

from core.config.logging_config import LoggingConfig

_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})

_installed_handlers: List[logging.Handler] = []


# =============================================================================
# Log Context
# =============================================================================

def get_log_context() -> Dict[str, Any]:
    """Properties active in the current context"""
    return dict(_log_context.get())


def push_log_context(**properties: Any) -> Token:
    """Merge properties into the current context; undo with reset_log_context"""
    merged = dict(_log_context.get())
    merged.update(properties)
    return _log_context.set(merged)


def reset_log_context(token: Token) -> None:
    _log_context.reset(token)


@contextmanager
def log_context(**properties: Any) -> Iterator[None]:
    """Scope properties to a block"""
    token = push_log_context(**properties)
    try:
        yield
    finally:
        reset_log_context(token)


class LogContextFilter(logging.Filter):
    """Copies the active log context onto each record"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.log_context = get_log_context()
        return True


# =============================================================================
# Formatters
# =============================================================================

class StructuredFormatter(logging.Formatter):
    """
    Compact JSON formatter.

    Keys follow the compact log event layout: @t timestamp, @l level,
    @m rendered message, @mt message template, @x exception. Event fields
    passed through ``extra={"event_fields": {...}}`` and log context
    properties are written as top-level keys unless they collide with a
    core or enrichment key.
    """

    def __init__(self, application_name: str = "logging-app", environment: str = "development"):
        super().__init__()
        self.application_name = application_name
        self.environment = environment
        self.machine_name = socket.gethostname()

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "@t": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "@l": record.levelname,
            "@m": record.getMessage(),
        }

        template = getattr(record, "event_template", None)
        if template:
            payload["@mt"] = template

        if record.exc_info:
            payload["@x"] = self.formatException(record.exc_info)

        payload["SourceContext"] = record.name
        payload["ApplicationName"] = self.application_name
        payload["Environment"] = self.environment
        payload["MachineName"] = self.machine_name
        payload["ProcessId"] = record.process
        payload["ThreadId"] = record.thread

        properties: Dict[str, Any] = dict(getattr(record, "log_context", None) or {})
        properties.update(getattr(record, "event_fields", None) or {})
        # Core and enrichment keys win over same-named properties
        for name, value in properties.items():
            payload.setdefault(name, value)

        return json.dumps(payload, default=str)


# =============================================================================
# Setup
# =============================================================================

def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if config.enable_console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    if config.enable_structured:
        formatter: logging.Formatter = StructuredFormatter(
            application_name=config.application_name,
            environment=config.environment,
        )
    else:
        formatter = logging.Formatter(config.log_format)

    context_filter = LogContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
    return handlers


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
    debug_loggers: Sequence[str] = (),
) -> logging.Logger:
    """
    Configure process logging (once) and return the service logger.

    Args:
        service_name: Logger name for the service
        level: Override for the configured log level
        config: Logging config (defaults to environment)
        debug_loggers: Loggers that pass DEBUG records whatever the
            configured level

    Returns:
        Logger named after the service
    """
    config = config or LoggingConfig.from_env()
    root = logging.getLogger()

    if not _installed_handlers:
        for handler in _build_handlers(config):
            root.addHandler(handler)
            _installed_handlers.append(handler)

    root.setLevel(getattr(logging, (level or config.log_level).upper(), logging.INFO))

    # Handlers stay at NOTSET, so these reach every output
    for name in debug_loggers:
        logging.getLogger(name).setLevel(logging.DEBUG)

    # Keep framework chatter down
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger(service_name)

