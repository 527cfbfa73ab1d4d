"""
Telemetry Sink

Structured log emission over stdlib logging. The rendered message is the
log message; the template and the event properties travel in ``extra`` so a
structured formatter can write them as fields. Simulated faults are attached
as ``exc_info``. Span attributes are pushed into the log context and show up
on every record emitted later in the same context.
"""

import logging
from typing import Any, Dict, Optional

from core.logger import push_log_context

from .models import Severity, SimulatedFault, render_template
from .protocols import SyntheticFaultError

EVENTS_LOGGER_NAME = "log_generator_service.events"


class LoggingTelemetrySink:
    """Telemetry sink writing to a stdlib logger"""

    def __init__(self, target: Optional[logging.Logger] = None):
        self.logger = target or logging.getLogger(EVENTS_LOGGER_NAME)

    def emit(
        self,
        severity: Severity,
        message_template: str,
        properties: Dict[str, Any],
        fault: Optional[SimulatedFault] = None,
    ) -> None:
        exc_info = None
        if fault is not None:
            error = SyntheticFaultError(fault)
            exc_info = (type(error), error, None)

        self.logger.log(
            severity.log_level,
            render_template(message_template, properties),
            exc_info=exc_info,
            extra={
                "event_template": message_template,
                "event_fields": dict(properties),
            },
        )

    def report_internal_failure(self, error: BaseException) -> None:
        self.logger.error(
            "Error in continuous log generation: %s",
            error,
            exc_info=(type(error), error, error.__traceback__),
        )

    def annotate(self, **attributes: Any) -> None:
        """Tag the current unit of work for trace correlation"""
        push_log_context(**attributes)
