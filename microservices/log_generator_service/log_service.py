"""
Log Service - On-demand Logging

Request-driven counterpart of the continuous generator: log one message at
a chosen level, or emit a burst of random records. Everything goes through
the same telemetry sink.
"""

import asyncio
import contextvars
import logging
import random
from datetime import datetime, timezone
from typing import Optional, Tuple

from .models import (
    GenerateLogsResponse,
    LogEntryResponse,
    Severity,
    SimulatedFault,
)
from .protocols import LogGeneratorError, TelemetrySinkProtocol

logger = logging.getLogger(__name__)

MAX_GENERATED_LOGS = 1000

GENERATED_LEVELS: Tuple[Severity, ...] = (
    Severity.INFO,
    Severity.WARNING,
    Severity.ERROR,
    Severity.DEBUG,
)

GENERATED_MESSAGES: Tuple[str, ...] = (
    "Processing user request",
    "Database connection timeout",
    "Cache miss occurred",
    "Authentication successful",
    "File processing completed",
    "Network latency detected",
    "Memory usage threshold exceeded",
    "Background job started",
)

_LEVEL_NOUNS = {
    Severity.INFO: "log",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
    Severity.DEBUG: "debug",
}


class InvalidLogCountError(LogGeneratorError):
    """Raised when a burst size is outside the accepted range"""
    def __init__(self, count: int, maximum: int):
        self.count = count
        self.maximum = maximum
        super().__init__(f"Log count {count} must be between 1 and {maximum}")


class LogService:
    """On-demand log emission"""

    def __init__(
        self,
        sink: TelemetrySinkProtocol,
        rng: Optional[random.Random] = None,
        spacing_seconds: float = 0.05,
    ):
        self.sink = sink
        self.rng = rng or random.Random()
        self.spacing_seconds = spacing_seconds

    def _annotate(self, **attributes) -> None:
        annotate = getattr(self.sink, "annotate", None)
        if callable(annotate):
            annotate(**attributes)

    # =============================================================================
    # Single messages
    # =============================================================================

    async def log_message(self, severity: Severity, message: str) -> LogEntryResponse:
        """Log a caller-supplied message at the given level"""
        fault = None
        if severity is Severity.ERROR:
            fault = SimulatedFault(kind="SimulatedError", message=f"Simulated error: {message}")
        elif severity is Severity.CRITICAL:
            fault = SimulatedFault(kind="SimulatedCriticalError", message=f"Critical error: {message}")

        self._annotate(**{"log.level": severity.value.lower(), "log.message": message})
        self.sink.emit(
            severity,
            f"{severity.value} log: {{Message}} from {{Source}}",
            {"Message": message, "Source": "API"},
            fault,
        )

        return LogEntryResponse(
            level=severity,
            message=message,
            timestamp=datetime.now(timezone.utc),
        )

    # =============================================================================
    # Bursts
    # =============================================================================

    async def generate_logs(self, count: int = 10) -> GenerateLogsResponse:
        """
        Emit count random records, spaced to spread their timestamps.

        Args:
            count: Number of records (1..MAX_GENERATED_LOGS)

        Raises:
            InvalidLogCountError: if count is out of range
        """
        if not 1 <= count <= MAX_GENERATED_LOGS:
            raise InvalidLogCountError(count, MAX_GENERATED_LOGS)

        self._annotate(**{"log.count": count})
        for index in range(1, count + 1):
            # Per-record attributes must not leak into the next record
            contextvars.copy_context().run(self._emit_generated, index)
            if index < count and self.spacing_seconds > 0:
                await asyncio.sleep(self.spacing_seconds)

        logger.debug("Generated %d on-demand log records", count)
        return GenerateLogsResponse(generated=count, timestamp=datetime.now(timezone.utc))

    def _emit_generated(self, index: int) -> None:
        severity = self.rng.choice(GENERATED_LEVELS)
        message = self.rng.choice(GENERATED_MESSAGES)
        user_id = self.rng.randrange(1000, 9999)
        request_id = format(self.rng.getrandbits(32), "08x")

        self._annotate(**{
            "log.type": severity.value,
            "log.index": index,
            "user.id": user_id,
            "request.id": request_id,
        })
        self.sink.emit(
            severity,
            f"Generated {_LEVEL_NOUNS[severity]} {{Index}}: {{Message}} for User:{{UserId}} Request:{{RequestId}}",
            {
                "Index": index,
                "Message": message,
                "UserId": user_id,
                "RequestId": request_id,
            },
        )
