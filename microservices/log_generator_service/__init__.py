"""
Log Generator Service Microservice

Continuous synthetic log workload for exercising observability pipelines
"""

from .catalog import EventCatalog
from .client import LogGeneratorServiceClient
from .generators import EventGenerator
from .log_service import LogService
from .models import (
    EventCategory,
    SchedulerState,
    Severity,
    SimulatedFault,
    SyntheticEvent,
    TickOutcome,
)
from .protocols import (
    ConfigurationError,
    GenerationFailure,
    LogGeneratorError,
    TelemetrySinkProtocol,
)
from .scheduler import LogGeneratorScheduler
from .telemetry_sink import LoggingTelemetrySink

__version__ = "1.0.0"
__all__ = [
    "EventCatalog",
    "EventGenerator",
    "LogGeneratorScheduler",
    "LogService",
    "LoggingTelemetrySink",
    "LogGeneratorServiceClient",
    "EventCategory",
    "SchedulerState",
    "Severity",
    "SimulatedFault",
    "SyntheticEvent",
    "TickOutcome",
    "ConfigurationError",
    "GenerationFailure",
    "LogGeneratorError",
    "TelemetrySinkProtocol",
]
