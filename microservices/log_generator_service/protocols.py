"""
Log Generator Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import EventCategory, Severity, SimulatedFault


# =============================================================================
# Custom Exceptions (defined here to avoid importing the sink)
# =============================================================================


class LogGeneratorError(Exception):
    """Base exception for log generator service"""
    pass


class ConfigurationError(LogGeneratorError):
    """Raised at startup when a pool or a cadence setting is invalid"""
    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"Invalid configuration for {setting}: {message}")


class GenerationFailure(LogGeneratorError):
    """Raised when a tick fails to synthesize or emit its event"""
    def __init__(self, counter: int, category: EventCategory, cause: BaseException):
        self.counter = counter
        self.category = category
        self.cause = cause
        super().__init__(
            f"Tick {counter} ({category.value}) failed: {type(cause).__name__}: {cause}"
        )


class SyntheticFaultError(LogGeneratorError):
    """Exception view of a simulated fault, used only for rendering"""
    def __init__(self, fault: SimulatedFault):
        self.fault = fault
        self.kind = fault.kind
        super().__init__(fault.message)

    def __str__(self) -> str:
        return f"{self.kind}: {self.fault.message}"


# =============================================================================
# Telemetry Sink Protocol
# =============================================================================


@runtime_checkable
class TelemetrySinkProtocol(Protocol):
    """
    Interface for the structured telemetry sink.

    Implementations:
    - LoggingTelemetrySink (production - stdlib logging)
    - MockTelemetrySink (testing)

    A sink may additionally expose ``annotate(**attributes)`` to tag the
    current unit of work for trace correlation; see SpanAnnotatorProtocol.
    """

    def emit(
        self,
        severity: Severity,
        message_template: str,
        properties: Dict[str, Any],
        fault: Optional[SimulatedFault] = None,
    ) -> None:
        """
        Record one structured event.

        Args:
            severity: Debug, Info, Warning, Error or Critical
            message_template: Template with {Name} placeholders
            properties: Named values for the template
            fault: Simulated fault to attach as an exception
        """
        ...

    def report_internal_failure(self, error: BaseException) -> None:
        """
        Record a failure of the generation process itself.

        Args:
            error: The failure (normally a GenerationFailure)
        """
        ...


@runtime_checkable
class SpanAnnotatorProtocol(Protocol):
    """Optional sink capability: tag the current unit of work"""

    def annotate(self, **attributes: Any) -> None:
        ...
