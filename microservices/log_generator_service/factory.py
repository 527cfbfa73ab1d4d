"""
Log Generator Service Factory

Factory functions for creating the scheduler and the on-demand log service
with real dependencies (stdlib logging sink) or with injected test doubles.

Usage:
    from .factory import create_log_generator_scheduler
    scheduler = create_log_generator_scheduler(settings.generator)
"""
import logging
import random
from typing import Optional

from core.config import LogGeneratorConfig

from .catalog import EventCatalog
from .generators import EventGenerator
from .log_service import LogService
from .protocols import TelemetrySinkProtocol
from .scheduler import LogGeneratorScheduler
from .telemetry_sink import LoggingTelemetrySink


def create_telemetry_sink(target: Optional[logging.Logger] = None) -> LoggingTelemetrySink:
    """Create the logging-backed telemetry sink"""
    return LoggingTelemetrySink(target=target)


def create_log_generator_scheduler(
    config: Optional[LogGeneratorConfig] = None,
    sink: Optional[TelemetrySinkProtocol] = None,
) -> LogGeneratorScheduler:
    """
    Create LogGeneratorScheduler with real dependencies.

    Args:
        config: Generator settings (defaults to environment)
        sink: Telemetry sink (defaults to LoggingTelemetrySink)

    Returns:
        Scheduler in the Idle state

    Raises:
        ConfigurationError: if the settings are invalid
    """
    config = config or LogGeneratorConfig.from_env()
    catalog = EventCatalog(rng=random.Random(config.seed))
    generator = EventGenerator(
        catalog=catalog,
        payment_success_rate=config.payment_success_rate,
        performance_warning_ms=config.performance_warning_ms,
        performance_info_ms=config.performance_info_ms,
    )
    return LogGeneratorScheduler(
        generator=generator,
        sink=sink or create_telemetry_sink(),
        interval_seconds=config.interval_seconds,
        cooldown_seconds=config.cooldown_seconds,
    )


def create_log_service(
    sink: Optional[TelemetrySinkProtocol] = None,
    seed: Optional[int] = None,
) -> LogService:
    """Create the on-demand LogService"""
    return LogService(sink=sink or create_telemetry_sink(), rng=random.Random(seed))


class LogGeneratorServiceFactory:
    """
    Factory class for creating log generator components.

    Usage:
        # Production
        scheduler = LogGeneratorServiceFactory.create_scheduler(config)

        # Testing
        scheduler = LogGeneratorServiceFactory.create_for_testing(
            mock_sink=MockTelemetrySink(), seed=42, interval_seconds=0.01
        )
    """

    @staticmethod
    def create_scheduler(
        config: Optional[LogGeneratorConfig] = None,
        sink: Optional[TelemetrySinkProtocol] = None,
    ) -> LogGeneratorScheduler:
        return create_log_generator_scheduler(config=config, sink=sink)

    @staticmethod
    def create_for_testing(
        mock_sink: TelemetrySinkProtocol,
        seed: Optional[int] = 0,
        interval_seconds: float = 0.01,
        cooldown_seconds: float = 0.02,
        generator: Optional[EventGenerator] = None,
    ) -> LogGeneratorScheduler:
        """
        Create a scheduler with a mock sink and short waits.

        Args:
            mock_sink: Sink recording emitted events
            seed: Seed for the catalog randomness
            interval_seconds: Normal wait
            cooldown_seconds: Wait after a failure
            generator: Replacement generator (e.g. one that raises)
        """
        generator = generator or EventGenerator(catalog=EventCatalog(rng=random.Random(seed)))
        return LogGeneratorScheduler(
            generator=generator,
            sink=mock_sink,
            interval_seconds=interval_seconds,
            cooldown_seconds=cooldown_seconds,
        )
