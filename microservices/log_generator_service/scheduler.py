"""
Continuous Log Generator - Scheduler Loop

Background task that emits one synthetic event per tick, rotating through
the eight event categories. A tick that fails is reported through the sink
and followed by a longer cooldown; the loop itself only ends on a stop
request or task cancellation.
"""

import asyncio
import contextvars
import logging
from typing import Optional

from .generators import EventGenerator
from .models import (
    EventCategory,
    GeneratorStatusResponse,
    SchedulerState,
    TickOutcome,
)
from .protocols import ConfigurationError, GenerationFailure, TelemetrySinkProtocol

logger = logging.getLogger(__name__)


class LogGeneratorScheduler:
    """
    Drives the category generators on a fixed cadence.

    Args:
        generator: Category generators
        sink: Telemetry sink receiving events and internal failures
        interval_seconds: Wait after a successful tick
        cooldown_seconds: Wait after a failed tick

    Raises:
        ConfigurationError: if either wait is not positive
    """

    def __init__(
        self,
        generator: EventGenerator,
        sink: TelemetrySinkProtocol,
        interval_seconds: float = 5.0,
        cooldown_seconds: float = 10.0,
    ):
        if interval_seconds <= 0:
            raise ConfigurationError("interval_seconds", f"must be positive, got {interval_seconds}")
        if cooldown_seconds <= 0:
            raise ConfigurationError("cooldown_seconds", f"must be positive, got {cooldown_seconds}")

        self.generator = generator
        self.sink = sink
        self.interval_seconds = interval_seconds
        self.cooldown_seconds = cooldown_seconds

        self.state = SchedulerState.IDLE
        self.counter = 0
        self.ticks_succeeded = 0
        self.ticks_failed = 0
        self.last_outcome: Optional[TickOutcome] = None

        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> asyncio.Task:
        """Run the loop as a background task on the current event loop"""
        if self.state is SchedulerState.STOPPED:
            raise RuntimeError("Log generator scheduler has already stopped")
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run(), name="log-generator")
        return self._task

    def request_stop(self) -> None:
        """Signal the loop to exit at its next check"""
        self._stop_event.set()

    async def stop(self) -> None:
        """Signal the loop and wait for the background task to finish"""
        self.request_stop()
        if self._task is not None:
            # A task cancelled by the host has already ended; not an error here
            (result,) = await asyncio.gather(self._task, return_exceptions=True)
            if isinstance(result, Exception):
                logger.error("Continuous log generator ended with an error: %s", result, exc_info=result)
        # A task cancelled before its first step never reaches run()'s finally
        self.state = SchedulerState.STOPPED

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    @property
    def is_running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    async def run(self) -> None:
        """Tick until stopped or cancelled"""
        self.state = SchedulerState.RUNNING
        logger.info(
            "Continuous log generator started - generating logs every %s seconds",
            self.interval_seconds,
        )
        try:
            while not self._stop_event.is_set():
                outcome = self.tick()
                if await self._wait(outcome.next_delay):
                    break
        finally:
            self.state = SchedulerState.STOPPED
            logger.info(
                "Continuous log generator stopped after %d ticks (%d failed)",
                self.counter,
                self.ticks_failed,
            )

    async def _wait(self, delay: float) -> bool:
        """Sleep for delay seconds; True if a stop was requested meanwhile"""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

    # =========================================================================
    # Tick
    # =========================================================================

    def tick(self) -> TickOutcome:
        """Generate and emit the event for the next rotation slot"""
        self.counter += 1
        counter = self.counter
        category = EventCategory.for_tick(counter)

        try:
            # Span annotations stay scoped to this tick
            contextvars.copy_context().run(self._dispatch, counter, category)
        except Exception as e:
            failure = GenerationFailure(counter, category, e)
            failure.__cause__ = e
            self._report_failure(failure)
            self.ticks_failed += 1
            outcome = TickOutcome(
                counter=counter,
                category=category,
                success=False,
                error=str(failure),
                next_delay=self.cooldown_seconds,
            )
        else:
            self.ticks_succeeded += 1
            outcome = TickOutcome(
                counter=counter,
                category=category,
                success=True,
                next_delay=self.interval_seconds,
            )

        self.last_outcome = outcome
        return outcome

    def _dispatch(self, counter: int, category: EventCategory) -> None:
        annotate = getattr(self.sink, "annotate", None)
        if callable(annotate):
            annotate(**{"log.counter": counter, "log.type": category.value})

        event = self.generator.generate(category)

        properties = dict(event.properties)
        properties.setdefault("Category", event.category.value)
        self.sink.emit(event.severity, event.message_template, properties, event.fault)

    def _report_failure(self, failure: GenerationFailure) -> None:
        try:
            self.sink.report_internal_failure(failure)
        except Exception:
            logger.exception("Telemetry sink could not record generation failure: %s", failure)

    # =========================================================================
    # Status
    # =========================================================================

    def status(self) -> GeneratorStatusResponse:
        return GeneratorStatusResponse(
            state=self.state,
            counter=self.counter,
            ticks_succeeded=self.ticks_succeeded,
            ticks_failed=self.ticks_failed,
            interval_seconds=self.interval_seconds,
            cooldown_seconds=self.cooldown_seconds,
            last_outcome=self.last_outcome,
        )
