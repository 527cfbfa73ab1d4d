"""
Log Generator Scheduler - Component Tests

Tests the continuous generation loop with a mocked telemetry sink:
rotation, failure isolation, cooldown, and stop/cancel behavior.
"""
import asyncio
import logging
from unittest.mock import patch

import pytest

from microservices.log_generator_service.factory import LogGeneratorServiceFactory
from microservices.log_generator_service.generators import EventGenerator
from microservices.log_generator_service.models import EventCategory, SchedulerState
from microservices.log_generator_service.protocols import (
    ConfigurationError,
    GenerationFailure,
)
from microservices.log_generator_service.scheduler import LogGeneratorScheduler

pytestmark = [pytest.mark.component]


def _stop_after(scheduler: LogGeneratorScheduler, waits: int, delays: list):
    """Replacement for _wait that records delays and stops after `waits` calls"""
    async def fake_wait(delay: float) -> bool:
        delays.append(delay)
        return len(delays) >= waits
    return fake_wait


# =============================================================================
# Construction
# =============================================================================

class TestSchedulerConfiguration:
    """Startup-time validation"""

    def test_initial_state_is_idle(self, scheduler):
        assert scheduler.state is SchedulerState.IDLE
        assert scheduler.counter == 0
        assert scheduler.last_outcome is None

    @pytest.mark.parametrize("interval,cooldown", [(0, 10), (-1, 10), (5, 0), (5, -2.5)])
    def test_non_positive_waits_rejected(self, mock_sink, interval, cooldown):
        with pytest.raises(ConfigurationError):
            LogGeneratorScheduler(
                generator=EventGenerator(),
                sink=mock_sink,
                interval_seconds=interval,
                cooldown_seconds=cooldown,
            )


# =============================================================================
# Tick
# =============================================================================

class TestSchedulerTick:
    """Single iteration behavior"""

    def test_tick_increments_counter_once(self, scheduler):
        scheduler.tick()
        assert scheduler.counter == 1
        scheduler.tick()
        assert scheduler.counter == 2

    def test_first_tick_dispatches_warning(self, scheduler, mock_sink):
        """Counter is incremented before selection, so tick one is slot 1"""
        outcome = scheduler.tick()
        assert outcome.category is EventCategory.WARNING
        assert mock_sink.categories() == ["Warning"]

    def test_eight_ticks_from_multiple_of_eight_cover_rotation_in_order(self, scheduler, mock_sink):
        scheduler.counter = 7
        for _ in range(8):
            scheduler.tick()

        assert mock_sink.categories() == [c.value for c in EventCategory.rotation()]

    def test_rotation_repeats_every_eight_ticks(self, scheduler, mock_sink):
        for _ in range(24):
            scheduler.tick()

        categories = mock_sink.categories()
        assert categories[:8] == categories[8:16] == categories[16:24]

    def test_successful_tick_waits_normal_interval(self, scheduler):
        outcome = scheduler.tick()
        assert outcome.success is True
        assert outcome.error is None
        assert outcome.next_delay == 5.0
        assert scheduler.ticks_succeeded == 1

    def test_simulated_fault_is_not_a_failure(self, scheduler, mock_sink):
        """Error category carries a fault payload but the tick succeeds"""
        scheduler.counter = 1
        outcome = scheduler.tick()

        assert outcome.category is EventCategory.ERROR
        assert outcome.success is True
        assert mock_sink.events[0]["fault"] is not None
        assert mock_sink.failures == []

    def test_sink_failure_is_reported_and_triggers_cooldown(self, scheduler, mock_sink):
        mock_sink.fail_with(ConnectionError("collector unavailable"), times=1)

        outcome = scheduler.tick()

        assert outcome.success is False
        assert outcome.next_delay == 10.0
        assert "collector unavailable" in outcome.error
        assert scheduler.ticks_failed == 1
        assert len(mock_sink.failures) == 1

        failure = mock_sink.failures[0]
        assert isinstance(failure, GenerationFailure)
        assert failure.counter == 1
        assert failure.category is EventCategory.WARNING
        assert isinstance(failure.cause, ConnectionError)

    def test_generator_failure_is_isolated(self, scheduler, mock_sink):
        with patch.object(scheduler.generator, "generate", side_effect=RuntimeError("boom")):
            failed = scheduler.tick()

        recovered = scheduler.tick()

        assert failed.success is False
        assert recovered.success is True
        assert recovered.counter == 2
        assert recovered.category is EventCategory.ERROR
        assert len(mock_sink.events) == 1

    def test_failure_does_not_shift_rotation(self, scheduler, mock_sink):
        mock_sink.fail_with(RuntimeError("flaky"), times=1)
        outcomes = [scheduler.tick() for _ in range(3)]

        assert [o.category for o in outcomes] == [
            EventCategory.WARNING,
            EventCategory.ERROR,
            EventCategory.DEBUG,
        ]

    def test_failing_failure_report_is_logged(self, scheduler, mock_sink, caplog):
        mock_sink.fail_with(RuntimeError("emit failed"), times=1)

        with patch.object(mock_sink, "report_internal_failure", side_effect=RuntimeError("report failed")):
            with caplog.at_level(logging.ERROR):
                outcome = scheduler.tick()

        assert outcome.success is False
        assert "could not record generation failure" in caplog.text

    def test_span_annotation_per_tick(self, scheduler, mock_sink):
        scheduler.tick()
        scheduler.tick()

        assert mock_sink.annotations == [
            {"log.counter": 1, "log.type": "Warning"},
            {"log.counter": 2, "log.type": "Error"},
        ]

    def test_sink_without_annotation_is_supported(self, mock_plain_sink):
        scheduler = LogGeneratorServiceFactory.create_for_testing(mock_sink=mock_plain_sink)

        outcome = scheduler.tick()

        assert outcome.success is True
        assert len(mock_plain_sink.events) == 1

    def test_status_reflects_counters(self, scheduler, mock_sink):
        scheduler.tick()
        mock_sink.fail_with(RuntimeError("down"), times=1)
        scheduler.tick()

        status = scheduler.status()
        assert status.counter == 2
        assert status.ticks_succeeded == 1
        assert status.ticks_failed == 1
        assert status.last_outcome.success is False
        assert status.interval_seconds == 5.0
        assert status.cooldown_seconds == 10.0


# =============================================================================
# Loop
# =============================================================================

@pytest.mark.asyncio
class TestSchedulerLoop:
    """Run loop waits and termination"""

    async def test_wait_after_failure_equals_cooldown(self, scheduler, mock_sink):
        delays = []
        mock_sink.fail_with(RuntimeError("sink unavailable"), times=1)

        with patch.object(scheduler, "_wait", _stop_after(scheduler, 3, delays)):
            await scheduler.run()

        assert delays == [10.0, 5.0, 5.0]
        assert scheduler.state is SchedulerState.STOPPED

    async def test_wait_after_success_equals_interval(self, scheduler):
        delays = []

        with patch.object(scheduler, "_wait", _stop_after(scheduler, 4, delays)):
            await scheduler.run()

        assert delays == [5.0] * 4
        assert scheduler.counter == 4

    async def test_loop_survives_repeated_failures(self, scheduler, mock_sink):
        delays = []
        mock_sink.fail_with(RuntimeError("down"))

        with patch.object(scheduler, "_wait", _stop_after(scheduler, 5, delays)):
            await scheduler.run()

        assert scheduler.ticks_failed == 5
        assert len(mock_sink.failures) == 5
        assert delays == [10.0] * 5

    async def test_stop_requested_before_run_starts_no_tick(self, scheduler, mock_sink):
        scheduler.request_stop()

        await scheduler.run()

        assert scheduler.counter == 0
        assert mock_sink.events == []
        assert scheduler.state is SchedulerState.STOPPED

    async def test_stop_during_wait_exits_without_another_tick(self, mock_sink):
        scheduler = LogGeneratorServiceFactory.create_for_testing(
            mock_sink=mock_sink, interval_seconds=30.0, cooldown_seconds=60.0
        )

        with patch.object(
            scheduler.generator, "generate", wraps=scheduler.generator.generate
        ) as generate:
            task = scheduler.start()
            await asyncio.sleep(0.05)
            assert scheduler.is_running
            assert generate.call_count == 1

            await asyncio.wait_for(scheduler.stop(), timeout=1.0)

        assert task.done()
        assert generate.call_count == 1
        assert scheduler.state is SchedulerState.STOPPED
        assert mock_sink.failures == []

    async def test_task_cancellation_is_not_a_failure(self, mock_sink):
        scheduler = LogGeneratorServiceFactory.create_for_testing(
            mock_sink=mock_sink, interval_seconds=30.0, cooldown_seconds=60.0
        )
        task = scheduler.start()
        await asyncio.sleep(0.05)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert scheduler.state is SchedulerState.STOPPED
        assert mock_sink.failures == []
        assert scheduler.ticks_failed == 0

    async def test_stop_after_cancellation_returns_normally(self, mock_sink):
        scheduler = LogGeneratorServiceFactory.create_for_testing(
            mock_sink=mock_sink, interval_seconds=30.0, cooldown_seconds=60.0
        )
        task = scheduler.start()
        await asyncio.sleep(0.02)
        task.cancel()
        await asyncio.sleep(0.02)

        await asyncio.wait_for(scheduler.stop(), timeout=1.0)

        assert task.cancelled()
        assert scheduler.state is SchedulerState.STOPPED
        assert mock_sink.failures == []

    async def test_stop_after_cancellation_before_first_tick(self, mock_sink):
        scheduler = LogGeneratorServiceFactory.create_for_testing(mock_sink=mock_sink)
        task = scheduler.start()
        task.cancel()

        await scheduler.stop()

        assert task.cancelled()
        assert scheduler.state is SchedulerState.STOPPED
        assert mock_sink.events == []

    async def test_short_interval_loop_emits_in_rotation(self, mock_sink):
        scheduler = LogGeneratorServiceFactory.create_for_testing(
            mock_sink=mock_sink, interval_seconds=0.001, cooldown_seconds=0.002
        )
        scheduler.start()
        while scheduler.counter < 9:
            await asyncio.sleep(0.005)
        await scheduler.stop()

        categories = mock_sink.categories()
        assert categories[0] == "Warning"
        assert categories[7] == "Info"
        assert categories[8] == "Warning"

    async def test_start_returns_same_task_while_running(self, mock_sink):
        scheduler = LogGeneratorServiceFactory.create_for_testing(
            mock_sink=mock_sink, interval_seconds=30.0
        )
        first = scheduler.start()
        second = scheduler.start()
        assert first is second
        await scheduler.stop()

    async def test_restart_after_stop_rejected(self, scheduler):
        await scheduler.stop()
        assert scheduler.state is SchedulerState.STOPPED
        with pytest.raises(RuntimeError):
            scheduler.start()

    async def test_independent_schedulers_keep_separate_counters(self, mock_sink, mock_plain_sink):
        a = LogGeneratorServiceFactory.create_for_testing(mock_sink=mock_sink)
        b = LogGeneratorServiceFactory.create_for_testing(mock_sink=mock_plain_sink)

        for _ in range(3):
            a.tick()
        b.tick()

        assert a.counter == 3
        assert b.counter == 1
