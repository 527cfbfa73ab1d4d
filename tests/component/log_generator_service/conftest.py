"""
Log Generator Service Component Test Configuration

Pytest fixtures for component testing with mocked dependencies.
"""
import random

import pytest

from microservices.log_generator_service.factory import LogGeneratorServiceFactory
from microservices.log_generator_service.log_service import LogService


@pytest.fixture
def scheduler(mock_sink):
    """Scheduler with the default 5s/10s cadence (waits are patched in tests)"""
    return LogGeneratorServiceFactory.create_for_testing(
        mock_sink=mock_sink,
        seed=7,
        interval_seconds=5.0,
        cooldown_seconds=10.0,
    )


@pytest.fixture
def log_service(mock_sink):
    """On-demand log service without spacing delays"""
    return LogService(sink=mock_sink, rng=random.Random(3), spacing_seconds=0.0)
