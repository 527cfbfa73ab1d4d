"""
API Test Layer Configuration

Layer 1: HTTP Contract Tests
- FastAPI TestClient against the real application object
- Service components swapped for ones backed by a mock telemetry sink
- httpx client exercised over ASGITransport (no network)

Usage:
    pytest tests/api -v
    pytest tests/api -v -k "generate"
"""

import os
import random
import sys

import pytest
from fastapi.testclient import TestClient

# Add project root
sys.path.insert(
    0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

from microservices.log_generator_service import main
from microservices.log_generator_service.factory import LogGeneratorServiceFactory
from microservices.log_generator_service.log_service import LogService
from tests.component.mocks import MockTelemetrySink


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "api: marks tests as API tests")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def api_sink() -> MockTelemetrySink:
    return MockTelemetrySink()


@pytest.fixture
def service(monkeypatch, api_sink):
    """Application microservice with mock-backed components"""
    monkeypatch.setattr(
        main.microservice,
        "log_service",
        LogService(sink=api_sink, rng=random.Random(5), spacing_seconds=0.0),
    )
    monkeypatch.setattr(main.microservice, "scheduler", None)
    return main.microservice


@pytest.fixture
def scheduler(service, api_sink, monkeypatch):
    """Generator that has already run a few ticks"""
    scheduler = LogGeneratorServiceFactory.create_for_testing(
        mock_sink=api_sink, interval_seconds=5.0, cooldown_seconds=10.0
    )
    for _ in range(3):
        scheduler.tick()
    monkeypatch.setattr(service, "scheduler", scheduler)
    return scheduler


@pytest.fixture
def client(service) -> TestClient:
    """TestClient without lifespan (components come from the service fixture)"""
    return TestClient(main.app)
