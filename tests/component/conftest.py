"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── log_generator_service/   Scheduler, sink and on-demand service
    └── mocks/                   Mock implementations

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import MockPlainTelemetrySink, MockTelemetrySink


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Sink Mocks
# =============================================================================

@pytest.fixture
def mock_sink() -> MockTelemetrySink:
    """Mock telemetry sink with span annotation"""
    return MockTelemetrySink()


@pytest.fixture
def mock_plain_sink() -> MockPlainTelemetrySink:
    """Mock telemetry sink without span annotation"""
    return MockPlainTelemetrySink()
