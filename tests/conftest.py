"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - api/        : HTTP contract tests (FastAPI TestClient, httpx client)
    - component/  : Component tests (scheduler, sinks, services with mocks)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import random
import sys

import pytest

# Set testing environment BEFORE any project imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_GENERATOR_ENABLED"] = "false"

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)


# =============================================================================
# Test Configuration
# =============================================================================

class TestConfig:
    """Centralized test configuration"""

    SEED = 20240611
    LARGE_SAMPLE = 100_000


@pytest.fixture(scope="session")
def test_config() -> TestConfig:
    return TestConfig()


@pytest.fixture
def rng() -> random.Random:
    """Seeded randomness source"""
    return random.Random(TestConfig.SEED)
