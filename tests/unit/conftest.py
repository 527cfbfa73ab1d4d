"""
Unit Test Layer Configuration

Structure:
    tests/unit/
    ├── core/                    Config and logging helpers
    └── log_generator_service/   Rotation, catalog, generators, models

Usage:
    pytest tests/unit -v                 # All unit tests
    pytest tests/unit -m unit -v         # By marker
"""
import os
import random
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from microservices.log_generator_service.catalog import EventCatalog
from microservices.log_generator_service.generators import EventGenerator


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


@pytest.fixture
def catalog(rng) -> EventCatalog:
    return EventCatalog(rng=rng)


@pytest.fixture
def generator(catalog) -> EventGenerator:
    return EventGenerator(catalog=catalog)


@pytest.fixture
def seeded_generator():
    """Build a generator with its own seed and settings"""
    def _make(seed: int = 1, **kwargs) -> EventGenerator:
        return EventGenerator(catalog=EventCatalog(rng=random.Random(seed)), **kwargs)
    return _make
