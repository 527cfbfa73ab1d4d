"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (telemetry sink).
"""

from .telemetry_mock import MockPlainTelemetrySink, MockTelemetrySink

__all__ = [
    'MockTelemetrySink',
    'MockPlainTelemetrySink',
]
