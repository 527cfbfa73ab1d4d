#!/usr/bin/env python3
"""Log generator configuration

Cadence and payload policy of the continuous log generator. Values are
plain defaults here; range checks happen where they are consumed
(EventGenerator / LogGeneratorScheduler) so a bad value fails at startup.
"""
import os
from dataclasses import dataclass
from typing import Optional

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _optional_int(val: Optional[str]) -> Optional[int]:
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        return None


@dataclass
class LogGeneratorConfig:
    """Continuous log generator settings"""
    enabled: bool = True

    # Cadence
    interval_seconds: float = 5.0
    cooldown_seconds: float = 10.0

    # Payload policy
    payment_success_rate: float = 0.97
    performance_warning_ms: int = 2000
    performance_info_ms: int = 1000

    # Fixed seed for reproducible runs (None = system randomness)
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> 'LogGeneratorConfig':
        """Load generator config from environment variables"""
        return cls(
            enabled=_bool(os.getenv("LOG_GENERATOR_ENABLED", "true")),
            interval_seconds=_float(os.getenv("LOG_GENERATOR_INTERVAL_SECONDS", "5"), 5.0),
            cooldown_seconds=_float(os.getenv("LOG_GENERATOR_COOLDOWN_SECONDS", "10"), 10.0),
            payment_success_rate=_float(os.getenv("LOG_GENERATOR_PAYMENT_SUCCESS_RATE", "0.97"), 0.97),
            performance_warning_ms=_int(os.getenv("LOG_GENERATOR_PERF_WARNING_MS", "2000"), 2000),
            performance_info_ms=_int(os.getenv("LOG_GENERATOR_PERF_INFO_MS", "1000"), 1000),
            seed=_optional_int(os.getenv("LOG_GENERATOR_SEED")),
        )
