#!/usr/bin/env python3
"""Application main configuration

Combines the service identity with the logging and generator sub-configs.
"""
import os
from dataclasses import dataclass, field

from .generator_config import LogGeneratorConfig
from .logging_config import LoggingConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class AppConfig:
    """Main log generator service configuration with all sub-configs"""

    # Environment
    environment: str = "development"
    debug: bool = False

    # Service identity
    service_name: str = "logging-app"
    service_version: str = "1.0.0"
    service_host: str = "0.0.0.0"
    service_port: int = 8080

    # Collector endpoint, wired by the host (reported at startup)
    otel_endpoint: str = "http://otel-collector:4318"

    # Sub-configurations
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    generator: LogGeneratorConfig = field(default_factory=LogGeneratorConfig)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Load complete configuration from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),

            service_name=os.getenv("SERVICE_NAME", "logging-app"),
            service_version=os.getenv("SERVICE_VERSION", "1.0.0"),
            service_host=os.getenv("SERVICE_HOST") or os.getenv("HOST", "0.0.0.0"),
            service_port=_int(os.getenv("SERVICE_PORT") or os.getenv("PORT", "8080"), 8080),

            otel_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel-collector:4318"),

            logging=LoggingConfig.from_env(),
            generator=LogGeneratorConfig.from_env(),
        )
