#!/usr/bin/env python3
"""
Core Module for the Log Generator Service

Shared components used by the microservice:

COMPONENTS:
    - config/: Environment-driven configuration (service, logging, generator)
    - logger.py: Service logger setup, structured formatter, log context

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("log_generator_service", config=settings.logging)
"""

__version__ = "1.0.0"
