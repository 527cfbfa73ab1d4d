"""
Log Generator Service - Main Application

Demonstration workload for an observability pipeline: a background task
emits a rotating stream of synthetic structured logs, and HTTP endpoints
log on demand.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import Body, FastAPI, HTTPException, Path, Request

from core.config import get_settings
from core.logger import setup_service_logger
from .factory import create_log_generator_scheduler, create_log_service, create_telemetry_sink
from .log_service import MAX_GENERATED_LOGS, InvalidLogCountError, LogService
from .models import (
    GenerateLogsResponse,
    GeneratorStatusResponse,
    LogEntryResponse,
    LogMessageRequest,
    Severity,
)
from .protocols import ConfigurationError
from .scheduler import LogGeneratorScheduler
from .telemetry_sink import EVENTS_LOGGER_NAME

# Initialize configuration
config = get_settings()

# Setup loggers (use actual service name); every generated severity is emitted
app_logger = setup_service_logger(
    "log_generator_service",
    config=config.logging,
    debug_loggers=(EVENTS_LOGGER_NAME,),
)
logger = app_logger


# Service instance
class LogGeneratorMicroservice:
    def __init__(self):
        self.scheduler: Optional[LogGeneratorScheduler] = None
        self.log_service: Optional[LogService] = None

    async def initialize(self):
        sink = create_telemetry_sink()
        self.log_service = create_log_service(sink=sink, seed=config.generator.seed)

        if not config.generator.enabled:
            logger.info("Continuous log generator disabled by configuration")
            return

        try:
            self.scheduler = create_log_generator_scheduler(config.generator, sink=sink)
        except ConfigurationError:
            logger.critical("Continuous log generator misconfigured", exc_info=True)
            raise
        self.scheduler.start()

    async def shutdown(self):
        if self.scheduler:
            await self.scheduler.stop()
        logger.info("Log generator service shutting down")


# Global instance
microservice = LogGeneratorMicroservice()


# Lifespan management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Startup
    logger.info("Starting %s", config.service_name)
    await microservice.initialize()

    logger.info("Application started successfully")
    logger.info("Environment: %s", config.environment)
    logger.info("OTEL Endpoint: %s", config.otel_endpoint)
    logger.info("Service Name: %s", config.service_name)
    logger.info("Service Version: %s", config.service_version)

    yield

    # Shutdown
    await microservice.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Log Generator Service",
    description="Synthetic structured log workload for observability pipelines",
    version=config.service_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """One summary record per HTTP request"""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "HTTP %s %s responded %s in %.4f ms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        extra={
            "event_template": "HTTP {RequestMethod} {RequestPath} responded {StatusCode} in {Elapsed} ms",
            "event_fields": {
                "RequestMethod": request.method,
                "RequestPath": request.url.path,
                "StatusCode": response.status_code,
                "Elapsed": round(elapsed_ms, 4),
                "UserAgent": request.headers.get("user-agent", ""),
            },
        },
    )
    return response


# =============================================================================
# Dependencies
# =============================================================================

def get_log_service() -> LogService:
    if microservice.log_service is None:
        raise HTTPException(status_code=503, detail="Log service not initialized")
    return microservice.log_service


def get_scheduler() -> LogGeneratorScheduler:
    if microservice.scheduler is None:
        raise HTTPException(status_code=503, detail="Continuous log generator not running")
    return microservice.scheduler


# =============================================================================
# Health
# =============================================================================

@app.get("/health")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "port": config.service_port,
        "version": config.service_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health/detailed")
async def detailed_health_check():
    """Health check including generator state"""
    scheduler = microservice.scheduler
    return {
        "status": "healthy",
        "service": config.service_name,
        "port": config.service_port,
        "version": config.service_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {
            "log_service": "healthy" if microservice.log_service else "unavailable",
            "log_generator": scheduler.state.value if scheduler else "disabled",
        },
        "generator": scheduler.status().model_dump(mode="json") if scheduler else None,
    }


# =============================================================================
# On-demand logging
# =============================================================================

async def _log_at(severity: Severity, request: LogMessageRequest) -> LogEntryResponse:
    return await get_log_service().log_message(severity, request.message)


@app.post("/api/v1/logs/info", response_model=LogEntryResponse)
async def log_info(request: LogMessageRequest = Body(...)):
    """Log a message at Info level"""
    return await _log_at(Severity.INFO, request)


@app.post("/api/v1/logs/warning", response_model=LogEntryResponse)
async def log_warning(request: LogMessageRequest = Body(...)):
    """Log a message at Warning level"""
    return await _log_at(Severity.WARNING, request)


@app.post("/api/v1/logs/error", response_model=LogEntryResponse)
async def log_error(request: LogMessageRequest = Body(...)):
    """Log a message at Error level with a simulated exception"""
    return await _log_at(Severity.ERROR, request)


@app.post("/api/v1/logs/critical", response_model=LogEntryResponse)
async def log_critical(request: LogMessageRequest = Body(...)):
    """Log a message at Critical level with a simulated exception"""
    return await _log_at(Severity.CRITICAL, request)


@app.get("/api/v1/logs/generate/{count}", response_model=GenerateLogsResponse)
async def generate_logs(count: int = Path(..., ge=1, le=MAX_GENERATED_LOGS)):
    """Emit a burst of random log records"""
    try:
        return await get_log_service().generate_logs(count)
    except InvalidLogCountError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/api/v1/logs/generator/status", response_model=GeneratorStatusResponse)
async def generator_status():
    """State and counters of the continuous generator"""
    return get_scheduler().status()


if __name__ == "__main__":
    uvicorn.run(
        "microservices.log_generator_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug,
    )
