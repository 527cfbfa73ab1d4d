"""
Log Generator Service - Data Models

Event categories, severities, synthetic event payloads and API models
"""

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class EventCategory(str, Enum):
    """Semantic category of a generated event, in rotation order"""
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    DEBUG = "Debug"
    PERFORMANCE = "Performance"
    SECURITY = "Security"
    BUSINESS = "Business"
    SYSTEM = "System"

    @classmethod
    def rotation(cls) -> List["EventCategory"]:
        return list(cls)

    @classmethod
    def for_tick(cls, counter: int) -> "EventCategory":
        """Category dispatched for a rotation counter value"""
        if counter < 0:
            raise ValueError(f"Rotation counter must be non-negative, got {counter}")
        order = cls.rotation()
        return order[counter % len(order)]


class Severity(str, Enum):
    """Reported severity of a log record"""
    DEBUG = "Debug"
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    CRITICAL = "Critical"

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.CRITICAL: logging.CRITICAL,
}


class SchedulerState(str, Enum):
    """Lifecycle of the continuous generator"""
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


# ==================
# Event Models
# ==================

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def render_template(template: str, properties: Dict[str, Any]) -> str:
    """Substitute named {Placeholders}; unknown names are left as written"""
    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in properties:
            return str(properties[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


class SimulatedFault(BaseModel):
    """Fabricated error attached to an event as payload"""
    kind: str = Field(..., min_length=1)
    message: str


class SyntheticEvent(BaseModel):
    """One generated log event"""
    category: EventCategory
    severity: Severity
    message_template: str
    properties: Dict[str, Any] = Field(default_factory=dict)
    fault: Optional[SimulatedFault] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def render(self) -> str:
        return render_template(self.message_template, self.properties)


class TickOutcome(BaseModel):
    """Result of one scheduler iteration"""
    counter: int
    category: EventCategory
    success: bool
    error: Optional[str] = None
    next_delay: float
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ==================
# Request Models
# ==================

class LogMessageRequest(BaseModel):
    """Message to log through an on-demand endpoint"""
    message: str = Field(..., min_length=1, max_length=2000)


# ==================
# Response Models
# ==================

class LogEntryResponse(BaseModel):
    level: Severity
    message: str
    timestamp: datetime


class GenerateLogsResponse(BaseModel):
    generated: int
    timestamp: datetime


class GeneratorStatusResponse(BaseModel):
    state: SchedulerState
    counter: int
    ticks_succeeded: int
    ticks_failed: int
    interval_seconds: float
    cooldown_seconds: float
    last_outcome: Optional[TickOutcome] = None
