"""
Application Event Contracts
===========================
Typed events for progress/log/state updates published to observers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Union

from studio.models import JobStage


class EventType(str, Enum):
    """High-level event categories."""

    PROGRESS = "progress"
    LOG = "log"
    STATE = "state"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ProgressEvent:
    """Progress update for one job (0-100)."""

    event_type: EventType
    timestamp: str
    job_id: str
    stage: JobStage
    progress: int
    message: str
    eta: Optional[str] = None


@dataclass(frozen=True)
class LogEvent:
    """Log message emitted from the controller or a driver."""

    event_type: EventType
    timestamp: str
    level: str
    message: str


@dataclass(frozen=True)
class StateEvent:
    """Stage transition for a job, including removal."""

    event_type: EventType
    timestamp: str
    stage: Optional[JobStage]
    job_id: str
    message: str = ""


AppEvent = Union[ProgressEvent, LogEvent, StateEvent]
EventListener = Callable[[AppEvent], None]


def make_progress_event(
    job_id: str,
    stage: JobStage,
    progress: float,
    message: str = "",
    eta: Optional[str] = None,
) -> ProgressEvent:
    """Create a normalized progress event."""
    pct = int(max(0, min(100, progress)))
    return ProgressEvent(
        event_type=EventType.PROGRESS,
        timestamp=_now_iso(),
        job_id=job_id,
        stage=stage,
        progress=pct,
        message=message,
        eta=eta,
    )


def make_log_event(message: str, level: str = "info") -> LogEvent:
    """Create a normalized log event."""
    return LogEvent(
        event_type=EventType.LOG,
        timestamp=_now_iso(),
        level=level.lower(),
        message=message,
    )


def make_state_event(stage: Optional[JobStage], job_id: str, message: str = "") -> StateEvent:
    """Create a normalized state event. ``stage`` is None when the job was removed."""
    return StateEvent(
        event_type=EventType.STATE,
        timestamp=_now_iso(),
        stage=stage,
        job_id=job_id,
        message=message,
    )
