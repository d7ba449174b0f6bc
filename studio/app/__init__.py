"""
Application Module
==================
Core application controller and business logic.

Key Components:
    - StudioController: Documents, jobs, settings and playback
    - AppConfig: Engine configuration
    - Events: Typed progress/state/log events for observers
"""

from .config import AppConfig
from .controller import StudioController
from .estimate import Estimate, LinearEstimator
from .events import (
    AppEvent,
    EventType,
    LogEvent,
    ProgressEvent,
    StateEvent,
)
from studio.models import (
    ConversionJob,
    FileInput,
    JobStage,
    PlaybackState,
    SourceDocument,
    StudioSnapshot,
)
from .playback import PlaybackController

__all__ = [
    "AppConfig",
    "StudioController",
    "Estimate",
    "LinearEstimator",
    "AppEvent",
    "EventType",
    "ProgressEvent",
    "LogEvent",
    "StateEvent",
    "ConversionJob",
    "FileInput",
    "JobStage",
    "PlaybackState",
    "SourceDocument",
    "StudioSnapshot",
    "PlaybackController",
]
