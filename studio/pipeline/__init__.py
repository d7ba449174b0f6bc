"""
Pipeline Module
================
Simulated conversion pipeline: the stage table and the driver that walks
jobs through it.
"""

from .stages import (
    DEFAULT_STAGES,
    StageSpec,
    stage_eta,
    stage_progress,
    sub_progress,
)
from .driver import JobPublisher, StageDriver

__all__ = [
    "DEFAULT_STAGES",
    "StageSpec",
    "StageDriver",
    "JobPublisher",
    "stage_eta",
    "stage_progress",
    "sub_progress",
]
