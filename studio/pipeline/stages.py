"""
Stage Table
===========
The fixed forward sequence a conversion job moves through, plus the
progress and ETA arithmetic shared by the driver and its tests.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from studio.models import JobStage

# Minutes of ETA per remaining stage
ETA_MINUTES_PER_STAGE = 2


@dataclass(frozen=True)
class StageSpec:
    """One step of the processing sequence."""
    stage: JobStage
    substatus: str


DEFAULT_STAGES: tuple[StageSpec, ...] = (
    StageSpec(JobStage.UPLOADING, "Uploading file..."),
    StageSpec(JobStage.CHUNKING, "Breaking into chapters..."),
    StageSpec(JobStage.SYNTHESIZING, "Converting to speech..."),
    StageSpec(JobStage.MERGING, "Combining audio files..."),
    StageSpec(JobStage.PACKAGING, "Final processing..."),
    StageSpec(JobStage.COMPLETED, "Ready for download!"),
)


def stage_progress(index: int, total: int) -> int:
    """Coarse progress published on entering stage ``index``."""
    return (100 * (index + 1)) // total


def sub_progress(index: int, done: int, intervals: int, total: int) -> int:
    """Progress after ``done`` of ``intervals`` sub-intervals of stage ``index``."""
    return (100 * (index * intervals + done)) // (total * intervals)


def stage_eta(index: int, total: int) -> Optional[str]:
    """ETA text on entering stage ``index``; None once nothing remains."""
    remaining = total - index - 1
    if remaining <= 0:
        return None
    return f"{math.ceil(remaining * ETA_MINUTES_PER_STAGE)}m"
