"""
Stage-Progression Driver
========================
Drives one job through the simulated stage sequence:
Upload → Chunk → Synthesize → Merge → Package → Completed

Each stage is entered with a coarse progress value, then its duration is
split into equal sub-intervals with a finer update after each wait. The
driver never touches job state directly; every write goes through the
publisher, which refuses writes for removed, terminal or superseded runs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from config.settings import Settings
from studio.models import JobStage
from studio.concurrency import CancellationToken, Scheduler
from studio.pipeline.stages import (
    DEFAULT_STAGES,
    StageSpec,
    stage_eta,
    stage_progress,
    sub_progress,
)

if TYPE_CHECKING:
    from studio.app.config import AppConfig

logger = logging.getLogger(__name__)

JobPublisher = Callable[[str, CancellationToken, dict[str, Any]], bool]
# Args: job_id, run token, field updates. Returns False when the write was refused.


class StageDriver:
    """
    Runs the stage sequence for jobs.

    One driver instance serves every job; each ``run`` call is an independent
    coroutine scheduled as its own task.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        publish: JobPublisher,
        config: AppConfig,
        settings: Optional[Settings] = None,
        stages: Sequence[StageSpec] = DEFAULT_STAGES,
    ):
        """
        Initialize the driver.

        Args:
            scheduler: Clock used for sub-interval waits
            publish: Write path into the job collection
            config: Stage timing and nominal duration
            settings: Shared settings (output format names the download)
            stages: Stage table, ending with the completed stage
        """
        if not stages or stages[-1].stage != JobStage.COMPLETED:
            raise ValueError("stage table must end with the completed stage")
        self.scheduler = scheduler
        self.publish = publish
        self.config = config
        self.settings = settings or Settings()
        self.stages = tuple(stages)

    @property
    def total_stages(self) -> int:
        return len(self.stages)

    def result_fields(self, job_id: str) -> dict[str, Any]:
        """Result locations written when a job completes."""
        return {
            "audio_url": f"/audio/demo-{job_id}.mp3",
            "download_url": f"/downloads/{job_id}.{self.settings.output.format}",
            "duration": self.config.nominal_duration_seconds,
        }

    async def run(self, job_id: str, token: CancellationToken) -> bool:
        """
        Drive a job from its first stage to completion.

        Returns:
            True if the job reached completed, False if the run was abandoned
        """
        total = self.total_stages
        intervals = self.config.sub_intervals

        for index, spec in enumerate(self.stages):
            if spec.stage == JobStage.COMPLETED:
                updates = {
                    "stage": JobStage.COMPLETED,
                    "substatus": spec.substatus,
                    "progress": 100,
                    "eta": None,
                }
                updates.update(self.result_fields(job_id))
                if not self.publish(job_id, token, updates):
                    return False
                logger.info("Job %s completed", job_id)
                return True

            entered = self.publish(job_id, token, {
                "stage": spec.stage,
                "substatus": spec.substatus,
                "progress": stage_progress(index, total),
                "eta": stage_eta(index, total),
            })
            if not entered:
                logger.debug("Job %s abandoned before %s", job_id, spec.stage.value)
                return False

            duration = self.config.stage_duration(spec.stage.value)
            if duration <= 0:
                continue

            step = duration / intervals
            for done in range(1, intervals + 1):
                await self.scheduler.sleep(step)
                progressed = self.publish(job_id, token, {
                    "progress": sub_progress(index, done, intervals, total),
                })
                if not progressed:
                    logger.debug("Job %s abandoned during %s", job_id, spec.stage.value)
                    return False

        return False
