"""
Application Controller
======================
Central controller for the audiobook studio.

Owns the document and job collections, the shared settings and the
playback state, and launches one stage-driver run per job. Presentation
layers (CLI, TUI) only go through this class:
- Commands mutate state synchronously
- Observers receive typed events
- ``snapshot()`` gives a read-only copy for rendering
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable, Optional, Sequence

from config.settings import Settings
from studio.app.config import AppConfig
from studio.app.estimate import Estimate, Estimator, LinearEstimator
from studio.app.events import (
    AppEvent,
    EventListener,
    make_log_event,
    make_progress_event,
    make_state_event,
)
from studio.models import (
    ConversionJob,
    FileInput,
    JobStage,
    PlaybackState,
    SourceDocument,
    StudioSnapshot,
    new_id,
)
from studio.app.playback import PlaybackController
from studio.concurrency import (
    AsyncioScheduler,
    CancellationToken,
    DriverRegistry,
    Scheduler,
)
from studio.errors import CANCELLED_BY_USER
from studio.pipeline.driver import StageDriver
from studio.pipeline.stages import DEFAULT_STAGES, StageSpec

logger = logging.getLogger(__name__)


class StudioController:
    """
    Central controller for the audiobook studio.

    Responsibilities:
        - Document intake (files, pasted text)
        - Job lifecycle (start, cancel, retry, remove)
        - Settings updates and estimates
        - Playback target

    Commands that start drivers (``start_job``, ``retry_job``) must be called
    from inside a running event loop.

    Example:
        controller = StudioController()
        controller.subscribe(render)

        [doc] = controller.add_documents([FileInput("book.pdf", 1024, "application/pdf", pages=120)])
        job_id = controller.start_job(doc.id)

        await controller.wait_idle()
        controller.play_job(job_id)
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        settings: Optional[Settings] = None,
        scheduler: Optional[Scheduler] = None,
        estimator: Optional[Estimator] = None,
        stages: Sequence[StageSpec] = DEFAULT_STAGES,
    ):
        """
        Initialize the controller.

        Args:
            config: Engine configuration
            settings: Synthesis settings (fresh defaults if None)
            scheduler: Clock for driver waits (wall clock if None)
            estimator: Pricing strategy (linear model from config if None)
            stages: Stage table for the driver
        """
        self.config = config or AppConfig()
        self.settings = settings or Settings()
        self.scheduler = scheduler or AsyncioScheduler()
        self.estimator = estimator or LinearEstimator(
            minutes_per_page=self.config.minutes_per_page,
            cost_per_page=self.config.cost_per_page,
        )

        self._documents: dict[str, SourceDocument] = {}
        self._jobs: dict[str, ConversionJob] = {}
        self._listeners: list[EventListener] = []
        self._registry = DriverRegistry()

        self.driver = StageDriver(
            scheduler=self.scheduler,
            publish=self._publish,
            config=self.config,
            settings=self.settings,
            stages=stages,
        )

        self.playback_state = PlaybackState()
        self.playback = PlaybackController(
            self.playback_state,
            self.get_job,
            skip_seconds=self.config.skip_seconds,
        )

    # ==================== Observers ====================

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """
        Register an event listener.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AppEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Event listener %r failed", listener)

    def _log(self, message: str, level: str = "info") -> None:
        logger.log(logging.getLevelName(level.upper()), message)
        self._emit(make_log_event(message, level))

    # ==================== Queries ====================

    @property
    def documents(self) -> list[SourceDocument]:
        return list(self._documents.values())

    @property
    def jobs(self) -> list[ConversionJob]:
        return [job.copy() for job in self._jobs.values()]

    def get_document(self, document_id: str) -> Optional[SourceDocument]:
        return self._documents.get(document_id)

    def get_job(self, job_id: str) -> Optional[ConversionJob]:
        return self._jobs.get(job_id)

    def active_driver_ids(self) -> list[str]:
        """Job ids with a driver task still scheduled."""
        return self._registry.active_ids()

    def snapshot(self) -> StudioSnapshot:
        """Copy of the full state for rendering."""
        return StudioSnapshot(
            documents=tuple(self._documents.values()),
            jobs=tuple(job.copy() for job in self._jobs.values()),
            settings=self.settings.copy(),
            playback=self.playback_state.copy(),
        )

    def get_estimate(self) -> Estimate:
        """Estimated narration time and cost for the current documents."""
        return self.estimator.estimate(self._documents.values(), self.settings)

    # ==================== Documents ====================

    def add_documents(self, inputs: Iterable[FileInput]) -> list[SourceDocument]:
        """
        Add accepted files as source documents.

        Args:
            inputs: Files already filtered by the acceptance policy

        Returns:
            The created documents
        """
        created = []
        for item in inputs:
            document = SourceDocument(
                id=new_id(),
                name=item.name,
                size=item.size,
                mime_type=item.mime_type,
                pages=item.pages,
                content=item.content,
            )
            self._documents[document.id] = document
            created.append(document)

        if created:
            self._log(f"{len(created)} file(s) added")
        return created

    def add_pasted_text(self, content: str, title: str) -> Optional[SourceDocument]:
        """
        Add pasted text as a plain-text document.

        Returns:
            The document, or None when title or content is blank
        """
        if not title or not title.strip() or not content or not content.strip():
            logger.warning("Ignoring pasted text with empty title or content")
            return None

        document = SourceDocument(
            id=new_id(),
            name=f"{title}.txt",
            size=len(content),
            mime_type="text/plain",
            pages=math.ceil(len(content) / self.config.text_chars_per_page),
            content=content,
        )
        self._documents[document.id] = document
        self._log(f"Added pasted text '{document.name}'")
        return document

    def remove_document(self, document_id: str) -> bool:
        """Remove a document. Jobs created from it are kept."""
        document = self._documents.pop(document_id, None)
        if document is None:
            logger.debug("remove_document: unknown id %s", document_id)
            return False
        self._log(f"Removed document '{document.name}'")
        return True

    # ==================== Jobs ====================

    def start_job(self, document_id: str) -> Optional[str]:
        """
        Create a queued job for a document and start its driver.

        Returns:
            The new job id, or None if the document does not exist
        """
        document = self._documents.get(document_id)
        if document is None:
            logger.debug("start_job: unknown document %s", document_id)
            return None

        job = ConversionJob(
            id=new_id(),
            document_id=document.id,
            document_name=document.name,
        )
        # The run only starts on the next loop turn, after the job is stored
        self._launch(job.id)
        self._jobs[job.id] = job
        self._emit(make_state_event(JobStage.QUEUED, job.id, f"queued '{document.name}'"))
        self._log(f"Started job {job.id} for '{document.name}'")
        return job.id

    def start_all(self) -> list[str]:
        """Start a job for every document that has none yet."""
        converted = {job.document_id for job in self._jobs.values()}
        started = []
        for document_id in list(self._documents):
            if document_id in converted:
                continue
            job_id = self.start_job(document_id)
            if job_id is not None:
                started.append(job_id)
        return started

    def cancel_job(self, job_id: str) -> bool:
        """
        Cancel a running job. Terminal or unknown jobs are left alone.

        Returns:
            True if the job was moved to failed
        """
        job = self._jobs.get(job_id)
        if job is None or job.is_terminal:
            logger.debug("cancel_job: nothing to cancel for %s", job_id)
            return False

        self._registry.cancel(job_id)
        job.stage = JobStage.FAILED
        job.error = CANCELLED_BY_USER
        job.eta = None
        self._emit(make_state_event(JobStage.FAILED, job_id, CANCELLED_BY_USER))
        self._log(f"Cancelled job {job_id}", "warning")
        return True

    def retry_job(self, job_id: str) -> bool:
        """
        Restart a job from the beginning under the same id.

        Returns:
            True if the job was restarted
        """
        job = self._jobs.get(job_id)
        if job is None:
            logger.debug("retry_job: unknown job %s", job_id)
            return False

        self._launch(job_id)
        job.reset()
        if self.playback_state.current_job_id == job_id:
            self.playback.stop()
        self._emit(make_state_event(JobStage.QUEUED, job_id, "retrying"))
        self._log(f"Retrying job {job_id}")
        return True

    def remove_job(self, job_id: str) -> bool:
        """
        Remove a job in any stage. Pending driver writes for it are dropped.

        Returns:
            True if the job existed
        """
        job = self._jobs.pop(job_id, None)
        if job is None:
            logger.debug("remove_job: unknown job %s", job_id)
            return False

        self._registry.cancel(job_id)
        if self.playback_state.current_job_id == job_id:
            self.playback.stop()
        self._emit(make_state_event(None, job_id, "removed"))
        self._log(f"Removed job {job_id}")
        return True

    def clear_all(self) -> None:
        """Drop every document and job."""
        self._registry.cancel_all()
        self._documents.clear()
        self._jobs.clear()
        self.playback.stop()
        self._log("Cleared all documents and jobs")

    def _launch(self, job_id: str) -> None:
        self._registry.start(job_id, lambda token: self.driver.run(job_id, token))

    def _publish(self, job_id: str, token: CancellationToken, updates: dict[str, Any]) -> bool:
        """
        Apply a driver update if the run is still live.

        Refused when the run was superseded or cancelled, the job was removed,
        or the job already reached a terminal stage. Progress never moves
        backwards within a run.
        """
        if token.is_cancelled():
            return False
        job = self._jobs.get(job_id)
        if job is None or job.is_terminal:
            return False

        if "progress" in updates:
            updates = dict(updates, progress=max(job.progress, updates["progress"]))

        previous_stage = job.stage
        for name, value in updates.items():
            setattr(job, name, value)

        if job.stage != previous_stage:
            self._emit(make_state_event(job.stage, job_id, job.substatus or ""))
        self._emit(make_progress_event(
            job_id,
            job.stage,
            job.progress,
            job.substatus or "",
            job.eta,
        ))
        return True

    # ==================== Settings ====================

    def update_voice_settings(self, **changes) -> None:
        self.settings.update("voice", **changes)

    def update_output_settings(self, **changes) -> None:
        self.settings.update("output", **changes)

    def update_advanced_settings(self, **changes) -> None:
        self.settings.update("advanced", **changes)

    # ==================== Playback ====================

    def play_job(self, job_id: str) -> bool:
        return self.playback.play(job_id)

    def pause_audio(self) -> None:
        self.playback.pause()

    def seek_to(self, time: float) -> None:
        self.playback.seek_to(time)

    def set_playback_rate(self, rate: float) -> None:
        self.playback.set_playback_rate(rate)

    # ==================== Lifecycle ====================

    async def wait_idle(self) -> None:
        """Wait until every driver run has finished."""
        await self._registry.wait()

    async def aclose(self) -> None:
        """
        Stop all driver runs.

        Call this when shutting down the application.
        """
        await self._registry.shutdown()
        self.playback.pause()
