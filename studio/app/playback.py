"""
Playback Controller
===================
Mini-player state: which finished job is loaded, play/pause, position and
rate. Seeks and rates are clamped here rather than trusted from callers.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from studio.models import ConversionJob, PlaybackState
from studio.concurrency import Scheduler

logger = logging.getLogger(__name__)

MIN_RATE = 0.5
MAX_RATE = 2.0
RATE_STEP = 0.25


class PlaybackController:
    """
    Controls the single playback target.

    Example:
        playback = PlaybackController(state, controller.get_job)
        playback.play(job_id)
        playback.skip(10)
        playback.set_playback_rate(1.5)
    """

    def __init__(
        self,
        state: PlaybackState,
        job_lookup: Callable[[str], Optional[ConversionJob]],
        skip_seconds: float = 10.0,
    ):
        self.state = state
        self._job_lookup = job_lookup
        self.skip_seconds = skip_seconds

    def play(self, job_id: str) -> bool:
        """
        Start playing a completed job.

        Returns:
            True if playback started; jobs that are missing, unfinished or
            have no audio leave the state untouched
        """
        job = self._job_lookup(job_id)
        if job is None or not job.is_playable:
            logger.debug("Ignoring play for job %s: not playable", job_id)
            return False

        if self.state.current_job_id != job_id:
            self.state.current_job_id = job_id
            self.state.current_time = 0.0
            self.state.duration = float(job.duration or 0.0)
        self.state.is_playing = True
        return True

    def pause(self) -> None:
        self.state.is_playing = False

    def toggle(self) -> bool:
        """Pause if playing, otherwise resume the current target."""
        if self.state.is_playing:
            self.pause()
            return False
        if self.state.current_job_id is None:
            return False
        return self.play(self.state.current_job_id)

    def stop(self) -> None:
        """Drop the target entirely."""
        self.state.current_job_id = None
        self.state.is_playing = False
        self.state.current_time = 0.0
        self.state.duration = 0.0

    def seek_to(self, time: float) -> None:
        self.state.current_time = min(max(0.0, time), self.state.duration)

    def skip(self, delta: Optional[float] = None) -> None:
        """Seek relative to the current position (default: skip forward)."""
        if delta is None:
            delta = self.skip_seconds
        self.seek_to(self.state.current_time + delta)

    def set_playback_rate(self, rate: float) -> None:
        self.state.playback_rate = min(MAX_RATE, max(MIN_RATE, rate))

    def step_rate(self, steps: int) -> None:
        self.set_playback_rate(self.state.playback_rate + steps * RATE_STEP)

    def tick(self) -> None:
        """Advance one second of playback, pausing at the end."""
        if not self.state.is_playing:
            return
        new_time = self.state.current_time + 1
        if new_time >= self.state.duration:
            self.pause()
        else:
            self.state.current_time = new_time

    async def run_clock(
        self,
        scheduler: Scheduler,
        on_tick: Optional[Callable[[], None]] = None,
    ) -> None:
        """Tick while playing; one tick every ``1 / rate`` seconds."""
        while self.state.is_playing:
            await scheduler.sleep(1.0 / self.state.playback_rate)
            self.tick()
            if on_tick is not None:
                on_tick()
