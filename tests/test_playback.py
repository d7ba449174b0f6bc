"""
Playback Controller Tests
=========================
Tests for the mini-player: target selection, clamping and the tick clock.
"""

import asyncio

import pytest

from studio.app.playback import MAX_RATE, MIN_RATE, PlaybackController
from studio.concurrency import VirtualScheduler
from studio.models import ConversionJob, JobStage, PlaybackState


def make_job(job_id, stage=JobStage.COMPLETED, duration=1800.0):
    job = ConversionJob(id=job_id, document_id="doc", document_name="book.pdf", stage=stage)
    if stage == JobStage.COMPLETED:
        job.audio_url = f"/audio/demo-{job_id}.mp3"
        job.duration = duration
    return job


@pytest.fixture
def jobs():
    return {
        "done": make_job("done"),
        "short": make_job("short", duration=3.0),
        "running": make_job("running", stage=JobStage.SYNTHESIZING),
    }


@pytest.fixture
def player(jobs):
    return PlaybackController(PlaybackState(), jobs.get)


class TestPlay:
    """Selecting and toggling the target."""

    def test_play_completed_job(self, player):
        assert player.play("done") is True
        assert player.state.current_job_id == "done"
        assert player.state.is_playing is True
        assert player.state.current_time == 0.0
        assert player.state.duration == 1800.0

    @pytest.mark.parametrize("job_id", ["running", "missing"])
    def test_play_unplayable_is_ignored(self, player, job_id):
        assert player.play(job_id) is False
        assert player.state == PlaybackState()

    def test_resume_same_target_keeps_position(self, player):
        player.play("done")
        player.seek_to(120)
        player.pause()
        player.play("done")
        assert player.state.current_time == 120

    def test_switch_target_resets_position(self, player):
        player.play("done")
        player.seek_to(120)
        player.play("short")
        assert player.state.current_job_id == "short"
        assert player.state.current_time == 0.0
        assert player.state.duration == 3.0

    def test_toggle(self, player):
        assert player.toggle() is False
        player.play("done")
        assert player.toggle() is False
        assert player.state.is_playing is False
        assert player.toggle() is True
        assert player.state.is_playing is True

    def test_stop(self, player):
        player.play("done")
        player.seek_to(50)
        player.stop()
        assert player.state.current_job_id is None
        assert player.state.is_playing is False
        assert player.state.current_time == 0.0


class TestSeekAndRate:
    """Clamped position and rate."""

    @pytest.mark.parametrize("target,expected", [(-5, 0.0), (900, 900), (99999, 1800.0)])
    def test_seek_is_clamped(self, player, target, expected):
        player.play("done")
        player.seek_to(target)
        assert player.state.current_time == expected

    def test_skip(self, player):
        player.play("done")
        player.skip()
        assert player.state.current_time == 10.0
        player.skip(-30)
        assert player.state.current_time == 0.0

    @pytest.mark.parametrize("rate,expected", [(0.1, MIN_RATE), (1.25, 1.25), (5.0, MAX_RATE)])
    def test_rate_is_clamped(self, player, rate, expected):
        player.set_playback_rate(rate)
        assert player.state.playback_rate == expected

    def test_step_rate(self, player):
        player.step_rate(2)
        assert player.state.playback_rate == 1.5
        player.step_rate(-10)
        assert player.state.playback_rate == MIN_RATE


class TestClock:
    """Tick behaviour."""

    def test_tick_advances_only_while_playing(self, player):
        player.play("done")
        player.tick()
        assert player.state.current_time == 1.0
        player.pause()
        player.tick()
        assert player.state.current_time == 1.0

    def test_tick_pauses_at_end(self, player):
        player.play("short")
        player.tick()
        player.tick()
        assert player.state.current_time == 2.0
        player.tick()
        assert player.state.is_playing is False
        assert player.state.current_time == 2.0

    @pytest.mark.asyncio
    async def test_run_clock_on_virtual_time(self, player):
        scheduler = VirtualScheduler()
        ticks = []
        player.play("done")
        player.set_playback_rate(2.0)

        task = asyncio.create_task(player.run_clock(scheduler, on_tick=lambda: ticks.append(1)))
        await scheduler.advance(5.0)

        assert player.state.current_time == 10.0
        assert len(ticks) == 10

        player.pause()
        await scheduler.run_until_idle()
        assert task.done()

    @pytest.mark.asyncio
    async def test_run_clock_ends_with_track(self, player):
        scheduler = VirtualScheduler()
        player.play("short")

        task = asyncio.create_task(player.run_clock(scheduler))
        await scheduler.run_until_idle()

        assert task.done()
        assert player.state.is_playing is False
