"""
Textual TUI App
===============
Queue dashboard: job progress, estimate, mini player and log, all driven by
the studio controller on the app's own event loop.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult
from textual.widgets import Button, DataTable, Footer, Header, RichLog, Static

from studio.app import AppConfig, StudioController
from studio.app.events import AppEvent, EventType
from studio.ingestion import accept_files, file_input_from_path
from studio.models import ConversionJob
from studio.tui.screens.dashboard import JOB_COLUMNS, DashboardShell
from studio.tui.styles import APP_CSS


@dataclass
class LaunchOptions:
    """Startup options passed from the launcher."""
    sources: list[Path] = field(default_factory=list)
    pages: Optional[int] = None
    time_scale: float = 1.0


def _format_time(seconds: float) -> str:
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"


class StudioTUI(App):
    """Terminal dashboard for the conversion queue."""

    CSS = APP_CSS

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("s", "start_all", "Start all"),
        ("c", "cancel_job", "Cancel"),
        ("r", "retry_job", "Retry"),
        ("x", "remove_job", "Remove"),
        ("k", "clear_all", "Clear"),
        ("p", "toggle_play", "Play/Pause"),
        ("left", "skip(-1)", "Back 10s"),
        ("right", "skip(1)", "Forward 10s"),
        ("equals_sign", "rate(1)", "Faster"),
        ("minus", "rate(-1)", "Slower"),
    ]

    def __init__(
        self,
        options: Optional[LaunchOptions] = None,
        controller: Optional[StudioController] = None,
    ):
        super().__init__()
        self.options = options or LaunchOptions()
        self.controller = controller or StudioController(
            config=AppConfig(time_scale=self.options.time_scale)
        )
        self._messages: deque[str] = deque(maxlen=500)
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield DashboardShell(id="root")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#jobs-table", DataTable)
        table.add_columns(*JOB_COLUMNS)
        self._unsubscribe = self.controller.subscribe(self._on_event)
        self._add_sources(self.options.sources)
        self._refresh_all()
        self._log("ready")

    def _add_sources(self, sources: list[Path]) -> None:
        inputs = []
        for source in sources:
            if not source.exists():
                self._log(f"source not found: {source}")
                continue
            inputs.append(file_input_from_path(source, pages=self.options.pages))

        result = accept_files(
            inputs,
            max_files=self.controller.config.max_files,
            max_bytes=self.controller.config.max_file_bytes,
        )
        for error in result.rejected:
            self._log(f"rejected: {error}")
        self.controller.add_documents(result.accepted)

    def _log(self, message: str) -> None:
        self._messages.append(message)
        self.query_one("#log-view", RichLog).write(message)

    # ==================== Rendering ====================

    @staticmethod
    def _job_row(job: ConversionJob) -> tuple[str, ...]:
        status = job.error or job.substatus or ""
        return (
            job.document_name,
            job.stage.value,
            f"{job.progress}%",
            job.eta or "-",
            status,
        )

    def _refresh_jobs(self) -> None:
        table = self.query_one("#jobs-table", DataTable)
        cursor_row = table.cursor_row
        table.clear()
        for job in self.controller.jobs:
            table.add_row(*self._job_row(job), key=job.id)
        if table.row_count:
            table.move_cursor(row=min(cursor_row, table.row_count - 1))

    def _refresh_estimate(self) -> None:
        estimate = self.controller.get_estimate()
        self.query_one("#documents-text", Static).update(
            f"documents: {len(self.controller.documents)}"
        )
        self.query_one("#estimate-time", Static).update(f"time: {estimate.time_text}")
        self.query_one("#estimate-cost", Static).update(f"cost: {estimate.cost_text}")

    def _refresh_player(self) -> None:
        state = self.controller.playback_state
        job = self.controller.get_job(state.current_job_id) if state.current_job_id else None
        if job is None:
            self.query_one("#player-text", Static).update("nothing playing")
            return
        icon = "playing" if state.is_playing else "paused"
        self.query_one("#player-text", Static).update(
            f"{icon}: {job.document_name}\n"
            f"{_format_time(state.current_time)} / {_format_time(state.duration)} "
            f"x{state.playback_rate:.2f}"
        )

    def _refresh_all(self) -> None:
        self._refresh_jobs()
        self._refresh_estimate()
        self._refresh_player()

    def _on_event(self, event: AppEvent) -> None:
        if event.event_type == EventType.LOG:
            self._log(f"[{event.level}] {event.message}")
            self._refresh_estimate()
            return
        self._refresh_jobs()
        if event.event_type == EventType.STATE:
            self._refresh_player()

    def _selected_job_id(self) -> Optional[str]:
        table = self.query_one("#jobs-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    # ==================== Actions ====================

    def action_start_all(self) -> None:
        started = self.controller.start_all()
        if not started:
            self._log("nothing new to convert")

    def action_cancel_job(self) -> None:
        job_id = self._selected_job_id()
        if job_id is None or not self.controller.cancel_job(job_id):
            self._log("no running job selected")

    def action_retry_job(self) -> None:
        job_id = self._selected_job_id()
        if job_id is not None:
            self.controller.retry_job(job_id)

    def action_remove_job(self) -> None:
        job_id = self._selected_job_id()
        if job_id is not None:
            self.controller.remove_job(job_id)

    def action_clear_all(self) -> None:
        self.controller.clear_all()
        self._refresh_all()

    def action_toggle_play(self) -> None:
        state = self.controller.playback_state
        job_id = self._selected_job_id()
        if state.is_playing:
            self.controller.pause_audio()
        elif job_id is None or not self.controller.play_job(job_id):
            self._log("select a completed job to play")
        else:
            clock = self.controller.playback.run_clock(
                self.controller.scheduler,
                on_tick=self._refresh_player,
            )
            self.run_worker(clock, group="playback", exclusive=True)
        self._refresh_player()

    def action_skip(self, direction: int) -> None:
        self.controller.playback.skip(direction * self.controller.config.skip_seconds)
        self._refresh_player()

    def action_rate(self, steps: int) -> None:
        self.controller.playback.step_rate(steps)
        self._refresh_player()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start":
            self.action_start_all()
        elif event.button.id == "cancel":
            self.action_cancel_job()
        elif event.button.id == "retry":
            self.action_retry_job()
        elif event.button.id == "remove":
            self.action_remove_job()
        elif event.button.id == "clear":
            self.action_clear_all()
        elif event.button.id == "play":
            self.action_toggle_play()

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        await self.controller.aclose()
