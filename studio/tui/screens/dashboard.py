"""
Dashboard screen shell for the studio TUI layout.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, RichLog, Static

JOB_COLUMNS = ("Document", "Stage", "Progress", "ETA", "Status")


class DashboardShell(Container):
    """Main dashboard shell containing actions, queue, estimate, player and log panes."""

    def compose(self) -> ComposeResult:
        with Horizontal(id="actions"):
            yield Button("Start all (s)", id="start", classes="-primary")
            yield Button("Cancel (c)", id="cancel")
            yield Button("Retry (r)", id="retry")
            yield Button("Remove (x)", id="remove")
            yield Button("Clear (k)", id="clear")
            yield Button("Play (p)", id="play")
        with Horizontal(id="panes"):
            with Vertical(id="queue-pane"):
                yield Static("Queue", classes="label")
                yield DataTable(id="jobs-table", cursor_type="row")
            with Vertical(id="side-pane"):
                yield Static("Estimate", classes="label")
                yield Static("documents: 0", id="documents-text")
                yield Static("time: 0m", id="estimate-time")
                yield Static("cost: $0.00", id="estimate-cost")
                yield Static("Player", classes="label")
                yield Static("nothing playing", id="player-text")
                yield Static("Logs", classes="label")
                yield RichLog(id="log-view", wrap=True, highlight=True)
