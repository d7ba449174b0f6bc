"""Screen exports for the studio TUI."""

from .dashboard import DashboardShell, JOB_COLUMNS

__all__ = ["DashboardShell", "JOB_COLUMNS"]
