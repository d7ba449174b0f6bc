"""
Test App Events Module
======================
Unit tests for typed app event contracts.
"""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from studio.app.events import (
    EventType,
    make_log_event,
    make_progress_event,
    make_state_event,
)
from studio.models import JobStage


def test_events() -> bool:
    print("\n" + "=" * 50)
    print("APP EVENTS TEST SUITE")
    print("=" * 50 + "\n")

    # Progress event clamp and fields
    progress = make_progress_event("job-1", JobStage.SYNTHESIZING, 170, "Converting to speech...", "6m")
    assert progress.event_type == EventType.PROGRESS
    assert progress.progress == 100
    assert progress.job_id == "job-1"
    assert progress.stage == JobStage.SYNTHESIZING
    assert progress.message == "Converting to speech..."
    assert progress.eta == "6m"
    assert make_progress_event("job-1", JobStage.UPLOADING, -3).progress == 0
    assert make_progress_event("job-1", JobStage.UPLOADING, 16.9).progress == 16
    print("✓ progress event normalization")

    # Log event level normalization
    log = make_log_event("2 file(s) added", "INFO")
    assert log.event_type == EventType.LOG
    assert log.level == "info"
    assert log.message == "2 file(s) added"
    print("✓ log event normalization")

    # State event creation
    state = make_state_event(JobStage.FAILED, "job-1", "Cancelled by user")
    assert state.event_type == EventType.STATE
    assert state.stage == JobStage.FAILED
    assert state.job_id == "job-1"
    assert state.message == "Cancelled by user"
    print("✓ state event creation")

    # Removal is a state event without a stage
    removed = make_state_event(None, "job-1", "removed")
    assert removed.stage is None
    assert removed.timestamp.endswith("+00:00")
    print("✓ removal state event")

    print("\n" + "=" * 50)
    print("ALL APP EVENT TESTS PASSED ✓")
    print("=" * 50 + "\n")
    return True


if __name__ == "__main__":
    success = test_events()
    sys.exit(0 if success else 1)
