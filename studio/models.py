"""
Studio Data Models
==================
Source documents, conversion jobs and playback state held by the controller.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from config.settings import Settings


class JobStage(str, Enum):
    """Job lifecycle stages, in forward order."""

    QUEUED = "queued"
    UPLOADING = "uploading"
    CHUNKING = "chunking"
    SYNTHESIZING = "synthesizing"
    MERGING = "merging"
    PACKAGING = "packaging"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStage.COMPLETED, JobStage.FAILED)


def new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FileInput:
    """
    A file accepted by the upload collaborator.

    Attributes:
        name: Display file name
        size: Size in bytes
        mime_type: MIME type reported for the file
        pages: Page count, when the collaborator knows it
        content: Raw text, when available
    """
    name: str
    size: int
    mime_type: str
    pages: Optional[int] = None
    content: Optional[str] = None


@dataclass(frozen=True)
class SourceDocument:
    """Input content for one audiobook. Immutable once created."""
    id: str
    name: str
    size: int
    mime_type: str
    pages: Optional[int] = None
    content: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class ConversionJob:
    """One audiobook-generation attempt for one source document."""
    id: str
    document_id: str
    document_name: str
    stage: JobStage = JobStage.QUEUED
    progress: int = 0
    substatus: Optional[str] = None
    eta: Optional[str] = None
    error: Optional[str] = None
    audio_url: Optional[str] = None
    download_url: Optional[str] = None
    duration: Optional[float] = None

    @property
    def is_terminal(self) -> bool:
        return self.stage.is_terminal

    @property
    def is_playable(self) -> bool:
        return self.stage == JobStage.COMPLETED and bool(self.audio_url)

    def reset(self) -> None:
        """Return the job to the start of a fresh run."""
        self.stage = JobStage.QUEUED
        self.progress = 0
        self.substatus = None
        self.eta = None
        self.error = None
        self.audio_url = None
        self.download_url = None
        self.duration = None

    def copy(self) -> "ConversionJob":
        return replace(self)


@dataclass
class PlaybackState:
    """Mini-player state. At most one job is the playback target."""
    current_job_id: Optional[str] = None
    is_playing: bool = False
    current_time: float = 0.0
    duration: float = 0.0
    playback_rate: float = 1.0

    def copy(self) -> "PlaybackState":
        return replace(self)


@dataclass(frozen=True)
class StudioSnapshot:
    """Read-only view of the controller state for presentation layers."""
    documents: tuple[SourceDocument, ...]
    jobs: tuple[ConversionJob, ...]
    settings: Settings
    playback: PlaybackState
