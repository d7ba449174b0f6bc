"""
Upload Acceptance Policy
========================
Rules the upload surface applies before handing files to the controller:
accepted document types, files per batch and bytes per file. Also the
pasted-text check shown to the user before a text document is created.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from studio.models import FileInput
from studio.errors import (
    EmptyPastedTextError,
    FileTooLargeError,
    StudioError,
    TooManyFilesError,
    UnsupportedFileTypeError,
)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

ACCEPTED_TYPES = {
    "text/plain": (".txt",),
    "application/pdf": (".pdf",),
    "application/epub+zip": (".epub",),
    DOCX_MIME: (".docx",),
}

SUFFIX_TYPES = {
    suffix: mime
    for mime, suffixes in ACCEPTED_TYPES.items()
    for suffix in suffixes
}

MAX_FILES = 10
MAX_FILE_BYTES = 20 * 1024 * 1024


@dataclass
class AcceptanceResult:
    """Outcome of checking an upload batch."""
    accepted: list[FileInput] = field(default_factory=list)
    rejected: list[StudioError] = field(default_factory=list)


def resolve_mime_type(name: str, reported: Optional[str] = None) -> str:
    """
    Resolve a file's MIME type, falling back to its suffix.

    Browsers and file pickers often report an empty or generic type for
    EPUB and DOCX files.
    """
    if reported in ACCEPTED_TYPES:
        return reported
    suffix = Path(name).suffix.lower()
    if suffix in SUFFIX_TYPES:
        return SUFFIX_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(name)
    return reported or guessed or "application/octet-stream"


def is_accepted_type(mime_type: str) -> bool:
    return mime_type in ACCEPTED_TYPES


def check_file(item: FileInput, max_bytes: int = MAX_FILE_BYTES) -> None:
    """
    Validate one file.

    Raises:
        UnsupportedFileTypeError: type not accepted
        FileTooLargeError: size over the limit
    """
    if not is_accepted_type(item.mime_type):
        raise UnsupportedFileTypeError(item.name, item.mime_type)
    if item.size > max_bytes:
        raise FileTooLargeError(item.name, item.size, max_bytes)


def accept_files(
    items: Iterable[FileInput],
    max_files: int = MAX_FILES,
    max_bytes: int = MAX_FILE_BYTES,
) -> AcceptanceResult:
    """
    Split a batch into accepted and rejected files.

    A batch over the file-count limit is rejected as a whole.
    """
    items = list(items)
    result = AcceptanceResult()
    if len(items) > max_files:
        result.rejected.append(TooManyFilesError(len(items), max_files))
        return result

    for item in items:
        try:
            check_file(item, max_bytes)
        except StudioError as exc:
            result.rejected.append(exc)
        else:
            result.accepted.append(item)
    return result


def file_input_from_path(path: Path, pages: Optional[int] = None) -> FileInput:
    """Describe a local file for the controller. Text files carry their content."""
    path = Path(path)
    mime_type = resolve_mime_type(path.name)
    content = None
    if mime_type == "text/plain":
        content = path.read_text(encoding="utf-8", errors="replace")
    return FileInput(
        name=path.name,
        size=path.stat().st_size,
        mime_type=mime_type,
        pages=pages,
        content=content,
    )


def validate_pasted_text(title: str, content: str) -> None:
    """
    Check a pasted-text submission.

    Raises:
        EmptyPastedTextError: title or content is blank
    """
    if not title or not title.strip():
        raise EmptyPastedTextError("title")
    if not content or not content.strip():
        raise EmptyPastedTextError("content")


def word_count(content: str) -> int:
    """Words in pasted text, as shown under the paste box."""
    return len(content.split())
