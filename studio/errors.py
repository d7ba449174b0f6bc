"""
Error Handling Module
=====================
Custom exceptions and error codes for the Audiobook Studio.

Unknown document/job references are never raised; the engine ignores them.
These errors cover input acceptance and settings validation, which the
presentation layer surfaces to the user.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


# Error text written to a job when the user cancels it
CANCELLED_BY_USER = "Cancelled by user"


class ErrorCode(Enum):
    """Error codes for the audiobook studio."""
    # Intake errors (E001-E099)
    E001 = "Unsupported file type"
    E002 = "File too large"
    E003 = "Too many files"
    E004 = "Pasted text is empty"

    # Settings errors (E100-E199)
    E100 = "Unknown setting"
    E101 = "Setting out of range"


@dataclass
class StudioError(Exception):
    """Base exception for the Audiobook Studio with error codes."""
    code: ErrorCode
    message: str
    details: Optional[str] = None
    file_name: Optional[str] = None

    def __str__(self) -> str:
        base = f"[{self.code.name}] {self.code.value}: {self.message}"
        if self.details:
            base += f" ({self.details})"
        if self.file_name:
            base += f" - File: {self.file_name}"
        return base


class UnsupportedFileTypeError(StudioError):
    """File type is not in the accepted set."""
    def __init__(self, file_name: str, mime_type: str = None):
        super().__init__(
            code=ErrorCode.E001,
            message=f"Cannot convert {file_name}",
            details=f"Type: {mime_type}" if mime_type else None,
            file_name=file_name
        )


class FileTooLargeError(StudioError):
    """File exceeds the per-file size limit."""
    def __init__(self, file_name: str, size: int, max_bytes: int):
        mb = max_bytes / (1024 ** 2)
        super().__init__(
            code=ErrorCode.E002,
            message=f"{file_name} is {size:,} bytes",
            details=f"Maximum allowed: {mb:.0f} MB",
            file_name=file_name
        )


class TooManyFilesError(StudioError):
    """Batch exceeds the per-upload file count."""
    def __init__(self, count: int, max_files: int):
        super().__init__(
            code=ErrorCode.E003,
            message=f"{count} files submitted",
            details=f"Maximum allowed: {max_files} per batch"
        )


class EmptyPastedTextError(StudioError):
    """Pasted text is missing a title or content."""
    def __init__(self, field_name: str):
        super().__init__(
            code=ErrorCode.E004,
            message=f"Please provide a {field_name}",
        )


class SettingsError(StudioError):
    """Settings update names an unknown field or an invalid value."""
    def __init__(self, group: str, field_name: str, details: str = None, unknown: bool = False):
        super().__init__(
            code=ErrorCode.E100 if unknown else ErrorCode.E101,
            message=f"{group}.{field_name}",
            details=details
        )
