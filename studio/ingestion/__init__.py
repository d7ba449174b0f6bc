"""
Ingestion Module
================
Upload acceptance rules and pasted-text validation.
"""

from .acceptance import (
    ACCEPTED_TYPES,
    AcceptanceResult,
    accept_files,
    check_file,
    file_input_from_path,
    resolve_mime_type,
    validate_pasted_text,
)

__all__ = [
    "ACCEPTED_TYPES",
    "AcceptanceResult",
    "accept_files",
    "check_file",
    "file_input_from_path",
    "resolve_mime_type",
    "validate_pasted_text",
]
