"""
Pipeline Module

Sequential file processing: number extraction, translation,
classification, naming and renaming through the host API.
"""

from .file_processor import (
    BatchResult,
    FileProcessor,
    ProgressCallback,
    RenameOutcome,
    records_from_items,
)

__all__ = [
    "BatchResult",
    "FileProcessor",
    "ProgressCallback",
    "RenameOutcome",
    "records_from_items",
]
