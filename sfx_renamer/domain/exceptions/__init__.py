"""
Domain Exceptions Module

Contains domain-specific exceptions:
- CatalogueLoadError: Term catalogue could not be loaded
- NLPServiceError: External NLP service failed or is unavailable
- TranslationError: Translation provider failed
- ProcessingError: File pipeline misuse (already running, nothing to do)
- RenameError: Host rename failed
"""

from __future__ import annotations


class SfxRenamerError(Exception):
    """Base class for all engine errors."""


class CatalogueLoadError(SfxRenamerError):
    """Raised when a catalogue source is unreadable or yields no valid rows."""


class NLPServiceError(SfxRenamerError):
    """Raised by the external NLP service client."""


class TranslationError(SfxRenamerError):
    """Raised when a translation provider fails."""


class ProcessingError(SfxRenamerError):
    """Raised for pipeline misuse, e.g. starting a batch while one is running."""


class RenameError(SfxRenamerError):
    """Raised by a host file API when a rename fails."""

    def __init__(self, item_id: str, message: str):
        super().__init__(f"{item_id}: {message}")
        self.item_id = item_id
        self.message = message


__all__ = [
    "SfxRenamerError",
    "CatalogueLoadError",
    "NLPServiceError",
    "TranslationError",
    "ProcessingError",
    "RenameError",
]
