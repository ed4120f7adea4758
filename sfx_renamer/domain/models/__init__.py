"""
Domain Models Module

Contains all domain models for SFX Renamer.
"""

from .term import (
    PartOfSpeech,
    WordSource,
    TermRecord,
    WordInfo,
    MatchedWord,
    MatchResult,
    split_synonyms,
)
from .file_record import (
    FileStatus,
    NumberParts,
    ClassificationResult,
    FileRecord,
)
from .categories import (
    DEFAULT_CATEGORY,
    CATEGORY_ID_MAP,
    CATEGORY_ZH_MAP,
    get_category_id,
    get_category_chinese_name,
)

__all__ = [
    # Terms and words
    "PartOfSpeech",
    "WordSource",
    "TermRecord",
    "WordInfo",
    "MatchedWord",
    "MatchResult",
    "split_synonyms",
    # Files
    "FileStatus",
    "NumberParts",
    "ClassificationResult",
    "FileRecord",
    # Category tables
    "DEFAULT_CATEGORY",
    "CATEGORY_ID_MAP",
    "CATEGORY_ZH_MAP",
    "get_category_id",
    "get_category_chinese_name",
]
