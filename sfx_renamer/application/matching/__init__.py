"""
Matching Engine Module

Two interchangeable engines behind one contract:
- TokenMatchingEngine: weighted token matching with bilingual alignment
- FuzzyMatchingEngine: approximate string similarity (rapidfuzz)
"""

from __future__ import annotations

from typing import Optional

from ...core.config import AppSettings
from ..catalogue import TermCatalogue
from ..tokenizer import PosAnalyzer
from .alignment import align_bilingual
from .base import MatchingEngine, hint_cat_id
from .fuzzy_engine import FuzzyMatchingEngine
from .scoring import TermEntry, WordScorer, filter_words
from .token_engine import TokenMatchingEngine

ENGINES = {
    TokenMatchingEngine.ENGINE_ID: TokenMatchingEngine,
    FuzzyMatchingEngine.ENGINE_ID: FuzzyMatchingEngine,
}


def create_engine(
    kind: str,
    catalogue: TermCatalogue,
    settings: Optional[AppSettings] = None,
    analyzer: Optional[PosAnalyzer] = None,
) -> MatchingEngine:
    """
    Build a matching engine by id ("token" or "fuzzy").

    Raises:
        ValueError: Unknown engine id
    """
    settings = settings or AppSettings()
    if kind == TokenMatchingEngine.ENGINE_ID:
        return TokenMatchingEngine(catalogue, settings.matching, analyzer, settings.tokenizer)
    if kind == FuzzyMatchingEngine.ENGINE_ID:
        return FuzzyMatchingEngine(catalogue, settings.fuzzy, analyzer, settings.tokenizer)
    raise ValueError(f"Unknown matching engine: {kind!r} (expected one of {sorted(ENGINES)})")


__all__ = [
    "ENGINES",
    "MatchingEngine",
    "TokenMatchingEngine",
    "FuzzyMatchingEngine",
    "TermEntry",
    "WordScorer",
    "align_bilingual",
    "create_engine",
    "filter_words",
    "hint_cat_id",
]
