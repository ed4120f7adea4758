"""
Matching Engine Base Classes

Defines the common contract of the matching engines. Engines are built
once per catalogue and are read-only afterwards, so one instance can serve
a whole batch.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Sequence

from ...core.config import TokenizerSettings
from ...domain.models import MatchResult, PartOfSpeech, WordInfo, WordSource
from ..catalogue import TermCatalogue
from ..tokenizer import PosAnalyzer, simple_tokenize

logger = logging.getLogger(__name__)


def hint_cat_id(ai_hint: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Read the catID of an externally produced classification hint."""
    if not ai_hint:
        return None
    value = ai_hint.get("catID") or ai_hint.get("cat_id") or ai_hint.get("CatID")
    return str(value).strip() if value else None


class MatchingEngine(ABC):
    """
    匹配引擎基类

    Subclasses implement match() and match_bilingual(); the text-level
    helpers and identify_category() are shared.

    Scores are only comparable within one engine.
    """

    ENGINE_ID: str = ""

    def __init__(
        self,
        catalogue: TermCatalogue,
        analyzer: Optional[PosAnalyzer] = None,
        tokenizer_settings: Optional[TokenizerSettings] = None,
    ):
        self._catalogue = catalogue
        self._analyzer = analyzer
        self._tokenizer_settings = tokenizer_settings or (
            analyzer.settings if analyzer else TokenizerSettings()
        )

    @property
    def catalogue(self) -> TermCatalogue:
        return self._catalogue

    @property
    def tokenizer_settings(self) -> TokenizerSettings:
        return self._tokenizer_settings

    @property
    @abstractmethod
    def single_threshold(self) -> float:
        """Minimum accepted score for a single-language match."""

    @property
    @abstractmethod
    def bilingual_threshold(self) -> float:
        """Minimum accepted score for a bilingual match."""

    @property
    def noun_threshold(self) -> float:
        """Threshold of the noun-only last resort in identify_category()."""
        return self.single_threshold * 0.5

    @abstractmethod
    def match(self, words: Sequence[WordInfo], top_n: Optional[int] = None) -> List[MatchResult]:
        """Rank every term matched by the words, best first."""

    @abstractmethod
    def match_bilingual(
        self,
        original: Sequence[WordInfo],
        translated: Sequence[WordInfo],
        top_n: Optional[int] = None,
    ) -> List[MatchResult]:
        """Rank terms using both the original and the translated words."""

    def best_match(
        self,
        words: Sequence[WordInfo],
        threshold: Optional[float] = None,
    ) -> Optional[MatchResult]:
        threshold = self.single_threshold if threshold is None else threshold
        ranked = self.match(words, top_n=1)
        if ranked and ranked[0].score >= threshold:
            return ranked[0]
        return None

    def tokenize(self, text: str, source: WordSource = WordSource.ORIGINAL) -> List[WordInfo]:
        """POS analysis when an analyzer is wired in, plain splitting otherwise."""
        if not text:
            return []
        if self._analyzer is not None:
            return self._analyzer.analyze(text, source)
        return simple_tokenize(text, self._tokenizer_settings, source)

    def find_match(
        self,
        text: str,
        pos_analysis: Optional[Sequence[WordInfo]] = None,
        threshold: Optional[float] = None,
    ) -> Optional[MatchResult]:
        words = list(pos_analysis) if pos_analysis is not None else self.tokenize(text)
        if not words:
            return None
        return self.best_match(words, threshold)

    def get_all_matches(
        self,
        text: str,
        pos_analysis: Optional[Sequence[WordInfo]] = None,
        limit: int = 20,
    ) -> List[MatchResult]:
        words = list(pos_analysis) if pos_analysis is not None else self.tokenize(text)
        if not words:
            return []
        return self.match(words, top_n=limit)

    def find_match_with_bilingual_text(
        self,
        original_text: str,
        translated_text: str,
        original_pos: Optional[Sequence[WordInfo]] = None,
        translated_pos: Optional[Sequence[WordInfo]] = None,
        threshold: Optional[float] = None,
    ) -> Optional[MatchResult]:
        original = list(original_pos) if original_pos is not None else self.tokenize(original_text)
        translated = (
            list(translated_pos) if translated_pos is not None
            else self.tokenize(translated_text, WordSource.TRANSLATED)
        )
        if not original and not translated:
            return None

        threshold = self.bilingual_threshold if threshold is None else threshold
        ranked = self.match_bilingual(original, translated, top_n=1)
        if ranked and ranked[0].score >= threshold:
            return ranked[0]
        return None

    def identify_category(
        self,
        text: str,
        ai_hint: Optional[Mapping[str, Any]] = None,
        pos_analysis: Optional[Sequence[WordInfo]] = None,
        translated_text: Optional[str] = None,
        translated_pos: Optional[Sequence[WordInfo]] = None,
    ) -> Optional[str]:
        """
        Resolve a catID: valid AI hint, bilingual match, single-language
        match, then nouns alone at a lower threshold.
        """
        cat_id = hint_cat_id(ai_hint)
        if cat_id and self._catalogue.is_valid_cat_id(cat_id):
            return cat_id
        if cat_id:
            logger.debug(f"Ignoring unknown AI catID: {cat_id}")

        if translated_text:
            result = self.find_match_with_bilingual_text(text, translated_text, pos_analysis, translated_pos)
            if result:
                return result.cat_id

        words = list(pos_analysis) if pos_analysis is not None else self.tokenize(text)
        result = self.best_match(words) if words else None
        if result:
            return result.cat_id

        nouns = [w for w in words if w.pos is PartOfSpeech.NOUN and len(w.word) >= 2]
        if nouns:
            result = self.best_match(nouns, threshold=self.noun_threshold)
            if result:
                return result.cat_id
        return None
