"""
Smart Classifier

智能分类器: 按优先级依次尝试各分类策略, 第一个成功的策略胜出。

Default order:
    ai -> bilingual -> pos -> translated -> plain -> first_token

Every strategy can be switched off or reordered through
ClassificationSettings.strategies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ...core.config import ClassificationSettings, StrategyConfig
from ...core.utils import is_chinese_text
from ...domain.models import ClassificationResult, MatchResult, WordInfo, WordSource
from ..catalogue import TermCatalogue
from ..matching import MatchingEngine, hint_cat_id
from ..tokenizer import PosAnalyzer, simple_tokenize

logger = logging.getLogger(__name__)


@dataclass
class _Request:
    """Inputs of one classification call."""
    text: str
    ai_hint: Optional[Mapping[str, Any]] = None
    pos_analysis: Optional[List[WordInfo]] = None
    translated_text: Optional[str] = None
    translated_pos: Optional[List[WordInfo]] = None


class SmartClassifier:
    """
    分类编排器

    Usage:
        classifier = SmartClassifier(catalogue, engine, analyzer)
        result = classifier.classify_file("footsteps on snow 01")
        cat_id = classifier.identify_category("关门声", translated_text="door close")
    """

    def __init__(
        self,
        catalogue: TermCatalogue,
        engine: MatchingEngine,
        analyzer: Optional[PosAnalyzer] = None,
        settings: Optional[ClassificationSettings] = None,
    ):
        self._catalogue = catalogue
        self._engine = engine
        self._analyzer = analyzer
        self._settings = settings or ClassificationSettings()
        self._handlers: Dict[str, Callable[[_Request, StrategyConfig], Optional[ClassificationResult]]] = {
            "ai": self._try_ai,
            "bilingual": self._try_bilingual,
            "pos": self._try_pos,
            "translated": self._try_translated,
            "plain": self._try_plain,
            "first_token": self._try_first_token,
        }

    @property
    def settings(self) -> ClassificationSettings:
        return self._settings

    @property
    def engine(self) -> MatchingEngine:
        return self._engine

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify_file(
        self,
        filename: str,
        ai_hint: Optional[Mapping[str, Any]] = None,
        translated_text: Optional[str] = None,
        translated_pos: Optional[Sequence[WordInfo]] = None,
        pos_analysis: Optional[Sequence[WordInfo]] = None,
    ) -> Optional[ClassificationResult]:
        """
        Classify a file name.

        Args:
            filename: Name to classify (number already removed, ideally)
            ai_hint: Externally produced {"catID": ...} suggestion
            translated_text: Translation of the name, enables bilingual matching
            translated_pos: Pre-computed analysis of translated_text
            pos_analysis: Pre-computed analysis of filename

        Returns:
            ClassificationResult, or None when every strategy failed.
        """
        if not self._catalogue:
            logger.debug("Classification skipped: catalogue is empty")
            return None

        text = (filename or "").strip()
        if not text and not hint_cat_id(ai_hint):
            return None

        request = _Request(
            text=text,
            ai_hint=ai_hint,
            pos_analysis=list(pos_analysis) if pos_analysis is not None else None,
            translated_text=(translated_text or "").strip() or None,
            translated_pos=list(translated_pos) if translated_pos is not None else None,
        )

        for strategy in self._settings.strategies.enabled_strategies():
            handler = self._handlers.get(strategy.key)
            if handler is None:
                logger.warning(f"Unknown classification strategy: {strategy.key}")
                continue
            result = handler(request, strategy)
            if result is not None:
                logger.debug(
                    f"Classified {text!r} as {result.cat_id} via {result.strategy} "
                    f"(score={result.score:.2f})"
                )
                return result

        logger.debug(f"No category found for {text!r}")
        return None

    def identify_category(
        self,
        text: str,
        pos_analysis: Optional[Sequence[WordInfo]] = None,
        translated_text: Optional[str] = None,
        translated_pos: Optional[Sequence[WordInfo]] = None,
        ai_hint: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        """Same cascade as classify_file(), returning only the catID."""
        result = self.classify_file(
            text,
            ai_hint=ai_hint,
            translated_text=translated_text,
            translated_pos=translated_pos,
            pos_analysis=pos_analysis,
        )
        return result.cat_id if result else None

    def validate_cat_id(self, cat_id: Optional[str]) -> bool:
        return self._catalogue.is_valid_cat_id(cat_id)

    def process_ai_classification(
        self,
        hint: Optional[Mapping[str, Any]],
        text: str = "",
    ) -> Optional[ClassificationResult]:
        """
        验证AI分类结果

        The hint is accepted only when its catID exists in the catalogue;
        otherwise it is discarded so the remaining strategies can run.
        """
        cat_id = hint_cat_id(hint)
        if not cat_id:
            return None

        term = self._catalogue.find_term_by_cat_id(cat_id)
        if term is None:
            if self._settings.validate_ai_classification:
                logger.warning(f"Discarding AI classification with unknown catID: {cat_id}")
            else:
                logger.debug(f"AI catID {cat_id} not in catalogue, no term to build a result from")
            return None

        selected = MatchResult(term=term, score=1.0, match_type="ai", rank=0, match_count=1)
        alternatives = [selected]
        if text:
            others = [m for m in self._rank(self._tokenize(text)) if m.cat_id != cat_id]
            for rank, match in enumerate(others[: self._settings.alternatives_limit - 1], start=1):
                match.rank = rank
                alternatives.append(match)

        return ClassificationResult.from_term(
            term,
            score=selected.score,
            match_type="ai",
            strategy="ai",
            alternatives=alternatives,
        )

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _try_ai(self, request: _Request, strategy: StrategyConfig) -> Optional[ClassificationResult]:
        if not request.ai_hint:
            return None
        return self.process_ai_classification(request.ai_hint, request.text)

    def _try_bilingual(self, request: _Request, strategy: StrategyConfig) -> Optional[ClassificationResult]:
        if not request.translated_text or not request.text:
            return None
        original = self._original_words(request)
        translated = self._translated_words(request)
        if not original and not translated:
            return None

        ranked = self._engine.match_bilingual(
            original, translated, top_n=self._settings.alternatives_limit
        )
        threshold = self._threshold(strategy, self._engine.bilingual_threshold)
        return self._accept(ranked, threshold, strategy.key)

    def _try_pos(self, request: _Request, strategy: StrategyConfig) -> Optional[ClassificationResult]:
        return self._single(self._original_words(request), strategy)

    def _try_translated(self, request: _Request, strategy: StrategyConfig) -> Optional[ClassificationResult]:
        if not request.translated_text:
            return None
        return self._single(self._translated_words(request), strategy)

    def _try_plain(self, request: _Request, strategy: StrategyConfig) -> Optional[ClassificationResult]:
        words = simple_tokenize(request.text, self._engine.tokenizer_settings)
        return self._single(words, strategy)

    def _try_first_token(self, request: _Request, strategy: StrategyConfig) -> Optional[ClassificationResult]:
        """
        Retry with the leading segment of the name at a lowered threshold.

        File names tend to put the most specific descriptor first.
        """
        segment = self._first_segment(request.text)
        if not segment:
            return None

        factor = self._settings.first_token_threshold_factor
        threshold = self._threshold(strategy, self._engine.single_threshold * factor)

        for words in (self._tokenize(segment), simple_tokenize(segment, self._engine.tokenizer_settings)):
            result = self._accept(self._rank(words), threshold, strategy.key)
            if result:
                return result
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _first_segment(self, text: str) -> str:
        text = text.strip()
        if " " in text:
            return text.split(" ", 1)[0]

        if self._settings.apply_first_token_to_unspaced_cjk and is_chinese_text(text):
            words = self._tokenize(text)
            if len(words) > 1:
                return words[0].word
        return ""

    def _tokenize(self, text: str, source: WordSource = WordSource.ORIGINAL) -> List[WordInfo]:
        if not text:
            return []
        if self._analyzer is not None:
            return self._analyzer.analyze(text, source)
        return self._engine.tokenize(text, source)

    def _original_words(self, request: _Request) -> List[WordInfo]:
        if request.pos_analysis is None:
            request.pos_analysis = self._tokenize(request.text)
        return request.pos_analysis

    def _translated_words(self, request: _Request) -> List[WordInfo]:
        if request.translated_pos is None:
            request.translated_pos = self._tokenize(request.translated_text or "", WordSource.TRANSLATED)
        return request.translated_pos

    def _rank(self, words: Sequence[WordInfo]) -> List[MatchResult]:
        if not words:
            return []
        return self._engine.match(words, top_n=self._settings.alternatives_limit)

    def _single(self, words: Sequence[WordInfo], strategy: StrategyConfig) -> Optional[ClassificationResult]:
        threshold = self._threshold(strategy, self._engine.single_threshold)
        return self._accept(self._rank(words), threshold, strategy.key)

    @staticmethod
    def _threshold(strategy: StrategyConfig, default: float) -> float:
        return default if strategy.threshold is None else strategy.threshold

    @staticmethod
    def _accept(
        ranked: List[MatchResult],
        threshold: float,
        strategy: str,
    ) -> Optional[ClassificationResult]:
        if not ranked or ranked[0].score < threshold:
            return None
        best = ranked[0]
        return ClassificationResult.from_term(
            best.term,
            score=best.score,
            match_type=best.match_type,
            strategy=strategy,
            alternatives=ranked,
        )
