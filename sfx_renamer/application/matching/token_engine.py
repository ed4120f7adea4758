"""
Token Matching Engine

The primary ("universal") matcher. Every filtered word is scored against
every term; per-term totals accumulate weight × source weight × match score
× POS multiplier, with each (word, catID) pair counted once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ...core.config import MatchingSettings, TokenizerSettings
from ...core.utils import contains_cjk
from ...domain.models import (
    MatchedWord,
    MatchResult,
    PartOfSpeech,
    WordInfo,
    WordSource,
)
from ..catalogue import TermCatalogue
from ..tokenizer import PosAnalyzer
from .alignment import align_bilingual
from .base import MatchingEngine
from .scoring import MIN_CONTAINMENT_LENGTH, TermEntry, WordScorer, filter_words

logger = logging.getLogger(__name__)


@dataclass
class _TermScore:
    """Running totals for one term during a query."""
    entry: TermEntry
    total: float = 0.0
    count: int = 0
    exact: bool = False
    pos_scores: Dict[PartOfSpeech, float] = field(default_factory=dict)
    matched: List[MatchedWord] = field(default_factory=list)

    def add(self, word: WordInfo, match_score: float, contribution: float) -> None:
        self.total += contribution
        self.count += 1
        self.exact = self.exact or match_score >= 1.0
        self.pos_scores[word.pos] = self.pos_scores.get(word.pos, 0.0) + contribution
        self.matched.append(MatchedWord(word.word, word.pos, word.source, match_score))

    @property
    def dominant_pos(self) -> PartOfSpeech:
        # max() keeps the first bucket on ties
        return max(self.pos_scores, key=lambda pos: self.pos_scores[pos])

    @property
    def language_mix(self) -> str:
        sources = {w.source for w in self.matched}
        if len(sources) > 1:
            return "bilingual"
        if all(contains_cjk(w.word) for w in self.matched):
            return "chinese"
        return "english"


class TokenMatchingEngine(MatchingEngine):
    """
    通用匹配引擎

    Usage:
        engine = TokenMatchingEngine(catalogue, MatchingSettings(), analyzer=analyzer)
        best = engine.find_match("heavy door slam")
        ranked = engine.match_bilingual(chinese_words, english_words)
    """

    ENGINE_ID = "token"

    def __init__(
        self,
        catalogue: TermCatalogue,
        settings: Optional[MatchingSettings] = None,
        analyzer: Optional[PosAnalyzer] = None,
        tokenizer_settings: Optional[TokenizerSettings] = None,
    ):
        super().__init__(catalogue, analyzer, tokenizer_settings)
        self._settings = settings or MatchingSettings()
        self._scorer = WordScorer(self._settings)
        self._entries = [TermEntry.build(term, i) for i, term in enumerate(catalogue)]
        logger.debug(f"Token engine indexed {len(self._entries)} terms")

    @property
    def settings(self) -> MatchingSettings:
        return self._settings

    @property
    def single_threshold(self) -> float:
        return self._settings.single_threshold

    @property
    def bilingual_threshold(self) -> float:
        return self._settings.bilingual_threshold

    def match(self, words: Sequence[WordInfo], top_n: Optional[int] = None) -> List[MatchResult]:
        return self._rank(words, bilingual=False, top_n=top_n)

    def match_bilingual(
        self,
        original: Sequence[WordInfo],
        translated: Sequence[WordInfo],
        top_n: Optional[int] = None,
    ) -> List[MatchResult]:
        original = [w if w.source is WordSource.ORIGINAL else replace(w, source=WordSource.ORIGINAL)
                    for w in filter_words(original)]
        translated = [w if w.source is WordSource.TRANSLATED else replace(w, source=WordSource.TRANSLATED)
                      for w in filter_words(translated)]

        original, translated = align_bilingual(
            original,
            translated,
            self._settings.alignment_bonus,
            self._settings.alignment_max_pairs,
        )
        return self._rank(original + translated, bilingual=True, top_n=top_n)

    def _source_weight(self, word: WordInfo, bilingual: bool) -> float:
        s = self._settings
        if bilingual:
            if word.source is WordSource.ORIGINAL:
                return s.bilingual_original_weight
            return s.bilingual_translated_weight
        if word.source is WordSource.ORIGINAL:
            return s.original_source_weight
        return s.translated_source_weight

    def _multiplier(self, word: WordInfo, entry: TermEntry, bilingual: bool) -> float:
        s = self._settings
        if word.pos is PartOfSpeech.NOUN:
            boost = s.bilingual_noun_boost if bilingual else s.noun_boost
            if self._scorer.is_category_relevant(word.word, entry):
                boost = max(boost, s.category_relevance_boost)
            return boost
        if word.pos is PartOfSpeech.ADJECTIVE:
            return s.bilingual_adjective_boost if bilingual else s.adjective_boost
        if word.pos is PartOfSpeech.VERB:
            return s.bilingual_verb_boost if bilingual else s.verb_boost
        return 1.0

    def _multi_word_bonus(self, state: _TermScore) -> float:
        """Reward multi-word sources ("Door Wood") hit by several words."""
        source_words = state.entry.source_words
        if len(source_words) < 2:
            return 1.0

        matched = {w.word.lower() for w in state.matched if not contains_cjk(w.word)}
        hits = 0
        for source_word in source_words:
            for word in matched:
                if word == source_word or (
                    min(len(word), len(source_word)) >= MIN_CONTAINMENT_LENGTH
                    and (word in source_word or source_word in word)
                ):
                    hits += 1
                    break
        return self._settings.multi_word_bonus if hits >= 2 else 1.0

    def _accumulate(self, words: Sequence[WordInfo], bilingual: bool) -> Dict[str, _TermScore]:
        states: Dict[str, _TermScore] = {}
        seen: Set[Tuple[str, str]] = set()

        for word in words:
            key_word = word.word.strip().lower()
            for entry in self._entries:
                key = (key_word, entry.term.cat_id)
                if key in seen:
                    continue

                match_score = self._scorer.score(key_word, entry)
                if match_score <= 0:
                    continue
                seen.add(key)

                contribution = (
                    word.weight
                    * self._source_weight(word, bilingual)
                    * match_score
                    * self._multiplier(word, entry, bilingual)
                )
                state = states.get(entry.term.cat_id)
                if state is None:
                    state = states[entry.term.cat_id] = _TermScore(entry)
                state.add(word, match_score, contribution)

        return states

    def _rank(
        self,
        words: Sequence[WordInfo],
        bilingual: bool,
        top_n: Optional[int] = None,
    ) -> List[MatchResult]:
        words = filter_words(words)
        if not words or not self._entries:
            return []

        states = list(self._accumulate(words, bilingual).values())
        for state in states:
            state.total *= self._multi_word_bonus(state)

        # 单词查询时精确匹配优先; 其余按总分降序 (稳定排序)
        exact_first = len({w.word.lower() for w in words}) == 1
        states.sort(key=lambda st: (not (exact_first and st.exact), -st.total))

        if top_n is not None:
            states = states[:top_n]

        results = [
            MatchResult(
                term=state.entry.term,
                score=state.total,
                match_type=f"{state.language_mix}_{state.dominant_pos.value}",
                rank=rank,
                match_count=state.count,
                matched_words=list(state.matched),
            )
            for rank, state in enumerate(states)
        ]
        if results:
            logger.debug(
                f"Top match {results[0].cat_id} score={results[0].score:.2f} "
                f"type={results[0].match_type} ({len(results)} candidates)"
            )
        return results
