"""
Fuzzy Matching Engine

Approximate string similarity over the term labels (source, target,
category, synonyms) with per-field weights. Similarities are 0..1
internally and reported on a 0..1000 scale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from ...core.config import FuzzySettings, TokenizerSettings
from ...domain.models import (
    MatchedWord,
    MatchResult,
    PartOfSpeech,
    TermRecord,
    WordInfo,
    WordSource,
)
from ..catalogue import TermCatalogue
from ..tokenizer import PosAnalyzer
from .base import MatchingEngine
from .scoring import filter_words

logger = logging.getLogger(__name__)

# 匹配成功后的词级相似度下限
WORD_HIT_SIMILARITY = 0.8


@dataclass(frozen=True)
class _FuzzyEntry:
    term: TermRecord
    fields: Tuple[Tuple[str, float], ...]  # (lower-cased value, normalized weight)


class FuzzyMatchingEngine(MatchingEngine):
    """
    模糊匹配引擎

    Usage:
        engine = FuzzyMatchingEngine(catalogue, FuzzySettings())
        best = engine.find_match("foot step snow")
    """

    ENGINE_ID = "fuzzy"

    def __init__(
        self,
        catalogue: TermCatalogue,
        settings: Optional[FuzzySettings] = None,
        analyzer: Optional[PosAnalyzer] = None,
        tokenizer_settings: Optional[TokenizerSettings] = None,
    ):
        super().__init__(catalogue, analyzer, tokenizer_settings)
        self._settings = settings or FuzzySettings()
        self._entries = [self._build_entry(term) for term in catalogue]
        logger.debug(f"Fuzzy engine indexed {len(self._entries)} terms")

    @property
    def settings(self) -> FuzzySettings:
        return self._settings

    @property
    def single_threshold(self) -> float:
        return self._settings.single_threshold * self._settings.score_scale

    @property
    def bilingual_threshold(self) -> float:
        return self._settings.bilingual_threshold

    def _build_entry(self, term: TermRecord) -> _FuzzyEntry:
        weights = self._settings.field_weights
        top = max(weights.values()) if weights else 1.0
        values = [
            (term.source, weights.get("source", 0.0)),
            (term.target, weights.get("target", 0.0)),
            (term.category, weights.get("category", 0.0)),
            *((s, weights.get("synonyms", 0.0)) for s in term.synonym_list),
            *((s, weights.get("synonyms_zh", 0.0)) for s in term.synonym_zh_list),
        ]
        fields: Dict[str, float] = {}
        for value, weight in values:
            value = value.strip().lower()
            if len(value) < self._settings.min_match_length or weight <= 0:
                continue
            fields[value] = max(fields.get(value, 0.0), weight / top)
        return _FuzzyEntry(term, tuple(fields.items()))

    def _similarity(self, query: str, value: str) -> float:
        if not query or not value:
            return 0.0
        scores = [fuzz.ratio(query, value), fuzz.token_set_ratio(query, value)]
        if len(value) >= 3 and len(query) >= self._settings.min_match_length:
            scores.append(fuzz.partial_ratio(value, query) * 0.9)
        return max(scores) / 100.0

    def _term_similarity(self, query: str, entry: _FuzzyEntry) -> float:
        return max(
            (self._similarity(query, value) * weight for value, weight in entry.fields),
            default=0.0,
        )

    def _search(self, words: Sequence[WordInfo]) -> List[Tuple[_FuzzyEntry, float, List[WordInfo]]]:
        """
        Score every term against the joined text and against each noun.

        Nouns count in proportion to their weight, the way repeating heavy
        nouns strengthens a query.
        """
        query = " ".join(w.word.lower() for w in words)
        nouns = [
            w for w in words
            if w.pos is PartOfSpeech.NOUN and len(w.word) >= self._settings.min_match_length
        ]

        found = []
        for entry in self._entries:
            score = self._term_similarity(query, entry)
            for noun in nouns:
                noun_score = self._term_similarity(noun.word.lower(), entry) * min(1.0, noun.weight / 100.0)
                score = max(score, noun_score)
            if score < self._settings.candidate_cutoff:
                continue
            hits = [w for w in words if self._term_similarity(w.word.lower(), entry) >= WORD_HIT_SIMILARITY]
            found.append((entry, score, hits))

        found.sort(key=lambda item: -item[1])
        return found

    def match(self, words: Sequence[WordInfo], top_n: Optional[int] = None) -> List[MatchResult]:
        words = filter_words(words)
        if not words:
            return []

        scale = self._settings.score_scale
        found = self._search(words)
        if top_n is not None:
            found = found[:top_n]

        return [
            MatchResult(
                term=entry.term,
                score=score * scale,
                match_type="fuzzy_noun" if any(w.pos is PartOfSpeech.NOUN for w in hits) else "fuzzy_text",
                rank=rank,
                match_count=len(hits),
                matched_words=[MatchedWord(w.word, w.pos, w.source, score) for w in hits],
            )
            for rank, (entry, score, hits) in enumerate(found)
        ]

    def match_bilingual(
        self,
        original: Sequence[WordInfo],
        translated: Sequence[WordInfo],
        top_n: Optional[int] = None,
    ) -> List[MatchResult]:
        """
        Merge per-catID scores of both texts, then boost by the POS of the
        words that hit the term.
        """
        s = self._settings
        merged: Dict[str, List] = {}

        for words, weight, source in (
            (filter_words(original), s.original_weight, WordSource.ORIGINAL),
            (filter_words(translated), s.translated_weight, WordSource.TRANSLATED),
        ):
            if not words:
                continue
            for entry, score, hits in self._search(words):
                slot = merged.setdefault(entry.term.cat_id, [entry.term, 0.0, []])
                slot[1] += score * s.score_scale * weight
                slot[2].extend((w, source, score) for w in hits)

        ranked = []
        for term, score, hits in merged.values():
            boost = sum(
                w.weight * s.pos_boost_factors.get(w.pos.value, 0.0) / 100.0
                for w, _, _ in hits
            )
            matched = [MatchedWord(w.word, w.pos, source, sim) for w, source, sim in hits]
            ranked.append((term, score * (1.0 + boost), matched))

        ranked.sort(key=lambda item: -item[1])
        if top_n is not None:
            ranked = ranked[:top_n]

        return [
            MatchResult(
                term=term,
                score=score,
                match_type="fuzzy_bilingual",
                rank=rank,
                match_count=len(hits),
                matched_words=hits,
            )
            for rank, (term, score, hits) in enumerate(ranked)
        ]

