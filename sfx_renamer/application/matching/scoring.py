"""
Word Scoring

Language-aware comparison of one word against the labels of one term.
CJK words need an exact or boundary match; Latin words are tried, in
order, for exact, whole-word, containment and shared-stem matches.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ...core.config import MatchingSettings
from ...core.utils import contains_cjk, contains_latin
from ...domain.models import PartOfSpeech, TermRecord, WordInfo
from ..tokenizer.stopwords import CHINESE_STOP_WORDS, is_english_stop_word

logger = logging.getLogger(__name__)

# 纯数字、字母+数字编号、纯标点
NOISE_TOKEN = re.compile(r"^(?:\d+|[a-z]\d+|[\W_]+)$", re.IGNORECASE)
LATIN_WORD_SPLIT = re.compile(r"[^a-z0-9']+")

MIN_CONTAINMENT_LENGTH = 3
MIN_PARTIAL_LENGTH = 4


@dataclass(frozen=True)
class TermEntry:
    """Pre-lowered labels of one term."""
    term: TermRecord
    order: int
    cjk_fields: Tuple[str, ...]
    latin_fields: Tuple[str, ...]
    category_labels: Tuple[str, ...]
    source_words: Tuple[str, ...]

    @classmethod
    def build(cls, term: TermRecord, order: int) -> 'TermEntry':
        fields = [f.strip().lower() for f in term.match_fields]
        source = term.source.lower()
        return cls(
            term=term,
            order=order,
            cjk_fields=tuple(f for f in fields if contains_cjk(f)),
            latin_fields=tuple(f for f in fields if contains_latin(f) and not contains_cjk(f)),
            category_labels=tuple(
                label.strip().lower() for label in (term.category, term.category_zh) if label.strip()
            ),
            source_words=tuple(w for w in LATIN_WORD_SPLIT.split(source) if w),
        )


def filter_words(words: Iterable[WordInfo]) -> List[WordInfo]:
    """
    Drop numbering, punctuation, stop words and lone non-Latin 'other' tokens.
    """
    kept: List[WordInfo] = []
    for word in words:
        text = word.word.strip()
        if not text:
            continue
        lower = text.lower()
        if NOISE_TOKEN.match(lower):
            continue
        if is_english_stop_word(lower) or lower in CHINESE_STOP_WORDS:
            continue
        if len(text) == 1 and not contains_latin(text) and word.pos is PartOfSpeech.OTHER:
            continue
        kept.append(word)
    return kept


def _common_prefix(a: str, b: str) -> int:
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


def _common_suffix(a: str, b: str) -> int:
    return _common_prefix(a[::-1], b[::-1])


class WordScorer:
    """
    Scores a word against a term on a 0..1 scale.

    Usage:
        scorer = WordScorer(MatchingSettings())
        scorer.score("footstep", entry)  # 1.0 for an exact label
    """

    def __init__(self, settings: Optional[MatchingSettings] = None):
        self._settings = settings or MatchingSettings()

    def score(self, word: str, entry: TermEntry) -> float:
        word = word.strip().lower()
        if not word:
            return 0.0
        if contains_cjk(word):
            return self._score_cjk(word, entry.cjk_fields)
        return self._score_latin(word, entry.latin_fields)

    def _score_cjk(self, word: str, fields: Iterable[str]) -> float:
        best = 0.0
        for field in fields:
            if field == word:
                return 1.0
            if field.startswith(word) or field.endswith(word):
                best = max(best, self._settings.cjk_boundary_factor * len(word) / len(field))
        return best

    def _score_latin(self, word: str, fields: Iterable[str]) -> float:
        best = 0.0
        for field in fields:
            best = max(best, self.score_latin_field(word, field))
            if best >= 1.0:
                break
        return best

    def score_latin_field(self, word: str, field: str) -> float:
        s = self._settings
        if word == field:
            return 1.0

        try:
            if re.search(rf"\b{re.escape(word)}\b", field):
                return s.word_boundary_score
        except re.error as e:
            logger.debug(f"Pattern failed for {word!r}: {e}")
            return s.fallback_contains_score if word in field else 0.0

        if len(word) >= MIN_CONTAINMENT_LENGTH and word in field:
            return s.word_in_field_score * len(word) / len(field)
        if len(field) >= MIN_CONTAINMENT_LENGTH and field in word:
            return s.field_in_word_score * len(field) / len(word)

        shorter = min(len(word), len(field))
        if shorter < MIN_PARTIAL_LENGTH:
            return 0.0
        shared = max(_common_prefix(word, field), _common_suffix(word, field))
        if shared >= MIN_PARTIAL_LENGTH and shared / shorter >= 0.6:
            return s.partial_score * shared / max(len(word), len(field))
        return 0.0

    def is_category_relevant(self, word: str, entry: TermEntry) -> bool:
        """Word names the term's category label (either language)."""
        word = word.strip().lower()
        if not word:
            return False
        for label in entry.category_labels:
            if word == label:
                return True
            if contains_cjk(word):
                if len(word) >= 2 and word in label:
                    return True
            elif len(word) >= MIN_CONTAINMENT_LENGTH and re.search(rf"\b{re.escape(word)}", label):
                return True
        return False
