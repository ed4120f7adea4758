"""
Term and Match Models

TermRecord is one row of the controlled vocabulary. WordInfo is one tagged
word produced by the tokenizer. MatchResult is one ranked candidate produced
by a matching engine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any, Dict, List, Mapping, Optional, Tuple

# 同义词分隔符: 英文/中文逗号、分号、顿号
SYNONYM_SEPARATORS = re.compile(r"[,，;；、]")


def split_synonyms(value: str) -> Tuple[str, ...]:
    """Split a delimiter-separated synonym string, dropping blanks."""
    if not value:
        return ()
    return tuple(part.strip() for part in SYNONYM_SEPARATORS.split(value) if part.strip())


class PartOfSpeech(Enum):
    """词性"""
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    OTHER = "other"


class WordSource(Enum):
    """Which text a word was taken from."""
    ORIGINAL = "original"
    TRANSLATED = "translated"


def _cell(row: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = row.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


@dataclass(frozen=True)
class TermRecord:
    """
    One taxonomy entry.

    Attributes:
        source: Canonical sub-category label (usually English)
        target: Paired label (usually Chinese), defaults to source
        cat_id: Unique sub-category identifier
        cat_short: Short code, defaults to the first 4 chars of cat_id
        category: Coarse category label
        category_zh: Chinese category label, defaults to category
        synonyms: Delimiter-separated alternate terms
        synonyms_zh: Delimiter-separated Chinese alternate terms
    """
    source: str
    target: str
    cat_id: str
    cat_short: str = ""
    category: str = ""
    category_zh: str = ""
    synonyms: str = ""
    synonyms_zh: str = ""

    @cached_property
    def synonym_list(self) -> Tuple[str, ...]:
        return split_synonyms(self.synonyms)

    @cached_property
    def synonym_zh_list(self) -> Tuple[str, ...]:
        return split_synonyms(self.synonyms_zh)

    @cached_property
    def match_fields(self) -> Tuple[str, ...]:
        """All labels a word may be matched against, deduplicated in field order."""
        fields = [self.source, self.target, *self.synonym_list, *self.synonym_zh_list]
        return tuple(dict.fromkeys(f for f in fields if f))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Optional['TermRecord']:
        """
        Build a record from a catalogue row.

        Returns None when the row has no SubCategory or no CatID.
        """
        source = _cell(row, "SubCategory", "source")
        cat_id = _cell(row, "CatID", "catID", "cat_id")
        if not source or not cat_id:
            return None

        category = _cell(row, "Category", "category")
        return cls(
            source=source,
            target=_cell(row, "SubCategory_zh", "target") or source,
            cat_id=cat_id,
            cat_short=_cell(row, "CatShort", "catShort", "cat_short") or cat_id[:4],
            category=category,
            category_zh=_cell(row, "Category_zh", "categoryNameZh", "category_zh") or category,
            synonyms=_cell(row, "Synonyms", "Synonyms - Comma Separated", "synonyms"),
            synonyms_zh=_cell(row, "Synonyms_zh", "synonymsZh", "synonyms_zh"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "catID": self.cat_id,
            "catShort": self.cat_short,
            "category": self.category,
            "categoryNameZh": self.category_zh,
            "synonyms": self.synonyms,
            "synonymsZh": self.synonyms_zh,
        }


@dataclass(frozen=True)
class WordInfo:
    """A tagged word with its importance weight."""
    word: str
    pos: PartOfSpeech
    weight: float
    source: WordSource = WordSource.ORIGINAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "pos": self.pos.value,
            "weight": self.weight,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class MatchedWord:
    """A word that contributed to a MatchResult."""
    word: str
    pos: PartOfSpeech
    source: WordSource
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "pos": self.pos.value, "source": self.source.value}


@dataclass
class MatchResult:
    """
    One ranked candidate term.

    Scores are comparable within one query of one engine only.
    """
    term: TermRecord
    score: float
    match_type: str = ""
    rank: int = 0
    match_count: int = 0
    matched_words: List[MatchedWord] = field(default_factory=list)

    @property
    def cat_id(self) -> str:
        return self.term.cat_id

    def to_dict(self, all_matches: Optional[List['MatchResult']] = None) -> Dict[str, Any]:
        data = {
            "term": self.term.to_dict(),
            "catID": self.cat_id,
            "score": self.score,
            "matchType": self.match_type,
            "rank": self.rank,
            "matchedWords": [w.to_dict() for w in self.matched_words],
        }
        if all_matches is not None:
            data["allMatches"] = [
                {"catID": m.cat_id, "score": m.score, "rank": m.rank, "matchType": m.match_type}
                for m in all_matches
            ]
        return data
