"""
File Record Models

FileRecord carries one file through the pipeline: the host item data,
the extracted number, translations, the chosen classification and the
formatted output name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .term import MatchResult, TermRecord


class FileStatus(Enum):
    """处理状态"""
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class NumberParts:
    """
    Result of splitting a numeric suffix (or prefix) off a name.

    Attributes:
        text: Name without the number
        number: Digits as written in the original name ("" if none)
        prefix: True when the number led the name ("01 Door Slam")
        suffix: Bracket marker, "()" for names like "Door Slam(2)"
    """
    text: str
    number: str = ""
    prefix: bool = False
    suffix: str = ""

    @property
    def has_number(self) -> bool:
        return bool(self.number)


@dataclass
class ClassificationResult:
    """分类结果"""
    cat_id: str
    cat_short: str
    category: str
    category_zh: str
    sub_category: str
    sub_category_zh: str
    score: float = 0.0
    match_type: str = ""
    strategy: str = ""
    alternatives: List[MatchResult] = field(default_factory=list)

    @classmethod
    def from_term(
        cls,
        term: TermRecord,
        score: float = 0.0,
        match_type: str = "",
        strategy: str = "",
        alternatives: Optional[List[MatchResult]] = None,
    ) -> 'ClassificationResult':
        return cls(
            cat_id=term.cat_id,
            cat_short=term.cat_short,
            category=term.category,
            category_zh=term.category_zh,
            sub_category=term.source,
            sub_category_zh=term.target,
            score=score,
            match_type=match_type,
            strategy=strategy,
            alternatives=list(alternatives or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "catID": self.cat_id,
            "catShort": self.cat_short,
            "category": self.category,
            "category_zh": self.category_zh,
            "subCategory": self.sub_category,
            "subCategory_zh": self.sub_category_zh,
            "score": self.score,
            "matchType": self.match_type,
            "strategy": self.strategy,
        }


@dataclass
class FileRecord:
    """
    One file moving through the rename pipeline.

    Attributes:
        id: Host item id
        name: File name without extension
        extension: Extension without the dot
        path: Location reported by the host, if any
        tags: Host tags
        sequence: 1-based position in the batch (used for generated serials)
    """
    id: str
    name: str
    extension: str = ""
    path: Optional[Path] = None
    tags: List[str] = field(default_factory=list)
    sequence: int = 1

    # 预处理
    name_without_number: str = ""
    number: Optional[NumberParts] = None
    is_chinese: bool = False

    # 翻译
    translated_name: str = ""
    standardized_name: str = ""

    # 分类
    cat_id: str = ""
    cat_short: str = ""
    category: str = ""
    category_zh: str = ""
    sub_category: str = ""
    sub_category_zh: str = ""
    match_results: List[MatchResult] = field(default_factory=list)
    current_match_rank: int = 0

    # 结果
    formatted_name: str = ""
    status: FileStatus = FileStatus.PENDING
    error_message: str = ""

    @property
    def original_name(self) -> str:
        return f"{self.name}.{self.extension}" if self.extension else self.name

    @property
    def is_classified(self) -> bool:
        return bool(self.cat_id)

    def apply_classification(self, result: ClassificationResult) -> None:
        self.cat_id = result.cat_id
        self.cat_short = result.cat_short
        self.category = result.category
        self.category_zh = result.category_zh
        self.sub_category = result.sub_category
        self.sub_category_zh = result.sub_category_zh
        self.match_results = list(result.alternatives)
        self.current_match_rank = 0

    def apply_term(self, term: TermRecord) -> None:
        self.cat_id = term.cat_id
        self.cat_short = term.cat_short
        self.category = term.category
        self.category_zh = term.category_zh
        self.sub_category = term.source
        self.sub_category_zh = term.target

    def mark_error(self, message: str) -> None:
        self.status = FileStatus.ERROR
        self.error_message = message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "extension": self.extension,
            "translatedName": self.translated_name,
            "standardizedName": self.standardized_name,
            "catID": self.cat_id,
            "category": self.category,
            "category_zh": self.category_zh,
            "subCategory": self.sub_category,
            "subCategory_zh": self.sub_category_zh,
            "formattedName": self.formatted_name,
            "status": self.status.value,
            "error": self.error_message,
        }
