"""
Chinese Segmentation

A chain of word-boundary segmenters: jieba's dictionary segmenter with POS
tags first, single-character splitting as the last resort. Each segmenter
returns (word, tag) pairs using jieba/ICTCLAS style tags.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

import jieba.posseg

from ...core.utils import CJK_PATTERN
from ...domain.models import PartOfSpeech
from .stopwords import CHINESE_STOP_WORDS

logger = logging.getLogger(__name__)

# 归为 other 的词性标记
OTHER_TAGS = frozenset({
    "x", "w", "m", "mq", "p", "c", "r", "q", "e", "y", "o", "i", "l", "eng",
})
NOUN_TAGS = frozenset({"j", "s", "t", "tg", "f"})


def map_chinese_pos(tag: str) -> PartOfSpeech:
    """
    词性标记映射

    a → adjective, v → verb, d → adverb, n* → noun; unknown tags → noun.
    """
    tag = (tag or "").lower()
    if not tag:
        return PartOfSpeech.NOUN
    if tag == "ad" or tag.startswith("d"):
        return PartOfSpeech.ADVERB
    if tag.startswith("a"):
        return PartOfSpeech.ADJECTIVE
    if tag.startswith("v"):
        return PartOfSpeech.VERB
    if tag.startswith("n") or tag in NOUN_TAGS:
        return PartOfSpeech.NOUN
    if tag in OTHER_TAGS or tag.startswith("u"):
        return PartOfSpeech.OTHER
    return PartOfSpeech.NOUN


class ChineseSegmenter(ABC):
    """Word-boundary segmenter for a run of CJK text."""

    name: str = "base"

    @abstractmethod
    def segment(self, text: str) -> List[Tuple[str, str]]:
        """Return (word, tag) pairs; an empty list means 'could not segment'."""


class JiebaSegmenter(ChineseSegmenter):
    """Dictionary-based segmentation and tagging via jieba.posseg."""

    name = "jieba"

    def segment(self, text: str) -> List[Tuple[str, str]]:
        return [
            (pair.word.strip(), pair.flag)
            for pair in jieba.posseg.lcut(text)
            if pair.word.strip()
        ]


class CharacterSegmenter(ChineseSegmenter):
    """Last resort: every ideograph is its own noun."""

    name = "character"

    def segment(self, text: str) -> List[Tuple[str, str]]:
        return [(char, "n") for char in text if CJK_PATTERN.match(char)]


def default_segmenters() -> List[ChineseSegmenter]:
    return [JiebaSegmenter(), CharacterSegmenter()]


class ChineseTagger:
    """Runs the segmenter chain and maps tags, excluding stop words."""

    def __init__(self, segmenters: Sequence[ChineseSegmenter] = ()):
        self._segmenters = list(segmenters) or default_segmenters()

    def tag(self, text: str) -> List[Tuple[str, PartOfSpeech]]:
        if not text:
            return []

        for segmenter in self._segmenters:
            try:
                pairs = segmenter.segment(text)
            except Exception as e:
                logger.warning(f"Segmenter {segmenter.name} failed on {text!r}: {e}")
                continue
            if pairs:
                return [
                    (word, map_chinese_pos(tag))
                    for word, tag in pairs
                    if word not in CHINESE_STOP_WORDS
                ]
        return []
