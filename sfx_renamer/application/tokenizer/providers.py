"""
POS Analysis Providers

Each provider exposes the same try_analyze(text) contract and returns
None on failure, so the analyzer can walk a prioritized list until one
succeeds.
"""

from __future__ import annotations

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import aiohttp

from ...core.config import TokenizerSettings
from ...core.utils import CJK_RUN_PATTERN, contains_cjk, contains_latin
from ...domain.exceptions import NLPServiceError
from ...domain.models import PartOfSpeech, WordInfo
from ...infrastructure.external_apis import NLPServiceClient
from .chinese import ChineseSegmenter, ChineseTagger
from .english import EnglishTagger

logger = logging.getLogger(__name__)

FALLBACK_SPLIT = re.compile(r"[\s_\-.]+")


class PosProvider(ABC):
    """
    A POS analysis back-end.

    try_analyze returns None when the provider cannot handle the text; an
    empty list is a valid answer only from the final local provider.
    """

    name: str = "base"

    @abstractmethod
    def try_analyze(self, text: str) -> Optional[List[WordInfo]]:
        pass

    async def try_analyze_async(self, text: str) -> Optional[List[WordInfo]]:
        return self.try_analyze(text)

    async def cleanup(self) -> None:
        """Release resources (optional)."""


class LocalPosProvider(PosProvider):
    """
    本地词性分析

    Routes CJK runs to the Chinese segmenter chain and the remaining text to
    the English tagger, keeping the order in which the words appear.
    """

    name = "local"

    def __init__(
        self,
        settings: Optional[TokenizerSettings] = None,
        english: Optional[EnglishTagger] = None,
        segmenters: Sequence[ChineseSegmenter] = (),
    ):
        self._settings = settings or TokenizerSettings()
        self._english = english or EnglishTagger(strip_verb_ing=self._settings.strip_verb_ing)
        self._chinese = ChineseTagger(segmenters)

    def _word(self, word: str, pos: PartOfSpeech) -> WordInfo:
        return WordInfo(word, pos, self._settings.weight_for(pos.value))

    def try_analyze(self, text: str) -> Optional[List[WordInfo]]:
        if not text or not text.strip():
            return []

        words: List[WordInfo] = []
        position = 0
        for run in CJK_RUN_PATTERN.finditer(text):
            words.extend(self._analyze_latin(text[position:run.start()]))
            words.extend(self._word(w, pos) for w, pos in self._chinese.tag(run.group()))
            position = run.end()
        words.extend(self._analyze_latin(text[position:]))

        if not words:
            words = self._fallback(text)
        return words

    def _analyze_latin(self, text: str) -> List[WordInfo]:
        if not contains_latin(text) and not any(c.isdigit() for c in text):
            return []
        return [self._word(w, pos) for w, pos in self._english.tag(text)]

    def _fallback(self, text: str) -> List[WordInfo]:
        """Nothing tagged: keep every piece as 'other', CJK runs as nouns."""
        words: List[WordInfo] = []
        for piece in FALLBACK_SPLIT.split(text):
            if not piece:
                continue
            pos = PartOfSpeech.NOUN if contains_cjk(piece) else PartOfSpeech.OTHER
            words.append(self._word(piece.lower(), pos))
        return words


class RemotePosProvider(PosProvider):
    """
    External NLP service provider.

    Only usable from async code. Pure-Latin text is left to the local
    English tagger.
    """

    name = "remote"

    def __init__(self, client: NLPServiceClient):
        self._client = client

    def try_analyze(self, text: str) -> Optional[List[WordInfo]]:
        return None

    async def try_analyze_async(self, text: str) -> Optional[List[WordInfo]]:
        if not self._client.enabled or not contains_cjk(text):
            return None

        try:
            words = await self._client.analyze_pos(text)
        except (NLPServiceError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"NLP service unavailable, falling back to local analysis: {e}")
            return None

        return words or None

    async def cleanup(self) -> None:
        await self._client.cleanup()
