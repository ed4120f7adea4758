"""
POS Analyzer

Walks the provider chain, assigns weights, filters noise and removes
duplicates. Results are memoized per input string in a bounded cache that
evicts the oldest entry.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from ...core.config import NLPServiceSettings, TokenizerSettings
from ...core.utils import CJK_RUN_PATTERN
from ...domain.models import PartOfSpeech, WordInfo, WordSource
from ...infrastructure.cache import BoundedCache, EvictionPolicy
from ...infrastructure.external_apis import NLPServiceClient
from .providers import LocalPosProvider, PosProvider, RemotePosProvider
from .stopwords import FUNCTION_WORDS

logger = logging.getLogger(__name__)

DIGITS_ONLY = re.compile(r"^\d+$")
PUNCTUATION_ONLY = re.compile(r"^[\W_]+$")
SIMPLE_SPLIT = re.compile(r"[\s_\-.]+")


class PosAnalyzer:
    """
    词性分析器

    Usage:
        analyzer = PosAnalyzer.create(TokenizerSettings())
        words = analyzer.analyze("heavy door slam")
        words = await analyzer.analyze_async("关门声")
    """

    def __init__(
        self,
        providers: Sequence[PosProvider],
        settings: Optional[TokenizerSettings] = None,
    ):
        if not providers:
            raise ValueError("At least one POS provider is required")
        self._providers = list(providers)
        self._settings = settings or TokenizerSettings()
        self._cache: BoundedCache[str, List[WordInfo]] = BoundedCache(
            max_size=self._settings.cache_size,
            policy=EvictionPolicy.FIFO,
        )

    @classmethod
    def create(
        cls,
        settings: Optional[TokenizerSettings] = None,
        nlp_settings: Optional[NLPServiceSettings] = None,
    ) -> 'PosAnalyzer':
        """Remote provider first when configured, local provider always last."""
        settings = settings or TokenizerSettings()
        providers: List[PosProvider] = []
        if nlp_settings is not None and nlp_settings.enabled:
            providers.append(RemotePosProvider(NLPServiceClient(nlp_settings)))
        providers.append(LocalPosProvider(settings))
        return cls(providers, settings)

    @property
    def settings(self) -> TokenizerSettings:
        return self._settings

    @property
    def providers(self) -> List[PosProvider]:
        return list(self._providers)

    def cache_stats(self) -> Dict[str, float]:
        return self._cache.snapshot()

    def clear_cache(self) -> None:
        self._cache.clear()

    async def cleanup(self) -> None:
        for provider in self._providers:
            await provider.cleanup()

    def analyze(self, text: str, source: WordSource = WordSource.ORIGINAL) -> List[WordInfo]:
        """
        Analyze text with the synchronous providers.

        Returns:
            Tagged words; empty for empty or noise-only text.
        """
        if not text or not text.strip():
            return []

        cached = self._cache.get(text)
        if cached is None:
            cached = self._finalize(self._run_chain(text))
            self._cache.set(text, cached)
        return self._with_source(cached, source)

    async def analyze_async(self, text: str, source: WordSource = WordSource.ORIGINAL) -> List[WordInfo]:
        """Analyze text, letting async providers (the NLP service) go first."""
        if not text or not text.strip():
            return []

        cached = self._cache.get(text)
        if cached is None:
            words: Optional[List[WordInfo]] = None
            for provider in self._providers:
                words = await provider.try_analyze_async(text)
                if words is not None:
                    logger.debug(f"POS provider {provider.name} analyzed {text!r}")
                    break
            cached = self._finalize(words or [])
            self._cache.set(text, cached)
        return self._with_source(cached, source)

    def _run_chain(self, text: str) -> List[WordInfo]:
        for provider in self._providers:
            words = provider.try_analyze(text)
            if words is not None:
                logger.debug(f"POS provider {provider.name} analyzed {text!r}")
                return words
        return []

    def _keep(self, word: WordInfo) -> bool:
        if not word.word:
            return False
        if not self._settings.filter_enabled:
            return True
        if DIGITS_ONLY.match(word.word) and word.weight < self._settings.number_weight_threshold:
            return False
        if PUNCTUATION_ONLY.match(word.word) and word.weight < self._settings.punctuation_weight_threshold:
            return False
        return word.word.lower() not in FUNCTION_WORDS

    def _finalize(self, words: List[WordInfo]) -> List[WordInfo]:
        seen = set()
        result: List[WordInfo] = []
        for word in words:
            if not self._keep(word) or word.word in seen:
                continue
            seen.add(word.word)
            result.append(word)
        return result

    @staticmethod
    def _with_source(words: List[WordInfo], source: WordSource) -> List[WordInfo]:
        return [w if w.source is source else replace(w, source=source) for w in words]


def simple_tokenize(
    text: str,
    settings: Optional[TokenizerSettings] = None,
    source: WordSource = WordSource.ORIGINAL,
) -> List[WordInfo]:
    """
    Split text without POS analysis.

    Pieces are cut on whitespace, underscores, hyphens and dots; CJK runs are
    separated from Latin runs. Every piece is tagged 'other'.
    """
    if not text:
        return []

    settings = settings or TokenizerSettings()
    weight = settings.weight_for(PartOfSpeech.OTHER.value)
    words: List[WordInfo] = []
    seen = set()

    for piece in SIMPLE_SPLIT.split(text):
        if not piece:
            continue
        parts: List[str] = []
        position = 0
        for run in CJK_RUN_PATTERN.finditer(piece):
            parts.append(piece[position:run.start()])
            parts.append(run.group())
            position = run.end()
        parts.append(piece[position:])

        for part in parts:
            part = part.strip().lower()
            if part and part not in seen:
                seen.add(part)
                words.append(WordInfo(part, PartOfSpeech.OTHER, weight, source))
    return words
