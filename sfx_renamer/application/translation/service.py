"""
Translation Service

包装翻译器: 结果缓存、直通规则和统一的错误类型。
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from ...core.utils import contains_cjk, contains_latin, is_chinese_text
from ...domain.exceptions import TranslationError
from ...infrastructure.cache import BoundedCache
from .base import Translator

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str, str, str]


class TranslationService:
    """
    翻译服务

    Text that is empty, or already in the target script, is returned as is
    without calling the provider.

    Usage:
        service = TranslationService(GlossaryTranslator(catalogue))
        zh = await service.translate("Door Slam")
        gloss = await service.reverse_translate("关门声")
    """

    def __init__(self, translator: Translator, cache_size: int = 1000):
        self._translator = translator
        self._cache: BoundedCache[CacheKey, str] = BoundedCache(max_size=cache_size)

    @property
    def translator(self) -> Translator:
        return self._translator

    @property
    def supports_completion(self) -> bool:
        return self._translator.supports_completion

    def cache_stats(self) -> Dict[str, float]:
        return self._cache.snapshot()

    def clear_cache(self) -> None:
        self._cache.clear()

    async def cleanup(self) -> None:
        await self._translator.cleanup()

    async def _cached(self, key: CacheKey, call) -> str:
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        operation, text = key[0], key[1]
        try:
            result = await call()
        except TranslationError:
            raise
        except Exception as e:
            raise TranslationError(f"{self._translator.id or 'translator'} {operation} failed: {e}") from e

        result = (result or "").strip()
        if not result:
            raise TranslationError(f"{operation} returned nothing for {text!r}")
        self._cache.set(key, result)
        logger.debug(f"{operation}: {text!r} -> {result!r}")
        return result

    async def translate(self, text: str, source_lang: str = "en", target_lang: str = "zh") -> str:
        """
        Translate text.

        Raises:
            TranslationError: The provider failed or returned nothing
        """
        if not text or not text.strip():
            return text
        target = target_lang.lower()
        if target.startswith("zh") and is_chinese_text(text):
            return text
        if target == "en" and not contains_cjk(text):
            return text
        return await self._cached(
            ("translate", text, source_lang, target_lang),
            lambda: self._translator.translate(text, source_lang, target_lang),
        )

    async def reverse_translate(self, text: str) -> str:
        """Chinese to English gloss; text without CJK passes through."""
        if not text or not contains_cjk(text):
            return text
        return await self._cached(
            ("reverse", text, "zh", "en"),
            lambda: self._translator.reverse_translate(text),
        )

    async def standardize(self, text: str) -> str:
        if not text or not (contains_latin(text) or contains_cjk(text)):
            return text
        return await self._cached(
            ("standardize", text, "", "en"),
            lambda: self._translator.standardize(text),
        )

    async def complete(self, prompt: str) -> str:
        """Uncached free-form completion."""
        try:
            return await self._translator.complete(prompt)
        except TranslationError:
            raise
        except Exception as e:
            raise TranslationError(f"Completion failed: {e}") from e
