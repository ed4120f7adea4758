"""
Glossary Translator

离线术语表翻译: 使用术语目录 (SubCategory <-> SubCategory_zh) 和可选的
用户术语表逐词翻译, 不认识的词原样保留。
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Mapping, Optional

from ...core.utils import contains_cjk
from ..catalogue import TermCatalogue
from ..naming_manager.text_utils import normalize_english_text, split_into_words
from .base import Translator

logger = logging.getLogger(__name__)

SEPARATORS = re.compile(r"[\s_\-.]+")
MAX_STANDARDIZED_WORDS = 5


def _join_pieces(pieces: List[str]) -> str:
    """Join translated pieces; adjacent CJK pieces need no space."""
    text = ""
    for piece in pieces:
        if not piece:
            continue
        if text and not (contains_cjk(text[-1]) and contains_cjk(piece[0])):
            text += " "
        text += piece
    return text


class GlossaryTranslator(Translator):
    """
    术语表翻译器

    Usage:
        translator = GlossaryTranslator(catalogue, {"snow": "雪"})
        await translator.translate("footsteps snow")   # "脚步声雪"
        await translator.reverse_translate("脚步声")     # "Footstep"
    """

    SERVICE_ID = "glossary"
    SERVICE_NAME = "Glossary"

    def __init__(
        self,
        catalogue: Optional[TermCatalogue] = None,
        glossary: Optional[Mapping[str, str]] = None,
    ):
        forward: Dict[str, str] = {}
        for key, value in (glossary or {}).items():
            if key and value:
                forward.setdefault(key.strip().lower(), value.strip())
        if catalogue is not None:
            for key, value in catalogue.glossary().items():
                forward.setdefault(key, value)

        self._forward = forward
        self._reverse: Dict[str, str] = {}
        for key, value in forward.items():
            self._reverse.setdefault(value.lower(), key)
        if catalogue is not None:
            # 目录的反向表优先于由正向表推出的条目
            self._reverse.update(catalogue.glossary(reverse=True))

        self._max_reverse_key = max((len(k) for k in self._reverse), default=0)
        logger.debug(f"Glossary translator: {len(self._forward)} forward, {len(self._reverse)} reverse entries")

    def __len__(self) -> int:
        return len(self._forward)

    def _lookup_english(self, word: str) -> Optional[str]:
        word = word.lower()
        found = self._forward.get(word)
        if found is None and len(word) > 3 and word.endswith("s"):
            # 复数: footsteps -> footstep, boxes -> box
            found = self._forward.get(word[:-1])
            if found is None and word.endswith("es"):
                found = self._forward.get(word[:-2])
        return found

    def _english_to_chinese(self, text: str) -> str:
        phrase = " ".join(SEPARATORS.split(text.strip())).lower()
        whole = self._forward.get(phrase)
        if whole:
            return whole
        pieces = [self._lookup_english(word) or word for word in split_into_words(text)]
        return _join_pieces(pieces)

    def _chinese_to_english(self, text: str) -> str:
        phrase = text.strip().lower()
        whole = self._reverse.get(phrase)
        if whole:
            return whole

        # 最长匹配
        pieces: List[str] = []
        unknown = ""
        position = 0
        while position < len(phrase):
            char = phrase[position]
            if char.isspace() or char in "_-.":
                if unknown:
                    pieces.append(unknown)
                    unknown = ""
                position += 1
                continue

            found = None
            for length in range(min(self._max_reverse_key, len(phrase) - position), 0, -1):
                candidate = phrase[position:position + length]
                if candidate in self._reverse:
                    found = candidate
                    break
            if found is None:
                unknown += char
                position += 1
                continue

            if unknown:
                pieces.append(unknown)
                unknown = ""
            pieces.append(self._reverse[found])
            position += len(found)

        if unknown:
            pieces.append(unknown)
        return _join_pieces(pieces)

    async def translate(self, text: str, source_lang: str = "en", target_lang: str = "zh") -> str:
        if not text:
            return text
        if target_lang.lower().startswith("zh"):
            return self._english_to_chinese(text)
        if source_lang.lower().startswith("zh"):
            return self._chinese_to_english(text)
        return text

    async def reverse_translate(self, text: str) -> str:
        if not text:
            return text
        return self._chinese_to_english(text)

    async def standardize(self, text: str) -> str:
        """Title-cased English words, at most five."""
        if contains_cjk(text):
            text = self._chinese_to_english(text)
        words = normalize_english_text(text).split()
        return " ".join(words[:MAX_STANDARDIZED_WORDS])
