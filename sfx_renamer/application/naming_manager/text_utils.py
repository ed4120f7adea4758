"""
Text Utilities

命名相关的文本处理: 规范化、命名风格、单词切分。
"""

from __future__ import annotations

import re
from typing import List

from ...core.utils import CJK_CHAR, contains_cjk, contains_latin, is_chinese_text

WHITESPACE = re.compile(r"\s+")
WORD_SEPARATORS = re.compile(r"[\s_\-]+")
NON_ENGLISH = re.compile(r"[^A-Za-z0-9\s]")
NON_CHINESE = re.compile(f"[^{CJK_CHAR}A-Za-z0-9\\s]")
CAMEL_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
CAMEL_ACRONYM = re.compile(r"([A-Z]+)([A-Z][a-z])")

NAMING_STYLES = ("none", "camelCase", "PascalCase", "snake_case", "kebab-case")


def normalize_english_text(text: str, keep_spaces: bool = True) -> str:
    """
    规范化英文文本

    Separators become spaces, other punctuation is dropped, whitespace is
    collapsed and every word gets an upper-case first letter.

    Example:
        "door-slam, heavy!" -> "Door Slam Heavy"
    """
    if not text:
        return ""
    text = WORD_SEPARATORS.sub(" ", text)
    text = NON_ENGLISH.sub("", text)
    words = [w[0].upper() + w[1:] for w in text.split()]
    return (" " if keep_spaces else "").join(words)


def normalize_chinese_text(text: str, keep_spaces: bool = False) -> str:
    """规范化中文文本: 只保留中文、字母和数字"""
    if not text:
        return ""
    text = WHITESPACE.sub(" ", text).strip()
    text = NON_CHINESE.sub("", text).strip()
    if not keep_spaces:
        text = text.replace(" ", "")
    return WHITESPACE.sub(" ", text)


def split_into_words(text: str) -> List[str]:
    """
    Split on separators, or on camelCase boundaries when there are none.

    Example:
        "KnifeCuttingSound" -> ["Knife", "Cutting", "Sound"]
    """
    if not text:
        return []
    text = WORD_SEPARATORS.sub(" ", text).strip()
    if " " in text:
        return text.split()
    text = CAMEL_ACRONYM.sub(r"\1 \2", CAMEL_LOWER_UPPER.sub(r"\1 \2", text))
    return text.split()


def apply_naming_style(text: str, style: str = "none", separator: str = "_") -> str:
    """应用命名风格"""
    if not text:
        return ""

    words = split_into_words(text)
    if style == "camelCase":
        return "".join(
            w.lower() if i == 0 else w[:1].upper() + w[1:].lower()
            for i, w in enumerate(words)
        )
    if style == "PascalCase":
        return "".join(w[:1].upper() + w[1:].lower() for w in words)
    if style == "snake_case":
        return "_".join(w.lower() for w in words)
    if style == "kebab-case":
        return "-".join(w.lower() for w in words)
    if style == "custom":
        return separator.join(words)
    return WHITESPACE.sub(" ", text).strip()


__all__ = [
    "NAMING_STYLES",
    "apply_naming_style",
    "contains_cjk",
    "contains_latin",
    "is_chinese_text",
    "normalize_chinese_text",
    "normalize_english_text",
    "split_into_words",
]
