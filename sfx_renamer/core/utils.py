"""
Core utility functions for sfx_renamer.
Provides script detection helpers used by the tokenizer, the matching
engines and the naming formatter.
"""

import re

# CJK 统一表意文字 (基本区 + 扩展A + 兼容区)
CJK_CHAR = r"\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff"
CJK_PATTERN = re.compile(f"[{CJK_CHAR}]")
CJK_RUN_PATTERN = re.compile(f"[{CJK_CHAR}]+")
LATIN_PATTERN = re.compile(r"[A-Za-z]")


def contains_cjk(text: str) -> bool:
    """文本中是否含有中文字符"""
    return bool(text) and CJK_PATTERN.search(text) is not None


def contains_latin(text: str) -> bool:
    return bool(text) and LATIN_PATTERN.search(text) is not None


def cjk_ratio(text: str) -> float:
    """
    Share of CJK characters among non-whitespace characters.

    Returns:
        0.0 for empty or whitespace-only text.
    """
    chars = [c for c in text if not c.isspace()]
    if not chars:
        return 0.0
    return sum(1 for c in chars if CJK_PATTERN.match(c)) / len(chars)


def is_chinese_text(text: str, threshold: float = 0.4) -> bool:
    """判断是否为中文文本 (中文字符占比超过阈值)"""
    return cjk_ratio(text) > threshold
