"""
Stop Word Sets

Words that never carry classification signal in a sound effect filename.
"""

from __future__ import annotations

from typing import FrozenSet

ENGLISH_STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "a", "an", "of", "in", "on", "at", "by", "for", "with", "about",
    "to", "and", "or", "but", "if", "then", "else", "when", "up", "down",
    "out", "as", "into", "from", "over", "under", "off", "via",
})

# 助动词、限定词、代词
AUXILIARY_WORDS: FrozenSet[str] = frozenset({
    "is", "am", "are", "was", "were", "be", "been", "being",
    "do", "does", "did", "have", "has", "had",
    "will", "would", "shall", "should", "can", "could", "may", "might", "must",
})

DETERMINERS_AND_PRONOUNS: FrozenSet[str] = frozenset({
    "this", "that", "these", "those", "some", "any", "each", "every", "no",
    "it", "its", "i", "you", "he", "she", "we", "they",
    "me", "him", "her", "us", "them", "my", "your", "his", "our", "their",
})

CHINESE_STOP_WORDS: FrozenSet[str] = frozenset({
    "的", "了", "和", "与", "或", "在", "中", "是", "有", "被",
    "将", "从", "给", "向", "把", "对", "为", "以",
})

# 后处理过滤用的虚词
FUNCTION_WORDS: FrozenSet[str] = frozenset(
    {"地", "得", "着", "过", "吗", "呢", "吧", "啊", "之", "其"}
    | AUXILIARY_WORDS
    | CHINESE_STOP_WORDS
)


def is_english_stop_word(word: str) -> bool:
    word = word.lower()
    return (
        word in ENGLISH_STOP_WORDS
        or word in AUXILIARY_WORDS
        or word in DETERMINERS_AND_PRONOUNS
    )
