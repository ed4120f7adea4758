"""
Tokenizer Module

Splits free text into POS-tagged, weighted words for Chinese and English,
with a prioritized chain of analysis providers.
"""

from .analyzer import PosAnalyzer, simple_tokenize
from .chinese import CharacterSegmenter, ChineseSegmenter, JiebaSegmenter, map_chinese_pos
from .english import EnglishTagger
from .providers import LocalPosProvider, PosProvider, RemotePosProvider

__all__ = [
    "PosAnalyzer",
    "simple_tokenize",
    "CharacterSegmenter",
    "ChineseSegmenter",
    "JiebaSegmenter",
    "map_chinese_pos",
    "EnglishTagger",
    "LocalPosProvider",
    "PosProvider",
    "RemotePosProvider",
]
