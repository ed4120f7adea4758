"""
Bilingual Alignment

Pairs same-POS words across the original and translated word lists and
boosts both sides of each pair, so terms corroborated by both texts rank
higher.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Mapping, Sequence, Tuple

from ...domain.models import PartOfSpeech, WordInfo


def _bucket(words: Sequence[WordInfo]) -> Dict[PartOfSpeech, List[int]]:
    """Indexes per POS, heaviest first (stable for equal weights)."""
    buckets: Dict[PartOfSpeech, List[int]] = {}
    for index, word in enumerate(words):
        buckets.setdefault(word.pos, []).append(index)
    for indexes in buckets.values():
        indexes.sort(key=lambda i: -words[i].weight)
    return buckets


def align_bilingual(
    original: Sequence[WordInfo],
    translated: Sequence[WordInfo],
    bonuses: Mapping[str, Tuple[float, float]],
    max_pairs: int = 4,
) -> Tuple[List[WordInfo], List[WordInfo]]:
    """
    双语词性对齐

    Args:
        original: Words from the original text
        translated: Words from the machine translation
        bonuses: POS name → (original multiplier, translated multiplier)
        max_pairs: Maximum pairs per POS bucket

    Returns:
        New word lists in the input order with paired weights multiplied.
    """
    aligned_original = list(original)
    aligned_translated = list(translated)

    original_buckets = _bucket(original)
    translated_buckets = _bucket(translated)

    for pos, original_indexes in original_buckets.items():
        bonus = bonuses.get(pos.value)
        translated_indexes = translated_buckets.get(pos)
        if not bonus or not translated_indexes:
            continue

        original_bonus, translated_bonus = bonus
        for oi, ti in list(zip(original_indexes, translated_indexes))[:max_pairs]:
            o_word = aligned_original[oi]
            t_word = aligned_translated[ti]
            aligned_original[oi] = replace(o_word, weight=o_word.weight * max(original_bonus, 1.0))
            aligned_translated[ti] = replace(t_word, weight=t_word.weight * max(translated_bonus, 1.0))

    return aligned_original, aligned_translated
