"""
English POS Tagger

Local heuristic tagger: a small lexicon of sound verbs, adjectives and
adverbs, then suffix rules. Anything left over is a noun, since filename
descriptors are mostly nouns.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from ...domain.models import PartOfSpeech
from .stopwords import is_english_stop_word

WORD_PATTERN = re.compile(r"[A-Za-z]+(?:'[A-Za-z]+)?|\d+")
CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")

SOUND_VERBS = frozenset({
    "hit", "knock", "tap", "clink", "slam", "crash", "bang", "smash", "break",
    "drop", "scrape", "drag", "slide", "roll", "swing", "open", "close",
    "creak", "squeak", "rattle", "shake", "stomp", "walk", "run", "jump",
    "fall", "splash", "pour", "drip", "blow", "burn", "crackle", "click",
    "ring", "buzz", "hum", "hiss", "pop", "snap", "tear", "rip", "crush",
    "kick", "punch", "slap", "throw", "grab", "pull", "push", "spin", "fly",
})

ADJECTIVES = frozenset({
    "big", "small", "large", "heavy", "light", "loud", "soft", "quiet", "hard",
    "fast", "slow", "short", "long", "deep", "high", "low", "distant", "near",
    "wet", "dry", "metallic", "wooden", "old", "new", "dark", "bright",
    "sharp", "dull", "thick", "thin", "huge", "tiny", "gentle", "rough",
    "smooth", "hollow", "muffled", "subtle", "intense", "massive", "little",
    "cold", "hot", "warm", "electric", "digital", "analog",
})

ADVERBS = frozenset({
    "very", "away", "back", "again", "together", "outside", "inside", "far",
})

ADJECTIVE_SUFFIXES = ("ful", "ous", "ive", "able", "ible", "less", "al", "ic")

# Sound nouns that look like -al / -ic adjectives
SUFFIX_NOUNS = frozenset({
    "animal", "signal", "crystal", "cymbal", "pedal", "metal", "medal", "portal",
    "terminal", "hospital", "festival", "carnival", "arsenal", "mineral",
    "music", "traffic", "magic", "logic", "panic", "mechanic", "clinic",
})


class EnglishTagger:
    """
    Heuristic English tagger.

    Usage:
        tagger = EnglishTagger()
        tagger.tag("Heavy door slamming")
        # [("heavy", ADJECTIVE), ("door", NOUN), ("slam", VERB)]
    """

    def __init__(self, strip_verb_ing: bool = True):
        self._strip_verb_ing = strip_verb_ing

    def tokenize(self, text: str) -> List[str]:
        """Lower-cased words; underscores and hyphens count as spaces."""
        if not text:
            return []
        text = CAMEL_BOUNDARY.sub(" ", text.replace("_", " "))
        return [w.lower() for w in WORD_PATTERN.findall(text)]

    def tag_word(self, word: str) -> PartOfSpeech:
        if word.isdigit():
            return PartOfSpeech.OTHER
        if word in SOUND_VERBS:
            return PartOfSpeech.VERB
        if word in ADJECTIVES:
            return PartOfSpeech.ADJECTIVE
        if word in ADVERBS:
            return PartOfSpeech.ADVERB
        if word.endswith("ly") and len(word) > 4:
            return PartOfSpeech.ADVERB
        if word.endswith("ing") and len(word) > 5:
            return PartOfSpeech.VERB
        if word.endswith("ed") and len(word) > 4:
            return PartOfSpeech.VERB
        if len(word) > 5 and word.endswith(ADJECTIVE_SUFFIXES) and word not in SUFFIX_NOUNS:
            return PartOfSpeech.ADJECTIVE
        return PartOfSpeech.NOUN

    def tag(self, text: str) -> List[Tuple[str, PartOfSpeech]]:
        tagged: List[Tuple[str, PartOfSpeech]] = []
        for word in self.tokenize(text):
            if is_english_stop_word(word):
                continue
            pos = self.tag_word(word)
            if pos is PartOfSpeech.VERB and self._strip_verb_ing:
                word = strip_ing(word)
            tagged.append((word, pos))
        return tagged


def strip_ing(word: str) -> str:
    """slamming -> slam, crashing -> crash, rolling -> roll"""
    if not word.endswith("ing") or len(word) <= 5:
        return word
    stem = word[:-3]
    if len(stem) > 2 and stem[-1] == stem[-2] and stem[-1] not in "lsz":
        stem = stem[:-1]
    return stem
