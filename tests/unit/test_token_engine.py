from __future__ import annotations

import pytest

from sfx_renamer.application.matching import FuzzyMatchingEngine, TokenMatchingEngine, create_engine
from sfx_renamer.core.config import AppSettings, MatchingSettings
from sfx_renamer.domain.models import PartOfSpeech, WordInfo, WordSource


def noun(text, source=WordSource.ORIGINAL, weight=100):
    return WordInfo(text, PartOfSpeech.NOUN, weight, source)


def test_english_query_with_plural(token_engine):
    best = token_engine.find_match("footsteps on snow")
    assert best is not None
    assert best.cat_id == "FOL001"
    assert best.score >= token_engine.single_threshold
    assert best.match_type == "english_noun"


def test_chinese_query(token_engine):
    best = token_engine.find_match("轻轻的脚步声")
    assert best is not None
    assert best.cat_id == "FOL001"


def test_multi_word_source_gets_bonus(catalogue):
    engine = TokenMatchingEngine(catalogue)
    words = [noun("door"), noun("wood")]
    ranked = engine.match(words)
    assert ranked[0].cat_id == "DOORWood"

    no_bonus = TokenMatchingEngine(catalogue, MatchingSettings(multi_word_bonus=1.0))
    assert ranked[0].score > no_bonus.match(words)[0].score


def test_each_word_counts_once_per_term(catalogue):
    engine = TokenMatchingEngine(catalogue)
    once = engine.match([noun("door")])[0].score
    twice = engine.match([noun("door"), noun("Door")])[0].score
    assert once == twice


def test_exact_match_ranked_first_for_single_word(catalogue):
    engine = TokenMatchingEngine(catalogue)
    ranked = engine.match([noun("shatter")])
    assert ranked[0].cat_id == "GLASBrk"
    assert ranked[0].matched_words[0].score == 1.0


def test_category_relevance_boost(catalogue):
    engine = TokenMatchingEngine(catalogue)
    ranked = engine.match([noun("explosions")])
    assert ranked[0].cat_id == "EXPLReal"


def test_bilingual_score_not_below_single_language(token_engine):
    original = [noun("脚步")]
    translated = [noun("footstep", WordSource.TRANSLATED)]

    single_original = token_engine.match(original)[0]
    single_translated = token_engine.match(translated)[0]
    bilingual = token_engine.match_bilingual(original, translated)[0]

    assert bilingual.cat_id == "FOL001"
    assert bilingual.score >= single_original.score
    assert bilingual.score >= single_translated.score
    assert bilingual.match_type.startswith("bilingual")


def test_empty_and_noise_queries(token_engine):
    assert token_engine.find_match("") is None
    assert token_engine.find_match("0001") is None
    assert token_engine.find_match("the of a") is None
    assert token_engine.match([]) == []
    assert token_engine.get_all_matches("") == []


def test_ranks_and_limit(token_engine):
    ranked = token_engine.get_all_matches("door glass wind", limit=2)
    assert len(ranked) == 2
    assert [m.rank for m in ranked] == [0, 1]
    assert ranked[0].score >= ranked[1].score


def test_identify_category_accepts_valid_hint_only(token_engine):
    assert token_engine.identify_category("door", ai_hint={"catID": "AMBWind"}) == "AMBWind"
    assert token_engine.identify_category("door", ai_hint={"catID": "NOPE"}) == "DOORWood"
    assert token_engine.identify_category("xyzzy") is None


def test_identify_category_bilingual(token_engine):
    assert token_engine.identify_category("脚步", translated_text="footstep") == "FOL001"


def test_find_match_with_bilingual_text(token_engine):
    result = token_engine.find_match_with_bilingual_text("木门", "wooden door")
    assert result is not None
    assert result.cat_id == "DOORWood"


def test_create_engine(catalogue):
    settings = AppSettings()
    assert isinstance(create_engine("token", catalogue, settings), TokenMatchingEngine)
    assert isinstance(create_engine("fuzzy", catalogue, settings), FuzzyMatchingEngine)
    with pytest.raises(ValueError):
        create_engine("neural", catalogue, settings)
