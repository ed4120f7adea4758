from __future__ import annotations

import pytest

from sfx_renamer.application.catalogue import TermCatalogue
from sfx_renamer.application.classification import SmartClassifier
from sfx_renamer.application.tokenizer import ChineseSegmenter, LocalPosProvider, PosAnalyzer
from sfx_renamer.core.config import ClassificationSettings, StrategySettings


@pytest.fixture
def classifier(catalogue, token_engine, analyzer, settings):
    return SmartClassifier(catalogue, token_engine, analyzer, settings.classification)


def only(*keys):
    strategies = StrategySettings.defaults()
    for strategy in strategies.strategies:
        if strategy.key not in keys:
            strategies = strategies.with_enabled(strategy.key, False)
    return ClassificationSettings(strategies=strategies)


def test_english_filename(classifier):
    result = classifier.classify_file("footsteps on snow")
    assert result is not None
    assert result.cat_id == "FOL001"
    assert result.category == "Foley"
    assert result.sub_category_zh == "脚步声"
    assert result.strategy == "pos"
    assert result.alternatives[0].cat_id == "FOL001"


def test_chinese_filename(classifier):
    result = classifier.classify_file("轻轻的脚步声")
    assert result is not None
    assert result.cat_id == "FOL001"


def test_empty_or_noise_names(classifier):
    assert classifier.classify_file("") is None
    assert classifier.classify_file("   ") is None
    assert classifier.classify_file("123") is None
    assert classifier.classify_file("xyzzy") is None


def test_empty_catalogue(token_engine):
    classifier = SmartClassifier(TermCatalogue(), token_engine)
    assert classifier.classify_file("footsteps") is None


def test_valid_ai_hint_wins(classifier):
    result = classifier.classify_file("footsteps", ai_hint={"catID": "GLASBrk"})
    assert result.cat_id == "GLASBrk"
    assert result.strategy == "ai"
    assert result.score == 1.0
    assert result.alternatives[0].match_type == "ai"
    assert "FOL001" in [m.cat_id for m in result.alternatives]


def test_unknown_ai_hint_is_discarded(classifier):
    result = classifier.classify_file("footsteps", ai_hint={"catID": "NOPE"})
    assert result.cat_id == "FOL001"
    assert result.strategy == "pos"


def test_ai_hint_without_text(classifier):
    result = classifier.classify_file("", ai_hint={"catID": "AMBWind"})
    assert result.cat_id == "AMBWind"


def test_process_ai_classification(classifier):
    assert classifier.process_ai_classification(None) is None
    assert classifier.process_ai_classification({"catID": "NOPE"}) is None
    result = classifier.process_ai_classification({"cat_id": "DOORWood"})
    assert result.sub_category == "Door Wood"
    assert len(result.alternatives) == 1


def test_bilingual_strategy(classifier):
    result = classifier.classify_file("脚步", translated_text="footstep")
    assert result.cat_id == "FOL001"
    assert result.strategy == "bilingual"


def test_translated_strategy(catalogue, token_engine, analyzer):
    classifier = SmartClassifier(catalogue, token_engine, analyzer, only("translated"))
    result = classifier.classify_file("xyzzy", translated_text="glass break")
    assert result.cat_id == "GLASBrk"
    assert result.strategy == "translated"


def test_plain_strategy(catalogue, token_engine, analyzer):
    classifier = SmartClassifier(catalogue, token_engine, analyzer, only("plain"))
    result = classifier.classify_file("wind_gust")
    assert result.cat_id == "AMBWind"
    assert result.strategy == "plain"


def test_first_token_strategy(catalogue, token_engine, analyzer):
    classifier = SmartClassifier(catalogue, token_engine, analyzer, only("first_token"))
    result = classifier.classify_file("shatter xyzzy qwerty")
    assert result.cat_id == "GLASBrk"
    assert result.strategy == "first_token"
    assert classifier.classify_file("shatter") is None


class FixedSegmenter(ChineseSegmenter):
    """Deterministic segmentation for the unspaced Chinese cases."""

    name = "fixed"
    SEGMENTS = {
        "风声呼呼": [("风声", "n"), ("呼呼", "o")],
        "风声": [("风声", "n")],
    }

    def segment(self, text):
        return self.SEGMENTS.get(text, [])


@pytest.fixture
def fixed_analyzer(settings):
    provider = LocalPosProvider(settings.tokenizer, segmenters=[FixedSegmenter()])
    return PosAnalyzer([provider], settings.tokenizer)


def test_first_token_on_unspaced_chinese(catalogue, token_engine, fixed_analyzer):
    settings = only("first_token").replace(apply_first_token_to_unspaced_cjk=True)
    classifier = SmartClassifier(catalogue, token_engine, fixed_analyzer, settings)
    result = classifier.classify_file("风声呼呼")
    assert result is not None
    assert result.cat_id == "AMBWind"
    assert result.strategy == "first_token"


def test_first_token_skips_unspaced_chinese_by_default(catalogue, token_engine, fixed_analyzer):
    classifier = SmartClassifier(catalogue, token_engine, fixed_analyzer, only("first_token"))
    assert classifier.classify_file("风声呼呼") is None


def test_all_strategies_disabled(catalogue, token_engine, analyzer):
    classifier = SmartClassifier(catalogue, token_engine, analyzer, only())
    assert classifier.classify_file("footsteps") is None


def test_strategy_threshold_override(catalogue, token_engine, analyzer):
    strict = StrategySettings.defaults()
    for key in ("pos", "translated", "plain", "first_token", "bilingual"):
        strict = strict.with_threshold(key, 1_000_000)
    classifier = SmartClassifier(catalogue, token_engine, analyzer, ClassificationSettings(strategies=strict))
    assert classifier.classify_file("footsteps") is None


def test_identify_category(classifier):
    assert classifier.identify_category("heavy door slam") == "DOORWood"
    assert classifier.identify_category("") is None
    assert classifier.validate_cat_id("FOL001")
    assert not classifier.validate_cat_id("NOPE")


def test_alternatives_limit(catalogue, token_engine, analyzer):
    settings = ClassificationSettings(alternatives_limit=1)
    classifier = SmartClassifier(catalogue, token_engine, analyzer, settings)
    result = classifier.classify_file("door glass wind")
    assert len(result.alternatives) == 1
