from __future__ import annotations

import json
import logging

import pytest

from sfx_renamer.core.config import (
    AppSettings,
    ClassificationSettings,
    ConfigManager,
    MatchingSettings,
    NamingSettings,
    StrategySettings,
)


def test_defaults_match_documented_constants():
    settings = AppSettings()
    assert settings.tokenizer.weight_for("noun") == 100
    assert settings.tokenizer.weight_for("unknown-tag") == 20
    assert settings.matching.single_threshold == 20.0
    assert settings.matching.bilingual_threshold == 50.0
    assert settings.matching.alignment_bonus["noun"] == (2.5, 1.5)
    assert settings.naming.elements == ("catID", "category_zh", "fxName", "fxName_zh")
    assert settings.pipeline.default_category == "Misc"


def test_with_value_returns_new_settings():
    settings = AppSettings()
    changed = settings.with_value("matching.noun_boost", 2.0)

    assert changed.matching.noun_boost == 2.0
    assert settings.matching.noun_boost == 1.3
    assert changed.naming == settings.naming


def test_with_value_rejects_unknown_section():
    with pytest.raises(KeyError):
        AppSettings().with_value("nope.value", 1)


def test_from_dict_merges_partial_sections():
    settings = AppSettings.from_dict({
        "matching": {"alignment_bonus": {"noun": [3.0, 2.0]}},
        "naming": {"elements": ["catID", "fxName"]},
    })
    assert settings.matching.alignment_bonus["noun"] == (3.0, 2.0)
    assert settings.matching.alignment_bonus["verb"] == (1.5, 1.2)
    assert settings.naming.elements == ("catID", "fxName")


def test_strategy_order_and_toggles():
    strategies = StrategySettings.defaults()
    keys = [s.key for s in strategies.enabled_strategies()]
    assert keys == ["ai", "bilingual", "pos", "translated", "plain", "first_token"]

    reordered = strategies.with_priority("first_token", 0).with_enabled("ai", False)
    keys = [s.key for s in reordered.enabled_strategies()]
    assert keys[0] == "first_token"
    assert "ai" not in keys
    # the original object is untouched
    assert strategies.is_enabled("ai")


def test_strategy_update_unknown_key():
    with pytest.raises(KeyError):
        StrategySettings.defaults().with_enabled("magic", True)


def test_settings_round_trip_through_dict():
    settings = AppSettings().with_value("classification.alternatives_limit", 3)
    assert AppSettings.from_dict(settings.to_dict()) == settings


def test_section_replace():
    assert MatchingSettings().replace(verb_boost=1.0).verb_boost == 1.0
    assert NamingSettings().replace(elements=["catID"]).elements == ("catID",)
    assert ClassificationSettings().replace(alternatives_limit=2).alternatives_limit == 2


def test_config_manager_loads_profile(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({"matching": {"engine": "fuzzy"}}), encoding="utf-8")

    manager = ConfigManager(path)
    assert manager.load() is True
    assert manager.get("matching.engine") == "fuzzy"
    assert manager.get("matching.noun_boost") == 1.3
    assert manager.get("missing.key", "default") == "default"
    assert manager.settings().matching.engine == "fuzzy"


def test_config_manager_missing_or_broken_profile(tmp_path):
    assert ConfigManager(tmp_path / "absent.json").load() is False

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    manager = ConfigManager(broken)
    assert manager.load() is False
    assert manager.settings() == AppSettings()

    not_object = tmp_path / "list.json"
    not_object.write_text("[1, 2]", encoding="utf-8")
    assert ConfigManager(not_object).load() is False


def test_config_manager_without_path_uses_defaults():
    manager = ConfigManager()
    assert manager.load() is False
    assert manager.get_all()["pipeline"]["default_category"] == "Misc"


def test_unknown_profile_keys_are_ignored(tmp_path, caplog):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({"matching": {"noun_bost": 2.0, "engine": "fuzzy"}}), encoding="utf-8")

    manager = ConfigManager(path)
    assert manager.load() is True
    with caplog.at_level(logging.WARNING, logger="sfx_renamer.core.config"):
        settings = manager.settings()

    assert settings.matching.engine == "fuzzy"
    assert settings.matching.noun_boost == MatchingSettings().noun_boost
    assert "noun_bost" in caplog.text


def test_non_object_section_falls_back_to_defaults():
    assert AppSettings.from_dict({"naming": 5}).naming == NamingSettings()


def test_invalid_profile_value_raises_value_error(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(
        json.dumps({"classification": {"strategies": {"pos": {"priority": "high"}}}}),
        encoding="utf-8",
    )
    manager = ConfigManager(path)
    manager.load()
    with pytest.raises(ValueError, match="Invalid configuration"):
        manager.settings()
