"""Shared fixtures: a small bilingual catalogue and the default analyzer."""

from __future__ import annotations

import pytest

from sfx_renamer.application.catalogue import TermCatalogue
from sfx_renamer.application.matching import FuzzyMatchingEngine, TokenMatchingEngine
from sfx_renamer.application.tokenizer import PosAnalyzer
from sfx_renamer.core.config import AppSettings

CATALOGUE_ROWS = [
    {
        "Category": "Foley", "Category_zh": "拟音", "SubCategory": "Footstep",
        "SubCategory_zh": "脚步声", "CatID": "FOL001", "CatShort": "FOL",
        "Synonyms": "Steps, Walking", "Synonyms_zh": "脚步",
    },
    {
        "Category": "Doors", "Category_zh": "门", "SubCategory": "Door Wood",
        "SubCategory_zh": "木门", "CatID": "DOORWood", "CatShort": "DOOR",
        "Synonyms": "Wooden Door, Door Slam", "Synonyms_zh": "关门声, 开门声",
    },
    {
        "Category": "Glass", "Category_zh": "玻璃", "SubCategory": "Glass Break",
        "SubCategory_zh": "玻璃破碎", "CatID": "GLASBrk", "CatShort": "GLAS",
        "Synonyms": "Shatter, Smash",
    },
    {
        "Category": "Ambience", "Category_zh": "环境", "SubCategory": "Wind",
        "SubCategory_zh": "风声", "CatID": "AMBWind", "CatShort": "AMB",
        "Synonyms": "Breeze, Gust",
    },
    {
        "Category": "Explosions", "Category_zh": "爆炸", "SubCategory": "Explosion Real",
        "SubCategory_zh": "真实爆炸", "CatID": "EXPLReal", "CatShort": "EXPL",
        "Synonyms": "Blast, Boom",
    },
]


@pytest.fixture
def catalogue_rows():
    return [dict(row) for row in CATALOGUE_ROWS]


@pytest.fixture
def catalogue(catalogue_rows):
    return TermCatalogue.from_rows(catalogue_rows)


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def analyzer(settings):
    return PosAnalyzer.create(settings.tokenizer)


@pytest.fixture
def token_engine(catalogue, settings, analyzer):
    return TokenMatchingEngine(catalogue, settings.matching, analyzer, settings.tokenizer)


@pytest.fixture
def fuzzy_engine(catalogue, settings):
    return FuzzyMatchingEngine(catalogue, settings.fuzzy, tokenizer_settings=settings.tokenizer)


@pytest.fixture
def catalogue_csv(tmp_path, catalogue_rows):
    """The sample catalogue written as a UTF-8 CSV file."""
    header = ["Category", "Category_zh", "SubCategory", "SubCategory_zh", "CatID", "CatShort", "Synonyms", "Synonyms_zh"]
    lines = [",".join(header)]
    for row in catalogue_rows:
        lines.append(",".join(f'"{row.get(key, "")}"' for key in header))
    path = tmp_path / "catalogue.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
