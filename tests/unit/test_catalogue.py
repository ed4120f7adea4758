from __future__ import annotations

import pytest

from sfx_renamer.application.catalogue import TermCatalogue
from sfx_renamer.domain.exceptions import CatalogueLoadError
from sfx_renamer.domain.models import TermRecord, split_synonyms


def test_from_rows_builds_indexes(catalogue):
    assert len(catalogue) == 5
    term = catalogue.find_term_by_cat_id("FOL001")
    assert term.source == "Footstep"
    assert term.target == "脚步声"
    assert term.synonym_list == ("Steps", "Walking")
    assert catalogue.is_valid_cat_id("DOORWood")
    assert not catalogue.is_valid_cat_id("NOPE")
    assert not catalogue.is_valid_cat_id(None)


def test_rows_without_required_fields_are_skipped(catalogue_rows):
    rows = catalogue_rows + [{"SubCategory": "", "CatID": "X1"}, {"SubCategory": "Y"}]
    catalogue = TermCatalogue.from_rows(rows)
    assert len(catalogue) == 5


def test_no_valid_rows_raises():
    with pytest.raises(CatalogueLoadError):
        TermCatalogue.from_rows([{"SubCategory": "Only"}])


def test_duplicate_cat_id_keeps_first():
    catalogue = TermCatalogue([
        TermRecord("First", "一", "ID1"),
        TermRecord("Second", "二", "ID1"),
    ])
    assert len(catalogue) == 1
    assert catalogue.find_term_by_cat_id("ID1").source == "First"


def test_row_defaults():
    term = TermRecord.from_row({"SubCategory": "Wind", "CatID": "AMBWind", "Category": "Ambience"})
    assert term.target == "Wind"
    assert term.cat_short == "AMBW"
    assert term.category_zh == "Ambience"


def test_categories_and_lookup(catalogue):
    assert catalogue.categories()[:2] == ["Foley", "Doors"]
    assert [t.cat_id for t in catalogue.get_terms_by_category("Glass")] == ["GLASBrk"]
    assert catalogue.find_term_by_category("门").cat_id == "DOORWood"
    assert catalogue.find_term_by_category("foley", "footstep").cat_id == "FOL001"
    assert catalogue.find_term_by_category("foley", "door wood") is None


def test_glossary_both_directions(catalogue):
    forward = catalogue.glossary()
    assert forward["footstep"] == "脚步声"
    assert forward["shatter"] == "玻璃破碎"

    reverse = catalogue.glossary(reverse=True)
    assert reverse["脚步声"] == "Footstep"
    assert reverse["关门声"] == "Door Wood"


def test_from_csv(catalogue_csv):
    catalogue = TermCatalogue.from_csv(catalogue_csv)
    assert len(catalogue) == 5
    assert catalogue.find_term_by_cat_id("AMBWind").target == "风声"


def test_from_csv_missing_file(tmp_path):
    with pytest.raises(CatalogueLoadError):
        TermCatalogue.from_csv(tmp_path / "missing.csv")


def test_split_synonyms_mixed_separators():
    assert split_synonyms("Slam, Bang；撞击、 敲击;") == ("Slam", "Bang", "撞击", "敲击")
    assert split_synonyms("") == ()
