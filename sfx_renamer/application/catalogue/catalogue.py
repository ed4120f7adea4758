"""
Term Catalogue

In-memory, read-only list of TermRecords with catID and category indexes.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from ...domain.exceptions import CatalogueLoadError
from ...domain.models import TermRecord

logger = logging.getLogger(__name__)


class TermCatalogue:
    """
    术语表

    Records are immutable once loaded; swapping catalogues means building a
    new instance. On duplicate catIDs the first record wins.

    Usage:
        catalogue = TermCatalogue.from_csv("ucs_terms.csv")
        term = catalogue.find_term_by_cat_id("FOLStep")
    """

    def __init__(self, terms: Iterable[TermRecord] = ()):
        self._terms: List[TermRecord] = []
        self._by_cat_id: Dict[str, TermRecord] = {}
        self._by_category: Dict[str, List[TermRecord]] = {}

        for term in terms:
            if term.cat_id in self._by_cat_id:
                logger.warning(f"Duplicate catID ignored: {term.cat_id} ({term.source})")
                continue
            self._terms.append(term)
            self._by_cat_id[term.cat_id] = term
            self._by_category.setdefault(term.category, []).append(term)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> 'TermCatalogue':
        """
        Build a catalogue from row-like mappings.

        Rows without SubCategory or CatID are skipped with a warning.

        Raises:
            CatalogueLoadError: If no valid row remains
        """
        terms: List[TermRecord] = []
        skipped = 0

        for index, row in enumerate(rows):
            term = TermRecord.from_row(row)
            if term is None:
                skipped += 1
                logger.warning(f"Skipping catalogue row {index + 1}: missing SubCategory or CatID")
                continue
            terms.append(term)

        if not terms:
            raise CatalogueLoadError(f"No valid catalogue rows ({skipped} skipped)")

        catalogue = cls(terms)
        logger.info(f"Loaded {len(catalogue)} terms ({skipped} rows skipped)")
        return catalogue

    @classmethod
    def from_csv(cls, path: Union[str, Path], encoding: str = "utf-8-sig") -> 'TermCatalogue':
        """
        Load a catalogue from a CSV file with a header row.

        Raises:
            CatalogueLoadError: If the file cannot be read or has no valid rows
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding=encoding, newline='') as f:
                rows = list(csv.DictReader(f))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise CatalogueLoadError(f"Cannot read catalogue {path}: {e}") from e

        logger.debug(f"Read {len(rows)} rows from {path}")
        return cls.from_rows(rows)

    @property
    def terms(self) -> List[TermRecord]:
        return list(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[TermRecord]:
        return iter(self._terms)

    def __bool__(self) -> bool:
        return bool(self._terms)

    def find_term_by_cat_id(self, cat_id: Optional[str]) -> Optional[TermRecord]:
        if not cat_id:
            return None
        return self._by_cat_id.get(cat_id)

    def is_valid_cat_id(self, cat_id: Optional[str]) -> bool:
        return self.find_term_by_cat_id(cat_id) is not None

    def categories(self) -> List[str]:
        """Distinct category labels in first-seen order."""
        return [category for category in self._by_category if category]

    def get_terms_by_category(self, category: str) -> List[TermRecord]:
        return list(self._by_category.get(category, []))

    def find_term_by_category(
        self,
        category: str,
        sub_category: Optional[str] = None,
    ) -> Optional[TermRecord]:
        """
        Find a term by category label and, optionally, sub-category label.

        Labels are compared case-insensitively against both languages.
        """
        wanted = category.strip().lower()
        wanted_sub = sub_category.strip().lower() if sub_category else None

        for term in self._terms:
            if wanted not in (term.category.lower(), term.category_zh.lower()):
                continue
            if wanted_sub is None or wanted_sub in (term.source.lower(), term.target.lower()):
                return term
        return None

    def glossary(self, reverse: bool = False) -> Dict[str, str]:
        """
        术语对照表

        Args:
            reverse: False for source → target (English → Chinese),
                True for target → source

        Returns:
            Lower-cased keys mapped to the paired label. Earlier terms win.
        """
        mapping: Dict[str, str] = {}
        for term in self._terms:
            if reverse:
                keys = [term.target, *term.synonym_zh_list]
                value = term.source
            else:
                keys = [term.source, *term.synonym_list]
                value = term.target
            if not value:
                continue
            for key in keys:
                key = key.strip().lower()
                if key and key not in mapping:
                    mapping[key] = value
        return mapping
