"""
Naming Rules

命名规则格式化器: 根据 NamingSettings 把 FileRecord 组合成新文件名。

Two modes:
- UCS: ordered elements (catID, category_zh, fxName, ...) joined by the separator
- Template: {category}/{name}/{tags}/... substitution

The formatter is pure. It reads the record and the settings and never
touches the file system.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from ...core.config import NamingSettings
from ...core.utils import contains_cjk
from ...domain.models import (
    DEFAULT_CATEGORY,
    FileRecord,
    get_category_chinese_name,
    get_category_id,
)
from .templates import get_template
from .text_utils import apply_naming_style, normalize_chinese_text, normalize_english_text
from .validator import sanitize_filename

logger = logging.getLogger(__name__)

# UCS 元素的标准顺序
UCS_ELEMENTS = (
    "catID",
    "category",
    "category_zh",
    "subCategory",
    "subCategory_zh",
    "fxName",
    "fxName_zh",
    "creatorID",
    "sourceID",
    "serialNumber",
)

SERIAL_WIDTH = 3


class NamingFormatter:
    """
    命名格式化器

    Usage:
        formatter = NamingFormatter(NamingSettings())
        record.formatted_name = formatter.format(record)
    """

    def __init__(self, settings: Optional[NamingSettings] = None):
        self._settings = settings or NamingSettings()

    @property
    def settings(self) -> NamingSettings:
        return self._settings

    def format(self, record: FileRecord, settings: Optional[NamingSettings] = None) -> str:
        """
        格式化文件名

        Args:
            record: Classified (or unclassified) file record
            settings: Overrides the formatter's settings for this call

        Returns:
            Sanitized file name including the extension
        """
        settings = settings or self._settings
        if settings.use_ucs:
            name = self._format_ucs(record, settings)
        else:
            name = self._format_template(record, settings)

        if not name:
            name = record.name_without_number or record.name
        if record.extension:
            name = f"{name}.{record.extension}"
        return sanitize_filename(name)

    # ------------------------------------------------------------------
    # Field helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _category(record: FileRecord) -> str:
        return record.category or DEFAULT_CATEGORY

    @staticmethod
    def fx_name(record: FileRecord, settings: NamingSettings) -> str:
        """English descriptor: standardized name, else the name without its number."""
        text = record.standardized_name or record.name_without_number or record.name
        if contains_cjk(text):
            return normalize_chinese_text(text, settings.keep_spaces_in_chinese)
        text = normalize_english_text(text)
        if settings.naming_style != "none":
            text = apply_naming_style(text, settings.naming_style, settings.separator)
        return text

    @staticmethod
    def fx_name_zh(record: FileRecord, settings: NamingSettings) -> str:
        return normalize_chinese_text(record.translated_name, settings.keep_spaces_in_chinese)

    @staticmethod
    def serial(record: FileRecord) -> str:
        """The preserved number, else the batch position padded to 3 digits."""
        if record.number is not None and record.number.has_number:
            return record.number.number
        return str(max(record.sequence, 0)).zfill(SERIAL_WIDTH)

    # ------------------------------------------------------------------
    # UCS
    # ------------------------------------------------------------------

    def _ucs_values(self, record: FileRecord, settings: NamingSettings) -> Dict[str, Callable[[], str]]:
        category = self._category(record)
        return {
            "catID": lambda: record.cat_id or get_category_id(category),
            "category": lambda: category,
            "category_zh": lambda: record.category_zh or get_category_chinese_name(category),
            "subCategory": lambda: record.sub_category,
            "subCategory_zh": lambda: record.sub_category_zh if record.sub_category else "",
            "fxName": lambda: self.fx_name(record, settings),
            "fxName_zh": lambda: self.fx_name_zh(record, settings),
            "creatorID": lambda: settings.creator_id,
            "sourceID": lambda: settings.source_id,
            "serialNumber": lambda: self.serial(record),
        }

    def _format_ucs(self, record: FileRecord, settings: NamingSettings) -> str:
        values = self._ucs_values(record, settings)
        parts: List[str] = []

        for element in settings.elements:
            getter = values.get(element)
            if getter is None:
                logger.warning(f"Unknown UCS element: {element}")
                continue
            value = getter().strip()
            if value:
                parts.append(value)

        # 保留原始序号, 即使未启用 serialNumber
        if "serialNumber" not in settings.elements and record.number is not None and record.number.has_number:
            parts.append(record.number.number)

        return settings.separator.join(parts)

    # ------------------------------------------------------------------
    # Template
    # ------------------------------------------------------------------

    def _format_template(self, record: FileRecord, settings: NamingSettings) -> str:
        category = self._category(record)
        tags = [t.strip() for t in record.tags if t and t.strip()][: settings.max_tags]
        context = {
            "category": category if settings.include_category else "",
            "category_zh": (record.category_zh or get_category_chinese_name(category))
            if settings.include_category else "",
            "name": self.fx_name(record, settings),
            "name_zh": self.fx_name_zh(record, settings),
            "tags": settings.separator.join(tags),
            "catID": record.cat_id or get_category_id(category),
            "number": record.number.number if record.number is not None else "",
        }
        template = get_template(settings.format, settings.template)
        return template.format(context, settings.separator)


def format_filename(record: FileRecord, settings: Optional[NamingSettings] = None) -> str:
    """Module-level shortcut for NamingFormatter(settings).format(record)."""
    return NamingFormatter(settings).format(record)
