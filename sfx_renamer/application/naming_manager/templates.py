"""
Naming Templates

自定义命名模板, 支持变量替换与格式修饰。

Syntax:
    {variable}            变量替换
    {variable|default}    带默认值
    {variable:format}     upper / lower / title / 03 (补零)
    {sep}                 configured separator

Placeholders left empty are removed together with the separators around
them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

logger = logging.getLogger(__name__)

VARIABLE_PATTERN = re.compile(r"\{([^}:|]+)(?::([^}|]+))?(?:\|([^}]*))?\}")
SEPARATOR_TOKEN = "{sep}"


def _apply_format(value: str, format_spec: str) -> str:
    if format_spec == "upper":
        return value.upper()
    if format_spec == "lower":
        return value.lower()
    if format_spec == "title":
        return value.title()
    if format_spec.startswith("0") and format_spec[1:].isdigit():
        return value.zfill(int(format_spec[1:]))
    logger.debug(f"Ignoring unknown format spec: {format_spec}")
    return value


def cleanup_separators(text: str, separator: str) -> str:
    """Collapse separator runs and trim separators at both ends."""
    text = text.strip()
    if not separator:
        return text
    sep = re.escape(separator)
    text = re.sub(f"(?:{sep}){{2,}}", separator, text)
    text = re.sub(f"^(?:{sep})+|(?:{sep})+$", "", text)
    return text.strip()


@dataclass(frozen=True)
class NamingTemplate:
    """命名模板"""
    id: str
    name: str
    pattern: str
    description: str = ""

    def format(self, context: Mapping[str, Any], separator: str = "_") -> str:
        """
        使用上下文格式化模板

        Args:
            context: Variable values; missing or empty values render as ""
            separator: Replaces {sep} and drives the cleanup of empty slots
        """
        text = self.pattern.replace(SEPARATOR_TOKEN, separator)

        def replace_variable(match: re.Match) -> str:
            var_name = match.group(1).strip()
            format_spec = match.group(2)
            default = match.group(3) or ""
            value = context.get(var_name)
            value = str(value) if value not in (None, "") else default
            if format_spec and value:
                value = _apply_format(value, format_spec.strip())
            return value

        return cleanup_separators(VARIABLE_PATTERN.sub(replace_variable, text), separator)

    def get_variables(self) -> List[str]:
        """获取模板中使用的变量列表"""
        pattern = self.pattern.replace(SEPARATOR_TOKEN, "")
        return list(dict.fromkeys(m.group(1).strip() for m in VARIABLE_PATTERN.finditer(pattern)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "pattern": self.pattern,
            "description": self.description,
        }


# 内置格式 (NamingSettings.format)
BUILTIN_TEMPLATES: Dict[str, NamingTemplate] = {
    "category_name": NamingTemplate(
        id="category_name",
        name="分类_名称",
        pattern="{category}{sep}{name}{sep}{number}",
        description="Foley_Footsteps Snow_01",
    ),
    "name_only": NamingTemplate(
        id="name_only",
        name="仅名称",
        pattern="{name}{sep}{number}",
        description="Footsteps Snow_01",
    ),
}


def get_template(format_id: str, custom_pattern: str = "") -> NamingTemplate:
    """
    Resolve the template of a naming format.

    "custom" uses custom_pattern; unknown ids fall back to category_name.
    """
    if format_id == "custom":
        return NamingTemplate(id="custom", name="自定义", pattern=custom_pattern or "{category}_{name}")
    template = BUILTIN_TEMPLATES.get(format_id)
    if template is None:
        logger.warning(f"Unknown naming format {format_id!r}, using category_name")
        template = BUILTIN_TEMPLATES["category_name"]
    return template
