"""
Number Extractor

数字提取: 从文件名中分离序号 ("Door Slam 01", "01 Door Slam", "Door Slam(2)")。
"""

from __future__ import annotations

import re

from ...domain.models import NumberParts

TRAILING_NUMBER = re.compile(r"^(.*?)[\s_\-.]+(\d+)$")
LEADING_NUMBER = re.compile(r"^(\d+)[\s_\-.]+(.*)$")
BRACKET_NUMBER = re.compile(r"^(.*?)\((\d+)\)$")


def extract_number(name: str) -> NumberParts:
    """
    Split a serial number off a name.

    Patterns are tried in order: trailing, leading, bracketed. The digits
    are kept exactly as written so "01" stays "01".
    """
    if not name:
        return NumberParts(text="")

    match = TRAILING_NUMBER.match(name)
    if match and match.group(1).strip():
        return NumberParts(text=match.group(1).strip(), number=match.group(2))

    match = LEADING_NUMBER.match(name)
    if match and match.group(2).strip():
        return NumberParts(text=match.group(2).strip(), number=match.group(1), prefix=True)

    match = BRACKET_NUMBER.match(name)
    if match and match.group(1).strip():
        return NumberParts(text=match.group(1).strip(), number=match.group(2), suffix="()")

    return NumberParts(text=name)


def combine_text_and_number(text: str, parts: NumberParts, separator: str = " ") -> str:
    """Put the number back where extract_number() found it."""
    if not parts.has_number:
        return text
    if parts.prefix:
        return f"{parts.number}{separator}{text}"
    if parts.suffix == "()":
        return f"{text}({parts.number})"
    return f"{text}{separator}{parts.number}"
