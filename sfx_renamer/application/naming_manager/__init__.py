"""
Naming Manager Module

命名管理模块: 序号提取、文本规范化、命名格式化 (UCS / 模板) 和文件名验证。
"""

from .number_extractor import extract_number, combine_text_and_number
from .text_utils import (
    NAMING_STYLES,
    apply_naming_style,
    is_chinese_text,
    normalize_chinese_text,
    normalize_english_text,
    split_into_words,
)
from .templates import (
    BUILTIN_TEMPLATES,
    NamingTemplate,
    cleanup_separators,
    get_template,
)
from .validator import (
    NamingValidator,
    ValidationError,
    ValidationResult,
    sanitize_filename,
)
from .naming_rules import UCS_ELEMENTS, NamingFormatter, format_filename

__all__ = [
    # Numbers
    'extract_number',
    'combine_text_and_number',
    # Text
    'NAMING_STYLES',
    'apply_naming_style',
    'is_chinese_text',
    'normalize_chinese_text',
    'normalize_english_text',
    'split_into_words',
    # Templates
    'BUILTIN_TEMPLATES',
    'NamingTemplate',
    'cleanup_separators',
    'get_template',
    # Validator
    'NamingValidator',
    'ValidationError',
    'ValidationResult',
    'sanitize_filename',
    # Formatter
    'UCS_ELEMENTS',
    'NamingFormatter',
    'format_filename',
]
