"""
Naming Validator

文件名清理与验证 (Windows / POSIX 文件系统限制)。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

# Windows保留名称
WINDOWS_RESERVED = frozenset({
    "CON", "PRN", "AUX", "NUL",
    "COM1", "COM2", "COM3", "COM4", "COM5", "COM6", "COM7", "COM8", "COM9",
    "LPT1", "LPT2", "LPT3", "LPT4", "LPT5", "LPT6", "LPT7", "LPT8", "LPT9",
})

# Windows与POSIX非法字符的并集, 重命名后的文件可能在两种系统间移动
ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
WHITESPACE = re.compile(r"\s+")

MAX_FILENAME_LENGTH = 255
DEFAULT_NAME = "unnamed"


def _split_extension(filename: str):
    stem, dot, ext = filename.rpartition(".")
    if not dot or not stem:
        return filename, ""
    return stem, f".{ext}"


def sanitize_filename(filename: Optional[str]) -> str:
    """
    清理文件名

    Illegal characters become "_", whitespace collapses, reserved device
    names get a "_" suffix and the name is cut to 255 characters without
    losing the extension.

    Returns:
        A usable file name, "unnamed" when nothing is left.
    """
    if not filename or not filename.strip():
        return DEFAULT_NAME

    stem, ext = _split_extension(ILLEGAL_CHARS.sub("_", filename))
    stem = WHITESPACE.sub(" ", stem).strip()
    ext = WHITESPACE.sub("", ext)

    if stem.upper() in WINDOWS_RESERVED:
        stem = f"{stem}_"

    if len(stem) + len(ext) > MAX_FILENAME_LENGTH:
        stem = stem[: MAX_FILENAME_LENGTH - len(ext)].rstrip()

    if not stem or stem == ".":
        stem = DEFAULT_NAME
    return f"{stem}{ext}"


class ValidationError(Enum):
    """验证错误类型"""
    EMPTY_NAME = "empty_name"
    ILLEGAL_CHARACTERS = "illegal_characters"
    RESERVED_NAME = "reserved_name"
    NAME_TOO_LONG = "name_too_long"
    DUPLICATE_NAME = "duplicate_name"


ERROR_MESSAGES = {
    ValidationError.EMPTY_NAME: "文件名为空",
    ValidationError.ILLEGAL_CHARACTERS: "包含非法字符",
    ValidationError.RESERVED_NAME: "使用了系统保留名称",
    ValidationError.NAME_TOO_LONG: "文件名过长",
    ValidationError.DUPLICATE_NAME: "重复的文件名",
}


@dataclass
class ValidationResult:
    """验证结果"""
    is_valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestion: str = ""

    def add_error(self, error: ValidationError, message: str = "") -> None:
        self.errors.append(error)
        self.is_valid = False
        if message:
            self.warnings.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def error_messages(self) -> List[str]:
        return [ERROR_MESSAGES.get(e, e.value) for e in self.errors]


class NamingValidator:
    """
    命名验证器

    Usage:
        result = NamingValidator().validate("AMB_环境_Wind.wav")
        if not result.is_valid:
            print(result.error_messages, result.suggestion)
    """

    def validate(
        self,
        filename: str,
        existing_names: Optional[Iterable[str]] = None,
    ) -> ValidationResult:
        """
        验证文件名

        Args:
            filename: Name to check, with extension
            existing_names: Names already taken in the target folder

        Returns:
            ValidationResult with errors, warnings and a sanitized suggestion
        """
        result = ValidationResult()

        if not filename or not filename.strip():
            result.add_error(ValidationError.EMPTY_NAME)
            result.suggestion = DEFAULT_NAME
            return result

        match = ILLEGAL_CHARS.search(filename)
        if match:
            result.add_error(ValidationError.ILLEGAL_CHARACTERS, f"包含非法字符: {match.group()!r}")

        stem, _ = _split_extension(filename)
        if stem.strip().upper() in WINDOWS_RESERVED:
            result.add_error(ValidationError.RESERVED_NAME, f"'{stem}' 是Windows保留名称")

        if len(filename) > MAX_FILENAME_LENGTH:
            result.add_error(
                ValidationError.NAME_TOO_LONG,
                f"文件名长度 {len(filename)} 超过限制 {MAX_FILENAME_LENGTH}",
            )

        if existing_names:
            lower = filename.lower()
            # 不区分大小写 (Windows/macOS)
            if any(name.lower() == lower for name in existing_names):
                result.add_error(ValidationError.DUPLICATE_NAME, f"与现有文件名重复: {filename}")

        if filename != filename.strip() or stem.endswith("."):
            result.add_warning("文件名首尾含有空格或点")
        if "  " in filename:
            result.add_warning("文件名包含连续空格")

        if not result.is_valid:
            result.suggestion = sanitize_filename(filename)
        return result
