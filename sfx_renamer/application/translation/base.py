"""
Translation Base Classes

定义翻译服务的基类和通用接口。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict

logger = logging.getLogger(__name__)


@dataclass
class AIServiceConfig:
    """AI服务配置"""
    provider_id: str = "openai_compatible"
    api_key: str = ""
    base_url: str = ""
    model_name: str = ""
    temperature: float = 0.3
    max_tokens: int = 512
    timeout: int = 30
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "provider_id": self.provider_id,
            "api_key": self.api_key,
            "base_url": self.base_url,
            "model_name": self.model_name,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
            "extra": dict(self.extra),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AIServiceConfig':
        """从字典创建"""
        return cls(
            provider_id=data.get("provider_id", "openai_compatible"),
            api_key=data.get("api_key", ""),
            base_url=data.get("base_url", ""),
            model_name=data.get("model_name", ""),
            temperature=data.get("temperature", 0.3),
            max_tokens=data.get("max_tokens", 512),
            timeout=data.get("timeout", 30),
            extra=data.get("extra", {}),
        )


class Translator(ABC):
    """
    翻译器基类

    Providers implement translate/reverse_translate/standardize. complete()
    is optional and only needed by the AI classifier.

    Errors are raised as TranslationError; callers decide the fallback.
    """

    SERVICE_ID: str = ""
    SERVICE_NAME: str = ""

    @property
    def id(self) -> str:
        return self.SERVICE_ID

    @property
    def name(self) -> str:
        return self.SERVICE_NAME

    @property
    def supports_completion(self) -> bool:
        return False

    @abstractmethod
    async def translate(self, text: str, source_lang: str = "en", target_lang: str = "zh") -> str:
        """Translate text between two languages."""

    @abstractmethod
    async def reverse_translate(self, text: str) -> str:
        """Translate target-language text (Chinese) back to an English gloss."""

    @abstractmethod
    async def standardize(self, text: str) -> str:
        """Produce a short canonical English description of a sound."""

    async def complete(self, prompt: str) -> str:
        """Free-form completion (optional capability)."""
        raise NotImplementedError(f"{self.name or type(self).__name__} does not support completion")

    async def cleanup(self) -> None:
        """清理资源（可选）"""
        pass
