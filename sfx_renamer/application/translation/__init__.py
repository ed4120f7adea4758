"""
Translation Module

翻译能力: 翻译、反向翻译 (中 -> 英) 和英文标准化描述。
"""

from .base import AIServiceConfig, Translator
from .glossary import GlossaryTranslator
from .openai_compatible import OpenAICompatibleTranslator
from .service import TranslationService

__all__ = [
    "AIServiceConfig",
    "Translator",
    "GlossaryTranslator",
    "OpenAICompatibleTranslator",
    "TranslationService",
]
