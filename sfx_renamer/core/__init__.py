"""
Core Module - Configuration

Contains core application components:
- config: Immutable settings objects and the JSON profile loader
"""

from .config import (
    DEFAULT_CONFIG,
    AppSettings,
    ClassificationSettings,
    ConfigManager,
    FuzzySettings,
    MatchingSettings,
    NamingSettings,
    NLPServiceSettings,
    PipelineSettings,
    StrategyConfig,
    StrategySettings,
    TokenizerSettings,
)

__all__ = [
    'DEFAULT_CONFIG',
    'AppSettings',
    'ClassificationSettings',
    'ConfigManager',
    'FuzzySettings',
    'MatchingSettings',
    'NamingSettings',
    'NLPServiceSettings',
    'PipelineSettings',
    'StrategyConfig',
    'StrategySettings',
    'TokenizerSettings',
]
