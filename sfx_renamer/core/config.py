"""
Configuration Management Module

Provides the immutable settings objects used by the engine and a read-only
JSON profile loader.

Every tunable (POS weights, score multipliers, thresholds, strategy order,
naming elements) is documented in DEFAULT_CONFIG. Settings objects are
frozen dataclasses; a change produces a new object instead of patching
shared state.
"""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)


# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "tokenizer": {
        "pos_weights": {
            "noun": 100,
            "adjective": 80,
            "verb": 60,
            "adverb": 40,
            "other": 20,
        },
        "unknown_weight": 20,
        "filter_enabled": True,
        "number_weight_threshold": 50,
        "punctuation_weight_threshold": 30,
        "cache_size": 500,
        "strip_verb_ing": True,
    },
    "nlp_service": {
        "enabled": False,
        "endpoint": "",
        "timeout": 15,
        "daily_limit": 50000,
        "access_key_id": "",
        "access_key_secret": "",
        "region": "cn-hangzhou",
    },
    "matching": {
        "engine": "token",
        # 单语匹配时原文/译文词的来源权重 (1.5:1)
        "original_source_weight": 1.5,
        "translated_source_weight": 1.0,
        # 双语匹配时原文/译文权重
        "bilingual_original_weight": 3.5,
        "bilingual_translated_weight": 1.0,
        "noun_boost": 1.3,
        "adjective_boost": 1.2,
        "verb_boost": 1.1,
        "bilingual_noun_boost": 2.5,
        "bilingual_adjective_boost": 1.5,
        "bilingual_verb_boost": 1.3,
        "category_relevance_boost": 3.0,
        "multi_word_bonus": 1.2,
        "alignment_max_pairs": 4,
        "alignment_bonus": {
            "noun": [2.5, 1.5],
            "adjective": [1.8, 1.3],
            "verb": [1.5, 1.2],
            "adverb": [1.2, 1.1],
        },
        "cjk_boundary_factor": 0.8,
        "word_boundary_score": 0.9,
        "word_in_field_score": 0.7,
        "field_in_word_score": 0.6,
        "partial_score": 0.8,
        "fallback_contains_score": 0.5,
        "single_threshold": 20.0,
        "bilingual_threshold": 50.0,
    },
    "fuzzy": {
        "field_weights": {
            "source": 0.8,
            "target": 0.8,
            "category": 0.5,
            "synonyms": 0.7,
            "synonyms_zh": 0.7,
        },
        "min_match_length": 2,
        "candidate_cutoff": 0.45,
        "single_threshold": 0.2,
        "bilingual_threshold": 50.0,
        "original_weight": 2.0,
        "translated_weight": 2.0,
        "score_scale": 1000,
        "pos_boost_factors": {
            "noun": 0.2,
            "adjective": 0.15,
            "verb": 0.12,
            "adverb": 0.08,
            "other": 0.1,
        },
    },
    "classification": {
        "strategies": {
            "ai": {"enabled": True, "priority": 1, "threshold": None},
            "bilingual": {"enabled": True, "priority": 2, "threshold": None},
            "pos": {"enabled": True, "priority": 3, "threshold": None},
            "translated": {"enabled": True, "priority": 4, "threshold": None},
            "plain": {"enabled": True, "priority": 5, "threshold": None},
            "first_token": {"enabled": True, "priority": 6, "threshold": None},
        },
        "first_token_threshold_factor": 0.5,
        "apply_first_token_to_unspaced_cjk": False,
        "validate_ai_classification": True,
        "alternatives_limit": 10,
    },
    "naming": {
        "use_ucs": True,
        "format": "category_name",  # category_name | name_only | custom
        "template": "{category}_{name}",
        "separator": "_",
        "include_category": True,
        "naming_style": "none",
        "elements": ["catID", "category_zh", "fxName", "fxName_zh"],
        "creator_id": "SFX",
        "source_id": "UCS",
        "max_tags": 3,
        "keep_spaces_in_chinese": False,
    },
    "pipeline": {
        "enable_translation": True,
        "enable_standardize": True,
        "use_ai_classification": False,
        "default_category": "Misc",
        "source_lang": "en",
        "target_lang": "zh",
        "audio_extensions": ["wav", "mp3", "flac", "aiff", "aif", "ogg", "m4a"],
    },
}


def _section(key: str) -> Dict[str, Any]:
    return deepcopy(DEFAULT_CONFIG[key])


def _merge_config(defaults: dict, loaded: dict) -> dict:
    """
    Recursively merge loaded config with defaults.

    Args:
        defaults: Default configuration
        loaded: Loaded configuration

    Returns:
        Merged configuration (loaded values take precedence)
    """
    result = deepcopy(defaults)

    for key, value in loaded.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_config(result[key], value)
        else:
            result[key] = value

    return result


def _section_values(cls: type, key: str, data: Any) -> Dict[str, Any]:
    """
    Merge one profile section over its defaults.

    Keys that are not fields of cls are dropped with a warning.
    """
    if data and not isinstance(data, dict):
        logger.warning(f"Ignoring {key} settings: expected an object, got {type(data).__name__}")
        data = {}
    merged = _merge_config(_section(key), data or {})
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(merged) - known)
    if unknown:
        logger.warning(f"Ignoring unknown {key} settings: {', '.join(unknown)}")
    return {k: v for k, v in merged.items() if k in known}


@dataclass(frozen=True)
class TokenizerSettings:
    """分词/词性标注配置"""
    pos_weights: Dict[str, float] = field(default_factory=lambda: _section("tokenizer")["pos_weights"])
    unknown_weight: float = 20
    filter_enabled: bool = True
    number_weight_threshold: float = 50
    punctuation_weight_threshold: float = 30
    cache_size: int = 500
    strip_verb_ing: bool = True

    def weight_for(self, pos: str) -> float:
        return self.pos_weights.get(pos, self.unknown_weight)

    def replace(self, **changes: Any) -> 'TokenizerSettings':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TokenizerSettings':
        merged = _section_values(cls, "tokenizer", data)
        return cls(**merged)


@dataclass(frozen=True)
class NLPServiceSettings:
    """External NLP service configuration."""
    enabled: bool = False
    endpoint: str = ""
    timeout: float = 15
    daily_limit: int = 50000
    access_key_id: str = ""
    access_key_secret: str = ""
    region: str = "cn-hangzhou"

    def replace(self, **changes: Any) -> 'NLPServiceSettings':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NLPServiceSettings':
        merged = _section_values(cls, "nlp_service", data)
        return cls(**merged)


@dataclass(frozen=True)
class MatchingSettings:
    """
    Score constants of the token matching engine.

    All multipliers are tuned defaults rather than fixed rules, so each one
    can be overridden from a profile.
    """
    engine: str = "token"
    original_source_weight: float = 1.5
    translated_source_weight: float = 1.0
    bilingual_original_weight: float = 3.5
    bilingual_translated_weight: float = 1.0
    noun_boost: float = 1.3
    adjective_boost: float = 1.2
    verb_boost: float = 1.1
    bilingual_noun_boost: float = 2.5
    bilingual_adjective_boost: float = 1.5
    bilingual_verb_boost: float = 1.3
    category_relevance_boost: float = 3.0
    multi_word_bonus: float = 1.2
    alignment_max_pairs: int = 4
    alignment_bonus: Dict[str, Tuple[float, float]] = field(
        default_factory=lambda: {
            pos: tuple(pair) for pos, pair in _section("matching")["alignment_bonus"].items()
        }
    )
    cjk_boundary_factor: float = 0.8
    word_boundary_score: float = 0.9
    word_in_field_score: float = 0.7
    field_in_word_score: float = 0.6
    partial_score: float = 0.8
    fallback_contains_score: float = 0.5
    single_threshold: float = 20.0
    bilingual_threshold: float = 50.0

    def replace(self, **changes: Any) -> 'MatchingSettings':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["alignment_bonus"] = {pos: list(pair) for pos, pair in self.alignment_bonus.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchingSettings':
        merged = _section_values(cls, "matching", data)
        merged["alignment_bonus"] = {
            pos: (float(pair[0]), float(pair[1]))
            for pos, pair in merged["alignment_bonus"].items()
        }
        return cls(**merged)


@dataclass(frozen=True)
class FuzzySettings:
    """Fuzzy (edit-distance) engine configuration."""
    field_weights: Dict[str, float] = field(default_factory=lambda: _section("fuzzy")["field_weights"])
    min_match_length: int = 2
    candidate_cutoff: float = 0.45
    single_threshold: float = 0.2
    bilingual_threshold: float = 50.0
    original_weight: float = 2.0
    translated_weight: float = 2.0
    score_scale: float = 1000
    pos_boost_factors: Dict[str, float] = field(
        default_factory=lambda: _section("fuzzy")["pos_boost_factors"]
    )

    def replace(self, **changes: Any) -> 'FuzzySettings':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FuzzySettings':
        merged = _section_values(cls, "fuzzy", data)
        return cls(**merged)


@dataclass(frozen=True)
class StrategyConfig:
    """One entry of the classification cascade."""
    key: str
    enabled: bool = True
    priority: int = 0
    threshold: Optional[float] = None  # None: use the engine default


@dataclass(frozen=True)
class StrategySettings:
    """
    Ordered, toggle-able classification strategies.

    Every mutator returns a new StrategySettings.
    """
    strategies: Tuple[StrategyConfig, ...] = ()

    def enabled_strategies(self) -> Tuple[StrategyConfig, ...]:
        """Enabled strategies sorted by priority (stable for equal priorities)."""
        return tuple(sorted(
            (s for s in self.strategies if s.enabled),
            key=lambda s: s.priority,
        ))

    def get(self, key: str) -> Optional[StrategyConfig]:
        for strategy in self.strategies:
            if strategy.key == key:
                return strategy
        return None

    def is_enabled(self, key: str) -> bool:
        strategy = self.get(key)
        return bool(strategy and strategy.enabled)

    def _update(self, key: str, **changes: Any) -> 'StrategySettings':
        if self.get(key) is None:
            raise KeyError(f"Unknown strategy: {key}")
        return StrategySettings(tuple(
            replace(s, **changes) if s.key == key else s for s in self.strategies
        ))

    def with_enabled(self, key: str, enabled: bool) -> 'StrategySettings':
        return self._update(key, enabled=enabled)

    def with_priority(self, key: str, priority: int) -> 'StrategySettings':
        return self._update(key, priority=priority)

    def with_threshold(self, key: str, threshold: Optional[float]) -> 'StrategySettings':
        return self._update(key, threshold=threshold)

    def to_dict(self) -> Dict[str, Any]:
        return {
            s.key: {"enabled": s.enabled, "priority": s.priority, "threshold": s.threshold}
            for s in self.strategies
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StrategySettings':
        if data and not isinstance(data, dict):
            raise ValueError(f"strategies must be an object, got {type(data).__name__}")
        merged = _merge_config(_section("classification")["strategies"], data or {})
        configs = []
        for key, value in merged.items():
            if not isinstance(value, dict):
                raise ValueError(f"strategy {key!r} must be an object")
            threshold = value.get("threshold")
            configs.append(StrategyConfig(
                key=key,
                enabled=bool(value.get("enabled", True)),
                priority=int(value.get("priority", 0)),
                threshold=None if threshold is None else float(threshold),
            ))
        return cls(tuple(configs))

    @classmethod
    def defaults(cls) -> 'StrategySettings':
        return cls.from_dict({})


@dataclass(frozen=True)
class ClassificationSettings:
    """分类策略级联配置"""
    strategies: StrategySettings = field(default_factory=StrategySettings.defaults)
    first_token_threshold_factor: float = 0.5
    apply_first_token_to_unspaced_cjk: bool = False
    validate_ai_classification: bool = True
    alternatives_limit: int = 10

    def replace(self, **changes: Any) -> 'ClassificationSettings':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strategies": self.strategies.to_dict(),
            "first_token_threshold_factor": self.first_token_threshold_factor,
            "apply_first_token_to_unspaced_cjk": self.apply_first_token_to_unspaced_cjk,
            "validate_ai_classification": self.validate_ai_classification,
            "alternatives_limit": self.alternatives_limit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClassificationSettings':
        merged = _section_values(cls, "classification", data)
        strategies = StrategySettings.from_dict(merged.pop("strategies"))
        return cls(strategies=strategies, **merged)


@dataclass(frozen=True)
class NamingSettings:
    """命名规则配置"""
    use_ucs: bool = True
    format: str = "category_name"
    template: str = "{category}_{name}"
    separator: str = "_"
    include_category: bool = True
    naming_style: str = "none"
    elements: Tuple[str, ...] = ("catID", "category_zh", "fxName", "fxName_zh")
    creator_id: str = "SFX"
    source_id: str = "UCS"
    max_tags: int = 3
    keep_spaces_in_chinese: bool = False

    def replace(self, **changes: Any) -> 'NamingSettings':
        if "elements" in changes:
            changes["elements"] = tuple(changes["elements"])
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["elements"] = list(self.elements)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NamingSettings':
        merged = _section_values(cls, "naming", data)
        merged["elements"] = tuple(merged["elements"])
        return cls(**merged)


@dataclass(frozen=True)
class PipelineSettings:
    """File pipeline configuration."""
    enable_translation: bool = True
    enable_standardize: bool = True
    use_ai_classification: bool = False
    default_category: str = "Misc"
    source_lang: str = "en"
    target_lang: str = "zh"
    audio_extensions: Tuple[str, ...] = ("wav", "mp3", "flac", "aiff", "aif", "ogg", "m4a")

    def replace(self, **changes: Any) -> 'PipelineSettings':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["audio_extensions"] = list(self.audio_extensions)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PipelineSettings':
        merged = _section_values(cls, "pipeline", data)
        merged["audio_extensions"] = tuple(ext.lower().lstrip(".") for ext in merged["audio_extensions"])
        return cls(**merged)


_SECTIONS = {
    "tokenizer": TokenizerSettings,
    "nlp_service": NLPServiceSettings,
    "matching": MatchingSettings,
    "fuzzy": FuzzySettings,
    "classification": ClassificationSettings,
    "naming": NamingSettings,
    "pipeline": PipelineSettings,
}


@dataclass(frozen=True)
class AppSettings:
    """
    Aggregated, immutable application settings.

    Usage:
        settings = AppSettings.from_dict({"matching": {"noun_boost": 2.0}})
        stricter = settings.with_value("matching.single_threshold", 40.0)
    """
    tokenizer: TokenizerSettings = field(default_factory=TokenizerSettings)
    nlp_service: NLPServiceSettings = field(default_factory=NLPServiceSettings)
    matching: MatchingSettings = field(default_factory=MatchingSettings)
    fuzzy: FuzzySettings = field(default_factory=FuzzySettings)
    classification: ClassificationSettings = field(default_factory=ClassificationSettings)
    naming: NamingSettings = field(default_factory=NamingSettings)
    pipeline: PipelineSettings = field(default_factory=PipelineSettings)

    def replace(self, **changes: Any) -> 'AppSettings':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name).to_dict() for name in _SECTIONS}

    def with_value(self, key: str, value: Any) -> 'AppSettings':
        """
        Return new settings with one dot-notation key changed.

        Args:
            key: Configuration key (e.g., "matching.noun_boost")
            value: Value to set

        Raises:
            KeyError: If the section is unknown
        """
        parts = key.split('.')
        if parts[0] not in _SECTIONS or len(parts) < 2:
            raise KeyError(f"Unknown configuration key: {key}")

        data = self.to_dict()
        config = data
        for part in parts[:-1]:
            config = config.setdefault(part, {})
        config[parts[-1]] = value
        return AppSettings.from_dict(data)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None) -> 'AppSettings':
        data = data or {}
        return cls(**{
            name: section_cls.from_dict(data.get(name) or {})
            for name, section_cls in _SECTIONS.items()
        })


class ConfigManager:
    """
    Loads a JSON settings profile merged over DEFAULT_CONFIG.

    Profiles are only read here; nothing is written back.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else None
        self._config: dict = deepcopy(DEFAULT_CONFIG)
        self._loaded = False

    def load(self) -> bool:
        """
        Load configuration from file.

        Returns:
            bool: True if a profile was loaded, False if defaults are used.
        """
        self._loaded = True
        if self.config_path is None:
            return False

        try:
            if not self.config_path.exists():
                logger.info(f"Config file not found, using defaults: {self.config_path}")
                return False

            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)

            if not isinstance(loaded, dict):
                logger.error(f"Config root must be an object: {self.config_path}")
                self._config = deepcopy(DEFAULT_CONFIG)
                return False

            self._config = _merge_config(DEFAULT_CONFIG, loaded)
            logger.info(f"Configuration loaded from {self.config_path}")
            return True

        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load configuration: {e}")
            self._config = deepcopy(DEFAULT_CONFIG)
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "matching.noun_boost")
            default: Default value if key not found

        Returns:
            The configuration value or default.
        """
        if not self._loaded:
            self.load()

        value: Any = self._config
        try:
            for part in key.split('.'):
                value = value[part]
            return deepcopy(value)
        except (KeyError, TypeError):
            return default

    def get_all(self) -> Dict[str, Any]:
        if not self._loaded:
            self.load()
        return deepcopy(self._config)

    def settings(self) -> AppSettings:
        """
        Build immutable settings from the loaded profile.

        Unknown keys are ignored with a warning.

        Raises:
            ValueError: A value has the wrong type
        """
        try:
            return AppSettings.from_dict(self.get_all())
        except (AttributeError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid configuration {self.config_path}: {e}") from e
