"""
Cache Infrastructure Module

Bounded in-memory caches for POS analysis and translation results.
"""

from .bounded_cache import BoundedCache, CacheStats, EvictionPolicy

__all__ = [
    'BoundedCache',
    'CacheStats',
    'EvictionPolicy',
]
