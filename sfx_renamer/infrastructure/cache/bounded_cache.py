"""
Bounded Cache

进程内有界缓存, 用于词性分析和翻译结果。

Two eviction policies:
    LRU   reads refresh an entry, the least recently touched one goes first
    FIFO  reads do not reorder, the earliest inserted entry goes first

Entries may expire after a TTL. All operations take one lock, so a cache
can be shared between the event loop and worker threads.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


class EvictionPolicy(Enum):
    LRU = "lru"
    FIFO = "fifo"


@dataclass
class CacheStats:
    """命中统计"""
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def to_dict(self) -> Dict[str, float]:
        return {**asdict(self), "hit_rate": self.hit_rate}


class BoundedCache(Generic[K, V]):
    """
    有界缓存

    Usage:
        pos_cache = BoundedCache[str, list](max_size=500, policy=EvictionPolicy.FIFO)
        pos_cache.set("关门声", words)
        words = pos_cache.get("关门声")
    """

    def __init__(
        self,
        max_size: int = 1000,
        policy: EvictionPolicy = EvictionPolicy.LRU,
        ttl: Optional[float] = None,
        on_evict: Optional[Callable[[K, V], None]] = None,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._policy = policy
        self._ttl = ttl
        self._on_evict = on_evict
        # key -> (value, stored_at); iteration order is eviction order
        self._entries: "OrderedDict[K, Tuple[V, float]]" = OrderedDict()
        self._lock = threading.RLock()
        self.stats = CacheStats()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def policy(self) -> EvictionPolicy:
        return self._policy

    def _expired(self, stored_at: float) -> bool:
        return self._ttl is not None and time.time() - stored_at > self._ttl

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._expired(entry[1]):
                if entry is not None:
                    self._drop(key)
                self.stats.misses += 1
                return default

            if self._policy is EvictionPolicy.LRU:
                self._entries.move_to_end(key)
            self.stats.hits += 1
            return entry[0]

    def set(self, key: K, value: V) -> None:
        with self._lock:
            known = key in self._entries
            self._entries[key] = (value, time.time())
            if known:
                # FIFO keeps the original insertion slot
                if self._policy is EvictionPolicy.LRU:
                    self._entries.move_to_end(key)
                return

            while len(self._entries) > self._max_size:
                self._drop(next(iter(self._entries)))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.stats = CacheStats()

    def snapshot(self) -> Dict[str, float]:
        """Size plus hit statistics, for diagnostics."""
        with self._lock:
            return {"size": len(self._entries), **self.stats.to_dict()}

    def keys(self) -> List[K]:
        """Keys in eviction order, next victim first."""
        with self._lock:
            return list(self._entries)

    def _drop(self, key: K) -> None:
        value, _ = self._entries.pop(key)
        self.stats.evictions += 1
        if self._on_evict:
            self._on_evict(key, value)

    def __contains__(self, key: K) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not self._expired(entry[1])

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
