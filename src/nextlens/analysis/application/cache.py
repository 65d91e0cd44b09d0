"""
Stage result cache.

ProjectAnalyzer asks the cache before running a stage and stores the result
afterwards, keyed by `(resolved root, stage)`. Nothing is persisted and
nothing is invalidated: a cache outlives file changes only as long as the
caller keeps it around.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Optional, Tuple

from nextlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

CacheKey = Tuple[str, str]


class AnalysisCache(ABC):
    """Interface for stage result caches."""

    @abstractmethod
    def get(self, root: str, stage: str) -> Optional[Any]:
        """Cached result, or None on a miss."""
        pass

    @abstractmethod
    def put(self, root: str, stage: str, value: Any) -> None:
        pass

    def clear(self) -> None:
        pass


class NullAnalysisCache(AnalysisCache):
    """Never stores anything. The default."""

    def get(self, root: str, stage: str) -> Optional[Any]:
        return None

    def put(self, root: str, stage: str, value: Any) -> None:
        return None


class InMemoryAnalysisCache(AnalysisCache):
    """
    Bounded, thread-safe LRU cache of stage results.

    Examples:
        >>> cache = InMemoryAnalysisCache(maxsize=2)
        >>> cache.put("/app", "routes", routes)
        >>> cache.get("/app", "routes") is routes
        True
    """

    def __init__(self, maxsize: int = 64) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self._maxsize = maxsize
        self._data: OrderedDict[CacheKey, Any] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, root: str, stage: str) -> Optional[Any]:
        key = (root, stage)
        with self._lock:
            if key not in self._data:
                self.misses += 1
                return None
            self._data.move_to_end(key)
            self.hits += 1
            value = self._data[key]

        logger.debug("analysis_cache_hit", root=root, stage=stage)
        return value

    def put(self, root: str, stage: str, value: Any) -> None:
        key = (root, stage)
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            if len(self._data) > self._maxsize:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    @property
    def maxsize(self) -> int:
        return self._maxsize
