from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Final

from lyrics_logic.models import TranslationResult

DEFAULT_CACHE_CAPACITY: Final[int] = 512

CacheKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class TranslationCacheStats:
    hits: int
    misses: int
    evictions_count: int
    size: int
    capacity: int


def _default_items() -> OrderedDict[CacheKey, TranslationResult]:
    return OrderedDict()


@dataclass(slots=True)
class TranslationCache:
    capacity: int = DEFAULT_CACHE_CAPACITY
    _items: OrderedDict[CacheKey, TranslationResult] = field(
        default_factory=_default_items
    )
    _hits: int = 0
    _misses: int = 0
    _evictions_count: int = 0

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError("Translation cache capacity must be positive")

    def get(self, key: CacheKey) -> TranslationResult | None:
        entry = self._items.get(key)
        if entry is None:
            self._misses += 1
            return None
        self._items.move_to_end(key)
        self._hits += 1
        return entry

    def set(self, key: CacheKey, result: TranslationResult) -> None:
        self._items[key] = result
        self._items.move_to_end(key)
        while len(self._items) > self.capacity:
            self._items.popitem(last=False)
            self._evictions_count += 1

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def snapshot(self) -> TranslationCacheStats:
        return TranslationCacheStats(
            hits=self._hits,
            misses=self._misses,
            evictions_count=self._evictions_count,
            size=len(self._items),
            capacity=self.capacity,
        )
