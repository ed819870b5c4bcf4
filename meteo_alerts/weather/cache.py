"""좌표 키 TTL 캐시입니다. / Coordinate-keyed TTL cache."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ..base import MeteoBaseModel
from .models import WeatherData
from .request import Coordinate

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """캐시 엔트리 구조입니다. / Cache entry structure."""

    value: WeatherData
    expires_at: float


class CacheStats(MeteoBaseModel):
    """캐시 통계입니다. / Cache statistics."""

    size: int
    ttl: int


class WeatherCache:
    """TTL 캐시 컨테이너입니다. / TTL cache container.

    Keys are the exact ``(latitude, longitude)`` pair, so two coordinates
    that differ by any amount never share an entry. Expired entries are
    dropped lazily on lookup or by :meth:`cleanup`.
    """

    def __init__(self, ttl_seconds: int = 600, clock: Clock = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: Dict[Tuple[float, float], CacheEntry] = {}

    def get(self, coordinate: Coordinate) -> Optional[WeatherData]:
        """캐시에서 값을 가져옵니다. / Retrieve value from cache."""

        entry = self._store.get(coordinate.key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            self._store.pop(coordinate.key, None)
            return None
        return entry.value

    def set(self, coordinate: Coordinate, value: WeatherData) -> None:
        """캐시에 값을 저장합니다. / Store value in cache."""

        expires_at = self._clock() + self.ttl_seconds
        self._store[coordinate.key] = CacheEntry(value=value, expires_at=expires_at)

    def cleanup(self) -> None:
        """만료 항목을 제거합니다. / Evict every expired entry."""

        now = self._clock()
        expired = [key for key, entry in self._store.items() if now > entry.expires_at]
        for key in expired:
            self._store.pop(key, None)

    def clear(self) -> None:
        """모든 항목을 제거합니다. / Drop every entry."""

        self._store.clear()

    def stats(self) -> CacheStats:
        """캐시 통계를 반환합니다. / Return cache statistics."""

        return CacheStats(size=len(self._store), ttl=self.ttl_seconds)
