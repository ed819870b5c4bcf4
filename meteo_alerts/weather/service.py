"""캐시와 메트릭을 갖춘 날씨 서비스입니다. / Weather service with cache and metrics."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic import Field

from ..base import MeteoBaseModel
from ..config import AlertThresholds, AppConfig
from ..reporting.summary import generate_weather_summary
from .cache import CacheStats, WeatherCache
from .client import FetchClient
from .metrics import MetricsCollector, MetricsSnapshot
from .models import WeatherData
from .pipeline import get_weather
from .request import parse_coordinate

LOGGER = logging.getLogger("weather.service")


class LookupResult(MeteoBaseModel):
    """조회 결과입니다. / Lookup result with provenance."""

    success: bool
    data: Optional[WeatherData] = None
    summary: Optional[str] = None
    error: Optional[str] = None
    source: Optional[Literal["cache", "api"]] = None
    response_time_ms: float = Field(alias="responseTime")
    name: Optional[str] = None


class ServiceStats(MeteoBaseModel):
    """서비스 통계입니다. / Service statistics."""

    metrics: MetricsSnapshot
    cache: CacheStats
    uptime_seconds: float = Field(alias="uptime")


class WeatherService:
    """날씨 서비스 파사드입니다. / Weather service facade.

    Wraps :func:`get_weather` with a cache lookup before the call and a cache
    write after a success. Identical concurrent lookups are not coalesced;
    each one that misses the cache issues its own fetch.
    """

    def __init__(
        self,
        client: FetchClient | None = None,
        cache: WeatherCache | None = None,
        metrics: MetricsCollector | None = None,
        thresholds: AlertThresholds | None = None,
    ) -> None:
        self.client = client or FetchClient()
        self.cache = cache or WeatherCache()
        self.metrics = metrics or MetricsCollector()
        self.thresholds = thresholds or AlertThresholds()
        self._started = time.monotonic()

    @classmethod
    def from_config(cls, config: AppConfig) -> "WeatherService":
        """설정으로 서비스를 만듭니다. / Build a service from configuration."""

        return cls(
            client=FetchClient(config.provider),
            cache=WeatherCache(ttl_seconds=config.cache.ttl_seconds),
            thresholds=config.alert_thresholds,
        )

    async def lookup(self, latitude: Any, longitude: Any) -> LookupResult:
        """캐시 우선 조회입니다. / Cache-first weather lookup."""

        started = time.perf_counter()
        try:
            coordinate = parse_coordinate(latitude, longitude)
        except ValueError as exc:
            return self._record_failure(started, str(exc))
        cached = self.cache.get(coordinate)
        if cached is not None:
            LOGGER.info("cache_hit", extra={"lat": latitude, "lon": longitude})
            elapsed = _elapsed_ms(started)
            self.metrics.record_request(elapsed, True)
            return LookupResult(
                success=True,
                data=cached,
                summary=generate_weather_summary(cached),
                source="cache",
                response_time_ms=elapsed,
            )
        LOGGER.info("provider_fetch", extra={"lat": latitude, "lon": longitude})
        result = await get_weather(
            coordinate, client=self.client, thresholds=self.thresholds
        )
        if not result.success or result.data is None:
            return self._record_failure(started, result.error)
        self.cache.set(coordinate, result.data)
        elapsed = _elapsed_ms(started)
        self.metrics.record_request(elapsed, True)
        return LookupResult(
            success=True,
            data=result.data,
            summary=result.summary,
            source="api",
            response_time_ms=elapsed,
        )

    def _record_failure(self, started: float, error: Optional[str]) -> LookupResult:
        elapsed = _elapsed_ms(started)
        self.metrics.record_request(elapsed, False)
        LOGGER.error(
            "lookup_failed",
            extra={"error": error, "response_time_ms": elapsed},
        )
        return LookupResult(success=False, error=error, response_time_ms=elapsed)

    async def monitor(self, locations: Sequence[Dict[str, Any]]) -> List[LookupResult]:
        """여러 위치를 동시에 조회합니다. / Look up many locations concurrently.

        Results keep the input order and carry the location ``name`` when
        one was given.
        """

        LOGGER.info("monitor_locations", extra={"count": len(locations)})
        results = await asyncio.gather(
            *(
                self.lookup(location.get("latitude"), location.get("longitude"))
                for location in locations
            )
        )
        return [
            result.model_copy(update={"name": location.get("name")})
            for location, result in zip(locations, results)
        ]

    def stats(self) -> ServiceStats:
        """서비스 통계를 반환합니다. / Return service statistics."""

        return ServiceStats(
            metrics=self.metrics.snapshot(),
            cache=self.cache.stats(),
            uptime_seconds=time.monotonic() - self._started,
        )

    def cleanup(self) -> None:
        """만료 캐시를 정리합니다. / Sweep expired cache entries."""

        self.cache.cleanup()
        LOGGER.info("cache_cleaned", extra={"size": self.cache.stats().size})


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
